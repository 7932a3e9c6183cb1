from __future__ import annotations

import argparse
from dataclasses import asdict
import logging
from pathlib import Path
import sys
from typing import Callable, Sequence, TypeVar

from . import dom_extractor, html_snapshot
from .config import CONFIG_PATH, GeneratorSettings, load_settings, merge_cli_overrides, save_settings
from .errors import LocatorToolError
from .locator_generator import describe_locators
from .log_config import build_logger
from .models import DomDocument, DomNode
from .page_object_writer import (
    generate_page_object_for_document,
    normalize_class_name,
    normalize_package_name,
    write_page_object,
)
from .runtime_checks import describe_launch_error

T = TypeVar("T")

logger = logging.getLogger("locatortool.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locatortool",
        description="Derive stable UI test locators and generate Selenium page objects.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Settings file (default: ~/.locatortool/config.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Generate a Java page object from all interactable elements")
    _add_source_arguments(generate)
    generate.add_argument("--package", dest="package_name", default=None)
    generate.add_argument("--class-name", dest="class_name", default=None)
    generate.add_argument("--output", dest="output_dir", default=None, help="Write <ClassName>.java into this folder")

    inspect = commands.add_parser("inspect", help="Print every locator for one element")
    _add_source_arguments(inspect)
    inspect.add_argument("--selector", required=True, help="CSS selector of the element to inspect")

    config = commands.add_parser("config", help="Show or update the saved generator defaults")
    config.add_argument("--package", dest="package_name", default=None)
    config.add_argument("--class-name", dest="class_name", default=None)
    config.add_argument("--output", dest="output_dir", default=None)
    config.add_argument("--log-to-file", action=argparse.BooleanOptionalAction, default=None)
    return parser


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="Open the page in headless Chromium")
    source.add_argument("--html", type=Path, help="Read a saved HTML file")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    if args.verbose:
        build_logger(log_dir=None, level=logging.DEBUG)
    elif settings.log_to_file:
        build_logger()
    else:
        build_logger(log_dir=None)

    try:
        if args.command == "generate":
            return _run_generate(args, settings)
        if args.command == "config":
            return _run_config(args, settings)
        return _run_inspect(args)
    except LocatorToolError as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1


def _run_generate(args: argparse.Namespace, settings: GeneratorSettings) -> int:
    effective = merge_cli_overrides(
        settings,
        package_name=args.package_name,
        class_name=args.class_name,
        output_dir=args.output_dir,
    )
    document = _with_document(args, lambda page, doc: doc)
    if document is None:
        return 1

    result = generate_page_object_for_document(document, effective.package_name, effective.class_name)
    for skipped in result.skipped:
        print(f"skipped <{skipped.tag}> at {list(skipped.index_path)}: {skipped.reason}", file=sys.stderr)
    for name in result.name_collisions:
        print(f"warning: field name '{name}' is generated for more than one locator", file=sys.stderr)
    for merged in result.merged:
        print(
            f"warning: <{merged.tag}> at {list(merged.index_path)} shares {merged.dedup_key} "
            f"with the element at {list(merged.kept_index_path)} and was merged into it",
            file=sys.stderr,
        )

    if effective.output_dir:
        ok, message, _ = write_page_object(result, Path(effective.output_dir))
        print(message, file=sys.stdout if ok else sys.stderr)
        if not ok:
            return 1
    else:
        sys.stdout.write(result.source)
    print(f"{len(result.locators)} unique interactable elements in {result.file_name}", file=sys.stderr)
    return 0


def _run_inspect(args: argparse.Namespace) -> int:
    def _select(page, document: DomDocument) -> tuple[DomDocument, list[DomNode]]:
        if page is None:
            return document, html_snapshot.select_nodes(document, args.selector)
        return document, dom_extractor.select_nodes(page, document, args.selector)

    selected = _with_document(args, _select)
    if selected is None:
        return 1
    document, nodes = selected
    if not nodes:
        print(f"error: no element matches {args.selector!r}", file=sys.stderr)
        return 1

    for title, code in describe_locators(document, nodes[0]):
        print(f"[{title}]")
        print(code)
        print()
    return 0


def _run_config(args: argparse.Namespace, settings: GeneratorSettings) -> int:
    updated = merge_cli_overrides(
        settings,
        package_name=None if args.package_name is None else normalize_package_name(args.package_name),
        class_name=None if args.class_name is None else normalize_class_name(args.class_name),
        output_dir=args.output_dir,
        log_to_file=args.log_to_file,
    )
    if updated != settings:
        path = args.config or CONFIG_PATH
        ok, error = save_settings(updated, path)
        if not ok:
            print(f"error: {error}", file=sys.stderr)
            return 1
        logger.info("Saved settings to %s", path)

    for key, value in asdict(updated).items():
        print(f"{key} = {value}")
    return 0


def _with_document(args: argparse.Namespace, callback: Callable[..., T]) -> T | None:
    if args.html is not None:
        try:
            document = html_snapshot.load_html_file(args.html)
        except OSError as exc:
            print(f"error: could not read {args.html}: {exc}", file=sys.stderr)
            return None
        return callback(None, document)
    return _with_live_page(args.url, callback)


def _with_live_page(url: str, callback: Callable[..., T]) -> T | None:
    from playwright.sync_api import Error as PlaywrightError, sync_playwright

    try:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=True)
            try:
                page = browser.new_page()
                page.goto(url, wait_until="domcontentloaded")
                document = dom_extractor.capture_document(page)
                logger.info("Captured %s (%s)", document.url or url, document.title)
                return callback(page, document)
            finally:
                browser.close()
    except PlaywrightError as exc:
        logger.exception("Browser session failed.")
        print(f"error: {describe_launch_error(exc)}", file=sys.stderr)
        return None


if __name__ == "__main__":
    raise SystemExit(main())
