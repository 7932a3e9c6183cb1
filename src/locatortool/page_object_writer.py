from __future__ import annotations

import logging
import os
from pathlib import Path
import re
import tempfile
from typing import Iterable, Sequence

from .code_emitters import to_find_by_annotation
from .errors import ConfigurationError
from .interactability import is_interactable, query_candidate_elements
from .locator_generator import resolve_primary
from .models import DomDocument, DomNode, LocatorInfo, MergedElement, PageObjectResult, SkippedElement
from .name_suggester import to_accessor_name

DEFAULT_PACKAGE_NAME = "com.example.pages"
DEFAULT_CLASS_NAME = "GeneratedPage"

PAGE_OBJECT_IMPORTS = (
    "org.openqa.selenium.WebDriver",
    "org.openqa.selenium.WebElement",
    "org.openqa.selenium.support.FindBy",
    "org.openqa.selenium.support.PageFactory",
)

_JAVA_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_JAVA_PACKAGE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*")

logger = logging.getLogger("locatortool.page_object")


def normalize_class_name(raw_value: str | None) -> str:
    value = (raw_value or "").strip()
    if not value:
        return DEFAULT_CLASS_NAME
    if not _JAVA_IDENTIFIER.fullmatch(value):
        raise ConfigurationError(f"Class name must be a Java identifier: {value!r}")
    return value


def normalize_package_name(raw_value: str | None) -> str:
    value = (raw_value or "").strip()
    if value and not _JAVA_PACKAGE.fullmatch(value):
        raise ConfigurationError(f"Package name must be dot-separated identifiers: {value!r}")
    return value


def collect_locators(
    document: DomDocument,
    candidates: Iterable[DomNode],
) -> tuple[list[LocatorInfo], list[SkippedElement], list[MergedElement]]:
    unique: dict[str, tuple[LocatorInfo, DomNode]] = {}
    skipped: list[SkippedElement] = []
    merged: list[MergedElement] = []

    for node in candidates:
        try:
            if not is_interactable(node):
                continue
            info = resolve_primary(document, node)
        except Exception as exc:
            skipped.append(SkippedElement(index_path=document.index_path(node), tag=node.tag, reason=str(exc)))
            logger.warning("Skipped <%s>: %s", node.tag, exc)
            continue

        key = info.dedup_key
        if key not in unique:
            unique[key] = (info, node)
            continue

        kept = unique[key][1]
        if kept is node:
            continue
        merged.append(
            MergedElement(
                index_path=document.index_path(node),
                tag=node.tag,
                kept_index_path=document.index_path(kept),
                dedup_key=key,
            )
        )
        logger.warning("Merged <%s> into an earlier element with locator %s", node.tag, key)

    return [info for info, _ in unique.values()], skipped, merged


def find_name_collisions(locators: Sequence[LocatorInfo]) -> list[str]:
    keys_by_name: dict[str, set[str]] = {}
    for info in locators:
        keys_by_name.setdefault(info.name, set()).add(info.dedup_key)
    return [name for name, keys in keys_by_name.items() if len(keys) > 1]


def build_page_object_source(package_name: str, class_name: str, locators: Sequence[LocatorInfo]) -> str:
    lines: list[str] = []
    if package_name.strip():
        lines += [f"package {package_name.strip()};", ""]

    lines += [f"import {item};" for item in PAGE_OBJECT_IMPORTS]
    lines += [
        "",
        f"public class {class_name} {{",
        "",
        "    private final WebDriver driver;",
        "",
        f"    public {class_name}(WebDriver driver) {{",
        "        this.driver = driver;",
        "        PageFactory.initElements(driver, this);",
        "    }",
        "",
    ]

    for info in locators:
        lines += [
            f"    {to_find_by_annotation(info)}",
            f"    private WebElement {info.name};",
            "",
        ]

    for info in locators:
        lines += [
            f"    public WebElement {to_accessor_name(info.name)}() {{",
            f"        return {info.name};",
            "    }",
            "",
        ]

    lines.append("}")
    return "\n".join(lines) + "\n"


def generate_page_object(
    document: DomDocument,
    candidates: Iterable[DomNode],
    package_name: str | None = DEFAULT_PACKAGE_NAME,
    class_name: str | None = DEFAULT_CLASS_NAME,
) -> PageObjectResult:
    package = normalize_package_name(package_name)
    klass = normalize_class_name(class_name)

    locators, skipped, merged = collect_locators(document, candidates)
    collisions = find_name_collisions(locators)
    if collisions:
        logger.warning("Generated field names clash for distinct locators: %s", ", ".join(collisions))

    source = build_page_object_source(package, klass, locators)
    logger.info(
        "Generated %s with %d unique interactable elements (%d skipped, %d merged).",
        klass,
        len(locators),
        len(skipped),
        len(merged),
    )
    return PageObjectResult(
        package_name=package,
        class_name=klass,
        source=source,
        locators=tuple(locators),
        skipped=tuple(skipped),
        name_collisions=tuple(collisions),
        merged=tuple(merged),
    )


def generate_page_object_for_document(
    document: DomDocument,
    package_name: str | None = DEFAULT_PACKAGE_NAME,
    class_name: str | None = DEFAULT_CLASS_NAME,
) -> PageObjectResult:
    return generate_page_object(document, query_candidate_elements(document), package_name, class_name)


def write_text_atomic(target: Path, text: str) -> None:
    """Replace ``target`` with ``text`` so readers never see a partial file."""
    fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as temp_file:
            temp_file.write(text)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        temp_path.replace(target)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise


def write_page_object(result: PageObjectResult, target_dir: Path) -> tuple[bool, str, Path]:
    target = target_dir / result.file_name
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return False, f"Could not create output folder: {exc}", target

    try:
        write_text_atomic(target, result.source)
    except OSError as exc:
        return False, f"Could not write page object: {exc}", target
    return True, f"Page object written to {target}", target
