from __future__ import annotations

from dataclasses import asdict, dataclass
import json
from pathlib import Path

from .page_object_writer import DEFAULT_CLASS_NAME, DEFAULT_PACKAGE_NAME, write_text_atomic

CONFIG_DIR = Path.home() / ".locatortool"
CONFIG_PATH = CONFIG_DIR / "config.json"


@dataclass(slots=True)
class GeneratorSettings:
    package_name: str = DEFAULT_PACKAGE_NAME
    class_name: str = DEFAULT_CLASS_NAME
    output_dir: str = ""
    log_to_file: bool = True


def load_settings(config_path: Path | None = None) -> GeneratorSettings:
    path = config_path or CONFIG_PATH
    if not path.exists() or not path.is_file():
        return GeneratorSettings()

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, TypeError):
        return GeneratorSettings()

    if not isinstance(payload, dict):
        return GeneratorSettings()

    return GeneratorSettings(
        package_name=str(payload.get("package_name", DEFAULT_PACKAGE_NAME) or DEFAULT_PACKAGE_NAME),
        class_name=str(payload.get("class_name", DEFAULT_CLASS_NAME) or DEFAULT_CLASS_NAME),
        output_dir=str(payload.get("output_dir", "") or ""),
        log_to_file=bool(payload.get("log_to_file", True)),
    )


def save_settings(settings: GeneratorSettings, config_path: Path | None = None) -> tuple[bool, str | None]:
    path = config_path or CONFIG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        write_text_atomic(path, json.dumps(asdict(settings), indent=2, sort_keys=True) + "\n")
    except OSError as exc:
        return False, f"Could not save settings to {path}: {exc}"
    return True, None


def merge_cli_overrides(
    settings: GeneratorSettings,
    *,
    package_name: str | None = None,
    class_name: str | None = None,
    output_dir: str | None = None,
    log_to_file: bool | None = None,
) -> GeneratorSettings:
    return GeneratorSettings(
        package_name=settings.package_name if package_name is None else package_name,
        class_name=class_name or settings.class_name,
        output_dir=settings.output_dir if output_dir is None else output_dir,
        log_to_file=settings.log_to_file if log_to_file is None else log_to_file,
    )
