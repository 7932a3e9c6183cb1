from __future__ import annotations

from typing import assert_never

from .models import LocatorInfo, LocatorStrategy

GROOVY_HEADER = "// Groovy (Selenide)"
PLAYWRIGHT_HEADER = "// Playwright (TS/JS)"


def escape_java_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def to_find_by_annotation(info: LocatorInfo) -> str:
    value = escape_java_string(info.locator_value)
    match info.strategy:
        case LocatorStrategy.ID:
            return f'@FindBy(id = "{value}")'
        case LocatorStrategy.NAME:
            return f'@FindBy(name = "{value}")'
        case (
            LocatorStrategy.DATA_AUTOMATION
            | LocatorStrategy.DATA_TESTID
            | LocatorStrategy.CLASS_NAME
            | LocatorStrategy.CSS
        ):
            return f'@FindBy(css = "{value}")'
        case LocatorStrategy.XPATH:
            return f'@FindBy(xpath = "{value}")'
        case _:
            assert_never(info.strategy)


def to_selenide(info: LocatorInfo) -> str:
    value = escape_java_string(info.locator_value)
    match info.strategy:
        case LocatorStrategy.ID:
            return f'$(By.id("{value}"))'
        case LocatorStrategy.NAME:
            return f'$(By.name("{value}"))'
        case (
            LocatorStrategy.DATA_AUTOMATION
            | LocatorStrategy.DATA_TESTID
            | LocatorStrategy.CLASS_NAME
            | LocatorStrategy.CSS
        ):
            return f'$(By.cssSelector("{value}"))'
        case LocatorStrategy.XPATH:
            return f'$(By.xpath("{value}"))'
        case _:
            assert_never(info.strategy)


def to_playwright(info: LocatorInfo) -> str:
    raw = info.locator_value
    match info.strategy:
        case LocatorStrategy.ID:
            selector = "#" + raw.replace('"', '\\"').replace(" ", "\\ ")
        case LocatorStrategy.NAME:
            selector = escape_java_string("[name='" + raw.replace("'", "\\'") + "']")
        case (
            LocatorStrategy.DATA_AUTOMATION
            | LocatorStrategy.DATA_TESTID
            | LocatorStrategy.CLASS_NAME
            | LocatorStrategy.CSS
        ):
            selector = escape_java_string(raw)
        case LocatorStrategy.XPATH:
            selector = escape_java_string("xpath=" + raw)
        case _:
            assert_never(info.strategy)
    return f'page.locator("{selector}");'
