from __future__ import annotations

from .code_emitters import GROOVY_HEADER, PLAYWRIGHT_HEADER, to_playwright, to_selenide
from .errors import DetachedElementError, ResolutionError
from .models import AllLocators, DomDocument, DomNode, LocatorInfo, LocatorStrategy
from .name_suggester import to_field_name
from .selector_rules import (
    AUTOMATION_ATTR,
    TEST_ATTR_PRIORITY,
    build_relative_xpath,
    build_structural_css,
    build_text_xpath,
    class_css,
    escape_css_string,
    escape_single_quoted,
    normalize_space,
)


def resolve_primary(document: DomDocument, node: DomNode) -> LocatorInfo:
    if node is None or not node.is_element:
        raise ResolutionError("Only element nodes can be resolved.")
    if not document.contains(node):
        raise DetachedElementError(f"<{node.tag}> is not attached to the document.")

    tag = node.tag or "element"
    relative_xpath = build_relative_xpath(document, node)

    def _info(name_base: str, strategy: LocatorStrategy, locator_value: str) -> LocatorInfo:
        return LocatorInfo(
            name=to_field_name(name_base, tag),
            strategy=strategy,
            locator_value=locator_value,
            tag_name=tag,
            xpath=relative_xpath,
        )

    automation = node.attr(AUTOMATION_ATTR)
    if automation:
        css = f"[{AUTOMATION_ATTR}='{escape_single_quoted(automation)}']"
        return _info(automation, LocatorStrategy.DATA_AUTOMATION, css)

    test_attr = _first_test_attribute(node)
    if test_attr:
        attr, value = test_attr
        css = f"[{attr}='{escape_single_quoted(value)}']"
        return _info(value, LocatorStrategy.DATA_TESTID, css)

    id_value = node.attr("id")
    if id_value:
        return _info(id_value, LocatorStrategy.ID, id_value)

    name_value = node.attr("name")
    if name_value:
        return _info(name_value, LocatorStrategy.NAME, name_value)

    by_class = class_css(node)
    if by_class:
        return _info("_".join(node.classes), LocatorStrategy.CLASS_NAME, by_class)

    structural = build_structural_css(document, node)
    if structural:
        return _info(f"{tag}_element", LocatorStrategy.CSS, structural)

    return _info(f"{tag}_element", LocatorStrategy.XPATH, relative_xpath)


def resolve_all(document: DomDocument, node: DomNode) -> AllLocators:
    automation = node.attr(AUTOMATION_ATTR)
    test_attr = _first_test_attribute(node)
    test_value = test_attr[1] if test_attr else None
    text = normalize_space(node.text) or None

    css_data_testid = None
    if test_attr:
        css_data_testid = f'[{test_attr[0]}="{escape_css_string(test_attr[1])}"]'

    return AllLocators(
        relative_xpath=build_relative_xpath(document, node),
        data_automation=automation,
        data_testid=test_value,
        id=node.attr("id"),
        name_attr=node.attr("name"),
        class_attr=node.attributes.get("class") or None,
        css_data_automation=f'[{AUTOMATION_ATTR}="{escape_css_string(automation)}"]' if automation else None,
        css_data_testid=css_data_testid,
        css_by_class=class_css(node),
        css_generic=build_structural_css(document, node),
        text=text,
        text_xpath=build_text_xpath(node),
    )


def describe_locators(document: DomDocument, node: DomNode) -> list[tuple[str, str]]:
    info = resolve_primary(document, node)
    alternates = resolve_all(document, node)

    sections: list[tuple[str, str | None]] = [
        (
            "data-automation (By.cssSelector)",
            f'By.cssSelector("{escape_css_string(alternates.css_data_automation)}")'
            if alternates.css_data_automation
            else None,
        ),
        (
            "data-testid (By.cssSelector)",
            f'By.cssSelector("{escape_css_string(alternates.css_data_testid)}")'
            if alternates.css_data_testid
            else None,
        ),
        ("By.id (Java/Selenium)", f'By.id("{escape_css_string(alternates.id)}")' if alternates.id else None),
        (
            "By.name (Java/Selenium)",
            f'By.name("{escape_css_string(alternates.name_attr)}")' if alternates.name_attr else None,
        ),
        ("CSS (class-based)", alternates.css_by_class),
        ("CSS (generic)", alternates.css_generic),
        ("Relative XPath (primary)", alternates.relative_xpath),
        ("Text-based XPath", alternates.text_xpath),
        (GROOVY_HEADER.removeprefix("// "), to_selenide(info)),
        (PLAYWRIGHT_HEADER.removeprefix("// "), to_playwright(info)),
    ]
    return [(title, code) for title, code in sections if code]


def _first_test_attribute(node: DomNode) -> tuple[str, str] | None:
    for attr in TEST_ATTR_PRIORITY:
        value = node.attr(attr)
        if value:
            return attr, value
    return None
