from __future__ import annotations

import re

from .models import DomDocument, DomNode

TEST_ATTR_PRIORITY = (
    "data-testid",
    "data-test",
    "data-qa",
)
AUTOMATION_ATTR = "data-automation"
TEXT_XPATH_MAX_LENGTH = 40

_CSS_SAFE_ID_PATTERN = re.compile(r"^-?[A-Za-z_][A-Za-z0-9_-]*$")


def normalize_space(value: str | None, limit: int | None = None) -> str:
    if not value:
        return ""
    compact = re.sub(r"\s+", " ", str(value)).strip()
    return compact[:limit] if limit is not None else compact


def escape_single_quoted(value: str) -> str:
    return value.replace("'", "\\'")


def escape_css_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def escape_css_identifier(value: str) -> str:
    escaped: list[str] = []
    for char in value:
        if char.isalnum() or char in ("-", "_"):
            escaped.append(char)
        else:
            escaped.append(f"\\{ord(char):x} ")
    return "".join(escaped)


def is_css_safe_id(value: str) -> bool:
    return bool(_CSS_SAFE_ID_PATTERN.fullmatch(value))


def css_id_selector(id_value: str) -> str:
    if is_css_safe_id(id_value):
        return f"#{id_value}"
    escaped = escape_css_identifier(id_value)
    if id_value[:1].isdigit():
        escaped = f"\\{ord(id_value[0]):x} " + escaped[1:]
    return f"#{escaped}"


def xpath_literal(value: str) -> str:
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    pieces = value.split("'")
    quoted = [f"'{piece}'" for piece in pieces]
    return "concat(" + ", \"'\", ".join(quoted) + ")"


def same_tag_index(node: DomNode) -> int:
    return 1 + sum(1 for sibling in node.previous_siblings() if sibling.tag == node.tag)


def nth_of_type(node: DomNode) -> int | None:
    if node.parent is None:
        return None
    same_tag = [child for child in node.parent.children if child.tag == node.tag]
    for position, child in enumerate(same_tag, start=1):
        if child is node:
            return position
    return None


def nearest_id_anchor(node: DomNode) -> DomNode | None:
    current: DomNode | None = node
    while current is not None:
        if current.is_element and current.attr("id"):
            return current
        current = current.parent
    return None


def build_relative_xpath(document: DomDocument, node: DomNode) -> str:
    own_id = node.attr("id")
    if own_id:
        return f".//*[@id={xpath_literal(own_id)}]"

    anchor = nearest_id_anchor(node)
    if anchor is not None:
        anchor_match = f".//*[@id={xpath_literal(anchor.attr('id') or '')}]"
        parts: list[str] = []
        current: DomNode | None = node
        while current is not None and current is not anchor and current.is_element:
            parts.append(f"{current.tag}[{same_tag_index(current)}]")
            current = current.parent
        if not parts:
            return anchor_match
        return anchor_match + "//" + "/".join(reversed(parts))

    parts = []
    current = node
    while current is not None and current.is_element and not document.is_root_container(current):
        parts.append(f"{current.tag}[{same_tag_index(current)}]")
        current = current.parent
    if not parts:
        return f"//{node.tag or '*'}"
    return "//" + "/".join(reversed(parts))


def build_structural_css(document: DomDocument, node: DomNode) -> str | None:
    if not node.is_element:
        return None

    parts: list[str] = []
    current = node
    while current.parent is not None and not document.is_root_container(current):
        parent = current.parent
        nth = nth_of_type(current)
        parts.append(f"{current.tag}:nth-of-type({nth})" if nth else current.tag)
        current = parent
        parent_id = parent.attr("id")
        if parent_id:
            parts.append(css_id_selector(parent_id))
            break

    if not parts:
        return node.tag
    return " > ".join(reversed(parts))


def build_text_xpath(node: DomNode) -> str | None:
    text = normalize_space(node.text, limit=TEXT_XPATH_MAX_LENGTH + 1)
    if not text or len(text) > TEXT_XPATH_MAX_LENGTH:
        return None
    return f".//{node.tag}[normalize-space()={xpath_literal(text)}]"


def class_css(node: DomNode) -> str | None:
    classes = node.classes
    if not classes:
        return None
    return f"{node.tag}." + ".".join(classes)
