from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .models import DomDocument, DomNode
from .selector_rules import normalize_space

_FORM_CONTROLS = {"input", "button", "select", "textarea"}
_INVISIBLE_TAGS = {"script", "style", "template", "noscript", "head"}


def parse_html(html: str, url: str = "") -> DomDocument:
    soup = BeautifulSoup(html, "lxml")
    root_tag = soup.find("html")
    if not isinstance(root_tag, Tag):
        soup = BeautifulSoup(f"<html><body>{html}</body></html>", "lxml")
        root_tag = soup.find("html")

    root, _ = _convert(root_tag, parent=None, inherited_editable=False, in_disabled_fieldset=False)
    title_tag = soup.find("title")
    title = normalize_space(title_tag.get_text()) if isinstance(title_tag, Tag) else ""
    return DomDocument(root=root, url=url, title=title)


def load_html_file(path: Path) -> DomDocument:
    return parse_html(path.read_text(encoding="utf-8", errors="ignore"), url=path.resolve().as_uri())


def select_nodes(document: DomDocument, css: str) -> list[DomNode]:
    root_tag = document.root.source
    if not isinstance(root_tag, Tag) or root_tag.parent is None:
        return []
    by_tag = {id(node.source): node for node in document.iter_elements() if node.source is not None}
    return [by_tag[id(tag)] for tag in root_tag.parent.select(css) if id(tag) in by_tag]


def _convert(
    tag: Tag,
    parent: DomNode | None,
    inherited_editable: bool,
    in_disabled_fieldset: bool,
) -> tuple[DomNode, str]:
    attributes = {str(key): _attribute_text(value) for key, value in tag.attrs.items()}
    name = (tag.name or "").lower()

    editable = _content_editable(attributes.get("contenteditable"), inherited_editable)
    disabled = name in _FORM_CONTROLS and ("disabled" in attributes or in_disabled_fieldset)

    node = DomNode(
        tag=name,
        attributes=attributes,
        disabled=disabled,
        content_editable=editable,
        source=tag,
    )
    if parent is not None:
        parent.append(node)

    child_fieldset_disabled = in_disabled_fieldset or (name == "fieldset" and "disabled" in attributes)
    pieces: list[str] = []
    for child in tag.children:
        if isinstance(child, Tag):
            _, child_text = _convert(child, node, editable, child_fieldset_disabled)
            pieces.append(child_text)
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            pieces.append(str(child))

    raw_text = "" if name in _INVISIBLE_TAGS else " ".join(pieces)
    node.text = normalize_space(raw_text)
    return node, raw_text


def _attribute_text(value: object) -> str:
    # bs4 exposes multi-valued attributes such as class as lists.
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return "" if value is None else str(value)


def _content_editable(raw: str | None, inherited: bool) -> bool:
    if raw is None:
        return inherited
    lowered = raw.strip().lower()
    if lowered in {"", "true", "plaintext-only"}:
        return True
    if lowered == "false":
        return False
    return inherited
