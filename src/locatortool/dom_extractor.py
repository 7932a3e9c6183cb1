from __future__ import annotations

from typing import Any, Mapping, TYPE_CHECKING

from .models import DomDocument, DomNode, Rect

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Page

_SNAPSHOT_SCRIPT = """
() => {
  const capture = (el) => {
    const attrs = {};
    for (const attr of el.attributes) {
      attrs[attr.name] = attr.value;
    }
    const rect = el.getBoundingClientRect();
    const text = (el.innerText || el.textContent || '').trim().replace(/\\s+/g, ' ').slice(0, 200);
    return {
      tag: el.tagName.toLowerCase(),
      attributes: attrs,
      text,
      rect: { x: rect.x, y: rect.y, width: rect.width, height: rect.height },
      disabled: Boolean(el.disabled),
      content_editable: Boolean(el.isContentEditable),
      children: Array.from(el.children).map(capture),
    };
  };
  return {
    url: location.href || '',
    title: document.title || '',
    root: capture(document.documentElement),
  };
}
"""

_INDEX_PATH_SCRIPT = """
(el) => {
  const path = [];
  let current = el;
  while (current && current !== document.documentElement) {
    const parent = current.parentElement;
    if (!parent) return null;
    path.unshift(Array.prototype.indexOf.call(parent.children, current));
    current = parent;
  }
  return current ? path : null;
}
"""


def capture_document(page: Page) -> DomDocument:
    payload: dict[str, Any] = page.evaluate(_SNAPSHOT_SCRIPT)
    return document_from_payload(payload)


def document_from_payload(payload: Mapping[str, Any]) -> DomDocument:
    root_payload = payload.get("root")
    if not isinstance(root_payload, Mapping):
        root = DomNode(tag="html")
    else:
        root = _node_from_payload(root_payload)
    return DomDocument(
        root=root,
        url=str(payload.get("url", "") or ""),
        title=str(payload.get("title", "") or ""),
    )


def locate_element(document: DomDocument, element: ElementHandle) -> DomNode | None:
    path = element.evaluate(_INDEX_PATH_SCRIPT)
    if not isinstance(path, list):
        return None
    return document.node_at([int(index) for index in path])


def select_nodes(page: Page, document: DomDocument, css: str) -> list[DomNode]:
    nodes: list[DomNode] = []
    for handle in page.query_selector_all(css):
        node = locate_element(document, handle)
        if node is not None:
            nodes.append(node)
    return nodes


def _node_from_payload(payload: Mapping[str, Any]) -> DomNode:
    # Iterative build keeps deep documents clear of the recursion limit.
    root = _build_node(payload)
    stack: list[tuple[DomNode, Mapping[str, Any]]] = [(root, payload)]
    while stack:
        node, item = stack.pop()
        for child_payload in item.get("children", []) or []:
            if not isinstance(child_payload, Mapping):
                continue
            child = node.append(_build_node(child_payload))
            stack.append((child, child_payload))
    return root


def _build_node(payload: Mapping[str, Any]) -> DomNode:
    rect_payload = payload.get("rect")
    rect = None
    if isinstance(rect_payload, Mapping):
        rect = Rect(
            x=float(rect_payload.get("x", 0) or 0),
            y=float(rect_payload.get("y", 0) or 0),
            width=float(rect_payload.get("width", 0) or 0),
            height=float(rect_payload.get("height", 0) or 0),
        )
    return DomNode(
        tag=str(payload.get("tag", "") or ""),
        attributes={str(k): str(v) for k, v in dict(payload.get("attributes", {}) or {}).items()},
        text=str(payload.get("text", "") or ""),
        rect=rect,
        disabled=bool(payload.get("disabled", False)),
        content_editable=bool(payload.get("content_editable", False)),
    )
