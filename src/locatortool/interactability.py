from __future__ import annotations

from .models import DomDocument, DomNode

FORM_CONTROL_TAGS = frozenset({"input", "button", "select", "textarea"})
CLICKABLE_ROLES = frozenset({"button", "link"})

# Union of tags and attributes the bulk query collects before classification.
CANDIDATE_SELECTOR = (
    'a[href], button, input, select, textarea, [role="button"], [role="link"], '
    '[contenteditable="true"], [tabindex]'
)


def is_interactable(node: DomNode | None) -> bool:
    if node is None or not node.is_element:
        return False

    tag = node.tag
    if tag in FORM_CONTROL_TAGS:
        return not node.disabled

    if tag == "a" and node.has_attr("href"):
        return True

    if node.attributes.get("role") in CLICKABLE_ROLES:
        return True

    if node.content_editable:
        return True
    if node.has_attr("tabindex"):
        return True

    rect = node.rect
    if rect is not None and rect.width == 0 and rect.height == 0:
        return False

    return False


def matches_candidate_query(node: DomNode) -> bool:
    if not node.is_element:
        return False
    tag = node.tag
    if tag == "a" and node.has_attr("href"):
        return True
    if tag in FORM_CONTROL_TAGS:
        return True
    if node.attributes.get("role") in CLICKABLE_ROLES:
        return True
    if node.attributes.get("contenteditable") == "true":
        return True
    return node.has_attr("tabindex")


def query_candidate_elements(document: DomDocument) -> list[DomNode]:
    return [node for node in document.iter_elements() if matches_candidate_query(node)]
