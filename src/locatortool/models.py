from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Sequence

ELEMENT_NODE = 1
ROOT_CONTAINER_TAGS = frozenset({"html", "body"})


class LocatorStrategy(str, Enum):
    DATA_AUTOMATION = "DATA_AUTOMATION"
    DATA_TESTID = "DATA_TESTID"
    ID = "ID"
    NAME = "NAME"
    CLASS_NAME = "CLASS_NAME"
    CSS = "CSS"
    XPATH = "XPATH"


@dataclass(frozen=True, slots=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(eq=False, slots=True)
class DomNode:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""
    rect: Rect | None = None
    disabled: bool = False
    content_editable: bool = False
    node_type: int = ELEMENT_NODE
    parent: DomNode | None = field(default=None, repr=False)
    children: list[DomNode] = field(default_factory=list, repr=False)
    source: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.tag = (self.tag or "").strip().lower()

    @property
    def is_element(self) -> bool:
        return self.node_type == ELEMENT_NODE

    def append(self, child: DomNode) -> DomNode:
        child.parent = self
        self.children.append(child)
        return child

    def has_attr(self, key: str) -> bool:
        return key in self.attributes

    def attr(self, key: str) -> str | None:
        raw = self.attributes.get(key)
        if raw is None:
            return None
        # Whitespace-only values count as missing; others are returned verbatim.
        value = str(raw)
        return value if value.strip() else None

    @property
    def classes(self) -> list[str]:
        raw = self.attributes.get("class") or ""
        return [item for item in raw.split() if item]

    def previous_siblings(self) -> list[DomNode]:
        if self.parent is None:
            return []
        siblings: list[DomNode] = []
        for sibling in self.parent.children:
            if sibling is self:
                break
            siblings.append(sibling)
        return siblings

    def iter_subtree(self) -> Iterator[DomNode]:
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(eq=False, slots=True)
class DomDocument:
    root: DomNode
    url: str = ""
    title: str = ""

    @property
    def body(self) -> DomNode | None:
        if self.root.tag == "body":
            return self.root
        return next((child for child in self.root.children if child.tag == "body"), None)

    def is_root_container(self, node: DomNode) -> bool:
        return node is self.root or node is self.body or node.tag in ROOT_CONTAINER_TAGS

    def contains(self, node: DomNode | None) -> bool:
        current = node
        while current is not None:
            if current is self.root:
                return True
            current = current.parent
        return False

    def iter_elements(self) -> Iterator[DomNode]:
        return (node for node in self.root.iter_subtree() if node.is_element)

    def index_path(self, node: DomNode) -> tuple[int, ...]:
        path: list[int] = []
        current = node
        while current is not None and current is not self.root:
            parent = current.parent
            if parent is None:
                return ()
            path.append(next(i for i, child in enumerate(parent.children) if child is current))
            current = parent
        return tuple(reversed(path))

    def node_at(self, path: Sequence[int]) -> DomNode | None:
        current = self.root
        for index in path:
            if index < 0 or index >= len(current.children):
                return None
            current = current.children[index]
        return current


@dataclass(frozen=True, slots=True)
class LocatorInfo:
    name: str
    strategy: LocatorStrategy
    locator_value: str
    tag_name: str
    xpath: str

    @property
    def dedup_key(self) -> str:
        return f"{self.strategy.value}:{self.locator_value}"


@dataclass(frozen=True, slots=True)
class AllLocators:
    relative_xpath: str
    data_automation: str | None = None
    data_testid: str | None = None
    id: str | None = None
    name_attr: str | None = None
    class_attr: str | None = None
    css_data_automation: str | None = None
    css_data_testid: str | None = None
    css_by_class: str | None = None
    css_generic: str | None = None
    text: str | None = None
    text_xpath: str | None = None


@dataclass(frozen=True, slots=True)
class SkippedElement:
    index_path: tuple[int, ...]
    tag: str
    reason: str


@dataclass(frozen=True, slots=True)
class MergedElement:
    index_path: tuple[int, ...]
    tag: str
    kept_index_path: tuple[int, ...]
    dedup_key: str


@dataclass(frozen=True, slots=True)
class PageObjectResult:
    package_name: str
    class_name: str
    source: str
    locators: tuple[LocatorInfo, ...]
    skipped: tuple[SkippedElement, ...] = ()
    name_collisions: tuple[str, ...] = ()
    merged: tuple[MergedElement, ...] = ()

    @property
    def file_name(self) -> str:
        return f"{self.class_name}.java"
