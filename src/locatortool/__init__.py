from __future__ import annotations

from .code_emitters import to_find_by_annotation, to_playwright, to_selenide
from .interactability import is_interactable, query_candidate_elements
from .locator_generator import describe_locators, resolve_all, resolve_primary
from .models import (
    AllLocators,
    DomDocument,
    DomNode,
    LocatorInfo,
    LocatorStrategy,
    MergedElement,
    PageObjectResult,
    SkippedElement,
)
from .name_suggester import to_field_name
from .page_object_writer import generate_page_object, generate_page_object_for_document
from .selector_rules import build_relative_xpath, build_structural_css

__version__ = "0.1.0"

__all__ = [
    "AllLocators",
    "DomDocument",
    "DomNode",
    "LocatorInfo",
    "LocatorStrategy",
    "MergedElement",
    "PageObjectResult",
    "SkippedElement",
    "build_relative_xpath",
    "build_structural_css",
    "describe_locators",
    "generate_page_object",
    "generate_page_object_for_document",
    "is_interactable",
    "query_candidate_elements",
    "resolve_all",
    "resolve_primary",
    "to_field_name",
    "to_find_by_annotation",
    "to_playwright",
    "to_selenide",
]
