from __future__ import annotations

import re
import unicodedata

_TAG_PREFIXES = {
    "button": "btn ",
    "input": "input ",
    "select": "ddl ",
    "textarea": "txt ",
    "a": "lnk ",
}

_NON_WORD_RUN = re.compile(r"[^A-Za-z0-9_]+")
_ILLEGAL_CHAR = re.compile(r"[^A-Za-z0-9_]")


def to_field_name(base: str | None, tag_name: str | None) -> str:
    tag = (tag_name or "").strip().lower() or "element"
    safe_tag = _safe_tag(tag)

    if not base or not base.strip():
        base = f"{tag}_element"

    source = _TAG_PREFIXES.get(tag, "") + _transliterate(base)
    tokens = _NON_WORD_RUN.sub(" ", source).strip().split()
    if not tokens:
        tokens = [safe_tag, "element"]

    result = ""
    for index, token in enumerate(tokens):
        lowered = token.lower()
        if index == 0:
            result += lowered
        else:
            result += lowered[:1].upper() + lowered[1:]

    if result and not re.match(r"^[A-Za-z_]", result):
        result = f"{safe_tag}_{result}"

    result = _ILLEGAL_CHAR.sub("", result)
    if not result:
        result = f"{safe_tag}Element"
    return result


def to_accessor_name(field_name: str) -> str:
    return "get" + field_name[:1].upper() + field_name[1:]


def _safe_tag(tag_name: str) -> str:
    tag = _ILLEGAL_CHAR.sub("", _transliterate(tag_name).lower())
    # Tag names feed prefixes, so they must start an identifier on their own.
    if not tag or not re.match(r"^[a-z_]", tag):
        return "element"
    return tag


def _transliterate(value: str) -> str:
    table = str.maketrans(
        {
            "ç": "c",
            "Ç": "C",
            "ğ": "g",
            "Ğ": "G",
            "ı": "i",
            "İ": "I",
            "ö": "o",
            "Ö": "O",
            "ş": "s",
            "Ş": "S",
            "ü": "u",
            "Ü": "U",
        }
    )
    decomposed = unicodedata.normalize("NFKD", value.translate(table))
    return "".join(char for char in decomposed if not unicodedata.combining(char))
