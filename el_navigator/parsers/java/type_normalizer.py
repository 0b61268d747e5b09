from __future__ import annotations

import re
from functools import lru_cache

from ... import constants as cs
from ...models import TypeInfo

_ANNOTATION = re.compile(r"@[\w.$]+(?:\s*\([^()]*(?:\([^()]*\)[^()]*)*\))?")
_MODIFIER = re.compile(r"\b(?:" + "|".join(sorted(cs.TYPE_MODIFIERS)) + r")\b")
_ARRAY_SUFFIX = re.compile(r"(?:\s*\[\s*\]|\s*\.\.\.)+\s*$")
_WILDCARD = re.compile(r"^\?\s*(?:" + "|".join(cs.WILDCARD_BOUNDS) + r")\s+")
_WHITESPACE = re.compile(r"\s+")


def find_matching_angle(text: str, start: int) -> int:
    if start >= len(text) or text[start] != cs.CHAR_ANGLE_OPEN:
        return -1
    depth = 0
    for pos in range(start, len(text)):
        char = text[pos]
        if char == cs.CHAR_ANGLE_OPEN:
            depth += 1
        elif char == cs.CHAR_ANGLE_CLOSE:
            depth -= 1
            if depth == 0:
                return pos
    return -1


def split_top_level_commas(content: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in content:
        if char == cs.CHAR_ANGLE_OPEN:
            depth += 1
        elif char == cs.CHAR_ANGLE_CLOSE:
            depth -= 1
        elif char == cs.SEPARATOR_COMMA and depth == 0:
            if part := "".join(current).strip():
                parts.append(part)
            current = []
            continue
        current.append(char)
    if part := "".join(current).strip():
        parts.append(part)
    return parts


def strip_annotations_and_modifiers(raw: str) -> str:
    text = _ANNOTATION.sub(" ", raw)
    text = _MODIFIER.sub(" ", text)
    return text.strip()


def strip_type_parameter_clause(text: str) -> str:
    if not text.startswith(cs.CHAR_ANGLE_OPEN):
        return text
    end = find_matching_angle(text, 0)
    if end == -1:
        return ""
    return text[end + 1 :].strip()


def strip_array_suffix(text: str) -> tuple[str, bool]:
    if match := _ARRAY_SUFFIX.search(text):
        return text[: match.start()].strip(), True
    return text, False


def strip_wildcard(text: str) -> str:
    stripped = _WILDCARD.sub("", text)
    if stripped == cs.CHAR_QUESTION:
        return cs.JAVA_TYPE_OBJECT
    return stripped.strip()


def split_generic_arguments(text: str) -> tuple[str, list[str]]:
    open_at = text.find(cs.CHAR_ANGLE_OPEN)
    if open_at == -1:
        return text.strip(), []
    base = text[:open_at].strip()
    close_at = find_matching_angle(text, open_at)
    inner = text[open_at + 1 : close_at if close_at != -1 else len(text)]
    return base, split_top_level_commas(inner)


def simple_name(type_name: str) -> str:
    return type_name.rsplit(cs.SEPARATOR_DOT, 1)[-1]


def is_builtin_type(type_name: str) -> bool:
    if not type_name:
        return True
    return (
        simple_name(type_name) in cs.BUILTIN_TYPE_NAMES
        or type_name.startswith(cs.JAVA_STDLIB_PREFIX)
    )


@lru_cache(maxsize=4096)
def normalize_type(raw: str) -> TypeInfo:
    cleaned = strip_annotations_and_modifiers(raw)
    cleaned = strip_type_parameter_clause(cleaned)
    cleaned, is_array = strip_array_suffix(cleaned)
    cleaned = strip_wildcard(cleaned)
    base, arguments = split_generic_arguments(cleaned)

    normalized = _WHITESPACE.sub("", base)
    simple = simple_name(normalized)
    type_text = _WHITESPACE.sub(" ", cleaned).strip()
    if is_array:
        type_text = f"{type_text}{cs.ARRAY_SUFFIX}"

    element_text: str | None = None
    element_simple: str | None = None
    if is_array:
        element_text, element_simple = normalized, simple
    elif simple in cs.COLLECTION_TYPE_NAMES and arguments:
        element = normalize_type(arguments[0])
        element_text = element.normalized_type
        element_simple = element.simple_type_name

    return TypeInfo(
        type_text=type_text,
        normalized_type=normalized,
        simple_type_name=simple,
        element_type_text=element_text,
        element_simple_type_name=element_simple,
    )
