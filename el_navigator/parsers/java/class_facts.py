from __future__ import annotations

import re

from ... import constants as cs
from ...types_defs import ClassFacts
from .utils import blank_comments

CLASS_DECLARATION = re.compile(
    r"(?:public\s+)?(?:abstract\s+|final\s+)?class\s+([A-Za-z_][A-Za-z0-9_]*)\b"
)

_NAMED_EXPLICIT = re.compile(
    rf"@(?:[\w.]+\.)?{cs.ANNOTATION_NAMED}"
    r"\s*\(\s*(?:value\s*=\s*)?[\"']([^\"']+)[\"']\s*\)"
)
_MANAGED_BEAN_EXPLICIT = re.compile(
    rf"@(?:[\w.]+\.)?{cs.ANNOTATION_MANAGED_BEAN}"
    r"\s*\(\s*(?:name\s*=\s*)?[\"']([^\"']+)[\"']\s*\)"
)
_BEAN_ANNOTATION = re.compile(
    rf"@(?:[\w.]+\.)?(?:{cs.ANNOTATION_NAMED}|{cs.ANNOTATION_MANAGED_BEAN})\b"
)


def extract_class_name(text: str) -> str | None:
    if match := CLASS_DECLARATION.search(text):
        return match.group(1)
    return None


def to_default_bean_name(class_name: str) -> str:
    if len(class_name) <= 1:
        return class_name.lower()
    return class_name[0].lower() + class_name[1:]


def explicit_bean_names(text: str) -> list[str]:
    names = [m.group(1) for m in _NAMED_EXPLICIT.finditer(text)]
    names.extend(m.group(1) for m in _MANAGED_BEAN_EXPLICIT.finditer(text))
    return names


def has_bean_annotation(text: str) -> bool:
    return _BEAN_ANNOTATION.search(text) is not None


def extract_bean_names(text: str, class_name: str | None) -> list[str]:
    names = explicit_bean_names(text)
    if not names and class_name and has_bean_annotation(text):
        names.append(to_default_bean_name(class_name))
    return list(dict.fromkeys(names))


def extract_class_facts(text: str) -> ClassFacts:
    code = blank_comments(text)
    class_name = extract_class_name(code)
    return ClassFacts(class_name, tuple(extract_bean_names(code, class_name)))
