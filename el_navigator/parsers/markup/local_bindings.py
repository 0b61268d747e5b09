from __future__ import annotations

import re
from collections.abc import Iterator

from ... import constants as cs
from ...models import LocalBinding
from ...types_defs import TagMatch

TAG_NAME = re.compile(r"<([A-Za-z_][\w:.\-]*)")
ATTRIBUTE = re.compile(r"([A-Za-z_][\w:.\-]*)\s*=\s*([\"'])(.*?)\2", re.DOTALL)
VAR_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
SIMPLE_EL_PATH = re.compile(
    r"^#\{\s*([A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*)\s*\}$"
)


def _tag_end(text: str, start: int, limit: int) -> int:
    quote: str | None = None
    for pos in range(start + 1, limit):
        char = text[pos]
        if quote:
            if char == quote:
                quote = None
        elif char in cs.QUOTE_CHARS:
            quote = char
        elif char == cs.TAG_CLOSE:
            return pos
    return -1


def iter_tags(text: str, end: int | None = None) -> Iterator[TagMatch]:
    """Yield the opening/self-closing tags that close before `end`.

    A `<` followed by `/`, `!` or `?` is a closing tag, comment/doctype or
    processing instruction and is skipped. The tag ends at the first `>` that
    is not inside a quoted attribute value.
    """
    limit = len(text) if end is None else min(end, len(text))
    pos = text.find(cs.TAG_OPEN, 0, limit)
    while pos != -1:
        following = text[pos + 1 : pos + 2]
        if not following or following in cs.TAG_NON_ELEMENT_MARKERS:
            pos = text.find(cs.TAG_OPEN, pos + 1, limit)
            continue
        close = _tag_end(text, pos, limit)
        if close == -1:
            return
        if name_match := TAG_NAME.match(text, pos):
            yield TagMatch(
                name=name_match.group(1),
                start=pos,
                end=close + 1,
                text=text[pos : close + 1],
            )
        pos = text.find(cs.TAG_OPEN, close + 1, limit)


def parse_attributes(tag_text: str) -> dict[str, str]:
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE.finditer(tag_text):
        attributes.setdefault(match.group(1), match.group(3))
    return attributes


def binding_from_tag(tag: TagMatch) -> LocalBinding | None:
    attributes = parse_attributes(tag.text)
    var_name = attributes.get(cs.BINDING_VAR_ATTRIBUTE, "").strip()
    if not VAR_NAME.match(var_name):
        return None
    for attribute in cs.BINDING_VALUE_ATTRIBUTES:
        if attribute not in attributes:
            continue
        if match := SIMPLE_EL_PATH.match(attributes[attribute].strip()):
            return LocalBinding(
                var_name=var_name,
                value_expression=match.group(1),
                tag_name=tag.name,
                offset=tag.start,
            )
    return None


def scan_local_bindings(text: str, offset: int) -> dict[str, LocalBinding]:
    bindings: dict[str, LocalBinding] = {}
    for tag in iter_tags(text, offset):
        if binding := binding_from_tag(tag):
            bindings[binding.var_name] = binding
    return bindings


def find_local_binding(text: str, offset: int, name: str) -> LocalBinding | None:
    return scan_local_bindings(text, offset).get(name)
