from __future__ import annotations

import re
from collections.abc import Iterator

from ... import constants as cs
from ...models import CompletionContext, ElPath
from ...types_defs import ElSpan, Position, Range

EL_EXPRESSION = re.compile(r"#\{[^}\r\n]+\}")
IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
PATH_PREFIX = re.compile(
    r"\s*(?P<path>[A-Za-z_][A-Za-z0-9_]*(?:\(\))?"
    r"(?:\.[A-Za-z_][A-Za-z0-9_]*(?:\(\))?)*)"
)
CHAIN_SEGMENT = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)(?:\(\))?$")


def iter_el_spans(text: str) -> Iterator[ElSpan]:
    for match in EL_EXPRESSION.finditer(text):
        yield ElSpan(match.start(), match.end(), match.group(0))


def find_el_at_offset(text: str, offset: int) -> ElSpan | None:
    for span in iter_el_spans(text):
        # (H) Both ends count, so a cursor just past the closing brace still hits
        if span.start <= offset <= span.end:
            return span
        if span.start > offset:
            break
    return None


def expression_body(expression: str) -> str:
    body = expression.strip()
    if body.startswith(cs.EL_OPEN):
        body = body[len(cs.EL_OPEN) :]
    if body.endswith(cs.CHAR_BRACE_CLOSE):
        body = body[: -len(cs.CHAR_BRACE_CLOSE)]
    return body


def parse_el_path(expression: str) -> ElPath | None:
    """Parse the leading dotted member path of an EL expression.

    Accepts either the full `#{...}` text or its body. Anything after the
    path (operators, arguments, literals) is ignored; call parentheses on a
    segment are dropped.
    """
    match = PATH_PREFIX.match(expression_body(expression))
    if not match:
        return None
    names = IDENTIFIER.findall(match.group("path"))
    return ElPath(root=names[0], segments=tuple(names[1:]))


def segment_index_at(span: ElSpan, offset: int) -> int | None:
    match = PATH_PREFIX.match(span.text, len(cs.EL_OPEN))
    if not match:
        return None
    relative = offset - span.start
    index = -1
    for index, name in enumerate(
        IDENTIFIER.finditer(span.text, match.start("path"), match.end("path"))
    ):
        if relative <= name.end():
            return index
    return index if index >= 0 else None


def _prefix_range(line: int, start: int, prefix: str) -> Range:
    return Range(Position(line, start), Position(line, start + len(prefix)))


def parse_completion_context(
    line_text: str, character: int, line: int
) -> CompletionContext | None:
    before = line_text[: max(character, 0)]
    open_at = before.rfind(cs.EL_OPEN)
    if open_at == -1:
        return None
    body = before[open_at + len(cs.EL_OPEN) :]
    if cs.CHAR_BRACE_CLOSE in body:
        return None

    body = body.lstrip()
    if not body:
        return CompletionContext(
            kind=cs.CompletionContextKind.ROOT,
            prefix="",
            replace_range=_prefix_range(line, character, ""),
        )

    *head, typed = body.split(cs.SEPARATOR_DOT)
    prefix = ""
    if typed:
        if not (match := CHAIN_SEGMENT.match(typed)):
            return None
        prefix = match.group(1)
    names: list[str] = []
    for segment in head:
        if not (match := CHAIN_SEGMENT.match(segment)):
            return None
        names.append(match.group(1))

    replace_range = _prefix_range(line, character - len(typed), prefix)
    if not names:
        return CompletionContext(
            kind=cs.CompletionContextKind.ROOT,
            prefix=prefix,
            replace_range=replace_range,
        )
    return CompletionContext(
        kind=cs.CompletionContextKind.PATH,
        prefix=prefix,
        replace_range=replace_range,
        root=names[0],
        chain=tuple(names[1:]),
    )
