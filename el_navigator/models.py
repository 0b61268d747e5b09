from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from pathlib import Path

from . import constants as cs
from .types_defs import Position, Range


@dataclass(frozen=True)
class BeanEntry:
    bean_name: str
    class_name: str
    file_path: str


@dataclass(frozen=True)
class TypeInfo:
    type_text: str
    normalized_type: str
    simple_type_name: str
    element_type_text: str | None = None
    element_simple_type_name: str | None = None

    def target(self, prefer_element: bool) -> tuple[str, str]:
        if prefer_element and self.element_type_text and self.element_simple_type_name:
            return self.element_type_text, self.element_simple_type_name
        return self.normalized_type, self.simple_type_name


@dataclass(frozen=True)
class _MemberBase:
    label: str
    insert_text: str
    detail: str
    type_info: TypeInfo | None
    line: int

    @property
    def type_text(self) -> str | None:
        return self.type_info.type_text if self.type_info else None

    @property
    def element_type_text(self) -> str | None:
        return self.type_info.element_type_text if self.type_info else None


@dataclass(frozen=True)
class MethodFact(_MemberBase):
    has_parameters: bool = False

    @property
    def kind(self) -> cs.MemberKind:
        return cs.MemberKind.METHOD


@dataclass(frozen=True)
class FieldFact(_MemberBase):
    @property
    def kind(self) -> cs.MemberKind:
        return cs.MemberKind.FIELD


@dataclass(frozen=True)
class PropertyFact(_MemberBase):
    getter_name: str = ""

    @property
    def kind(self) -> cs.MemberKind:
        return cs.MemberKind.PROPERTY


type MemberFact = MethodFact | FieldFact | PropertyFact


@dataclass(frozen=True)
class LocalBinding:
    var_name: str
    value_expression: str
    tag_name: str
    offset: int


@dataclass(frozen=True)
class CacheEnvelope[V]:
    stamp: float
    value: V


@dataclass(frozen=True)
class ElPath:
    root: str
    segments: tuple[str, ...] = ()


@dataclass(frozen=True)
class CompletionContext:
    kind: cs.CompletionContextKind
    prefix: str
    replace_range: Range
    root: str | None = None
    chain: tuple[str, ...] = ()


@dataclass(frozen=True)
class ChainRequest:
    workspace_root: Path
    text: str
    offset: int
    root: str
    chain: tuple[str, ...] = ()
    prefer_element: bool = False


@dataclass(frozen=True)
class ResolvedClass:
    class_name: str
    file_path: str
    members: tuple[MemberFact, ...]
    bean: BeanEntry | None = None
    binding: LocalBinding | None = None


@dataclass
class TextDocument:
    text: str
    path: Path
    language_id: str = cs.LANGUAGE_ID_PLAINTEXT
    _line_starts: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._line_starts = [0]
        for index, char in enumerate(self.text):
            if char == "\n":
                self._line_starts.append(index + 1)

    @classmethod
    def from_path(cls, path: Path, text: str | None = None) -> TextDocument:
        content = path.read_text(encoding=cs.ENCODING_UTF8) if text is None else text
        language_id = cs.LANGUAGE_ID_BY_SUFFIX.get(
            path.suffix.lower(), cs.LANGUAGE_ID_PLAINTEXT
        )
        return cls(text=content, path=path, language_id=language_id)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def offset_at(self, position: Position) -> int:
        if position.line < 0:
            return 0
        if position.line >= len(self._line_starts):
            return len(self.text)
        start = self._line_starts[position.line]
        end = self._line_end(position.line)
        return min(start + max(position.character, 0), end)

    def position_at(self, offset: int) -> Position:
        offset = min(max(offset, 0), len(self.text))
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line])

    def line_text(self, line: int) -> str:
        if not 0 <= line < len(self._line_starts):
            return ""
        return self.text[self._line_starts[line] : self._line_end(line)]

    def _line_end(self, line: int) -> int:
        if line + 1 < len(self._line_starts):
            end = self._line_starts[line + 1] - 1
            if end > 0 and self.text[end - 1] == "\r":
                end -= 1
            return end
        return len(self.text)


@dataclass
class WorkspaceFolders:
    roots: list[Path] = field(default_factory=list)

    def root_for(self, path: Path) -> Path | None:
        resolved = path.resolve()
        containing = [
            root for root in self.roots if resolved.is_relative_to(root.resolve())
        ]
        if not containing:
            return None
        return max(containing, key=lambda root: len(root.resolve().parts))
