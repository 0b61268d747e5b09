from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple, Protocol, TypedDict, runtime_checkable

from .constants import CompletionItemKind

if TYPE_CHECKING:
    from .models import BeanEntry

type SimpleName = str
type BeanKey = str
type IndexKey = tuple[str, str]
type Clock = Callable[[], float]


class Position(NamedTuple):
    line: int
    character: int


class Range(NamedTuple):
    start: Position
    end: Position


class ElSpan(NamedTuple):
    start: int
    end: int
    text: str


class ClassFacts(NamedTuple):
    class_name: str | None
    bean_names: tuple[str, ...]


class MethodDeclaration(NamedTuple):
    name: str
    return_type: str
    parameters: str
    line: int


class FieldDeclaration(NamedTuple):
    name: str
    type_text: str
    line: int


class TagMatch(NamedTuple):
    name: str
    start: int
    end: int
    text: str


class MemberLocation(NamedTuple):
    method_name: str
    line: int


class HoverTarget(TypedDict):
    bean: str
    member: str
    class_name: str
    method_name: str | None
    method_line: int | None
    file_path: str


class DefinitionTarget(TypedDict):
    file_path: str
    line: int


class CompletionItem(TypedDict):
    label: str
    kind: CompletionItemKind
    insert_text: str
    detail: str
    replace_range: Range


@runtime_checkable
class DocumentProtocol(Protocol):
    @property
    def text(self) -> str: ...

    @property
    def path(self) -> Path: ...

    @property
    def language_id(self) -> str: ...

    def offset_at(self, position: Position) -> int: ...

    def position_at(self, offset: int) -> Position: ...

    def line_text(self, line: int) -> str: ...


class WorkspaceResolverProtocol(Protocol):
    def root_for(self, path: Path) -> Path | None: ...


type BeanIndexMap = Mapping[BeanKey, tuple[BeanEntry, ...]]
type ClassIndexMap = Mapping[SimpleName, tuple[str, ...]]
