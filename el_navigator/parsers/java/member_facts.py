from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from ... import constants as cs
from ... import logs as ls
from ...models import CacheEnvelope, FieldFact, MemberFact, MethodFact, PropertyFact
from ...types_defs import FieldDeclaration, MemberLocation, MethodDeclaration
from ...utils.path_utils import file_mtime, read_source_text
from .class_facts import extract_class_name
from .type_normalizer import normalize_type
from .utils import blank_comments, capitalize, decapitalize, line_at

if TYPE_CHECKING:
    from ...services.cache import CacheStore

_ANNOTATION_PREFIX = r"(?:@[\w.$]+(?:\([^()\n]*\))?[ \t]+)*"
_TYPE = r"[\w.$]+(?:\s*<[^;{}()=]*?>)?(?:\s*\[\s*\])*"
_NAME = r"[A-Za-z_$][\w$]*"

METHOD_DECLARATION = re.compile(
    r"^[ \t]*"
    + _ANNOTATION_PREFIX
    + r"(?:(?:"
    + "|".join(cs.METHOD_MODIFIERS)
    + r")\s+"
    + _ANNOTATION_PREFIX
    + r")+"
    + r"(?:<[^<>]*(?:<[^<>]*>[^<>]*)*>\s*)?"
    + rf"(?P<return_type>{_TYPE})"
    + rf"\s+(?P<name>{_NAME})\s*"
    + r"\((?P<parameters>[^()]*)\)"
    + r"\s*(?:throws\s+[\w.$,\s]+?)?\s*\{",
    re.MULTILINE,
)

FIELD_DECLARATION = re.compile(
    r"^[ \t]*"
    + _ANNOTATION_PREFIX
    + r"(?:public|protected)\s+"
    + _ANNOTATION_PREFIX
    + r"(?:(?:static|final|transient|volatile)\s+"
    + _ANNOTATION_PREFIX
    + r")*"
    + rf"(?P<type>{_TYPE})"
    + rf"\s+(?P<name>{_NAME})\s*(?:=[^;]*)?;",
    re.MULTILINE,
)

GETTER_NAME = re.compile(r"^(?:get|is)([A-Z][\w$]*)$")
_WHITESPACE = re.compile(r"\s+")


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def iter_method_declarations(
    code: str, class_name: str | None = None
) -> Iterator[MethodDeclaration]:
    for match in METHOD_DECLARATION.finditer(code):
        name = match.group("name")
        if name == class_name or name in cs.SKIPPED_METHOD_NAMES:
            continue
        yield MethodDeclaration(
            name=name,
            return_type=_collapse(match.group("return_type")),
            parameters=_collapse(match.group("parameters")),
            line=line_at(code, match.start("name")),
        )


def iter_field_declarations(code: str) -> Iterator[FieldDeclaration]:
    for match in FIELD_DECLARATION.finditer(code):
        yield FieldDeclaration(
            name=match.group("name"),
            type_text=_collapse(match.group("type")),
            line=line_at(code, match.start("name")),
        )


def property_name_for_getter(method_name: str) -> str | None:
    if match := GETTER_NAME.match(method_name):
        return decapitalize(match.group(1))
    return None


def accessor_candidates(member: str) -> list[str]:
    if not member:
        return []
    suffix = capitalize(member)
    return [
        member,
        f"{cs.GETTER_PREFIX}{suffix}",
        f"{cs.BOOLEAN_GETTER_PREFIX}{suffix}",
        f"{cs.SETTER_PREFIX}{suffix}",
    ]


def dedupe_members(facts: Iterable[MemberFact]) -> tuple[MemberFact, ...]:
    seen: set[tuple[cs.MemberKind, str]] = set()
    unique: list[MemberFact] = []
    for fact in facts:
        key = (fact.kind, fact.label)
        if key in seen:
            continue
        seen.add(key)
        unique.append(fact)
    return tuple(unique)


def _method_facts(declaration: MethodDeclaration) -> Iterator[MemberFact]:
    type_info = normalize_type(declaration.return_type)
    if not type_info.normalized_type:
        type_info = None
    type_label = type_info.type_text if type_info else cs.DETAIL_UNKNOWN_TYPE
    has_parameters = bool(declaration.parameters)
    yield MethodFact(
        label=declaration.name,
        insert_text=(
            f"{declaration.name}{cs.CALL_SUFFIX}"
            if has_parameters
            else declaration.name
        ),
        detail=cs.DETAIL_METHOD.format(
            return_type=type_label,
            name=declaration.name,
            parameters=declaration.parameters,
        ),
        type_info=type_info,
        line=declaration.line,
        has_parameters=has_parameters,
    )
    if has_parameters:
        return
    if property_name := property_name_for_getter(declaration.name):
        yield PropertyFact(
            label=property_name,
            insert_text=property_name,
            detail=cs.DETAIL_PROPERTY.format(
                type_text=type_label, getter=declaration.name
            ),
            type_info=type_info,
            line=declaration.line,
            getter_name=declaration.name,
        )


def _field_fact(declaration: FieldDeclaration) -> FieldFact:
    type_info = normalize_type(declaration.type_text)
    if not type_info.normalized_type:
        type_info = None
    return FieldFact(
        label=declaration.name,
        insert_text=declaration.name,
        detail=cs.DETAIL_FIELD.format(
            type_text=type_info.type_text if type_info else cs.DETAIL_UNKNOWN_TYPE,
            name=declaration.name,
        ),
        type_info=type_info,
        line=declaration.line,
    )


def extract_member_facts(
    text: str, class_name: str | None = None
) -> tuple[MemberFact, ...]:
    code = blank_comments(text)
    if class_name is None:
        class_name = extract_class_name(code)
    facts: list[MemberFact] = []
    for method in iter_method_declarations(code, class_name):
        facts.extend(_method_facts(method))
    facts.extend(_field_fact(field) for field in iter_field_declarations(code))
    return dedupe_members(facts)


def find_member(
    members: Iterable[MemberFact], label: str
) -> MemberFact | None:
    by_kind: dict[cs.MemberKind, MemberFact] = {}
    for member in members:
        if member.label == label:
            by_kind.setdefault(member.kind, member)
    for kind in (cs.MemberKind.PROPERTY, cs.MemberKind.FIELD, cs.MemberKind.METHOD):
        if kind in by_kind:
            return by_kind[kind]
    return None


def locate_method(
    members: Iterable[MemberFact], candidates: list[str]
) -> MemberLocation | None:
    methods = {
        member.label: member.line
        for member in reversed(tuple(members))
        if isinstance(member, MethodFact)
    }
    for candidate in candidates:
        if candidate in methods:
            return MemberLocation(candidate, methods[candidate])
    return None


class MemberFactExtractor:
    def __init__(
        self, cache: CacheStore[str, CacheEnvelope[tuple[MemberFact, ...]]]
    ) -> None:
        self.cache = cache

    def members_for(self, path: Path | str) -> tuple[MemberFact, ...]:
        path = Path(path)
        mtime = file_mtime(path)
        if mtime is None:
            return ()

        key = str(path)
        cached = self.cache.get(key)
        if cached is not None and cached.stamp == mtime:
            logger.debug(ls.MEMBERS_CACHE_HIT.format(path=path))
            return cached.value

        text = read_source_text(path)
        if text is None:
            return ()

        members = extract_member_facts(text)
        self.cache.put(key, CacheEnvelope(mtime, members))
        logger.debug(ls.MEMBERS_EXTRACTED.format(count=len(members), path=path))
        return members
