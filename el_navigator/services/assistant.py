from __future__ import annotations

import time
from pathlib import Path

from loguru import logger

from .. import constants as cs
from .. import logs as ls
from ..config import AppConfig
from ..models import (
    BeanEntry,
    ChainRequest,
    CompletionContext,
    LocalBinding,
    ResolvedClass,
)
from ..parsers.java.member_facts import (
    MemberFactExtractor,
    accessor_candidates,
    find_member,
    locate_method,
)
from ..parsers.markup.el_reference import (
    find_el_at_offset,
    parse_completion_context,
    parse_el_path,
    segment_index_at,
)
from ..parsers.markup.local_bindings import scan_local_bindings
from ..types_defs import (
    Clock,
    CompletionItem,
    DefinitionTarget,
    DocumentProtocol,
    HoverTarget,
    MemberLocation,
    Position,
    Range,
    WorkspaceResolverProtocol,
)
from .cache import AssistCaches
from .chain_resolver import ChainResolver
from .indexes import BeanIndex, ClassIndex


def is_target_document(document: DocumentProtocol) -> bool:
    if document.language_id in cs.TARGET_LANGUAGE_IDS:
        return True
    return str(document.path).lower().endswith(cs.TARGET_DOCUMENT_SUFFIX)


def _matches_prefix(label: str, prefix: str) -> bool:
    return label.lower().startswith(prefix.lower())


class ExpressionAssistant:
    """Hover, go-to-definition and completion for `#{...}` references.

    One instance owns the caches for every workspace it serves; call
    `invalidate()` whenever Java sources or the configuration change.
    """

    def __init__(
        self,
        config: AppConfig,
        workspaces: WorkspaceResolverProtocol,
        caches: AssistCaches | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.config = config
        self.workspaces = workspaces
        self.caches = caches if caches is not None else AssistCaches()
        self.beans = BeanIndex(self.caches.beans, config, clock)
        self.classes = ClassIndex(self.caches.classes, config, clock)
        self.members = MemberFactExtractor(self.caches.members)
        self.resolver = ChainResolver(self.beans, self.classes, self.members)

    def invalidate(self) -> None:
        self.caches.invalidate_all()

    def resolve_hover_target(
        self, document: DocumentProtocol, position: Position
    ) -> HoverTarget | None:
        if not self.config.HOVER_ENABLED:
            logger.debug(ls.HOVER_DISABLED)
            return None
        return self._resolve_reference(document, position)

    def resolve_definition_target(
        self, document: DocumentProtocol, position: Position
    ) -> DefinitionTarget | None:
        if not self.config.HOVER_ENABLED:
            logger.debug(ls.HOVER_DISABLED)
            return None
        if (target := self._resolve_reference(document, position)) is None:
            return None
        return DefinitionTarget(
            file_path=target["file_path"],
            line=target["method_line"] or 1,
        )

    def get_completion_items(
        self, document: DocumentProtocol, position: Position
    ) -> list[CompletionItem] | None:
        if not self.config.COMPLETION_ENABLED:
            logger.debug(ls.COMPLETION_DISABLED)
            return None
        if (workspace_root := self._workspace_for(document)) is None:
            return None

        context = parse_completion_context(
            document.line_text(position.line), position.character, position.line
        )
        if context is None:
            logger.debug(
                ls.NO_COMPLETION_CONTEXT.format(
                    line=position.line, character=position.character
                )
            )
            return None

        offset = document.offset_at(position)
        match context.kind:
            case cs.CompletionContextKind.ROOT:
                return self._root_items(workspace_root, document.text, offset, context)
            case cs.CompletionContextKind.PATH:
                return self._member_items(
                    workspace_root, document.text, offset, context
                )
        return None

    def _workspace_for(self, document: DocumentProtocol) -> Path | None:
        if not is_target_document(document):
            logger.debug(ls.NOT_TARGET_DOCUMENT.format(path=document.path))
            return None
        workspace_root = self.workspaces.root_for(document.path)
        if workspace_root is None:
            logger.debug(ls.NO_WORKSPACE.format(path=document.path))
        return workspace_root

    def _resolve_reference(
        self, document: DocumentProtocol, position: Position
    ) -> HoverTarget | None:
        if (workspace_root := self._workspace_for(document)) is None:
            return None

        offset = document.offset_at(position)
        span = find_el_at_offset(document.text, offset)
        if span is None:
            logger.debug(ls.NO_EL_AT_OFFSET.format(offset=offset))
            return None
        path = parse_el_path(span.text)
        if path is None or not path.segments:
            return None

        # (H) The root segment itself has no declaration; fall back to the first member
        under_cursor = segment_index_at(span, offset) or 0
        depth = min(max(under_cursor, 1), len(path.segments))
        member = path.segments[depth - 1]
        request = ChainRequest(
            workspace_root=workspace_root,
            text=document.text,
            offset=offset,
            root=path.root,
            chain=path.segments[: depth - 1],
        )

        found = self._locate_member(request, member)
        if found is None:
            return None
        owner, location = found
        if find_member(owner.members, member) is None:
            logger.debug(
                ls.MEMBER_NOT_FOUND.format(member=member, class_name=owner.class_name)
            )
            return None
        return HoverTarget(
            bean=path.root,
            member=member,
            class_name=owner.class_name,
            method_name=location.method_name if location else None,
            method_line=location.line if location else None,
            file_path=owner.file_path,
        )

    def _locate_member(
        self, request: ChainRequest, member: str
    ) -> tuple[ResolvedClass, MemberLocation | None] | None:
        candidates = accessor_candidates(member)
        if not request.chain:
            root = self.resolver.resolve_root(request)
            if root is not None and root.binding is None:
                return self._rank_bean_entries(
                    request.workspace_root, request.root, member, candidates
                )
        else:
            root = self.resolver.resolve(request)
        if root is None:
            return None
        return root, locate_method(root.members, candidates)

    def _rank_bean_entries(
        self,
        workspace_root: Path,
        bean_name: str,
        member: str,
        candidates: list[str],
    ) -> tuple[ResolvedClass, MemberLocation | None] | None:
        ranked: list[
            tuple[bool, bool, int, ResolvedClass, MemberLocation | None]
        ] = []
        for entry in self.beans.lookup(workspace_root, bean_name):
            members = self.members.members_for(entry.file_path)
            location = locate_method(members, candidates)
            owner = ResolvedClass(
                class_name=entry.class_name,
                file_path=entry.file_path,
                members=members,
                bean=entry,
            )
            missing = find_member(members, member) is None
            ranked.append(
                (missing, location is None, len(entry.file_path), owner, location)
            )
        if not ranked:
            return None
        _, _, _, owner, location = min(ranked, key=lambda item: item[:3])
        return owner, location

    def _root_items(
        self,
        workspace_root: Path,
        text: str,
        offset: int,
        context: CompletionContext,
    ) -> list[CompletionItem]:
        bindings = scan_local_bindings(text, offset)
        items = [
            self._binding_item(binding, context.replace_range)
            for name, binding in sorted(bindings.items())
            if _matches_prefix(name, context.prefix)
        ]

        shadowed = {name.lower() for name in bindings}
        for key, entries in sorted(self.beans.get(workspace_root).items()):
            if key in shadowed or not entries:
                continue
            entry = min(entries, key=lambda candidate: len(candidate.file_path))
            if _matches_prefix(entry.bean_name, context.prefix):
                items.append(self._bean_item(entry, context.replace_range))
        return items

    def _member_items(
        self,
        workspace_root: Path,
        text: str,
        offset: int,
        context: CompletionContext,
    ) -> list[CompletionItem] | None:
        if context.root is None:
            return None
        owner = self.resolver.resolve(
            ChainRequest(
                workspace_root=workspace_root,
                text=text,
                offset=offset,
                root=context.root,
                chain=context.chain,
                prefer_element=True,
            )
        )
        if owner is None:
            return None
        return [
            CompletionItem(
                label=member.label,
                kind=cs.CompletionItemKind(member.kind),
                insert_text=member.insert_text,
                detail=member.detail,
                replace_range=context.replace_range,
            )
            for member in owner.members
            if _matches_prefix(member.label, context.prefix)
        ]

    @staticmethod
    def _bean_item(entry: BeanEntry, replace_range: Range) -> CompletionItem:
        return CompletionItem(
            label=entry.bean_name,
            kind=cs.CompletionItemKind.BEAN,
            insert_text=entry.bean_name,
            detail=cs.DETAIL_BEAN.format(class_name=entry.class_name),
            replace_range=replace_range,
        )

    @staticmethod
    def _binding_item(binding: LocalBinding, replace_range: Range) -> CompletionItem:
        return CompletionItem(
            label=binding.var_name,
            kind=cs.CompletionItemKind.VARIABLE,
            insert_text=binding.var_name,
            detail=cs.DETAIL_VARIABLE.format(
                tag_name=binding.tag_name, expression=binding.value_expression
            ),
            replace_range=replace_range,
        )
