from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from loguru import logger

from .. import constants as cs
from .. import logs as ls
from ..models import ChainRequest, LocalBinding, ResolvedClass
from ..parsers.java.member_facts import MemberFactExtractor, find_member
from ..parsers.java.type_normalizer import is_builtin_type
from ..parsers.markup.el_reference import parse_el_path
from ..parsers.markup.local_bindings import find_local_binding
from .indexes import BeanIndex, ClassIndex


class ChainResolver:
    """Walks `root.segment.segment` through member types to a terminal class.

    The root is a local variable bound earlier in the markup when one is in
    scope, otherwise a managed bean. Every failed hop yields None.
    """

    def __init__(
        self,
        beans: BeanIndex,
        classes: ClassIndex,
        members: MemberFactExtractor,
    ) -> None:
        self.beans = beans
        self.classes = classes
        self.members = members

    def resolve(self, request: ChainRequest) -> ResolvedClass | None:
        return self._resolve(request, depth=0)

    def resolve_root(self, request: ChainRequest) -> ResolvedClass | None:
        return self._resolve_root(request, depth=0)

    def _resolve(self, request: ChainRequest, depth: int) -> ResolvedClass | None:
        current = self._resolve_root(request, depth)
        last = len(request.chain) - 1
        for index, segment in enumerate(request.chain):
            if current is None:
                return None
            current = self.step(
                request.workspace_root,
                current,
                segment,
                prefer_element=request.prefer_element and index == last,
            )
        if current is not None:
            logger.debug(
                ls.CHAIN_RESOLVED.format(
                    path=cs.SEPARATOR_DOT.join((request.root, *request.chain)),
                    class_name=current.class_name,
                    file_path=current.file_path,
                )
            )
        return current

    def _resolve_root(self, request: ChainRequest, depth: int) -> ResolvedClass | None:
        binding = find_local_binding(request.text, request.offset, request.root)
        if binding is not None:
            return self._resolve_binding(request, binding, depth)

        entry = self.beans.best_entry(request.workspace_root, request.root)
        if entry is None:
            return None
        return ResolvedClass(
            class_name=entry.class_name,
            file_path=entry.file_path,
            members=self.members.members_for(entry.file_path),
            bean=entry,
        )

    def _resolve_binding(
        self, request: ChainRequest, binding: LocalBinding, depth: int
    ) -> ResolvedClass | None:
        if depth >= cs.MAX_BINDING_DEPTH:
            logger.debug(ls.BINDING_TOO_DEEP.format(name=binding.var_name))
            return None
        if (path := parse_el_path(binding.value_expression)) is None:
            return None

        logger.debug(
            ls.BINDING_SHADOWS_BEAN.format(
                name=binding.var_name,
                tag=binding.tag_name,
                expression=binding.value_expression,
            )
        )
        # (H) Bindings come from iteration tags, so the bound value is one element
        inner = ChainRequest(
            workspace_root=request.workspace_root,
            text=request.text,
            offset=binding.offset,
            root=path.root,
            chain=path.segments,
            prefer_element=True,
        )
        resolved = self._resolve(inner, depth + 1)
        if resolved is None:
            return None
        return replace(resolved, binding=binding)

    def step(
        self,
        workspace_root: Path,
        current: ResolvedClass,
        segment: str,
        prefer_element: bool = False,
    ) -> ResolvedClass | None:
        member = find_member(current.members, segment)
        if member is None:
            logger.debug(
                ls.MEMBER_NOT_FOUND.format(
                    member=segment, class_name=current.class_name
                )
            )
            return None
        if member.type_info is None:
            logger.debug(
                ls.MEMBER_UNTYPED.format(member=segment, class_name=current.class_name)
            )
            return None

        type_name, simple = member.type_info.target(prefer_element)
        if is_builtin_type(type_name):
            logger.debug(ls.TYPE_BUILTIN.format(type_name=type_name))
            return None

        file_path = self.classes.locate(workspace_root, type_name, simple)
        if file_path is None:
            logger.debug(ls.TYPE_NOT_INDEXED.format(type_name=type_name))
            return None

        return ResolvedClass(
            class_name=simple,
            file_path=file_path,
            members=self.members.members_for(file_path),
        )
