from __future__ import annotations

import os
import time
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from .. import constants as cs
from .. import logs as ls
from ..config import AppConfig
from ..decorators import timing_decorator
from ..models import BeanEntry, CacheEnvelope
from ..parsers.java.class_facts import extract_class_facts, extract_class_name
from ..parsers.java.utils import blank_comments
from ..types_defs import BeanIndexMap, ClassIndexMap, Clock, IndexKey
from ..utils.path_utils import collect_source_files, read_source_text
from .cache import CacheStore


def find_nested_source_root(workspace_root: Path) -> str | None:
    try:
        children = sorted(
            entry.name for entry in os.scandir(workspace_root) if entry.is_dir()
        )
    except OSError as e:
        logger.debug(ls.SOURCE_WALK_FAILED.format(path=workspace_root, error=e))
        return None

    for child in children:
        candidate = f"{child}/{cs.DEFAULT_SOURCE_ROOT_RELATIVE}"
        if (workspace_root / candidate).exists():
            return candidate
    return None


def resolve_source_root(workspace_root: Path, configured: str | None) -> str:
    relative = (configured or "").strip() or cs.DEFAULT_SOURCE_ROOT_RELATIVE
    if (workspace_root / relative).exists():
        return relative

    # (H) Multi-module layouts keep the conventional root one level down
    if relative.lower() == cs.DEFAULT_SOURCE_ROOT_RELATIVE.lower():
        if nested := find_nested_source_root(workspace_root):
            logger.debug(
                ls.SOURCE_ROOT_NESTED.format(relative=nested, workspace=workspace_root)
            )
            return nested

    return relative


def shortest_path(paths: list[str] | tuple[str, ...]) -> str | None:
    return min(paths, key=len) if paths else None


class _TimedIndex[V]:
    label = "Index"

    def __init__(
        self,
        cache: CacheStore[IndexKey, CacheEnvelope[V]],
        config: AppConfig,
        clock: Clock = time.monotonic,
    ) -> None:
        self.cache = cache
        self.config = config
        self.clock = clock

    def source_root(self, workspace_root: Path) -> Path:
        relative = resolve_source_root(
            workspace_root, self.config.SOURCE_ROOT_RELATIVE
        )
        return workspace_root / relative

    def get(self, workspace_root: Path) -> V:
        root = self.source_root(workspace_root)
        key: IndexKey = (str(workspace_root), str(root))
        now = self.clock()
        cached = self.cache.get(key)
        if cached is not None:
            age = now - cached.stamp
            if age <= self.config.index_cache_ttl_seconds:
                logger.debug(
                    ls.INDEX_CACHE_HIT.format(
                        index=self.label, key=key, age=age * cs.MS_PER_SECOND
                    )
                )
                return cached.value
            logger.debug(ls.INDEX_CACHE_EXPIRED.format(index=self.label, key=key))

        value = self.build(root)
        self.cache.put(key, CacheEnvelope(now, value))
        return value

    def build(self, source_root: Path) -> V:
        raise NotImplementedError


class BeanIndex(_TimedIndex[BeanIndexMap]):
    label = "Bean index"

    @timing_decorator
    def build(self, source_root: Path) -> BeanIndexMap:
        index: dict[str, list[BeanEntry]] = {}
        files = collect_source_files(source_root)
        for file_path in files:
            if (text := read_source_text(file_path)) is None:
                continue
            class_name, bean_names = extract_class_facts(text)
            for bean_name in bean_names:
                index.setdefault(bean_name.lower(), []).append(
                    BeanEntry(
                        bean_name=bean_name,
                        class_name=class_name or file_path.stem,
                        file_path=str(file_path),
                    )
                )
        logger.info(
            ls.BEAN_INDEX_BUILT.format(
                beans=len(index), files=len(files), root=source_root
            )
        )
        return MappingProxyType({key: tuple(entries) for key, entries in index.items()})

    def lookup(self, workspace_root: Path, bean_name: str) -> tuple[BeanEntry, ...]:
        return self.get(workspace_root).get(bean_name.lower(), ())

    def best_entry(self, workspace_root: Path, bean_name: str) -> BeanEntry | None:
        entries = self.lookup(workspace_root, bean_name)
        if not entries:
            logger.debug(ls.BEAN_NOT_FOUND.format(name=bean_name))
            return None
        best = min(entries, key=lambda entry: len(entry.file_path))
        if len(entries) > 1:
            logger.debug(
                ls.BEAN_AMBIGUOUS.format(
                    name=bean_name, count=len(entries), path=best.file_path
                )
            )
        return best


class ClassIndex(_TimedIndex[ClassIndexMap]):
    label = "Class index"

    @timing_decorator
    def build(self, source_root: Path) -> ClassIndexMap:
        index: dict[str, dict[str, None]] = {}
        files = collect_source_files(source_root)
        for file_path in files:
            text = read_source_text(file_path)
            class_name = extract_class_name(blank_comments(text)) if text else None
            key = (class_name or file_path.stem).lower()
            index.setdefault(key, {})[str(file_path)] = None
        logger.info(
            ls.CLASS_INDEX_BUILT.format(
                classes=len(index), files=len(files), root=source_root
            )
        )
        return MappingProxyType({key: tuple(paths) for key, paths in index.items()})

    def candidates(self, workspace_root: Path, simple_name: str) -> tuple[str, ...]:
        return self.get(workspace_root).get(simple_name.lower(), ())

    def locate(
        self, workspace_root: Path, normalized_type: str, simple_name: str
    ) -> str | None:
        candidates = self.candidates(workspace_root, simple_name)
        if not candidates:
            return None
        if cs.SEPARATOR_DOT in normalized_type:
            suffix = normalized_type.replace(cs.SEPARATOR_DOT, os.sep) + cs.JAVA_EXT
            for candidate in candidates:
                if candidate.endswith(os.sep + suffix) or candidate == suffix:
                    return candidate
        return shortest_path(candidates)

