from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from .. import logs as ls
from ..models import CacheEnvelope, MemberFact
from ..types_defs import BeanIndexMap, ClassIndexMap, IndexKey


class CacheStore[K, V]:
    """Keyed store whose values are replaced wholesale, never mutated in place."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._entries: dict[K, V] = {}

    def get(self, key: K) -> V | None:
        return self._entries.get(key)

    def put(self, key: K, value: V) -> V:
        self._entries[key] = value
        return value

    def invalidate_all(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class AssistCaches:
    beans: CacheStore[IndexKey, CacheEnvelope[BeanIndexMap]] = field(
        default_factory=lambda: CacheStore("Bean index")
    )
    classes: CacheStore[IndexKey, CacheEnvelope[ClassIndexMap]] = field(
        default_factory=lambda: CacheStore("Class index")
    )
    members: CacheStore[str, CacheEnvelope[tuple[MemberFact, ...]]] = field(
        default_factory=lambda: CacheStore("Member facts")
    )

    def invalidate_all(self) -> None:
        self.beans.invalidate_all()
        self.classes.invalidate_all()
        self.members.invalidate_all()
        logger.debug(ls.CACHES_INVALIDATED)

