from .assistant import ExpressionAssistant, is_target_document
from .cache import AssistCaches, CacheStore
from .chain_resolver import ChainResolver
from .indexes import BeanIndex, ClassIndex

__all__ = [
    "AssistCaches",
    "BeanIndex",
    "CacheStore",
    "ChainResolver",
    "ClassIndex",
    "ExpressionAssistant",
    "is_target_document",
]
