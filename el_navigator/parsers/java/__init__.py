from .class_facts import extract_class_facts, to_default_bean_name
from .member_facts import MemberFactExtractor, extract_member_facts
from .type_normalizer import is_builtin_type, normalize_type

__all__ = [
    "MemberFactExtractor",
    "extract_class_facts",
    "extract_member_facts",
    "is_builtin_type",
    "normalize_type",
    "to_default_bean_name",
]
