from .el_reference import find_el_at_offset, parse_completion_context, parse_el_path
from .local_bindings import find_local_binding, scan_local_bindings

__all__ = [
    "find_el_at_offset",
    "find_local_binding",
    "parse_completion_context",
    "parse_el_path",
    "scan_local_bindings",
]
