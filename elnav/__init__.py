from el_navigator.config import AppConfig, settings
from el_navigator.models import TextDocument, WorkspaceFolders
from el_navigator.services.assistant import ExpressionAssistant, is_target_document
from el_navigator.services.cache import AssistCaches
from el_navigator.types_defs import Position

__all__ = [
    "AppConfig",
    "AssistCaches",
    "ExpressionAssistant",
    "Position",
    "TextDocument",
    "WorkspaceFolders",
    "is_target_document",
    "settings",
]
