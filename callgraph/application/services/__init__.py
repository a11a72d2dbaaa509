"""
Application Services

Use case implementations orchestrating the domain services.
"""

from .editor_service import GraphEditorService, ImportResult
from .generation_service import GenerationService

__all__ = [
    "GraphEditorService",
    "ImportResult",
    "GenerationService",
]
