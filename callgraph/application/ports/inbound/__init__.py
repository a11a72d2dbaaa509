"""
Inbound Ports (Primary/Driving Ports)

Use case interfaces called by the CLI and the HTTP API.
"""

from .editor_port import IEditorUseCase

__all__ = [
    "IEditorUseCase",
]
