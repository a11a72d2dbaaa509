"""
Application Ports

Inbound ports describe what drivers may ask of the application; outbound
ports describe the infrastructure the application needs.
"""

from .inbound import IEditorUseCase
from .outbound import IDocumentStore

__all__ = [
    "IEditorUseCase",
    "IDocumentStore",
]
