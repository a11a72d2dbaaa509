"""
Outbound Ports (Secondary/Driven Ports)

Interfaces for infrastructure that the application drives.
"""

from .document_store import IDocumentStore

__all__ = [
    "IDocumentStore",
]
