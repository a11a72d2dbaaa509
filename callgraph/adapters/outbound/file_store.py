"""
File Store Adapter

Implements IDocumentStore for the local filesystem.
"""

import os

from callgraph.application.ports import IDocumentStore


class LocalFileStore(IDocumentStore):
    """
    Local filesystem implementation of IDocumentStore.

    Provides file I/O for specification documents and generated artifacts.
    """

    def read_bytes(self, path: str) -> bytes:
        """Read file content undecoded."""
        with open(path, 'rb') as f:
            return f.read()

    def write_text(self, path: str, content: str) -> str:
        """Write text content to file. Returns the written path."""
        self.makedirs(os.path.dirname(path))
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def exists(self, path: str) -> bool:
        """Check if path exists."""
        return os.path.exists(path)

    def makedirs(self, path: str) -> None:
        """Create directory and parents if they don't exist."""
        if path:
            os.makedirs(path, exist_ok=True)
