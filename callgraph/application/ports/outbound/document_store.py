"""
Document Store Port

Interface for reading and writing specification documents.
"""

from abc import ABC, abstractmethod


class IDocumentStore(ABC):
    """
    Outbound port for specification document storage.

    Documents are read as raw bytes and written as text; parsing and
    serialization stay in the domain layer.
    """

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """
        Read a document without decoding it.

        Args:
            path: Location of the document

        Returns:
            Raw document content; the JSON parser detects its encoding
        """
        pass

    @abstractmethod
    def write_text(self, path: str, content: str) -> str:
        """
        Write a document, creating parent directories as needed.

        Returns:
            The written path
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass
