"""
Editor Use Case Port

Interface defining the contract for interactive graph editing.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Union


class IEditorUseCase(ABC):
    """
    Inbound port for the editing session.

    One session holds one current graph. Loading replaces it only on
    success; every edit applies to it in place.
    """

    @abstractmethod
    def load_text(self, text: Union[str, bytes]) -> Any:
        """
        Import a specification document.

        Args:
            text: Raw JSON text or undecoded bytes

        Returns:
            Import result carrying either the new graph or the error
        """
        pass

    @abstractmethod
    def export_text(self) -> str:
        """Serialize the current graph back to specification JSON."""
        pass

    @abstractmethod
    def add_node(self) -> Any:
        pass

    @abstractmethod
    def update_node(self, node_id: str, partial: Mapping[str, Any]) -> Any:
        """
        Merge a partial field update into one node.

        Unknown ids, unknown fields and invalid values are ignored.

        Raises:
            DuplicateNodeError: a change of service or method name would give
                the node the fully-qualified name of another node. The node
                is left unchanged.
        """
        pass

    @abstractmethod
    def remove_node(self, node_id: str) -> Any:
        pass

    @abstractmethod
    def connect(self, source_id: str, target_id: str) -> Any:
        pass

    @abstractmethod
    def disconnect(self, edge_id: str) -> Any:
        pass

    @abstractmethod
    def validate(self) -> Any:
        """Lint the current graph."""
        pass

    @abstractmethod
    def summary(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    def select(self, node_id: Optional[str]) -> Any:
        pass
