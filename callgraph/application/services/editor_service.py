"""
Graph Editor Service

Application service implementing IEditorUseCase. Owns the single current
graph of an editing session and routes every change through the domain
mutation API:

    load_text / load_file  → SpecImporter  (graph replaced only on success)
    add / update / remove  → mutation API
    connect / disconnect   → edge operations
    export_text / save     → SpecExporter + IDocumentStore

The selected node is stored as an id and resolved against the graph on
every read, so edits are always visible through ``selected_node``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from callgraph.application.ports import IDocumentStore, IEditorUseCase
from callgraph.domain.errors import SpecError
from callgraph.domain.models import (
    CallEdge,
    CallGraph,
    NodeCategory,
    ServiceNode,
    UnresolvedCallReference,
)
from callgraph.domain.services import (
    NodeClassifier,
    SpecExporter,
    SpecImporter,
    SpecValidator,
    ValidationReport,
    connect_nodes,
    create_default_node,
    remove_node,
    update_node,
)
from callgraph.domain.services.exporter import DEFAULT_PORT
from callgraph.domain.services.mutation import DEFAULT_METHOD_NAME, DEFAULT_SERVICE_NAME


@dataclass
class ImportResult:
    """Outcome of one load attempt."""
    success: bool
    graph: Optional[CallGraph] = None
    error: Optional[SpecError] = None
    unresolved_calls: List[UnresolvedCallReference] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"success": self.success}
        if self.graph is not None:
            result["statistics"] = self.graph.get_statistics()
        if self.error is not None:
            result["error"] = self.error.to_dict()
        result["unresolved_calls"] = [u.to_dict() for u in self.unresolved_calls]
        return result


class GraphEditorService(IEditorUseCase):
    """
    Editing session over one CallGraph.

    Args:
        store: Document storage used by load_file / save.
        export_filename: Default save target.
        default_port: Port for new nodes and for services without one on export.
    """

    def __init__(
        self,
        store: IDocumentStore,
        importer: Optional[SpecImporter] = None,
        exporter: Optional[SpecExporter] = None,
        classifier: Optional[NodeClassifier] = None,
        validator: Optional[SpecValidator] = None,
        export_filename: str = "microservice-graph.json",
        default_port: int = DEFAULT_PORT,
    ) -> None:
        self._store = store
        self._importer = importer or SpecImporter()
        self._exporter = exporter or SpecExporter(default_port=default_port)
        self._classifier = classifier or NodeClassifier()
        self._validator = validator or SpecValidator()
        self.export_filename = export_filename
        self.default_port = default_port
        self.graph = CallGraph()
        self._selected_id: Optional[str] = None
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    def load_text(self, text: Union[str, bytes]) -> ImportResult:
        try:
            graph = self._importer.import_json(text)
        except SpecError as e:
            self._logger.error(f"Import rejected, keeping current graph: {e}")
            return ImportResult(success=False, error=e)

        self.graph = graph
        self._selected_id = None
        return ImportResult(success=True, graph=graph, unresolved_calls=graph.unresolved_calls())

    def load_file(self, path: str) -> ImportResult:
        self._logger.info(f"Loading specification from {path}")
        return self.load_text(self._store.read_bytes(path))

    def export_text(self) -> str:
        return self._exporter.export_json(self.graph)

    def save(self, path: Optional[str] = None) -> str:
        target = path or self.export_filename
        written = self._store.write_text(target, self.export_text())
        self._logger.info(f"Saved specification to {written}")
        return written

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add_node(
        self,
        service_name: str = DEFAULT_SERVICE_NAME,
        method_name: str = DEFAULT_METHOD_NAME,
    ) -> ServiceNode:
        return create_default_node(
            self.graph, service_name=service_name, method_name=method_name, port=self.default_port
        )

    def update_node(self, node_id: str, partial: Mapping[str, Any]) -> Optional[ServiceNode]:
        """Apply a partial update. Raises DuplicateNodeError on a name collision."""
        update_node(self.graph, node_id, partial)
        return self.graph.get_node(node_id)

    def remove_node(self, node_id: str) -> Optional[ServiceNode]:
        node = remove_node(self.graph, node_id)
        if node is not None and self._selected_id == node_id:
            self._selected_id = None
        return node

    def connect(self, source_id: str, target_id: str) -> Optional[CallEdge]:
        return connect_nodes(self.graph, source_id, target_id)

    def disconnect(self, edge_id: str) -> Optional[CallEdge]:
        edge = self.graph.remove_edge(edge_id)
        if edge is None:
            self._logger.warning(f"Ignoring removal of unknown edge {edge_id}")
        return edge

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, node_id: Optional[str]) -> Optional[ServiceNode]:
        if node_id is not None and node_id not in self.graph:
            self._logger.warning(f"Cannot select unknown node {node_id}")
            node_id = None
        self._selected_id = node_id
        return self.selected_node

    @property
    def selected_node(self) -> Optional[ServiceNode]:
        if self._selected_id is None:
            return None
        return self.graph.get_node(self._selected_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def category(self, node_id: str) -> Optional[NodeCategory]:
        node = self.graph.get_node(node_id)
        return self._classifier.classify(node) if node is not None else None

    def classify_nodes(self) -> Dict[str, NodeCategory]:
        return self._classifier.classify_graph(self.graph)

    def validate(self) -> ValidationReport:
        return self._validator.validate(self.graph)

    def summary(self) -> Dict[str, Any]:
        selected = self.selected_node
        return {
            "statistics": self.graph.get_statistics(),
            "categories": self._classifier.distribution(self.graph),
            "selected_node": selected.id if selected else None,
        }
