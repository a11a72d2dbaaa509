"""
Specification Importer

Turns a specification document into a CallGraph:

    1. Parse and shape-check the document (SimulatorSpec.from_dict)
    2. Pass 1 - give every (service, method) a fresh node id, in document order,
       and build the fully-qualified name lookup
    3. Merge requests_per_second from the first matching entry point
    4. Pass 2 - resolve each flattened call to a node id and create one edge
       per resolved target; unresolved calls stay on the node, without an edge
    5. Place nodes on a grid (presentation only)

Any structural problem aborts the whole import; no partial graph is returned.
"""

import logging
from typing import Any, Mapping, Union

from ..errors import DuplicateNodeError, MalformedDocument
from ..models.graph import CallGraph, ServiceNode
from ..models.spec import SimulatorSpec
from ..models.value_objects import Distribution, Position


class SpecImporter:
    """
    Builds CallGraph instances from specification documents.

    Args:
        columns: Nodes per row in the initial grid layout.
        spacing: Distance between grid cells.
    """

    def __init__(self, columns: int = 4, spacing: float = 220.0):
        self.columns = max(1, columns)
        self.spacing = spacing
        self.logger = logging.getLogger(__name__)

    def import_json(self, text: Union[str, bytes]) -> CallGraph:
        """Parse JSON text and import it. Raises InvalidFileContent on bad JSON."""
        return self.import_spec(SimulatorSpec.from_json(text))

    def import_dict(self, data: Mapping[str, Any]) -> CallGraph:
        return self.import_spec(SimulatorSpec.from_dict(data))

    def import_spec(self, spec: SimulatorSpec) -> CallGraph:
        graph = CallGraph()

        # Pass 1: node identities
        for index, (service_name, method_name, service, method) in enumerate(spec.iter_methods()):
            entry = spec.load.find(service_name, method_name)
            node = ServiceNode(
                id=graph.next_node_id(),
                service_name=service_name,
                method_name=method_name,
                port=service.port,
                calls=method.flat_calls(),
                latency_distribution=_copy(method.latency_distribution),
                error_rate=_copy(method.error_rate),
                requests_per_second=entry.requests_per_second if entry else None,
                position=self._grid_position(index),
            )
            try:
                graph.add_node(node)
            except DuplicateNodeError as e:
                raise MalformedDocument(
                    f"fully-qualified name '{e.full_name}' is defined twice",
                    path=f"services.{service_name}.methods.{method_name}",
                ) from e

        # Pass 2: resolve calls
        index_by_name = graph.name_index()
        for node in graph:
            for call in node.calls:
                target = index_by_name.get(call)
                if target is None:
                    self.logger.warning(f"Unresolved call reference '{call}' on {node.full_name}")
                    continue
                graph.add_edge(node.id, target)

        unmatched = [
            ep.to_dict() for ep in spec.load.entry_points if ep.full_name not in index_by_name
        ]
        if unmatched:
            self.logger.warning(f"{len(unmatched)} entry point(s) do not match any method")
        # snapshot at import time; SpecValidator rechecks it against current names
        graph.metadata["unmatched_entry_points"] = unmatched

        self.logger.info(
            f"Imported {len(graph.nodes)} methods from {len(spec.services)} services "
            f"with {len(graph.edges)} call edges"
        )
        return graph

    def _grid_position(self, index: int) -> Position:
        row, col = divmod(index, self.columns)
        return Position(x=col * self.spacing, y=row * self.spacing)


def _copy(dist: Distribution) -> Distribution:
    return Distribution(type=dist.type, parameters=dict(dist.parameters))


def import_spec(source: Union[str, bytes, Mapping[str, Any], SimulatorSpec]) -> CallGraph:
    """Import JSON text, a parsed document or a SimulatorSpec with default settings."""
    importer = SpecImporter()
    if isinstance(source, SimulatorSpec):
        return importer.import_spec(source)
    if isinstance(source, (str, bytes)):
        return importer.import_json(source)
    return importer.import_dict(source)
