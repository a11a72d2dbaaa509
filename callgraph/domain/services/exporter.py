"""
Specification Exporter

Inverse of the importer. Rebuilds the service-grouped document from the
current graph:

- services appear in the order they are first seen among the nodes
- calls come from outgoing edges (edge-creation order), wrapped as a single
  call group, or ``[]`` when the node calls nothing; the node's cached
  ``calls`` list is not consulted
- the service port is the last non-empty port among its nodes, falling back
  to ``default_port``
- entry points are re-derived from nodes carrying requests_per_second

Node ids and positions are presentation data and are dropped.
"""

import logging
from typing import Optional

from ..models.graph import CallGraph
from ..models.spec import EntryPoint, LoadSpec, MethodSpec, ServiceSpec, SimulatorSpec
from ..models.value_objects import Distribution

DEFAULT_PORT = 50051


class SpecExporter:
    """Serializes CallGraph instances back to the specification format."""

    def __init__(self, default_port: int = DEFAULT_PORT):
        self.default_port = default_port
        self.logger = logging.getLogger(__name__)

    def export_spec(self, graph: CallGraph) -> SimulatorSpec:
        services = {}
        entry_points = []

        for service_name, nodes in graph.services().items():
            methods = {}
            port: Optional[int] = None

            for node in nodes:
                port = node.port or port

                targets = graph.call_targets(node.id)
                methods[node.method_name] = MethodSpec(
                    calls=[targets] if targets else [],
                    latency_distribution=Distribution(
                        node.latency_distribution.type, dict(node.latency_distribution.parameters)
                    ),
                    error_rate=Distribution(node.error_rate.type, dict(node.error_rate.parameters)),
                )

                if node.is_entry_point:
                    entry_points.append(EntryPoint(
                        service=service_name,
                        method=node.method_name,
                        requests_per_second=node.requests_per_second,
                    ))

            services[service_name] = ServiceSpec(port=port or self.default_port, methods=methods)

        self.logger.info(
            f"Exported {len(services)} services, {len(graph.nodes)} methods, "
            f"{len(entry_points)} entry points"
        )
        return SimulatorSpec(services=services, load=LoadSpec(entry_points=entry_points))

    def export_dict(self, graph: CallGraph) -> dict:
        return self.export_spec(graph).to_dict()

    def export_json(self, graph: CallGraph, indent: int = 2) -> str:
        return self.export_spec(graph).to_json(indent=indent)


def export_spec(graph: CallGraph, default_port: int = DEFAULT_PORT) -> str:
    """Export a graph to specification JSON text."""
    return SpecExporter(default_port=default_port).export_json(graph)
