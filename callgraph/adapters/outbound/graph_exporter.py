"""
Graph Format Exporter

Exports CallGraph instances to formats read by graph tooling:
- NetworkX (direct DiGraph object)
- GraphML (for Gephi, yEd, NetworkX)
- DOT/GraphViz, one cluster per service, nodes filled by category colour

Node ids are kept as graph keys; labels carry "service.method".
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import networkx as nx

from callgraph.domain.models import CallGraph, ServiceNode
from callgraph.domain.services import NodeClassifier


class GraphFormatExporter:
    """
    Exports CallGraph instances to graph interchange formats.

    Args:
        classifier: Classifier used for the ``category`` attribute and DOT colours.
    """

    def __init__(self, classifier: Optional[NodeClassifier] = None):
        self.classifier = classifier or NodeClassifier()
        self.logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # NetworkX
    # ------------------------------------------------------------------

    def to_networkx(self, graph: CallGraph) -> nx.DiGraph:
        G = nx.DiGraph()
        for node in graph:
            G.add_node(node.id, **self._node_attributes(node))
        for edge in graph.edges:
            G.add_edge(edge.source, edge.target, edge_id=edge.id)
        return G

    def _node_attributes(self, node: ServiceNode) -> Dict[str, Any]:
        attrs: Dict[str, Any] = {
            "label": node.full_name,
            "service": node.service_name,
            "method": node.method_name,
            "category": self.classifier.classify(node).value,
            "latency_type": node.latency_distribution.type,
            "error_type": node.error_rate.type,
        }
        for name, value in node.latency_distribution.parameters.items():
            attrs[f"latency_{name}"] = float(value)
        for name, value in node.error_rate.parameters.items():
            attrs[f"error_{name}"] = float(value)
        # GraphML has no null
        if node.port is not None:
            attrs["port"] = node.port
        if node.requests_per_second is not None:
            attrs["requests_per_second"] = float(node.requests_per_second)
        return attrs

    # ------------------------------------------------------------------
    # GraphML
    # ------------------------------------------------------------------

    def to_graphml(self, graph: CallGraph) -> str:
        return "\n".join(nx.generate_graphml(self.to_networkx(graph)))

    def export_to_graphml(self, graph: CallGraph, filepath: str) -> str:
        """Export CallGraph to a GraphML file"""
        self.logger.info(f"Exporting to GraphML: {filepath}")
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        nx.write_graphml(self.to_networkx(graph), str(path))
        return str(path)

    # ------------------------------------------------------------------
    # DOT
    # ------------------------------------------------------------------

    def to_dot(self, graph: CallGraph) -> str:
        lines = [
            'digraph CallGraph {',
            '  rankdir=LR;',
            '  node [fontname="Arial", fontsize=10, shape=box, style="rounded,filled"];',
            '  edge [fontname="Arial", fontsize=8];',
            '',
        ]

        for i, (service, nodes) in enumerate(graph.services().items()):
            lines.append(f'  subgraph cluster_{i} {{')
            lines.append(f'    label="{_escape(service)}"; style=dashed; color=gray;')
            for node in nodes:
                category = self.classifier.classify(node)
                lines.append(
                    f'    "{_escape(node.id)}" [label="{_escape(node.method_name)}", '
                    f'fillcolor="{category.color}", tooltip="{category.label}"];'
                )
            lines.append('  }')
            lines.append('')

        for edge in graph.edges:
            lines.append(f'  "{_escape(edge.source)}" -> "{_escape(edge.target)}";')

        lines.append('}')
        return "\n".join(lines) + "\n"

    def export_to_dot(self, graph: CallGraph, filepath: str) -> str:
        """Export CallGraph to DOT/GraphViz format"""
        self.logger.info(f"Exporting to DOT: {filepath}")
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_dot(graph))
        return str(path)


def _escape(text: str) -> str:
    return text.replace('\\', '\\\\').replace('"', '\\"')
