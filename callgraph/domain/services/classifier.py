"""
Node Classifier

Derives the visual category of a method node from its current data only.
Categories are checked in order and the first match wins:

    ENTRY_POINT  : requests_per_second is set
    HIGH_ERROR   : error_rate p > error_threshold            (default 0.1)
    HIGH_LATENCY : latency mean or value > latency_threshold (default 200)
    DEFAULT      : anything else

Advisory only: categories never affect edges or export.
"""

from __future__ import annotations

from typing import Dict, Iterable

from callgraph.domain.models import CallGraph, NodeCategory, ServiceNode

ERROR_THRESHOLD = 0.1
LATENCY_THRESHOLD = 200.0


class NodeClassifier:
    """
    Precedence-based classifier for method nodes.

    Args:
        error_threshold: Error probability above which a node is HIGH_ERROR.
        latency_threshold: Latency (ms) above which a node is HIGH_LATENCY.
    """

    def __init__(
        self,
        error_threshold: float = ERROR_THRESHOLD,
        latency_threshold: float = LATENCY_THRESHOLD,
    ) -> None:
        self.error_threshold = error_threshold
        self.latency_threshold = latency_threshold

    def classify(self, node: ServiceNode) -> NodeCategory:
        if node.is_entry_point:
            return NodeCategory.ENTRY_POINT
        if self.is_high_error(node):
            return NodeCategory.HIGH_ERROR
        if self.is_high_latency(node):
            return NodeCategory.HIGH_LATENCY
        return NodeCategory.DEFAULT

    def is_high_error(self, node: ServiceNode) -> bool:
        p = node.error_rate.get("p")
        return p is not None and p > self.error_threshold

    def is_high_latency(self, node: ServiceNode) -> bool:
        # whichever of mean / value the distribution defines
        for name in ("mean", "value"):
            v = node.latency_distribution.get(name)
            if v is not None and v > self.latency_threshold:
                return True
        return False

    # ------------------------------------------------------------------
    # Batch classification
    # ------------------------------------------------------------------

    def classify_graph(self, graph: CallGraph) -> Dict[str, NodeCategory]:
        """Node id -> category for every node in the graph."""
        return {node.id: self.classify(node) for node in graph}

    def distribution(self, nodes: Iterable[ServiceNode]) -> Dict[str, int]:
        counts = {c.value: 0 for c in NodeCategory}
        for node in nodes:
            counts[self.classify(node).value] += 1
        return counts


_DEFAULT = NodeClassifier()


def classify(node: ServiceNode) -> NodeCategory:
    """Classify with the default thresholds."""
    return _DEFAULT.classify(node)
