"""
Call Graph Model

Flat, addressable representation of a specification:

Vertices:
- ServiceNode: one per method {id, service_name, method_name, port, calls,
  latency_distribution, error_rate, requests_per_second, position}

Edges:
- CallEdge (ServiceNode → ServiceNode): {id, source, target}

Edges are keyed by node id, never by name. A node's ``calls`` list is an
editing cache filled at import/creation time; the edge list is canonical.
"""

from __future__ import annotations

import itertools
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from ..errors import DuplicateNodeError
from .spec import full_name
from .value_objects import (
    Distribution,
    Position,
    default_error_rate,
    default_latency,
)


# =============================================================================
# Vertex / Edge Classes
# =============================================================================

@dataclass
class ServiceNode:
    """A method of a service, as shown on the editing canvas."""
    id: str
    service_name: str
    method_name: str
    latency_distribution: Distribution = field(default_factory=default_latency)
    error_rate: Distribution = field(default_factory=default_error_rate)
    port: Optional[int] = None
    calls: List[str] = field(default_factory=list)
    requests_per_second: Optional[float] = None
    position: Position = field(default_factory=Position)

    @property
    def full_name(self) -> str:
        return full_name(self.service_name, self.method_name)

    @property
    def is_entry_point(self) -> bool:
        return self.requests_per_second is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "service_name": self.service_name,
            "method_name": self.method_name,
            "port": self.port,
            "calls": list(self.calls),
            "latency_distribution": self.latency_distribution.to_dict(),
            "error_rate": self.error_rate.to_dict(),
            "requests_per_second": self.requests_per_second,
            "position": self.position.to_dict(),
        }


@dataclass
class CallEdge:
    """Directed call from one method node to another."""
    id: str
    source: str
    target: str

    @staticmethod
    def make_id(source: str, target: str) -> str:
        return f"edge-{source}-{target}"

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "source": self.source, "target": self.target}


@dataclass(frozen=True)
class UnresolvedCallReference:
    """A call string on a node that names no existing method. Non-fatal."""
    node_id: str
    caller: str
    reference: str

    def to_dict(self) -> Dict[str, str]:
        return {"node_id": self.node_id, "caller": self.caller, "reference": self.reference}


class IdGenerator:
    """Monotonic ``node-N`` ids scoped to one graph."""

    def __init__(self, prefix: str = "node-"):
        self.prefix = prefix
        self._counter = itertools.count()

    def next_id(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


# =============================================================================
# Graph
# =============================================================================

class CallGraph:
    """Container for method nodes and call edges with lookup helpers."""

    def __init__(self):
        self.nodes: Dict[str, ServiceNode] = {}
        self.edges: List[CallEdge] = []
        self.metadata: Dict[str, Any] = {}
        self._names: Dict[str, str] = {}
        self._edges_by_id: Dict[str, CallEdge] = {}
        self._outgoing: Dict[str, List[CallEdge]] = defaultdict(list)
        self._incoming: Dict[str, List[CallEdge]] = defaultdict(list)
        self._ids = IdGenerator()

    # Vertex operations
    def next_node_id(self) -> str:
        node_id = self._ids.next_id()
        while node_id in self.nodes:
            node_id = self._ids.next_id()
        return node_id

    def add_node(self, node: ServiceNode) -> ServiceNode:
        if node.id in self.nodes:
            raise ValueError(f"Node id already present: {node.id}")
        existing_id = self._names.get(node.full_name)
        if existing_id is not None:
            raise DuplicateNodeError(node.full_name, node.id, existing_id)
        self.nodes[node.id] = node
        self._names[node.full_name] = node.id
        return node

    def get_node(self, node_id: str) -> Optional[ServiceNode]:
        return self.nodes.get(node_id)

    def find_node(self, name: str) -> Optional[ServiceNode]:
        """Look a node up by its fully-qualified name."""
        node_id = self._names.get(name)
        return self.nodes.get(node_id) if node_id is not None else None

    def rename(self, node_id: str, service_name: str, method_name: str) -> Optional[ServiceNode]:
        """
        Give a node a new service and method name. Returns None for an unknown
        id. Raises DuplicateNodeError, leaving the node as it was, when another
        node already holds the name.
        """
        node = self.nodes.get(node_id)
        if node is None:
            return None
        new_name = full_name(service_name, method_name)
        existing_id = self._names.get(new_name)
        if existing_id is not None and existing_id != node_id:
            raise DuplicateNodeError(new_name, node_id, existing_id)
        if self._names.get(node.full_name) == node_id:
            del self._names[node.full_name]
        node.service_name = service_name
        node.method_name = method_name
        self._names[new_name] = node_id
        return node

    def remove_node(self, node_id: str) -> Optional[ServiceNode]:
        """Remove a node and every edge touching it. Other nodes' ``calls`` are left as-is."""
        node = self.nodes.pop(node_id, None)
        if node is None:
            return None
        if self._names.get(node.full_name) == node_id:
            del self._names[node.full_name]
        for edge in list(self._outgoing.get(node_id, [])) + list(self._incoming.get(node_id, [])):
            self.remove_edge(edge.id)
        self._outgoing.pop(node_id, None)
        self._incoming.pop(node_id, None)
        return node

    def name_index(self) -> Dict[str, str]:
        """Fully-qualified name -> node id."""
        return dict(self._names)

    # Edge operations
    def add_edge(self, source: str, target: str) -> Optional[CallEdge]:
        """
        Add ``source → target``. Returns None when either end is missing;
        returns the existing edge when the pair is already connected.
        """
        if source not in self.nodes or target not in self.nodes:
            return None
        edge_id = CallEdge.make_id(source, target)
        if edge_id in self._edges_by_id:
            return self._edges_by_id[edge_id]
        edge = CallEdge(id=edge_id, source=source, target=target)
        self.edges.append(edge)
        self._edges_by_id[edge_id] = edge
        self._outgoing[source].append(edge)
        self._incoming[target].append(edge)
        return edge

    def get_edge(self, edge_id: str) -> Optional[CallEdge]:
        return self._edges_by_id.get(edge_id)

    def remove_edge(self, edge_id: str) -> Optional[CallEdge]:
        edge = self._edges_by_id.pop(edge_id, None)
        if edge is None:
            return None
        self.edges.remove(edge)
        self._outgoing[edge.source].remove(edge)
        self._incoming[edge.target].remove(edge)
        return edge

    def outgoing_edges(self, node_id: str) -> List[CallEdge]:
        return list(self._outgoing.get(node_id, []))

    def incoming_edges(self, node_id: str) -> List[CallEdge]:
        return list(self._incoming.get(node_id, []))

    def call_targets(self, node_id: str) -> List[str]:
        """Fully-qualified names this node calls, in edge-creation order."""
        return [
            self.nodes[e.target].full_name
            for e in self._outgoing.get(node_id, [])
            if e.target in self.nodes
        ]

    # Query methods
    def services(self) -> Dict[str, List[ServiceNode]]:
        """Nodes grouped by service name, services in first-seen order."""
        groups: Dict[str, List[ServiceNode]] = {}
        for node in self.nodes.values():
            groups.setdefault(node.service_name, []).append(node)
        return groups

    def entry_points(self) -> List[ServiceNode]:
        return [n for n in self.nodes.values() if n.is_entry_point]

    def unresolved_calls(self) -> List[UnresolvedCallReference]:
        index = self.name_index()
        return [
            UnresolvedCallReference(node_id=node.id, caller=node.full_name, reference=call)
            for node in self.nodes.values()
            for call in node.calls
            if call not in index
        ]

    def duplicate_full_names(self) -> Dict[str, List[str]]:
        seen: Dict[str, List[str]] = defaultdict(list)
        for node in self.nodes.values():
            seen[node.full_name].append(node.id)
        return {name: ids for name, ids in seen.items() if len(ids) > 1}

    # Serialization
    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata,
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges],
        }

    def get_statistics(self) -> Dict[str, int]:
        return {
            "num_services": len(self.services()),
            "num_methods": len(self.nodes),
            "num_edges": len(self.edges),
            "num_entry_points": len(self.entry_points()),
            "num_unresolved_calls": len(self.unresolved_calls()),
        }

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[ServiceNode]:
        return iter(list(self.nodes.values()))

    def __repr__(self) -> str:
        return f"CallGraph(services={len(self.services())}, methods={len(self.nodes)}, edges={len(self.edges)})"
