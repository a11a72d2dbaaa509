"""
Graph Mutation API

In-place edits of a CallGraph:

- create_default_node : add a structurally complete node with default data
- update_node         : merge a partial field update into one node
- remove_node         : drop a node and every edge touching it
- connect_nodes       : draw a call edge between two existing nodes

update_node merge rules:
    top-level fields        replaced
    latency_distribution    ``type`` replaced, ``parameters`` merged key by key
    error_rate              same as latency_distribution
    position                ``x`` / ``y`` merged

Renames take effect immediately. Edges are keyed by id so they survive a
rename, but other nodes whose ``calls`` named the old "service.method" now
hold a dangling reference. That is accepted and never repaired here.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ..models.graph import CallEdge, CallGraph, ServiceNode
from ..models.spec import full_name
from ..models.value_objects import (
    Distribution,
    Position,
    default_error_rate,
    default_latency,
    is_real_number,
)
from .exporter import DEFAULT_PORT

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "new-service"
DEFAULT_METHOD_NAME = "new-method"

EDITABLE_FIELDS = (
    "service_name",
    "method_name",
    "port",
    "calls",
    "latency_distribution",
    "error_rate",
    "requests_per_second",
    "position",
)


def create_default_node(
    graph: CallGraph,
    service_name: str = DEFAULT_SERVICE_NAME,
    method_name: str = DEFAULT_METHOD_NAME,
    port: int = DEFAULT_PORT,
) -> ServiceNode:
    """Add a new node with default data and return it."""
    name, n = method_name, 2
    while graph.find_node(full_name(service_name, name)) is not None:
        name = f"{method_name}-{n}"
        n += 1

    slot = len(graph)
    node = ServiceNode(
        id=graph.next_node_id(),
        service_name=service_name,
        method_name=name,
        port=port,
        calls=[],
        latency_distribution=default_latency(),
        error_rate=default_error_rate(),
        position=Position(x=100.0 + (slot % 4) * 220.0, y=100.0 + (slot // 4) * 220.0),
    )
    graph.add_node(node)
    logger.info(f"Created node {node.id} ({node.full_name})")
    return node


def update_node(graph: CallGraph, node_id: str, partial: Mapping[str, Any]) -> CallGraph:
    """
    Apply ``partial`` to the node with ``node_id`` and return the graph.

    Unknown ids and fields are ignored with a warning. Raises
    DuplicateNodeError, leaving the node untouched, when a rename would
    collide with another node's fully-qualified name.
    """
    node = graph.get_node(node_id)
    if node is None:
        logger.warning(f"Ignoring update for unknown node {node_id}")
        return graph

    changes: Dict[str, Any] = {}
    for key, value in partial.items():
        if key not in EDITABLE_FIELDS:
            if key != "id":
                logger.warning(f"Ignoring unknown field '{key}' for node {node_id}")
            continue
        converted = _convert(node, key, value)
        if converted is _SKIP:
            logger.warning(f"Ignoring invalid value for '{key}' on node {node_id}: {value!r}")
            continue
        changes[key] = converted

    service_name = changes.pop("service_name", node.service_name)
    method_name = changes.pop("method_name", node.method_name)
    if (service_name, method_name) != (node.service_name, node.method_name):
        old_name = node.full_name
        graph.rename(node.id, service_name, method_name)
        logger.info(f"Renamed node {node.id}: {old_name} -> {node.full_name}")

    for key, value in changes.items():
        setattr(node, key, value)
    return graph


def remove_node(graph: CallGraph, node_id: str) -> Optional[ServiceNode]:
    node = graph.remove_node(node_id)
    if node is None:
        logger.warning(f"Ignoring removal of unknown node {node_id}")
    else:
        logger.info(f"Removed node {node_id} ({node.full_name})")
    return node


def connect_nodes(graph: CallGraph, source_id: str, target_id: str) -> Optional[CallEdge]:
    """Draw ``source → target``. The source's cached ``calls`` list is not touched."""
    edge = graph.add_edge(source_id, target_id)
    if edge is None:
        logger.warning(f"Cannot connect {source_id} -> {target_id}: unknown node")
    return edge


# ---------------------------------------------------------------------------
# Field conversion
# ---------------------------------------------------------------------------

_SKIP = object()


def _convert(node: ServiceNode, key: str, value: Any) -> Any:
    if key in ("service_name", "method_name"):
        return value if isinstance(value, str) and value else _SKIP

    if key == "port":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            return _SKIP
        return value if value > 0 else None

    if key == "requests_per_second":
        # cleared by None or a non-positive rate, like an emptied form field
        if value is None:
            return None
        if not is_real_number(value):
            return _SKIP
        return value if value > 0 else None

    if key == "calls":
        if not isinstance(value, (list, tuple)) or not all(isinstance(c, str) for c in value):
            return _SKIP
        return list(value)

    if key == "position":
        if isinstance(value, Position):
            return Position(x=value.x, y=value.y)
        if not isinstance(value, Mapping):
            return _SKIP
        return node.position.merged(value)

    # latency_distribution / error_rate
    current: Distribution = getattr(node, key)
    if isinstance(value, Distribution):
        value = value.to_dict()
    if not isinstance(value, Mapping):
        return _SKIP
    dist_type = value.get("type", current.type)
    if not isinstance(dist_type, str) or not dist_type:
        return _SKIP
    params = value.get("parameters") or {}
    if not isinstance(params, Mapping):
        return _SKIP
    clean = {k: v for k, v in params.items() if is_real_number(v)}
    if len(clean) != len(params):
        logger.warning(f"Dropping non-numeric {key} parameters on node {node.id}")
    return current.merged({"type": dist_type, "parameters": clean})
