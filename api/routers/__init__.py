from . import graph, health, nodes

__all__ = ["graph", "health", "nodes"]
