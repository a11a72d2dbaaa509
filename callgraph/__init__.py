"""
callgraph

Bidirectional conversion between microservice call-graph specifications and
an editable graph of method nodes and call edges.
"""

__version__ = "1.0.0"
