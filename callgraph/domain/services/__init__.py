"""
Domain Services Package

Pure domain logic: specification import/export, node classification,
graph mutation and validation. No I/O or infrastructure dependencies.
"""

from .importer import SpecImporter, import_spec
from .exporter import SpecExporter, export_spec, DEFAULT_PORT
from .classifier import NodeClassifier, classify
from .mutation import (
    create_default_node, update_node, remove_node, connect_nodes, EDITABLE_FIELDS
)
from .validator import SpecValidator, ValidationIssue, ValidationReport

__all__ = [
    # Import / export
    "SpecImporter",
    "import_spec",
    "SpecExporter",
    "export_spec",
    "DEFAULT_PORT",
    # Classifier
    "NodeClassifier",
    "classify",
    # Mutation
    "create_default_node",
    "update_node",
    "remove_node",
    "connect_nodes",
    "EDITABLE_FIELDS",
    # Validation
    "SpecValidator",
    "ValidationIssue",
    "ValidationReport",
]
