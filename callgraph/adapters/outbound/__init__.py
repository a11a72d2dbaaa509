"""
Outbound Adapters

Filesystem storage and graph interchange formats.
"""

from .file_store import LocalFileStore
from .graph_exporter import GraphFormatExporter

__all__ = [
    "LocalFileStore",
    "GraphFormatExporter",
]
