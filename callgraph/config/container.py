"""
Dependency Injection Container

Wires ports to adapters and manages service lifecycle.
"""

from dataclasses import dataclass, field
from typing import Optional

from .settings import Settings

from callgraph.application.ports import IDocumentStore
from callgraph.adapters.outbound import GraphFormatExporter, LocalFileStore
from callgraph.application.services import GenerationService, GraphEditorService
from callgraph.domain.services import NodeClassifier, SpecExporter


@dataclass
class Container:
    """
    Dependency injection container.

    Wires hexagonal architecture components:
    - Ports define contracts
    - Adapters implement ports
    - Services orchestrate domain logic
    """
    settings: Settings = field(default_factory=Settings)

    _store: Optional[IDocumentStore] = field(default=None, repr=False)
    _editor: Optional[GraphEditorService] = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Container":
        """Create container from settings."""
        return cls(settings=settings)

    def document_store(self) -> IDocumentStore:
        """Get the document store singleton."""
        if not self._store:
            self._store = LocalFileStore()
        return self._store

    def classifier(self) -> NodeClassifier:
        return NodeClassifier(
            error_threshold=self.settings.error_threshold,
            latency_threshold=self.settings.latency_threshold,
        )

    def exporter(self) -> SpecExporter:
        return SpecExporter(default_port=self.settings.default_port)

    def editor_service(self) -> GraphEditorService:
        """Get the editing session singleton."""
        if not self._editor:
            self._editor = GraphEditorService(
                store=self.document_store(),
                exporter=self.exporter(),
                classifier=self.classifier(),
                export_filename=self.settings.export_filename,
                default_port=self.settings.default_port,
            )
        return self._editor

    def generation_service(self) -> GenerationService:
        return GenerationService(exporter=self.exporter())

    def format_exporter(self) -> GraphFormatExporter:
        return GraphFormatExporter(classifier=self.classifier())

    def reset(self) -> None:
        """Drop the current editing session."""
        self._editor = None
