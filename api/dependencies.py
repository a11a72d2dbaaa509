"""
FastAPI dependency injection for API routes.

Provides:
  - ``get_container``: the process-wide container built from environment settings
  - ``get_editor``: the single editing session held by that container
"""

import logging

from fastapi import Depends

from callgraph.application.services import GraphEditorService
from callgraph.config import Container, Settings

# ── Configuration ────────────────────────────────────────────────────────

settings = Settings.from_env()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

_container = Container.from_settings(settings)


# ── Dependencies ─────────────────────────────────────────────────────────

def get_container() -> Container:
    return _container


def get_editor(container: Container = Depends(get_container)) -> GraphEditorService:
    return container.editor_service()
