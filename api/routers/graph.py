"""
Specification import, export, validation and whole-graph endpoints.
"""

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from api.dependencies import get_container, get_editor
from api.models import ImportRequest, SelectRequest
from callgraph.application.services import GraphEditorService
from callgraph.config import Container

router = APIRouter(prefix="/api/v1/graph", tags=["graph"])
logger = logging.getLogger(__name__)

EXPORT_MEDIA_TYPES = {
    "json": "application/json",
    "yaml": "application/x-yaml",
    "compose": "application/x-yaml",
}


def graph_payload(editor: GraphEditorService) -> Dict[str, Any]:
    data = editor.graph.to_dict()
    categories = editor.classify_nodes()
    for node in data["nodes"]:
        node["category"] = categories[node["id"]].value
    data["statistics"] = editor.graph.get_statistics()
    selected = editor.selected_node
    data["selected_node"] = selected.to_dict() if selected else None
    return data


@router.post("/import", response_model=Dict[str, Any])
async def import_graph(request: ImportRequest, editor: GraphEditorService = Depends(get_editor)):
    """
    Import a specification, replacing the current graph.

    A rejected document leaves the current graph untouched.
    """
    if request.text is not None:
        text = request.text
    elif request.document is not None:
        text = json.dumps(request.document)
    else:
        raise HTTPException(status_code=400, detail="Provide either 'text' or 'document'")

    result = editor.load_text(text)
    if not result.success:
        logger.error(f"Import failed: {result.error}")
        raise HTTPException(status_code=400, detail=result.error.to_dict())

    return {
        **result.to_dict(),
        "graph": graph_payload(editor),
    }


@router.get("", response_model=Dict[str, Any])
async def get_graph(editor: GraphEditorService = Depends(get_editor)):
    """Current nodes, edges and categories."""
    return graph_payload(editor)


@router.get("/export")
async def export_graph(
    fmt: str = Query("json", alias="format", description="json, yaml (simulator config) or compose"),
    container: Container = Depends(get_container),
    editor: GraphEditorService = Depends(get_editor),
):
    """Download the current graph as a specification document."""
    if fmt not in EXPORT_MEDIA_TYPES:
        raise HTTPException(status_code=400, detail=f"Unknown export format: {fmt}")

    if fmt == "json":
        content = editor.export_text()
        filename = editor.export_filename
    elif fmt == "yaml":
        content = container.generation_service().simulator_yaml(editor.graph)
        filename = "simulator.yaml"
    else:
        content = container.generation_service().docker_compose_yaml(editor.graph)
        filename = "docker-compose.yaml"

    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/validate", response_model=Dict[str, Any])
async def validate_graph(editor: GraphEditorService = Depends(get_editor)):
    return editor.validate().to_dict()


@router.put("/selection", response_model=Dict[str, Any])
async def select_node(request: SelectRequest, editor: GraphEditorService = Depends(get_editor)):
    """Select a node for editing, or clear the selection."""
    if request.node_id is not None and request.node_id not in editor.graph:
        raise HTTPException(status_code=404, detail=f"Node not found: {request.node_id}")
    node = editor.select(request.node_id)
    return {"selected_node": node.to_dict() if node else None}
