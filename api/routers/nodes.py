"""
Node and edge editing endpoints.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from api.dependencies import get_editor
from api.models import EdgeCreateRequest, NodeCreateRequest
from callgraph.application.services import GraphEditorService
from callgraph.domain.errors import DuplicateNodeError

router = APIRouter(prefix="/api/v1", tags=["nodes"])
logger = logging.getLogger(__name__)


def _require_node(editor: GraphEditorService, node_id: str) -> None:
    if node_id not in editor.graph:
        raise HTTPException(status_code=404, detail=f"Node not found: {node_id}")


def node_payload(editor: GraphEditorService, node_id: str) -> Dict[str, Any]:
    data = editor.graph.get_node(node_id).to_dict()
    data["category"] = editor.category(node_id).value
    return data


@router.post("/nodes", response_model=Dict[str, Any], status_code=201)
async def create_node(
    request: Optional[NodeCreateRequest] = None,
    editor: GraphEditorService = Depends(get_editor),
):
    """Add a node with default latency, error rate and port."""
    request = request or NodeCreateRequest()
    node = editor.add_node(service_name=request.service_name, method_name=request.method_name)
    return node_payload(editor, node.id)


@router.get("/nodes/{node_id}", response_model=Dict[str, Any])
async def get_node(node_id: str, editor: GraphEditorService = Depends(get_editor)):
    _require_node(editor, node_id)
    return node_payload(editor, node_id)


@router.patch("/nodes/{node_id}", response_model=Dict[str, Any])
async def patch_node(
    node_id: str,
    partial: Dict[str, Any] = Body(...),
    editor: GraphEditorService = Depends(get_editor),
):
    """
    Merge a partial update into a node.

    Distribution ``parameters`` and ``position`` are merged key by key;
    every other field is replaced.
    """
    _require_node(editor, node_id)
    try:
        editor.update_node(node_id, partial)
    except DuplicateNodeError as e:
        logger.error(f"Rejected update of {node_id}: {e}")
        raise HTTPException(status_code=409, detail=e.to_dict())
    return node_payload(editor, node_id)


@router.delete("/nodes/{node_id}", response_model=Dict[str, Any])
async def delete_node(node_id: str, editor: GraphEditorService = Depends(get_editor)):
    node = editor.remove_node(node_id)
    if node is None:
        raise HTTPException(status_code=404, detail=f"Node not found: {node_id}")
    return {"success": True, "removed": node.to_dict()}


@router.get("/nodes/{node_id}/category", response_model=Dict[str, Any])
async def get_node_category(node_id: str, editor: GraphEditorService = Depends(get_editor)):
    _require_node(editor, node_id)
    category = editor.category(node_id)
    return {
        "node_id": node_id,
        "category": category.value,
        "label": category.label,
        "color": category.color,
    }


@router.post("/edges", response_model=Dict[str, Any], status_code=201)
async def create_edge(request: EdgeCreateRequest, editor: GraphEditorService = Depends(get_editor)):
    """Connect two nodes. Connecting an already-connected pair returns the existing edge."""
    _require_node(editor, request.source)
    _require_node(editor, request.target)
    return editor.connect(request.source, request.target).to_dict()


@router.delete("/edges/{edge_id}", response_model=Dict[str, Any])
async def delete_edge(edge_id: str, editor: GraphEditorService = Depends(get_editor)):
    edge = editor.disconnect(edge_id)
    if edge is None:
        raise HTTPException(status_code=404, detail=f"Edge not found: {edge_id}")
    return {"success": True, "removed": edge.to_dict()}
