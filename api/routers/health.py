"""
Health check endpoints.
"""

from fastapi import APIRouter
from typing import Dict, Any
from datetime import datetime, timezone

from api.models import HealthResponse
from callgraph import __version__

router = APIRouter()


@router.get("/", response_model=Dict[str, Any])
async def root():
    """Root endpoint - API information"""
    return {
        "name": "Call Graph Editor API",
        "version": __version__,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "import": "/api/v1/graph/import",
            "graph": "/api/v1/graph",
            "export": "/api/v1/graph/export",
            "validate": "/api/v1/graph/validate",
            "nodes": "/api/v1/nodes",
            "edges": "/api/v1/edges",
        }
    }


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
    )
