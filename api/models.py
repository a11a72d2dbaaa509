"""
Pydantic models for API requests and responses.
"""

from pydantic import BaseModel, Field
from typing import Dict, Any, Optional


class ImportRequest(BaseModel):
    """Either the raw file text or an already-parsed document."""
    text: Optional[str] = Field(default=None, description="Raw specification JSON text")
    document: Optional[Dict[str, Any]] = Field(default=None, description="Parsed specification document")


class NodeCreateRequest(BaseModel):
    service_name: str = Field(default="new-service", description="Service of the new method")
    method_name: str = Field(default="new-method", description="Method name; made unique within the service")


class EdgeCreateRequest(BaseModel):
    source: str = Field(..., description="Calling node id")
    target: str = Field(..., description="Called node id")


class SelectRequest(BaseModel):
    node_id: Optional[str] = Field(default=None, description="Node to select, or null to clear")


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
