"""
Domain Models Package

Pure domain entities with no infrastructure dependencies.
Re-exports all domain models for convenient imports.
"""

from .enums import LatencyType, ErrorRateType, NodeCategory, IssueLevel
from .value_objects import Distribution, Position, default_latency, default_error_rate
from .spec import (
    SimulatorSpec, ServiceSpec, MethodSpec, LoadSpec, EntryPoint, full_name
)
from .graph import (
    CallGraph, ServiceNode, CallEdge, UnresolvedCallReference, IdGenerator
)

__all__ = [
    # Enums
    "LatencyType", "ErrorRateType", "NodeCategory", "IssueLevel",
    # Value objects
    "Distribution", "Position", "default_latency", "default_error_rate",
    # Specification schema
    "SimulatorSpec", "ServiceSpec", "MethodSpec", "LoadSpec", "EntryPoint", "full_name",
    # Graph
    "CallGraph", "ServiceNode", "CallEdge", "UnresolvedCallReference", "IdGenerator",
]
