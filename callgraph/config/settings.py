"""
Application Settings

Environment configuration for the editor, CLI and API.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings from environment."""

    # Export
    default_port: int = 50051
    export_filename: str = "microservice-graph.json"

    # Classification thresholds
    error_threshold: float = 0.1
    latency_threshold: float = 200.0

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            default_port=int(os.getenv("CALLGRAPH_DEFAULT_PORT", "50051")),
            export_filename=os.getenv("CALLGRAPH_EXPORT_FILENAME", "microservice-graph.json"),
            error_threshold=float(os.getenv("CALLGRAPH_ERROR_THRESHOLD", "0.1")),
            latency_threshold=float(os.getenv("CALLGRAPH_LATENCY_THRESHOLD", "200.0")),
            log_level=os.getenv("CALLGRAPH_LOG_LEVEL", "INFO").upper(),
        )
