"""
Deployment Generation Service

Renders a specification as the YAML documents the simulator stack consumes:

- simulator configuration : services with ``container_port`` and methods
  whose distributions use ``distribution_type``
- docker-compose file     : one container per service on a shared bridge
  network, method configurations passed as ``METHOD_<NAME>`` JSON env vars
"""

import json
import logging
from typing import Any, Dict, Optional, Union

import yaml

from callgraph.domain.models import CallGraph, Distribution, SimulatorSpec
from callgraph.domain.services import SpecExporter

SIMULATOR_IMAGE = "microservice-simulator:latest"
NETWORK_NAME = "microservice_net"
COMPOSE_VERSION = "3"


class GenerationService:
    """Application service for simulator and container deployment files."""

    def __init__(self, exporter: Optional[SpecExporter] = None) -> None:
        self.exporter = exporter or SpecExporter()
        self.logger = logging.getLogger(__name__)

    def _as_spec(self, source: Union[SimulatorSpec, CallGraph]) -> SimulatorSpec:
        if isinstance(source, CallGraph):
            return self.exporter.export_spec(source)
        return source

    def simulator_config(self, source: Union[SimulatorSpec, CallGraph]) -> Dict[str, Any]:
        spec = self._as_spec(source)
        services = {}
        for name, service in spec.services.items():
            services[name] = {
                "container_port": service.port if service.port is not None else self.exporter.default_port,
                "methods": {
                    method_name: {
                        "calls": [list(group) for group in method.calls],
                        "latency_distribution": _distribution(method.latency_distribution),
                        "error_rate": _distribution(method.error_rate),
                    }
                    for method_name, method in service.methods.items()
                },
            }

        config: Dict[str, Any] = {"services": services}
        if spec.load.entry_points:
            config["load"] = {"entry_points": [ep.to_dict() for ep in spec.load.entry_points]}
        return config

    def simulator_yaml(self, source: Union[SimulatorSpec, CallGraph]) -> str:
        config = self.simulator_config(source)
        self.logger.info(f"Generated simulator configuration for {len(config['services'])} services")
        return yaml.safe_dump(config, sort_keys=False, default_flow_style=False)

    def docker_compose(self, source: Union[SimulatorSpec, CallGraph]) -> Dict[str, Any]:
        spec = self._as_spec(source)
        services = {}
        for name, service in spec.services.items():
            port = service.port if service.port is not None else self.exporter.default_port

            dependencies = {
                call.split(".")[0]
                for method in service.methods.values()
                for call in method.flat_calls()
            }
            dependencies.discard(name)

            environment = {
                f"METHOD_{method_name.upper()}": json.dumps(method.to_dict())
                for method_name, method in service.methods.items()
            }
            environment["SERVICE_PORT"] = str(port)

            entry: Dict[str, Any] = {
                "image": SIMULATOR_IMAGE,
                "ports": [f"{port}:{port}"],
                "environment": environment,
                "networks": [NETWORK_NAME],
            }
            if dependencies:
                entry["depends_on"] = sorted(dependencies)
            services[name] = entry

        return {
            "version": COMPOSE_VERSION,
            "services": services,
            "networks": {NETWORK_NAME: {"driver": "bridge"}},
        }

    def docker_compose_yaml(self, source: Union[SimulatorSpec, CallGraph]) -> str:
        compose = self.docker_compose(source)
        self.logger.info(f"Generated docker-compose file with {len(compose['services'])} containers")
        return yaml.safe_dump(compose, sort_keys=False, default_flow_style=False)


def _distribution(dist: Distribution) -> Dict[str, Any]:
    return {"distribution_type": dist.type, "parameters": dict(dist.parameters)}
