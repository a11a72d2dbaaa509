"""
Specification Schema

Declarative shapes of a call graph specification document:

    SimulatorSpec
      ├── services: {name -> ServiceSpec}
      │     ├── port
      │     └── methods: {name -> MethodSpec}
      │           ├── calls: [[ "service.method", ... ], ...]
      │           ├── latency_distribution: Distribution
      │           └── error_rate: Distribution
      └── load: LoadSpec
            └── entry_points: [EntryPoint]

``from_dict`` checks structure only (types and required keys) and raises
MalformedDocument / MalformedMethod. Business rules such as "stddev must be
positive" are left to the validator service.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ..errors import InvalidFileContent, MalformedDocument, MalformedMethod
from .value_objects import Distribution, is_real_number


def full_name(service: str, method: str) -> str:
    """Fully-qualified ``service.method`` reference."""
    return f"{service}.{method}"


@dataclass
class MethodSpec:
    latency_distribution: Distribution
    error_rate: Distribution
    calls: List[List[str]] = field(default_factory=list)

    def flat_calls(self) -> List[str]:
        return [call for group in self.calls for call in group]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "calls": [list(group) for group in self.calls],
            "latency_distribution": self.latency_distribution.to_dict(),
            "error_rate": self.error_rate.to_dict(),
        }

    @staticmethod
    def from_dict(data: Any, service: str, method: str) -> "MethodSpec":
        if not isinstance(data, Mapping):
            raise MalformedMethod("method definition must be an object", service, method)

        distributions = {}
        for key in ("latency_distribution", "error_rate"):
            if data.get(key) is None:
                raise MalformedMethod(f"missing required field '{key}'", service, method)
            try:
                distributions[key] = Distribution.from_dict(data[key])
            except ValueError as e:
                raise MalformedMethod(f"invalid {key}: {e}", service, method) from e

        return MethodSpec(
            latency_distribution=distributions["latency_distribution"],
            error_rate=distributions["error_rate"],
            calls=_parse_calls(data.get("calls"), service, method),
        )


def _parse_calls(raw: Any, service: str, method: str) -> List[List[str]]:
    """Normalize ``calls`` into a list of groups; a bare string is its own group."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedMethod("'calls' must be a list of call groups", service, method)

    groups: List[List[str]] = []
    for item in raw:
        if isinstance(item, str):
            groups.append([item])
        elif isinstance(item, list) and all(isinstance(c, str) for c in item):
            groups.append(list(item))
        else:
            raise MalformedMethod(
                f"call group must be a list of 'service.method' strings, got {item!r}",
                service, method,
            )
    return groups


@dataclass
class ServiceSpec:
    port: Optional[int] = None
    methods: Dict[str, MethodSpec] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.port is not None:
            result["port"] = self.port
        result["methods"] = {name: m.to_dict() for name, m in self.methods.items()}
        return result

    @staticmethod
    def from_dict(data: Any, name: str) -> "ServiceSpec":
        if not isinstance(data, Mapping):
            raise MalformedDocument("service definition must be an object", path=f"services.{name}")

        port = data.get("port")
        if port is not None and (isinstance(port, bool) or not isinstance(port, int)):
            raise MalformedDocument(f"port must be an integer, got {port!r}", path=f"services.{name}.port")

        methods = data.get("methods")
        if not isinstance(methods, Mapping):
            raise MalformedDocument("'methods' must be an object", path=f"services.{name}.methods")

        return ServiceSpec(
            port=port,
            methods={m: MethodSpec.from_dict(body, name, m) for m, body in methods.items()},
        )


@dataclass
class EntryPoint:
    service: str
    method: str
    requests_per_second: Union[int, float]

    @property
    def full_name(self) -> str:
        return full_name(self.service, self.method)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service": self.service,
            "method": self.method,
            "requests_per_second": self.requests_per_second,
        }

    @staticmethod
    def from_dict(data: Any, index: int) -> "EntryPoint":
        path = f"load.entry_points[{index}]"
        if not isinstance(data, Mapping):
            raise MalformedDocument("entry point must be an object", path=path)
        for key in ("service", "method"):
            if not isinstance(data.get(key), str):
                raise MalformedDocument(f"'{key}' must be a string", path=path)
        rps = data.get("requests_per_second")
        if not is_real_number(rps) or rps <= 0:
            raise MalformedDocument(
                f"'requests_per_second' must be a positive number, got {rps!r}", path=path
            )
        return EntryPoint(service=data["service"], method=data["method"], requests_per_second=rps)


@dataclass
class LoadSpec:
    entry_points: List[EntryPoint] = field(default_factory=list)

    def find(self, service: str, method: str) -> Optional[EntryPoint]:
        """First entry point matching the method, if any."""
        for ep in self.entry_points:
            if ep.service == service and ep.method == method:
                return ep
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"entry_points": [ep.to_dict() for ep in self.entry_points]}

    @staticmethod
    def from_dict(data: Any) -> "LoadSpec":
        if data is None:
            return LoadSpec()
        if not isinstance(data, Mapping):
            raise MalformedDocument("'load' must be an object", path="load")
        raw = data.get("entry_points")
        if raw is None:
            return LoadSpec()
        if not isinstance(raw, list):
            raise MalformedDocument("'entry_points' must be a list", path="load.entry_points")
        return LoadSpec(entry_points=[EntryPoint.from_dict(ep, i) for i, ep in enumerate(raw)])


@dataclass
class SimulatorSpec:
    """A complete specification document."""
    services: Dict[str, ServiceSpec] = field(default_factory=dict)
    load: LoadSpec = field(default_factory=LoadSpec)

    def iter_methods(self):
        """Yield ``(service_name, method_name, ServiceSpec, MethodSpec)`` in document order."""
        for service_name, service in self.services.items():
            for method_name, method in service.methods.items():
                yield service_name, method_name, service, method

    def to_dict(self) -> Dict[str, Any]:
        return {
            "services": {name: s.to_dict() for name, s in self.services.items()},
            "load": self.load.to_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @staticmethod
    def from_dict(data: Any) -> "SimulatorSpec":
        if not isinstance(data, Mapping):
            raise MalformedDocument("document must be a JSON object")
        services = data.get("services")
        if not isinstance(services, Mapping):
            raise MalformedDocument("missing top-level 'services' object", path="services")
        return SimulatorSpec(
            services={name: ServiceSpec.from_dict(body, name) for name, body in services.items()},
            load=LoadSpec.from_dict(data.get("load")),
        )

    @staticmethod
    def from_json(text: Union[str, bytes]) -> "SimulatorSpec":
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidFileContent(f"not a valid JSON document: {e}") from e
        except RecursionError as e:
            raise InvalidFileContent("document is nested too deeply") from e
        return SimulatorSpec.from_dict(data)
