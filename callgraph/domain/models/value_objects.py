from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Mapping
import math


def is_real_number(value: Any) -> bool:
    """True for finite ints/floats; bools are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass
class Distribution:
    """
    Tagged ``{type, parameters}`` description of latency or error behaviour.

    The core only carries distributions structurally; it never samples them.
    Parameter names depend on the type (``value`` for constant, ``mean`` and
    ``stddev`` for normal, ``p`` for bernoulli, ...).
    """
    type: str
    parameters: Dict[str, float] = field(default_factory=dict)

    def get(self, name: str, default: Optional[float] = None) -> Optional[float]:
        return self.parameters.get(name, default)

    def merged(self, partial: Mapping[str, Any]) -> "Distribution":
        """
        Return a copy with ``partial`` applied.

        ``type`` is replaced; ``parameters`` are merged key by key so a single
        parameter can be edited without discarding its siblings.
        """
        params = dict(self.parameters)
        params.update(partial.get("parameters") or {})
        return Distribution(type=partial.get("type", self.type), parameters=params)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "parameters": dict(self.parameters)}

    @staticmethod
    def from_dict(data: Any) -> "Distribution":
        """Build from a document mapping; raises ValueError on a bad shape."""
        if not isinstance(data, Mapping):
            raise ValueError("distribution must be an object")
        dist_type = data.get("type")
        if not isinstance(dist_type, str) or not dist_type:
            raise ValueError("distribution 'type' must be a non-empty string")
        params = data.get("parameters", {})
        if not isinstance(params, Mapping):
            raise ValueError("distribution 'parameters' must be an object")
        for name, value in params.items():
            if not is_real_number(value):
                raise ValueError(f"parameter '{name}' must be a real number, got {value!r}")
        return Distribution(type=dist_type, parameters=dict(params))


@dataclass
class Position:
    """Canvas position of a node. Presentation only, never exported."""
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    def merged(self, partial: Mapping[str, Any]) -> "Position":
        x = partial.get("x", self.x)
        y = partial.get("y", self.y)
        # keep the layout finite
        return Position(
            x=float(x) if is_real_number(x) else self.x,
            y=float(y) if is_real_number(y) else self.y,
        )


def default_latency() -> Distribution:
    return Distribution(type="constant", parameters={"value": 100.0})


def default_error_rate() -> Distribution:
    return Distribution(type="bernoulli", parameters={"p": 0.0})
