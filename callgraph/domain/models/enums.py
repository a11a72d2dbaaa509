from enum import Enum


class LatencyType(str, Enum):
    CONSTANT = "constant"
    NORMAL = "normal"
    EXPONENTIAL = "exponential"
    UNIFORM = "uniform"  # accepted by the simulator, not offered by the editor


class ErrorRateType(str, Enum):
    BERNOULLI = "bernoulli"
    CONSTANT = "constant"


class NodeCategory(str, Enum):
    """Visual category of a method node, in classification precedence order."""
    ENTRY_POINT = "entry_point"
    HIGH_ERROR = "high_error"
    HIGH_LATENCY = "high_latency"
    DEFAULT = "default"

    @property
    def color(self) -> str:
        return _CATEGORY_COLORS[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


_CATEGORY_COLORS = {
    NodeCategory.ENTRY_POINT: "#FEC700",
    NodeCategory.HIGH_ERROR: "#84754D",
    NodeCategory.HIGH_LATENCY: "#B7A57A",
    NodeCategory.DEFAULT: "#4B2E82",
}


class IssueLevel(str, Enum):
    ERROR = "error"
    WARNING = "warning"
