"""
Specification Validator

Lints a CallGraph against the rules the workload simulator enforces before
it accepts a specification. Nothing here blocks import or export; the
editor surfaces the report and the operator decides.

Checks:
    - at least one service
    - call strings of the form ``Service.Method`` that resolve to a method
    - latency distribution parameters per type
        constant    : value >= 0
        normal      : mean >= 0, stddev > 0
        exponential : rate > 0
        uniform     : 0 <= min <= max
    - error rate ``p`` within [0, 1]
    - positive requests_per_second, entry points naming real methods (the
      entry points the importer could not match are rechecked against the
      current names, so a later rename or new node clears the error)
    - one port per service, within 1..65535
    - unique fully-qualified names
    - call cycles (warning)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import networkx as nx

from callgraph.domain.models import (
    CallGraph, Distribution, ErrorRateType, IssueLevel, LatencyType, ServiceNode, full_name
)

MAX_REPORTED_CYCLES = 10


@dataclass
class ValidationIssue:
    level: IssueLevel
    code: str
    message: str
    subject: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "code": self.code,
            "message": self.message,
            "subject": self.subject,
        }


@dataclass
class ValidationReport:
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == IssueLevel.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == IssueLevel.WARNING]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.is_valid,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "issues": [i.to_dict() for i in self.issues],
        }


class SpecValidator:
    """Rule-based lint for call graphs."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def validate(self, graph: CallGraph) -> ValidationReport:
        report = ValidationReport()

        if not graph.nodes:
            self._error(report, "no_services", "Configuration must define at least one service")
            return report

        self._check_names(graph, report)
        self._check_calls(graph, report)
        for node in graph:
            self._check_latency(node, report)
            self._check_error_rate(node, report)
        self._check_load(graph, report)
        self._check_ports(graph, report)
        self._check_cycles(graph, report)

        self.logger.info(
            f"Validation finished: {len(report.errors)} errors, {len(report.warnings)} warnings"
        )
        return report

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _check_names(self, graph: CallGraph, report: ValidationReport) -> None:
        for name, ids in graph.duplicate_full_names().items():
            self._error(report, "duplicate_method", f"'{name}' is defined by nodes {', '.join(ids)}", name)
        for node in graph:
            if "." in node.service_name or "." in node.method_name:
                self._error(
                    report, "invalid_name",
                    f"Service and method names must not contain '.': {node.full_name}",
                    node.full_name,
                )

    def _check_calls(self, graph: CallGraph, report: ValidationReport) -> None:
        for node in graph:
            for call in node.calls:
                if len(call.split(".")) != 2:
                    self._error(
                        report, "invalid_call_format",
                        f"Invalid call format in {node.full_name}: '{call}'. "
                        "Expected 'ServiceName.MethodName'",
                        node.full_name,
                    )
        for ref in graph.unresolved_calls():
            if len(ref.reference.split(".")) == 2:
                self._warning(
                    report, "unresolved_call",
                    f"'{ref.reference}' called by {ref.caller} does not exist",
                    ref.caller,
                )

    def _check_latency(self, node: ServiceNode, report: ValidationReport) -> None:
        dist = node.latency_distribution
        subject = node.full_name
        kind = dist.type

        if kind == LatencyType.CONSTANT.value:
            self._require(dist, "value", subject, report, minimum=0.0)
        elif kind == LatencyType.NORMAL.value:
            self._require(dist, "mean", subject, report, minimum=0.0)
            self._require(dist, "stddev", subject, report, minimum=0.0, strict=True)
        elif kind == LatencyType.EXPONENTIAL.value:
            self._require(dist, "rate", subject, report, minimum=0.0, strict=True)
        elif kind == LatencyType.UNIFORM.value:
            lo = self._require(dist, "min", subject, report, minimum=0.0)
            hi = self._require(dist, "max", subject, report)
            if lo is not None and hi is not None and lo > hi:
                self._error(
                    report, "invalid_parameter",
                    f"Uniform distribution for {subject} has min > max: {lo} > {hi}", subject,
                )
        else:
            self._error(report, "unknown_distribution", f"Unknown distribution type for {subject}: '{kind}'", subject)

    def _check_error_rate(self, node: ServiceNode, report: ValidationReport) -> None:
        dist = node.error_rate
        subject = node.full_name
        if dist.type not in (ErrorRateType.BERNOULLI.value, ErrorRateType.CONSTANT.value):
            self._error(report, "unknown_distribution", f"Unknown error rate type for {subject}: '{dist.type}'", subject)
            return
        p = self._require(dist, "p", subject, report, minimum=0.0)
        if p is not None and p > 1.0:
            self._error(report, "invalid_parameter", f"Error rate p for {subject} exceeds 1: {p}", subject)

    def _check_load(self, graph: CallGraph, report: ValidationReport) -> None:
        # the importer records unmatched entry points once; names may have changed since
        for ep in graph.metadata.get("unmatched_entry_points", []):
            name = full_name(ep["service"], ep["method"])
            if graph.find_node(name) is None:
                self._error(report, "unknown_entry_point", f"Entry point {name} does not exist", name)
        entries = graph.entry_points()
        for node in entries:
            if node.requests_per_second <= 0:
                self._error(
                    report, "invalid_entry_point",
                    f"Entry point {node.full_name} requests_per_second must be positive",
                    node.full_name,
                )
        if not entries:
            self._warning(report, "no_entry_points", "No entry points defined; no load will be generated")

    def _check_ports(self, graph: CallGraph, report: ValidationReport) -> None:
        for service, nodes in graph.services().items():
            ports = sorted({n.port for n in nodes if n.port})
            if len(ports) > 1:
                # export keeps the last one seen; reported, not repaired
                self._warning(
                    report, "divergent_ports",
                    f"Methods of service '{service}' disagree on port: {ports}", service,
                )
            for port in ports:
                if not 0 < port <= 65535:
                    self._error(report, "invalid_port", f"Port {port} of service '{service}' is out of range", service)

    def _check_cycles(self, graph: CallGraph, report: ValidationReport) -> None:
        G = nx.DiGraph()
        G.add_nodes_from(graph.nodes)
        G.add_edges_from((e.source, e.target) for e in graph.edges)

        for i, cycle in enumerate(nx.simple_cycles(G)):
            if i >= MAX_REPORTED_CYCLES:
                self._warning(report, "call_cycle", "Further call cycles omitted")
                break
            names = [graph.nodes[n].full_name for n in cycle]
            path = " -> ".join(names + [names[0]])
            self._warning(report, "call_cycle", f"Circular call chain: {path}", names[0])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require(
        self,
        dist: Distribution,
        name: str,
        subject: str,
        report: ValidationReport,
        minimum: Optional[float] = None,
        strict: bool = False,
    ) -> Optional[float]:
        value = dist.get(name)
        if value is None:
            self._error(report, "missing_parameter", f"{dist.type} distribution for {subject} missing '{name}' parameter", subject)
            return None
        if minimum is not None and (value <= minimum if strict else value < minimum):
            bound = "positive" if strict else "non-negative"
            self._error(report, "invalid_parameter", f"{dist.type} distribution for {subject} needs {bound} '{name}': {value}", subject)
        return value

    def _error(self, report: ValidationReport, code: str, message: str, subject: Optional[str] = None) -> None:
        report.issues.append(ValidationIssue(IssueLevel.ERROR, code, message, subject))

    def _warning(self, report: ValidationReport, code: str, message: str, subject: Optional[str] = None) -> None:
        report.issues.append(ValidationIssue(IssueLevel.WARNING, code, message, subject))
