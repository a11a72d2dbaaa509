"""
Unit Tests for the specification validator

Tests for:
    - validator.py: each lint rule and the report summary
"""

import pytest

from callgraph.domain.models import CallGraph, Distribution, IssueLevel, ServiceNode
from callgraph.domain.services import SpecValidator, import_spec, update_node


def codes(report, level=None):
    return [i.code for i in report.issues if level is None or i.level == level]


@pytest.fixture
def validator():
    return SpecValidator()


class TestReport:

    def test_shop_is_valid(self, validator, shop_graph):
        report = validator.validate(shop_graph)
        assert report.is_valid
        assert report.issues == []

    def test_to_dict(self, validator, missing_call_spec):
        data = validator.validate(import_spec(missing_call_spec)).to_dict()
        assert data["valid"] is True
        assert data["warning_count"] == 1
        assert data["issues"][0]["code"] == "unresolved_call"
        assert data["issues"][0]["level"] == "warning"


class TestRules:

    def test_empty_graph(self, validator):
        report = validator.validate(CallGraph())
        assert codes(report) == ["no_services"]
        assert not report.is_valid

    def test_bad_call_format(self, validator, foo_bar_graph):
        foo_bar_graph.find_node("A.foo").calls = ["justamethod", "a.b.c"]
        report = validator.validate(foo_bar_graph)
        assert codes(report, IssueLevel.ERROR) == ["invalid_call_format", "invalid_call_format"]

    def test_unresolved_is_warning(self, validator, missing_call_spec):
        report = validator.validate(import_spec(missing_call_spec))
        assert report.is_valid
        assert codes(report, IssueLevel.WARNING) == ["unresolved_call"]

    @pytest.mark.parametrize("latency, code", [
        (Distribution("normal", {"mean": 10}), "missing_parameter"),
        (Distribution("normal", {"mean": 10, "stddev": 0}), "invalid_parameter"),
        (Distribution("constant", {"value": -1}), "invalid_parameter"),
        (Distribution("exponential", {"rate": 0}), "invalid_parameter"),
        (Distribution("uniform", {"min": 10, "max": 5}), "invalid_parameter"),
        (Distribution("uniform", {"max": 5}), "missing_parameter"),
        (Distribution("pareto", {"alpha": 1}), "unknown_distribution"),
    ])
    def test_latency_rules(self, validator, foo_bar_graph, latency, code):
        foo_bar_graph.find_node("A.bar").latency_distribution = latency
        assert codes(validator.validate(foo_bar_graph), IssueLevel.ERROR) == [code]

    @pytest.mark.parametrize("error_rate, code", [
        (Distribution("bernoulli", {"p": 1.5}), "invalid_parameter"),
        (Distribution("bernoulli", {"p": -0.1}), "invalid_parameter"),
        (Distribution("bernoulli", {}), "missing_parameter"),
        (Distribution("poisson", {"p": 0.1}), "unknown_distribution"),
    ])
    def test_error_rate_rules(self, validator, foo_bar_graph, error_rate, code):
        foo_bar_graph.find_node("A.bar").error_rate = error_rate
        assert codes(validator.validate(foo_bar_graph), IssueLevel.ERROR) == [code]

    def test_uniform_valid(self, validator, foo_bar_graph):
        foo_bar_graph.find_node("A.bar").latency_distribution = Distribution("uniform", {"min": 5, "max": 5})
        assert validator.validate(foo_bar_graph).is_valid

    def test_unmatched_entry_point(self, validator, foo_bar_spec):
        foo_bar_spec["load"]["entry_points"].append({"service": "Z", "method": "nope", "requests_per_second": 1})
        report = validator.validate(import_spec(foo_bar_spec))
        assert codes(report, IssueLevel.ERROR) == ["unknown_entry_point"]

    def test_unmatched_entry_point_cleared_by_rename(self, validator, foo_bar_spec):
        foo_bar_spec["load"]["entry_points"].append({"service": "Z", "method": "nope", "requests_per_second": 1})
        graph = import_spec(foo_bar_spec)
        update_node(graph, graph.find_node("A.bar").id, {"service_name": "Z", "method_name": "nope"})
        assert "unknown_entry_point" not in codes(validator.validate(graph))

    def test_unmatched_entry_point_cleared_by_new_node(self, validator, foo_bar_spec):
        foo_bar_spec["load"]["entry_points"].append({"service": "Z", "method": "nope", "requests_per_second": 1})
        graph = import_spec(foo_bar_spec)
        graph.add_node(ServiceNode(id=graph.next_node_id(), service_name="Z", method_name="nope"))
        assert "unknown_entry_point" not in codes(validator.validate(graph))

    def test_non_positive_rate(self, validator, foo_bar_graph):
        foo_bar_graph.find_node("A.foo").requests_per_second = 0
        assert codes(validator.validate(foo_bar_graph), IssueLevel.ERROR) == ["invalid_entry_point"]

    def test_no_entry_points_warns(self, validator, foo_bar_graph):
        update_node(foo_bar_graph, foo_bar_graph.find_node("A.foo").id, {"requests_per_second": None})
        report = validator.validate(foo_bar_graph)
        assert report.is_valid
        assert codes(report) == ["no_entry_points"]

    def test_divergent_ports_warn(self, validator, foo_bar_graph):
        foo_bar_graph.find_node("A.bar").port = 9090
        report = validator.validate(foo_bar_graph)
        assert report.is_valid
        assert codes(report) == ["divergent_ports"]
        # reported, not repaired
        assert foo_bar_graph.find_node("A.bar").port == 9090

    def test_port_out_of_range(self, validator, foo_bar_graph):
        for node in foo_bar_graph:
            node.port = 70000
        assert codes(validator.validate(foo_bar_graph), IssueLevel.ERROR) == ["invalid_port"]

    def test_duplicate_names(self, validator):
        graph = CallGraph()
        graph.add_node(ServiceNode(id="node-0", service_name="A", method_name="x", requests_per_second=1))
        graph.add_node(ServiceNode(id="node-1", service_name="B", method_name="y"))
        # bypass the graph's own guard
        graph.nodes["node-1"].service_name = "A"
        graph.nodes["node-1"].method_name = "x"
        assert codes(validator.validate(graph), IssueLevel.ERROR) == ["duplicate_method"]

    def test_dotted_name(self, validator, foo_bar_graph):
        foo_bar_graph.rename(foo_bar_graph.find_node("A.bar").id, "A", "b.ar")
        assert "invalid_name" in codes(validator.validate(foo_bar_graph), IssueLevel.ERROR)


class TestCycles:

    def test_cycle_reported_as_warning(self, validator, foo_bar_graph):
        foo = foo_bar_graph.find_node("A.foo")
        bar = foo_bar_graph.find_node("A.bar")
        foo_bar_graph.add_edge(bar.id, foo.id)
        report = validator.validate(foo_bar_graph)
        assert report.is_valid
        assert codes(report) == ["call_cycle"]
        assert "A.foo" in report.issues[0].message and "A.bar" in report.issues[0].message

    def test_self_loop(self, validator, foo_bar_graph):
        bar = foo_bar_graph.find_node("A.bar")
        foo_bar_graph.add_edge(bar.id, bar.id)
        report = validator.validate(foo_bar_graph)
        assert report.issues[0].message == "Circular call chain: A.bar -> A.bar"

    def test_cycle_report_capped(self, validator):
        graph = CallGraph()
        ids = [graph.add_node(ServiceNode(id=f"node-{i}", service_name="S", method_name=f"m{i}")).id for i in range(6)]
        graph.nodes[ids[0]].requests_per_second = 1
        for a in ids:
            for b in ids:
                graph.add_edge(a, b)
        cycles = [i for i in validator.validate(graph).issues if i.code == "call_cycle"]
        assert len(cycles) == 11
        assert cycles[-1].message == "Further call cycles omitted"
