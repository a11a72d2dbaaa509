"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the call graph editor.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "importer"      # Run only importer tests
    pytest tests/ --quick            # Skip integration tests
"""

import copy
import json
import tempfile
from pathlib import Path
from typing import Any, Dict

import pytest

from callgraph.domain.services import import_spec


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "integration: marks tests that drive the CLI or HTTP API")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip integration tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests if --quick is specified"""
    if config.getoption("--quick"):
        skip = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip)


# =============================================================================
# Specification Fixtures
# =============================================================================

def method(calls=None, latency=None, p=0.0) -> Dict[str, Any]:
    """Method body with default constant latency and bernoulli error rate."""
    return {
        "calls": calls if calls is not None else [],
        "latency_distribution": latency or {"type": "constant", "parameters": {"value": 100}},
        "error_rate": {"type": "bernoulli", "parameters": {"p": p}},
    }


@pytest.fixture
def foo_bar_spec() -> Dict[str, Any]:
    """Service A: foo calls bar, foo is an entry point at 10 rps."""
    return {
        "services": {
            "A": {
                "port": 8080,
                "methods": {
                    "foo": method(calls=[["A.bar"]]),
                    "bar": method(),
                },
            },
        },
        "load": {"entry_points": [{"service": "A", "method": "foo", "requests_per_second": 10}]},
    }


@pytest.fixture
def shop_spec() -> Dict[str, Any]:
    """Three services, grouped calls, two entry points."""
    return {
        "services": {
            "frontend": {
                "port": 50051,
                "methods": {
                    "checkout": method(
                        calls=[["cart.get_items", "payment.charge"], ["shipping.quote"]],
                        latency={"type": "normal", "parameters": {"mean": 40, "stddev": 5}},
                    ),
                    "browse": method(calls=[["cart.get_items"]]),
                },
            },
            "cart": {
                "port": 50052,
                "methods": {"get_items": method()},
            },
            "payment": {
                "port": 50053,
                "methods": {
                    "charge": method(latency={"type": "normal", "parameters": {"mean": 250, "stddev": 40}}),
                },
            },
            "shipping": {
                "port": 50054,
                "methods": {"quote": method(p=0.15)},
            },
        },
        "load": {
            "entry_points": [
                {"service": "frontend", "method": "checkout", "requests_per_second": 50},
                {"service": "frontend", "method": "browse", "requests_per_second": 200},
            ]
        },
    }


@pytest.fixture
def missing_call_spec(foo_bar_spec) -> Dict[str, Any]:
    """foo additionally calls B.missing, which does not exist."""
    spec = copy.deepcopy(foo_bar_spec)
    spec["services"]["A"]["methods"]["foo"]["calls"] = [["A.bar", "B.missing"]]
    return spec


@pytest.fixture
def foo_bar_graph(foo_bar_spec):
    return import_spec(foo_bar_spec)


@pytest.fixture
def shop_graph(shop_spec):
    return import_spec(shop_spec)


# =============================================================================
# File Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def shop_spec_file(shop_spec, temp_dir) -> Path:
    path = temp_dir / "shop.json"
    path.write_text(json.dumps(shop_spec), encoding="utf-8")
    return path


@pytest.fixture
def make_method():
    """Factory for method bodies; see ``method``."""
    return method
