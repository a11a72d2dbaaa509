#!/usr/bin/env python3
"""
Quick Start Example
====================

Loads a specification, edits it through the editor service and prints the
exported document alongside the generated simulator configuration.

Usage:
    python examples/quick_start.py
"""

from pathlib import Path

from callgraph.config import Container, Settings

SPEC = Path(__file__).parent / "specs" / "shop.json"


def main():
    print("=" * 60)
    print("Call Graph Editor: Quick Start Demo")
    print("=" * 60)

    container = Container.from_settings(Settings.from_env())
    editor = container.editor_service()

    print("\n[1/4] Importing specification...")
    result = editor.load_file(str(SPEC))
    if not result.success:
        raise SystemExit(f"Import failed: {result.error}")
    stats = editor.graph.get_statistics()
    print(f"  {stats['num_methods']} methods, {stats['num_edges']} call edges")
    for ref in result.unresolved_calls:
        print(f"  unresolved: {ref.caller} -> {ref.reference}")

    print("\n[2/4] Categories...")
    for node_id, category in editor.classify_nodes().items():
        print(f"  {editor.graph.nodes[node_id].full_name:<24} {category.label}")

    print("\n[3/4] Adding fraud.score and wiring payment.charge to it...")
    fraud = editor.add_node(service_name="fraud", method_name="score")
    editor.update_node(fraud.id, {"latency_distribution": {"parameters": {"value": 12}}})
    charge = editor.graph.find_node("payment.charge")
    editor.connect(charge.id, fraud.id)

    report = editor.validate()
    print(f"  valid={report.is_valid} errors={len(report.errors)} warnings={len(report.warnings)}")

    print("\n[4/4] Simulator configuration:")
    print(container.generation_service().simulator_yaml(editor.graph))


if __name__ == "__main__":
    main()
