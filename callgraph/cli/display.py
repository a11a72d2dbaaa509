"""
Display Module

Terminal output for the command-line tools.
"""

from typing import Dict, List

from callgraph.domain.models import IssueLevel, NodeCategory, UnresolvedCallReference
from callgraph.domain.services import ValidationReport


# =============================================================================
# Terminal Colors
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: str, bold: bool = False) -> str:
    """Apply color to text."""
    style = Colors.BOLD if bold else ""
    return f"{style}{color}{text}{Colors.RESET}"


def category_color(category: NodeCategory) -> str:
    return {
        NodeCategory.ENTRY_POINT: Colors.YELLOW,
        NodeCategory.HIGH_ERROR: Colors.RED,
        NodeCategory.HIGH_LATENCY: Colors.BLUE,
    }.get(category, Colors.GRAY)


# =============================================================================
# Common Display Functions
# =============================================================================

def print_header(title: str, char: str = "=", width: int = 78) -> None:
    """Print a formatted header."""
    print(f"\n{colored(char * width, Colors.CYAN)}")
    print(f"{colored(f' {title} '.center(width), Colors.CYAN, bold=True)}")
    print(f"{colored(char * width, Colors.CYAN)}")


def print_subheader(title: str, char: str = "-", width: int = 78) -> None:
    """Print a formatted subheader."""
    print(f"\n{colored(f' {title} ', Colors.WHITE, bold=True)}")
    print(f"{colored(char * width, Colors.GRAY)}")


# =============================================================================
# Specification Display
# =============================================================================

def display_statistics(stats: Dict[str, int]) -> None:
    print_subheader("Graph Summary")
    print(f"  Services:        {stats['num_services']}")
    print(f"  Methods:         {stats['num_methods']}")
    print(f"  Call edges:      {stats['num_edges']}")
    print(f"  Entry points:    {stats['num_entry_points']}")
    print(f"  Unresolved:      {stats['num_unresolved_calls']}")


def display_categories(labels: Dict[str, NodeCategory]) -> None:
    """Print one line per node, keyed by "service.method"."""
    print_subheader("Node Categories")
    if not labels:
        print(colored("  (no nodes)", Colors.GRAY))
        return
    width = max(len(name) for name in labels)
    for name, category in labels.items():
        print(f"  {name:<{width}}  {colored(category.label, category_color(category))}")


def display_unresolved(refs: List[UnresolvedCallReference]) -> None:
    if not refs:
        return
    print_subheader("Unresolved Calls")
    for ref in refs:
        print(f"  {ref.caller} -> {colored(ref.reference, Colors.YELLOW)}")


def display_report(report: ValidationReport) -> None:
    print_subheader("Validation")
    for issue in report.issues:
        color = Colors.RED if issue.level == IssueLevel.ERROR else Colors.YELLOW
        print(f"  {colored(issue.level.value.upper(), color):<20} {issue.message}")

    if report.is_valid:
        status = colored("VALID", Colors.GREEN, bold=True)
    else:
        status = colored("INVALID", Colors.RED, bold=True)
    print(f"\n  Status: {status} ({len(report.errors)} errors, {len(report.warnings)} warnings)")
