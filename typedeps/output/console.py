"""Console output formatters using Rich."""

from rich.console import Console
from rich.table import Table

from .json_formatter import print_json
from ..models import (
    TypeRef,
    ReferencesResult,
    TypeMetrics,
    METRIC_COLUMNS,
    AnalysisResult,
)

console = Console()


def metrics_to_dict(metrics: TypeMetrics) -> dict:
    """Convert metrics to a JSON-serializable dict."""
    data = {"type": metrics.type_ref.name}
    for key, _ in METRIC_COLUMNS[1:]:
        data[key] = getattr(metrics, key)
    data["method_args"] = [
        {"method": name, "arguments": count} for name, count in metrics.method_args
    ]
    return data


def analysis_to_dict(result: AnalysisResult) -> dict:
    """Convert an analysis run to a JSON-serializable dict."""
    return {
        "depth": result.max_depth,
        "roots": [r.name for r in result.roots],
        "unresolved": list(result.unresolved),
        "metrics": [metrics_to_dict(m) for m in result.metrics],
        "nodes": [
            {"id": n.type_ref.name, "label": n.type_ref.simple_name, "connections": n.connections}
            for n in result.nodes
        ],
        "edges": [
            {"source": e.source.name, "target": e.target.name, "weight": e.weight}
            for e in result.edges
        ],
    }


def print_type(type_ref: TypeRef, as_json: bool = False):
    """Print a single resolved type."""
    if as_json:
        print_json({"name": type_ref.name, "simple_name": type_ref.simple_name})
    else:
        console.print(f"[bold]{type_ref.simple_name}[/bold]: {type_ref.name}")


def print_candidates(candidates: list[TypeRef], as_json: bool = False):
    """Print multiple candidate types."""
    if as_json:
        print_json([{"name": c.name, "simple_name": c.simple_name} for c in candidates])
    else:
        console.print(f"[yellow]Found {len(candidates)} candidates:[/yellow]")
        for i, candidate in enumerate(candidates, 1):
            console.print(f"  [{i}] {candidate.name}")


def print_references(result: ReferencesResult, as_json: bool = False):
    """Print direct references and known referrers of a type."""
    if as_json:
        print_json({
            "type": result.target.name,
            "references": [r.name for r in result.references],
            "referrers": [r.name for r in result.referrers],
        })
        return

    console.print(f"[bold]== REFERENCES ({len(result.references)}) ==[/bold]")
    if not result.references:
        console.print("[dim]None[/dim]")
    for type_ref in result.references:
        console.print(f"  {type_ref.name}")
    console.print()

    console.print(f"[bold]== REFERENCED BY ({len(result.referrers)}) ==[/bold]")
    if not result.referrers:
        console.print("[dim]None[/dim]")
    for type_ref in result.referrers:
        console.print(f"  {type_ref.name}")


def print_metrics(metrics: TypeMetrics, as_json: bool = False, out: Console = console):
    """Print metrics and the method table of one type."""
    if as_json:
        print_json(metrics_to_dict(metrics))
        return

    table = Table(title=metrics.type_ref.name, show_header=True)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for key, label in METRIC_COLUMNS[1:]:
        table.add_row(label, str(getattr(metrics, key)))
    out.print(table)

    if metrics.method_args:
        methods = Table(show_header=True)
        methods.add_column("Method")
        methods.add_column("Arguments", justify="right")
        for name, count in metrics.method_args:
            methods.add_row(name, str(count))
        out.print(methods)


def print_analysis(result: AnalysisResult, as_json: bool = False, out: Console = console):
    """Print a summary of an analysis run."""
    if as_json:
        print_json(analysis_to_dict(result))
        return

    depth = "unbounded" if result.max_depth == -1 else str(result.max_depth)
    table = Table(title=f"Analyzed {len(result.metrics)} root types (depth={depth})")
    table.add_column("Type")
    table.add_column("Methods", justify="right")
    table.add_column("Members", justify="right")
    table.add_column("Direct", justify="right")
    table.add_column("Indirect", justify="right")
    for row in result.metrics:
        table.add_row(
            row.type_ref.name,
            str(row.methods),
            str(row.members),
            str(row.direct_associations),
            str(row.indirect_associations),
        )
    out.print(table)
    out.print(f"Graph: {len(result.nodes)} nodes, {len(result.edges)} edges")

    for name in result.unresolved:
        out.print(f"[yellow]Unresolved: {name}[/yellow]")
