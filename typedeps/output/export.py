"""CSV export of the dependency graph and per-type report.

``nodes.csv`` and ``edges.csv`` follow the column names Gephi expects when
importing a spreadsheet as node and edge tables.
"""

import csv
from pathlib import Path

from ..models import AnalysisResult, EdgeRow, NodeRow, TypeMetrics, METRIC_COLUMNS

NODES_FILE = "nodes.csv"
EDGES_FILE = "edges.csv"
REPORT_FILE = "report.csv"
METHODS_FILE = "methods.csv"


def write_nodes_csv(path: Path, nodes: list[NodeRow]):
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["Id", "Label", "Connections"])
        for node in nodes:
            writer.writerow([node.type_ref.name, node.type_ref.simple_name, node.connections])


def write_edges_csv(path: Path, edges: list[EdgeRow]):
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["Source", "Target", "Weight"])
        for edge in edges:
            writer.writerow([edge.source.name, edge.target.name, edge.weight])


def write_report_csv(path: Path, metrics: list[TypeMetrics]):
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([label for _, label in METRIC_COLUMNS])
        for row in metrics:
            writer.writerow(
                [row.type_ref.name] + [getattr(row, key) for key, _ in METRIC_COLUMNS[1:]]
            )


def write_methods_csv(path: Path, metrics: list[TypeMetrics]):
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["Type", "Method", "Arguments"])
        for row in metrics:
            for name, count in row.method_args:
                writer.writerow([row.type_ref.name, name, count])


def export_analysis(result: AnalysisResult, output_dir: str | Path) -> dict[str, Path]:
    """Write all CSV files for an analysis run.

    Args:
        result: Completed analysis.
        output_dir: Directory to write into; created if missing.

    Returns:
        Mapping of file kind ("nodes", "edges", "report", "methods") to path.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = {
        "nodes": output_dir / NODES_FILE,
        "edges": output_dir / EDGES_FILE,
        "report": output_dir / REPORT_FILE,
        "methods": output_dir / METHODS_FILE,
    }
    write_nodes_csv(paths["nodes"], result.nodes)
    write_edges_csv(paths["edges"], result.edges)
    write_report_csv(paths["report"], result.metrics)
    write_methods_csv(paths["methods"], result.metrics)
    return paths
