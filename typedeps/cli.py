"""Main CLI application."""

import logging
from pathlib import Path
from typing import Optional

import msgspec
import typer
from rich.console import Console

from .config import AnalysisConfig, ConfigError, load_config
from .graph import AnalysisContext, RuntimeTypeProvider, TypeIndex, TypeUnresolved, load_roots
from .models import TypeRef
from .queries import (
    ResolveQuery,
    ReferencesQuery,
    ClosureQuery,
    MetricsQuery,
    AnalyzeQuery,
)
from .output import (
    print_json,
    print_type,
    print_candidates,
    print_references,
    print_metrics,
    print_analysis,
    analysis_to_dict,
    print_closure_tree,
    closure_tree_to_dict,
    export_analysis,
)

app = typer.Typer(
    name="typedeps",
    help="Map the structural type dependencies of a codebase",
    add_completion=False,
)
console = Console()

SCHEMA_HELP = "Path to type schema JSON"
RUNTIME_HELP = "Introspect importable Python classes instead of a schema"
CONFIG_HELP = "Path to config JSON"
DEPTH_HELP = "Closure depth, -1 for unbounded (default from config: -1)"


def _error(message: str):
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def get_context(
    schema: Optional[Path],
    runtime: bool,
    config_path: Optional[Path],
    import_paths: Optional[list[str]] = None,
    direct_edges: bool = False,
) -> AnalysisContext:
    """Build an analysis context from CLI options and the config file."""
    config = AnalysisConfig()
    if config_path is not None:
        try:
            config = load_config(config_path)
        except ConfigError as e:
            _error(str(e))
    if direct_edges:
        config = msgspec.structs.replace(config, transitive_edges=False)

    if schema and runtime:
        _error("Cannot use both --schema and --runtime")

    if runtime:
        provider = RuntimeTypeProvider(import_paths=[*config.import_paths, *(import_paths or [])])
        return AnalysisContext(provider, config)

    schema_path = schema or (Path(config.schema) if config.schema else None)
    if schema_path is None:
        _error("Either --schema or --runtime is required")
    if not schema_path.exists():
        _error(f"Schema file not found: {schema_path}")
    try:
        provider = TypeIndex(schema_path, extra_primitives=config.primitives)
    except msgspec.DecodeError as e:
        _error(f"Invalid schema {schema_path}: {e}")
    return AnalysisContext(provider, config)


def resolve_unique(context: AnalysisContext, name: str, json_output: bool) -> TypeRef:
    """Resolve a name to exactly one type or exit."""
    result = ResolveQuery(context).execute(name)

    if not result.found:
        if json_output:
            print_json({"error": "Type not found", "query": name})
        else:
            console.print(f"[red]Type not found: {name}[/red]")
        raise typer.Exit(1)

    if not result.unique:
        print_candidates(result.candidates, as_json=json_output)
        raise typer.Exit(1)

    return result.candidates[0]


# =============================================================================
# Analysis Command
# =============================================================================


@app.command()
def analyze(
    roots_file: Path = typer.Argument(..., help="File listing root type names, one per line"),
    schema: Optional[Path] = typer.Option(None, "--schema", "-s", help=SCHEMA_HELP),
    runtime: bool = typer.Option(False, "--runtime", "-r", help=RUNTIME_HELP),
    import_path: Optional[list[str]] = typer.Option(None, "--import-path", "-I", help="Extra import root (runtime mode)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", min=-1, help=DEPTH_HELP),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for CSV output"),
    direct_edges: bool = typer.Option(False, "--direct-edges", help="Record only direct references in the graph"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details"),
):
    """Analyze root types and export the dependency graph.

    Writes nodes.csv (Id,Label,Connections), edges.csv (Source,Target,Weight),
    report.csv (metrics per root type) and methods.csv (Type,Method,Arguments).

    Edges leaving a root type have weight 3, all others weight 1. A roots
    file without resolvable types produces empty tables.
    """
    _setup_logging(verbose)
    if not roots_file.exists():
        _error(f"Roots file not found: {roots_file}")

    context = get_context(schema, runtime, config, import_path, direct_edges)
    names = load_roots(roots_file)
    result = AnalyzeQuery(context).execute(names, depth=depth)

    output_dir = output or Path(context.config.output_dir)
    paths = export_analysis(result, output_dir)

    if json_output:
        data = analysis_to_dict(result)
        data["files"] = {kind: str(path) for kind, path in paths.items()}
        print_json(data)
    else:
        print_analysis(result, out=console)
        for path in paths.values():
            console.print(f"  - {path}")


# =============================================================================
# Query Commands
# =============================================================================


@app.command()
def resolve(
    name: str = typer.Argument(..., help="Type name to resolve"),
    schema: Optional[Path] = typer.Option(None, "--schema", "-s", help=SCHEMA_HELP),
    runtime: bool = typer.Option(False, "--runtime", "-r", help=RUNTIME_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Resolve a type name (full, any case, or simple name)."""
    context = get_context(schema, runtime, config)
    result = ResolveQuery(context).execute(name)

    if not result.found:
        if json_output:
            print_json({"error": "Type not found", "query": name})
        else:
            console.print(f"[red]Type not found: {name}[/red]")
        raise typer.Exit(1)

    if result.unique:
        print_type(result.candidates[0], as_json=json_output)
    else:
        print_candidates(result.candidates, as_json=json_output)


@app.command()
def refs(
    name: str = typer.Argument(..., help="Type to list direct references for"),
    schema: Optional[Path] = typer.Option(None, "--schema", "-s", help=SCHEMA_HELP),
    runtime: bool = typer.Option(False, "--runtime", "-r", help=RUNTIME_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", min=-1, help="Also walk the closure to this depth to find referrers"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Show the types a type directly references, and who references it.

    Referrers are only known for types visited so far; pass --depth to walk
    the closure of the type first.
    """
    context = get_context(schema, runtime, config)
    type_ref = resolve_unique(context, name, json_output)

    try:
        if depth is not None:
            context.engine.explore(type_ref, depth)
        result = ReferencesQuery(context).execute(type_ref)
    except TypeUnresolved as e:
        _error(str(e))

    if not json_output:
        console.print(f"[bold]References of {type_ref.name}:[/bold]")
    print_references(result, as_json=json_output)


@app.command()
def closure(
    name: str = typer.Argument(..., help="Root type"),
    schema: Optional[Path] = typer.Option(None, "--schema", "-s", help=SCHEMA_HELP),
    runtime: bool = typer.Option(False, "--runtime", "-r", help=RUNTIME_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", min=-1, help=DEPTH_HELP),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details"),
):
    """Show every type associated with a type, as a discovery tree."""
    _setup_logging(verbose)
    context = get_context(schema, runtime, config)
    type_ref = resolve_unique(context, name, json_output)

    try:
        result = ClosureQuery(context).execute(type_ref, depth=depth)
    except TypeUnresolved as e:
        _error(str(e))

    if json_output:
        print_json(closure_tree_to_dict(result))
    else:
        shown = "unbounded" if result.max_depth == -1 else result.max_depth
        console.print(f"[bold]Closure of {type_ref.name} (depth={shown}):[/bold]")
        print_closure_tree(result, console)


@app.command("inspect")
def inspect_cmd(
    name: str = typer.Argument(..., help="Type to report metrics for"),
    schema: Optional[Path] = typer.Option(None, "--schema", "-s", help=SCHEMA_HELP),
    runtime: bool = typer.Option(False, "--runtime", "-r", help=RUNTIME_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", min=-1, help=DEPTH_HELP),
    method: Optional[str] = typer.Option(None, "--method", "-m", help="Only print the argument count of this method"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Report method, field and association metrics for a type."""
    context = get_context(schema, runtime, config)
    type_ref = resolve_unique(context, name, json_output)
    query = MetricsQuery(context)

    if method is not None:
        count = query.method_arg_count(type_ref, method)
        if json_output:
            print_json({"type": type_ref.name, "method": method, "arguments": count})
        else:
            console.print(f"{type_ref.name}.{method}: {count} arguments")
        return

    try:
        metrics = query.execute(type_ref, depth=depth)
    except TypeUnresolved as e:
        _error(str(e))
    print_metrics(metrics, as_json=json_output, out=console)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
