"""Command-line interface for the server manifest build."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import get_settings
from .errors import ConfigError, ManifestBuildError
from .graph import build_server_graph
from .loaders import load_artifact_graph, load_compiled_exports, load_route_manifest
from .logging import bind_context, clear_context, configure_logging
from .state import BuildState, build_initial_state

console = Console()


def _build(
    client_manifest: Path = typer.Option(
        ...,
        "--client-manifest",
        "-c",
        help="Dependency manifest written by the client build.",
    ),
    routes: Path = typer.Option(
        ...,
        "--routes",
        "-r",
        help="Route manifest JSON (nodes, routes, matchers).",
    ),
    server_manifest: Optional[Path] = typer.Option(
        None,
        "--server-manifest",
        "-s",
        help="Dependency manifest written by the server build.",
    ),
    exports: Optional[Path] = typer.Option(
        None,
        "--exports",
        "-e",
        help="JSON map of source file to compiled export names.",
    ),
    client_dir: Optional[Path] = typer.Option(
        None,
        "--client-dir",
        help="Directory holding the client build's assets.",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Output directory for the server build.",
    ),
    cwd: Path = typer.Option(
        Path("."),
        "--cwd",
        help="Project root that manifest paths are relative to.",
    ),
    report: Optional[Path] = typer.Option(
        None,
        "--report",
        help="Destination JSON file for the build report.",
    ),
    inline_threshold: Optional[int] = typer.Option(
        None,
        "--inline-threshold",
        help="Inline stylesheets smaller than this many bytes.",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level."),
) -> None:
    """Emit per-node server manifests, the server entry and the method table."""

    try:
        settings = get_settings()
    except ConfigError as exc:
        console.print(f"[red]Build failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    if inline_threshold is not None:
        settings = settings.model_copy(update={"inline_style_threshold": inline_threshold})
    configure_logging(log_level or settings.log_level)

    root = cwd.resolve()
    if not root.is_dir():
        console.print(f"[red]Project root {root} does not exist.[/red]")
        raise typer.Exit(code=1)

    output_dir = out.resolve() if out is not None else root / settings.out_dir / "output"
    bind_context(output_dir=str(output_dir))
    try:
        state: BuildState = build_initial_state(
            cwd=root,
            settings=settings,
            output_dir=output_dir,
            client_dir=(client_dir or output_dir / "client").resolve(),
            client_graph=load_artifact_graph(client_manifest, root),
            route_manifest=load_route_manifest(routes),
            compiled_exports=load_compiled_exports(exports),
            server_graph=load_artifact_graph(server_manifest, root) if server_manifest else None,
        )
        state["report_path"] = report.resolve() if report is not None else None

        result_state = build_server_graph().invoke(state)
    except ManifestBuildError as exc:
        console.print(f"[red]Build failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    finally:
        clear_context()

    build = result_state.get("report")
    if build is None:
        console.print("[red]Build did not produce a report.[/red]")
        raise typer.Exit(code=1)

    if report is not None:
        console.print(f"[green]Report written to[/green] {report}")

    table = Table(title="Server Build Summary")
    table.add_column("Metric")
    table.add_column("Value")
    table.add_row("Graph Entries", build.metadata.get("graph_entries", "0"))
    table.add_row("Nodes", build.metadata.get("node_count", "0"))
    table.add_row("Inlined Stylesheets", build.metadata.get("inlined_stylesheets", "0"))
    table.add_row("Route Files With Methods", build.metadata.get("route_files_with_methods", "0"))
    table.add_row("Warnings", str(len(build.warnings)))
    console.print(table)

    if build.warnings:
        console.print("[yellow]Warnings detected during build:[/yellow]")
        for warning in build.warnings:
            console.print(f" - {warning}")


def app() -> None:
    """Entry point used by the console script."""

    typer.run(_build)


if __name__ == "__main__":  # pragma: no cover
    app()
