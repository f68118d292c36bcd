"""Final LangGraph node that assembles the build report."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from ..artifact import BuildReport
from ..state import BuildState


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def build_report(state: BuildState) -> Dict[str, object]:
    """Construct the report and optionally flush it to disk."""

    output_dir = state["output_dir"]
    records = state.get("node_records", [])
    slots = state.get("stylesheet_slots", {})
    methods = state.get("methods", {})
    server_entry = state.get("server_entry_path")

    graph = state["client_graph"]
    metadata = {
        "graph_entries": str(len(graph)),
        "dynamic_entries": str(sum(1 for key in graph if graph[key].is_dynamic_entry)),
        "node_count": str(len(records)),
        "inlined_stylesheets": str(len(slots)),
        "route_files_with_methods": str(len(methods)),
        "server_entry": _relative(server_entry, state["cwd"]) if server_entry else "",
    }

    report = BuildReport(
        out_dir=str(output_dir),
        entries=state.get("entries", {}),
        nodes=records,
        stylesheets=slots,
        methods=methods,
        metadata=metadata,
        warnings=state.get("warnings", []),
    )

    report_path = state.get("report_path")
    if report_path:
        report.to_json(report_path)

    return {"report": report}
