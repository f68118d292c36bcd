"""Canonical state definitions shared across the LangGraph pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, TypedDict

from .artifact import ArtifactGraph, BuildReport, MethodTable, NodeManifestRecord, RouteManifest
from .config import Settings


class BuildState(TypedDict, total=False):
    """State container exchanged between LangGraph nodes."""

    cwd: Path
    settings: Settings
    output_dir: Path
    client_dir: Path
    client_graph: ArtifactGraph
    server_graph: Optional[ArtifactGraph]
    route_manifest: RouteManifest
    compiled_exports: Dict[str, List[str]]
    entries: Dict[str, str]
    server_entry_path: Optional[Path]
    node_records: List[NodeManifestRecord]
    stylesheet_slots: Dict[str, int]
    methods: MethodTable
    report_path: Optional[Path]
    warnings: List[str]
    report: Optional[BuildReport]


def build_initial_state(
    cwd: Path,
    settings: Settings,
    output_dir: Path,
    client_dir: Path,
    client_graph: ArtifactGraph,
    route_manifest: RouteManifest,
    compiled_exports: Dict[str, List[str]],
    server_graph: Optional[ArtifactGraph] = None,
) -> BuildState:
    """Return the initial state for one build invocation."""

    return BuildState(
        cwd=cwd,
        settings=settings,
        output_dir=output_dir,
        client_dir=client_dir,
        client_graph=client_graph,
        server_graph=server_graph,
        route_manifest=route_manifest,
        compiled_exports=compiled_exports,
        entries={},
        server_entry_path=None,
        node_records=[],
        stylesheet_slots={},
        methods={},
        report_path=None,
        warnings=[],
        report=None,
    )
