"""Readers for the JSON files produced by the compiler and route discovery."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .artifact import ArtifactGraph, ChunkRecord, EdgeKind, ImportEdge, Route, RouteManifest, RouteNode
from .errors import InputFormatError


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise InputFormatError(f"Could not read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InputFormatError(f"{path} is not valid JSON: {exc}") from exc


def _string_list(value: Any, where: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InputFormatError(f"{where} must be a list of strings")
    return list(value)


def parse_artifact_graph(data: Any, root: Path) -> ArtifactGraph:
    """Build a graph from a bundler manifest in Vite's format."""

    if not isinstance(data, dict):
        raise InputFormatError("compiler manifest must be an object keyed by source path")

    entries: Dict[str, ChunkRecord] = {}
    for key, chunk in data.items():
        if not isinstance(chunk, dict) or not isinstance(chunk.get("file"), str):
            raise InputFormatError(f'manifest entry "{key}" has no compiled "file"')
        edges = [ImportEdge(target) for target in _string_list(chunk.get("imports"), f"{key}.imports")]
        edges.extend(
            ImportEdge(target, EdgeKind.DEFERRED)
            for target in _string_list(chunk.get("dynamicImports"), f"{key}.dynamicImports")
        )
        entries[key] = ChunkRecord(
            compiled_file=chunk["file"],
            imports=edges,
            css_assets=_string_list(chunk.get("css"), f"{key}.css"),
            assets=_string_list(chunk.get("assets"), f"{key}.assets"),
            is_dynamic_entry=bool(chunk.get("isDynamicEntry", False)),
        )
    return ArtifactGraph(entries, root)


def load_artifact_graph(path: Path, root: Path) -> ArtifactGraph:
    return parse_artifact_graph(_read_json(path), root)


def _parse_node(data: Any, position: int) -> RouteNode:
    if not isinstance(data, dict):
        raise InputFormatError(f"node {position} must be an object")
    return RouteNode(
        component=data.get("component"),
        universal=data.get("universal"),
        server=data.get("server"),
    )


def parse_route_manifest(data: Any) -> RouteManifest:
    """Build a route manifest; each route's ``leaf`` indexes into ``nodes``."""

    if not isinstance(data, dict):
        raise InputFormatError("route manifest must be an object")

    nodes = [_parse_node(item, i) for i, item in enumerate(data.get("nodes", []))]

    routes: List[Route] = []
    for i, item in enumerate(data.get("routes", [])):
        if not isinstance(item, dict):
            raise InputFormatError(f"route {i} must be an object")
        leaf: Optional[int] = item.get("leaf")
        node: Optional[RouteNode] = None
        if leaf is not None:
            if not isinstance(leaf, int) or not 0 <= leaf < len(nodes):
                raise InputFormatError(f"route {item.get('id', i)} has an invalid leaf index {leaf!r}")
            node = nodes[leaf]
        routes.append(Route(id=str(item.get("id", i)), endpoint=item.get("endpoint"), node=node))

    matchers = data.get("matchers", {})
    if not isinstance(matchers, dict):
        raise InputFormatError("matchers must be an object")
    return RouteManifest(nodes=nodes, routes=routes, matchers=dict(matchers))


def load_route_manifest(path: Path) -> RouteManifest:
    return parse_route_manifest(_read_json(path))


def load_compiled_exports(path: Optional[Path]) -> Dict[str, List[str]]:
    if path is None:
        return {}
    data = _read_json(path)
    if not isinstance(data, dict):
        raise InputFormatError("compiled exports must be an object keyed by source path")
    return {key: _string_list(value, key) for key, value in data.items()}
