"""LangGraph node that records which HTTP methods each route handler exports."""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Mapping, Sequence

from ..artifact import MethodTable, Route
from ..state import BuildState

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD")


def is_http_method(name: str) -> bool:
    return name in HTTP_METHODS


def extract_methods(
    routes: Sequence[Route],
    compiled_exports: Mapping[str, List[str]],
) -> MethodTable:
    """Map endpoint and server-logic files to the HTTP methods they export.

    Files with no entry in ``compiled_exports`` are left out of the table.
    """

    methods: MethodTable = {}
    for route in routes:
        files = [route.endpoint, route.node.server if route.node else None]
        for file in files:
            if not file:
                continue
            exports = compiled_exports.get(file)
            if exports is None:
                logger.debug("No compiled exports for %s (route %s)", file, route.id)
                continue
            methods[file] = [name for name in exports if is_http_method(name)]
    return methods


def extract_route_methods(state: BuildState) -> Dict[str, object]:
    """Build the method table and write it to ``server/methods.json``."""

    routes = state["route_manifest"].routes
    methods = extract_methods(routes, state.get("compiled_exports", {}))

    warnings = list(state.get("warnings", []))
    for route in routes:
        if route.endpoint and route.endpoint not in methods:
            logger.warning("Endpoint %s for route %s has no compiled exports", route.endpoint, route.id)
            warnings.append(f"Endpoint {route.endpoint} for route {route.id} exports nothing")

    target = state["output_dir"] / "server" / "methods.json"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(methods, indent=2), encoding="utf-8")

    logger.info("Recorded methods for %d route files", len(methods))
    return {"methods": methods, "warnings": warnings}
