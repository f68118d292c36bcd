"""LangGraph node that plans the bundler's named server entry points."""

from __future__ import annotations

import json
import logging
import posixpath
from pathlib import Path
from typing import Dict
from urllib.parse import unquote

from ..artifact import RouteManifest
from ..config import Settings, validate_settings
from ..state import BuildState
from ..utils.paths import posixify, relative_posix

logger = logging.getLogger(__name__)


def _strip_js(name: str) -> str:
    return name[:-3] if name.endswith(".js") else name


def plan_entry_inputs(manifest: RouteManifest, settings: Settings, cwd: Path) -> Dict[str, str]:
    """Return an ordered ``entry name -> absolute source path`` mapping."""

    routes_dir = cwd / settings.routes_dir
    inputs: Dict[str, str] = {
        "index": posixify(cwd / settings.runtime_dir / "server" / "index.js"),
        "internal": posixify(cwd / settings.out_dir / "generated" / "server-internal.js"),
    }

    for route in manifest.routes:
        if route.endpoint:
            resolved = (cwd / route.endpoint).resolve()
            relative = unquote(relative_posix(resolved, routes_dir.resolve()))
            inputs[posixpath.join("entries/endpoints", _strip_js(relative))] = posixify(resolved)

    for node in manifest.nodes:
        for file in (node.component, node.universal, node.server):
            if not file:
                continue
            resolved = (cwd / file).resolve()
            relative = unquote(relative_posix(resolved, routes_dir.resolve()))
            if relative.startswith(".."):
                name = posixpath.join("entries/fallbacks", posixpath.basename(posixify(file)))
            else:
                name = posixpath.join("entries/pages", _strip_js(relative))
            inputs[name] = posixify(resolved)

    for key, file in manifest.matchers.items():
        inputs[posixpath.join("entries/matchers", key)] = posixify((cwd / file).resolve())

    return inputs


def plan_inputs(state: BuildState) -> Dict[str, object]:
    """Compute the entry map and persist it next to the server output."""

    validate_settings(state["settings"])
    entries = plan_entry_inputs(state["route_manifest"], state["settings"], state["cwd"])

    target = state["output_dir"] / "server" / "entries.json"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(entries, indent=2), encoding="utf-8")

    logger.info("Planned %d server entry points", len(entries))
    return {"entries": entries}
