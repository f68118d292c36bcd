"""LangGraph node that writes one manifest module per route node."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..artifact import ArtifactGraph, NodeManifestRecord, ResolvedEntry, RouteNode
from ..errors import MissingManifestEntry
from ..logging import bind_context, unbind_context
from ..state import BuildState
from ..utils.codegen import render_module, to_js
from ..utils.identity import IdentityReconciler
from ..utils.resolver import resolve
from .stylesheets import StylesheetInliner

logger = logging.getLogger(__name__)


def _merge(target: List[str], items: List[str]) -> None:
    for item in items:
        if item not in target:
            target.append(item)


class NodeManifestEmitter:
    """Combine resolver and inliner output into ``nodes/<index>.js`` modules.

    ``graph`` passed to :meth:`emit` drives asset discovery; loader paths
    point at the compiled files recorded in ``server_graph``, falling back to
    the same graph when no separate server build exists.
    """

    def __init__(
        self,
        inliner: StylesheetInliner,
        server_graph: Optional[ArtifactGraph] = None,
    ) -> None:
        self.inliner = inliner
        self.server_graph = server_graph
        self._reconcilers: Dict[int, IdentityReconciler] = {}

    def _reconciler(self, graph: ArtifactGraph) -> IdentityReconciler:
        reconciler = self._reconcilers.get(id(graph))
        if reconciler is None:
            reconciler = self._reconcilers[id(graph)] = IdentityReconciler(graph)
        return reconciler

    def _in_graph(self, source: str, graph: ArtifactGraph) -> bool:
        try:
            self._reconciler(graph).canonicalize(source)
        except MissingManifestEntry:
            return False
        return True

    def _compiled(self, source: str, graph: ArtifactGraph) -> str:
        server_graph = graph if self.server_graph is None else self.server_graph
        key = self._reconciler(server_graph).canonicalize(source)
        return server_graph[key].compiled_file

    def build_record(self, node_index: int, node: RouteNode, graph: ArtifactGraph) -> NodeManifestRecord:
        record = NodeManifestRecord(index=node_index)
        reconciler = self._reconciler(graph)

        def _collect(source: str) -> ResolvedEntry:
            entry = resolve(source, graph, reconciler)
            _merge(record.imports, entry.imported_chunks)
            _merge(record.stylesheets, entry.stylesheets)
            _merge(record.fonts, entry.fonts)
            return entry

        if node.component:
            entry = _collect(node.component)
            record.file = entry.file
            record.component = self._compiled(node.component, graph)
        if node.universal:
            _collect(node.universal)
            record.universal = self._compiled(node.universal, graph)
        if node.server:
            # server-only modules are usually absent from the client build
            if self.server_graph is None or self._in_graph(node.server, graph):
                _collect(node.server)
            record.server = self._compiled(node.server, graph)

        for stylesheet in record.stylesheets:
            slot = self.inliner.inline(stylesheet)
            if slot is not None:
                record.inline_styles[stylesheet] = slot
        record.stylesheets = [
            stylesheet for stylesheet in record.stylesheets if stylesheet not in record.inline_styles
        ]
        return record

    def render(self, record: NodeManifestRecord) -> str:
        imports: List[str] = []
        exports: List[str] = [f"export const index = {record.index};"]

        if record.component:
            exports.append(
                f"export const component = async () => (await import('../{record.component}')).default;"
            )
            exports.append(f"export const file = {to_js(record.file)};")
        if record.universal:
            exports.append(f"export const universal = () => import('../{record.universal}');")
        if record.server:
            imports.append(f"import * as server from '../{record.server}';")
            exports.append("export { server };")

        exports.append(f"export const imports = {to_js(record.imports)};")
        exports.append(f"export const stylesheets = {to_js(record.stylesheets)};")
        exports.append(f"export const fonts = {to_js(record.fonts)};")

        styles: List[str] = []
        for stylesheet, slot in record.inline_styles.items():
            name = f"stylesheet_{slot}"
            imports.append(f"import {name} from '../stylesheets/{slot}.js';")
            styles.append(f"\t{to_js(stylesheet)}: {name}")
        if styles:
            joined = ",\n".join(styles)
            exports.append(f"export const inline_styles = () => ({{\n{joined}\n}});")

        return render_module(imports, exports)

    def emit(self, node_index: int, node: RouteNode, graph: ArtifactGraph) -> str:
        """Return the generated module text for the node at ``node_index``."""

        return self.render(self.build_record(node_index, node, graph))


def emit_node_manifests(state: BuildState) -> Dict[str, object]:
    """Write ``server/nodes/<i>.js`` for every node in the route manifest."""

    settings = state["settings"]

    server_dir: Path = state["output_dir"] / "server"
    nodes_dir = server_dir / "nodes"
    nodes_dir.mkdir(parents=True, exist_ok=True)

    inliner = StylesheetInliner(
        client_dir=state["client_dir"],
        stylesheet_dir=server_dir / "stylesheets",
        threshold=settings.inline_style_threshold,
    )
    emitter = NodeManifestEmitter(inliner, server_graph=state.get("server_graph"))
    graph = state["client_graph"]

    records: List[NodeManifestRecord] = []
    for index, node in enumerate(state["route_manifest"].nodes):
        bind_context(node_index=index, component=node.component or "")
        try:
            record = emitter.build_record(index, node, graph)
            (nodes_dir / f"{index}.js").write_text(emitter.render(record), encoding="utf-8")
            logger.debug(
                "Node %d: %d chunks, %d stylesheets, %d inlined",
                index,
                len(record.imports),
                len(record.stylesheets),
                len(record.inline_styles),
            )
        finally:
            unbind_context("node_index", "component")
        records.append(record)

    logger.info("Wrote %d node manifests, %d inlined stylesheets", len(records), len(inliner.table))
    return {"node_records": records, "stylesheet_slots": inliner.table}
