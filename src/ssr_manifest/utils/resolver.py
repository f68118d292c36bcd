"""Transitive asset resolution over the compiler's artifact graph."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..artifact import ArtifactGraph, ResolvedEntry
from .identity import IdentityReconciler


class _OrderedSet:
    """Insertion-ordered set backed by a dict."""

    def __init__(self) -> None:
        self._items: Dict[str, None] = {}

    def add(self, item: str) -> None:
        self._items.setdefault(item, None)

    def extend(self, items: List[str]) -> None:
        for item in items:
            self.add(item)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def to_list(self) -> List[str]:
        return list(self._items)


def resolve(
    entry_path: str,
    graph: ArtifactGraph,
    reconciler: Optional[IdentityReconciler] = None,
) -> ResolvedEntry:
    """Collect the chunks, stylesheets and fonts reachable from ``entry_path``.

    Traversal is depth-first along static import edges only; deferred edges
    point at code loaded on demand and are left out of the upfront set. Each
    module is visited once per call, keyed by its canonical graph entry, so
    cycles terminate and diamond-shared modules contribute exactly once.
    """

    reconciler = reconciler or IdentityReconciler(graph)
    entry_key = reconciler.canonicalize(entry_path)
    entry_file = graph[entry_key].compiled_file

    visited = _OrderedSet()
    chunks = _OrderedSet()
    stylesheets = _OrderedSet()
    fonts = _OrderedSet()

    stack: List[str] = [entry_key]
    while stack:
        key = reconciler.canonicalize(stack.pop())
        if key in visited:
            continue
        visited.add(key)

        record = graph[key]
        if key != entry_key and record.compiled_file != entry_file:
            chunks.add(record.compiled_file)
        stylesheets.extend(record.css_assets)
        fonts.extend(record.font_assets)

        # reversed so the first import is explored first
        stack.extend(reversed(record.static_imports))

    return ResolvedEntry(
        file=entry_file,
        imported_chunks=chunks.to_list(),
        stylesheets=stylesheets.to_list(),
        fonts=fonts.to_list(),
    )
