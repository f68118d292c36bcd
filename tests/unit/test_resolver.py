"""Tests for transitive asset resolution."""

from __future__ import annotations

import pytest

from ssr_manifest.errors import MissingManifestEntry
from ssr_manifest.utils.resolver import resolve


def test_shared_dependency_contributes_stylesheet(make_graph) -> None:
    graph = make_graph(
        {
            "page.js": {"file": "out/page.js", "imports": ["shared.js"], "css": []},
            "shared.js": {"file": "out/shared.js", "imports": [], "css": ["shared.css"]},
        }
    )

    entry = resolve("page.js", graph)

    assert entry.file == "out/page.js"
    assert entry.stylesheets == ["shared.css"]
    assert entry.imported_chunks == ["out/shared.js"]


def test_diamond_dependency_counted_once(make_graph) -> None:
    graph = make_graph(
        {
            "a.js": {"file": "a.js", "imports": ["b.js", "c.js"], "css": ["a.css"]},
            "b.js": {"file": "b.js", "imports": ["d.js"], "css": ["b.css"]},
            "c.js": {"file": "c.js", "imports": ["d.js"], "css": ["c.css"]},
            "d.js": {"file": "d.js", "css": ["d.css"], "assets": ["d.woff2"]},
        }
    )

    entry = resolve("a.js", graph)

    assert entry.stylesheets == ["a.css", "b.css", "d.css", "c.css"]
    assert entry.imported_chunks == ["b.js", "d.js", "c.js"]
    assert entry.fonts == ["d.woff2"]


def test_cycle_terminates(make_graph) -> None:
    graph = make_graph(
        {
            "a.js": {"file": "a.js", "imports": ["b.js"], "css": ["a.css"]},
            "b.js": {"file": "b.js", "imports": ["a.js"], "css": ["b.css"]},
        }
    )

    entry = resolve("a.js", graph)

    assert entry.stylesheets == ["a.css", "b.css"]
    assert entry.imported_chunks == ["b.js"]


def test_deferred_edges_are_not_followed(make_graph) -> None:
    graph = make_graph(
        {
            "page.js": {"file": "page.js", "dynamicImports": ["lazy.js"]},
            "lazy.js": {"file": "lazy.js", "css": ["lazy.css"]},
        }
    )

    entry = resolve("page.js", graph)

    assert entry.imported_chunks == []
    assert entry.stylesheets == []


def test_deferred_edge_to_missing_module_is_ignored(make_graph) -> None:
    graph = make_graph({"page.js": {"file": "page.js", "dynamicImports": ["never-built.js"]}})

    assert resolve("page.js", graph).file == "page.js"


def test_only_font_assets_are_collected(make_graph) -> None:
    graph = make_graph(
        {"page.js": {"file": "page.js", "assets": ["a.woff", "b.TTF", "c.otf", "logo.svg", "d.woff2"]}}
    )

    assert resolve("page.js", graph).fonts == ["a.woff", "b.TTF", "c.otf", "d.woff2"]


def test_shared_compiled_file_listed_once(make_graph) -> None:
    graph = make_graph(
        {
            "page.js": {"file": "page.js", "imports": ["x.js", "y.js"]},
            "x.js": {"file": "chunk.js"},
            "y.js": {"file": "chunk.js"},
        }
    )

    assert resolve("page.js", graph).imported_chunks == ["chunk.js"]


def test_missing_entry_names_path(make_graph) -> None:
    graph = make_graph({"page.js": {"file": "page.js"}})

    with pytest.raises(MissingManifestEntry) as excinfo:
        resolve("ghost.js", graph)

    assert excinfo.value.path == "ghost.js"
    assert "ghost.js" in str(excinfo.value)


def test_missing_static_import_is_fatal(make_graph) -> None:
    graph = make_graph({"page.js": {"file": "page.js", "imports": ["ghost.js"]}})

    with pytest.raises(MissingManifestEntry, match="ghost.js"):
        resolve("page.js", graph)


def test_repeated_queries_are_independent(make_graph) -> None:
    graph = make_graph(
        {
            "a.js": {"file": "a.js", "imports": ["shared.js"]},
            "b.js": {"file": "b.js", "imports": ["shared.js"]},
            "shared.js": {"file": "shared.js", "css": ["shared.css"]},
        }
    )

    assert resolve("a.js", graph).stylesheets == ["shared.css"]
    assert resolve("b.js", graph).stylesheets == ["shared.css"]
