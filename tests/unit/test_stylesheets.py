"""Tests for stylesheet inlining."""

from __future__ import annotations

from pathlib import Path

import pytest

from ssr_manifest.errors import AssetReadFailure
from ssr_manifest.nodes.stylesheets import StylesheetInliner

THRESHOLD = 10


@pytest.fixture
def client_dir(tmp_path: Path) -> Path:
    client = tmp_path / "client"
    (client / "assets").mkdir(parents=True)
    for name in ("a.css", "b.css", "c.css"):
        (client / "assets" / name).write_text(f".{name[0]}{{}}", encoding="utf-8")
    return client


@pytest.fixture
def inliner(tmp_path: Path, client_dir: Path) -> StylesheetInliner:
    return StylesheetInliner(client_dir, tmp_path / "server" / "stylesheets", THRESHOLD)


def test_threshold_boundary(inliner: StylesheetInliner) -> None:
    assert inliner.consider("assets/a.css", THRESHOLD - 1, THRESHOLD) == 0
    assert inliner.consider("assets/b.css", THRESHOLD, THRESHOLD) is None
    assert inliner.consider("assets/c.css", THRESHOLD + 1, THRESHOLD) is None
    assert inliner.table == {"assets/a.css": 0}


def test_slot_is_stable(inliner: StylesheetInliner) -> None:
    first = inliner.consider("assets/a.css", 1, THRESHOLD)
    inliner.consider("assets/b.css", 1, THRESHOLD)
    second = inliner.consider("assets/a.css", 1, THRESHOLD)

    assert first == second == 0
    assert inliner.table["assets/b.css"] == 1


def test_slots_follow_first_seen_order(inliner: StylesheetInliner) -> None:
    for name in ("c.css", "a.css", "b.css"):
        inliner.consider(f"assets/{name}", 1, THRESHOLD)

    assert inliner.table == {"assets/c.css": 0, "assets/a.css": 1, "assets/b.css": 2}


def test_inlined_module_written(tmp_path: Path, inliner: StylesheetInliner) -> None:
    inliner.consider("assets/a.css", 5, THRESHOLD)

    module = (tmp_path / "server" / "stylesheets" / "0.js").read_text(encoding="utf-8")
    assert module == '// assets/a.css\nexport default ".a{}";'


def test_unreadable_asset_does_not_take_a_slot(inliner: StylesheetInliner) -> None:
    inliner.consider("assets/a.css", 1, THRESHOLD)

    with pytest.raises(AssetReadFailure, match="assets/missing.css"):
        inliner.consider("assets/missing.css", 1, THRESHOLD)

    assert inliner.table == {"assets/a.css": 0}
    assert inliner.consider("assets/b.css", 1, THRESHOLD) == 1


def test_inline_measures_file_size(inliner: StylesheetInliner) -> None:
    # ".a{}" is four bytes
    small = StylesheetInliner(inliner.client_dir, inliner.stylesheet_dir, threshold=5)
    exact = StylesheetInliner(inliner.client_dir, inliner.stylesheet_dir, threshold=4)

    assert small.inline("assets/a.css") == 0
    assert exact.inline("assets/a.css") is None


def test_inline_disabled_with_zero_threshold(tmp_path: Path, client_dir: Path) -> None:
    inliner = StylesheetInliner(client_dir, tmp_path / "styles", threshold=0)

    assert inliner.inline("assets/a.css") is None
    assert not (tmp_path / "styles").exists()


def test_inline_missing_asset_raises(inliner: StylesheetInliner) -> None:
    with pytest.raises(AssetReadFailure):
        inliner.inline("assets/ghost.css")
