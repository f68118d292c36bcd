"""Helpers for writing ES module source text."""

from __future__ import annotations

import json


def to_js(value: object) -> str:
    """Serialize ``value`` as a compact JavaScript literal."""

    return json.dumps(value, separators=(",", ":"))


def render_module(imports: list[str], exports: list[str]) -> str:
    return "\n".join(imports) + "\n\n" + "\n".join(exports) + "\n"
