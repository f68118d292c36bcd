"""Inline small stylesheets as standalone generated modules."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from ..errors import AssetReadFailure
from ..utils.codegen import to_js

logger = logging.getLogger(__name__)


class StylesheetInliner:
    """Owns the stylesheet slot table for one build.

    Slots are assigned in first-seen order across every node of the build
    and never reassigned. Inlined sources are written to
    ``<stylesheet_dir>/<slot>.js``.
    """

    def __init__(self, client_dir: Path, stylesheet_dir: Path, threshold: int) -> None:
        self.client_dir = client_dir
        self.stylesheet_dir = stylesheet_dir
        self.threshold = threshold
        self._slots: Dict[str, int] = {}
        self._lock = threading.Lock()

    @property
    def table(self) -> Dict[str, int]:
        return dict(self._slots)

    def _read(self, asset_path: str) -> str:
        try:
            return (self.client_dir / asset_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise AssetReadFailure(asset_path, str(exc)) from exc

    def consider(self, asset_path: str, size_in_bytes: int, threshold: int) -> Optional[int]:
        """Return the inline slot for ``asset_path`` or None to link it by path.

        Only assets strictly smaller than ``threshold`` are inlined.
        """

        with self._lock:
            existing = self._slots.get(asset_path)
            if existing is not None:
                return existing
            if size_in_bytes >= threshold:
                return None

            slot = len(self._slots)
            source = self._read(asset_path)
            self.stylesheet_dir.mkdir(parents=True, exist_ok=True)
            (self.stylesheet_dir / f"{slot}.js").write_text(
                f"// {asset_path}\nexport default {to_js(source)};", encoding="utf-8"
            )
            self._slots[asset_path] = slot

        logger.debug("Inlined %s as stylesheet %d (%d bytes)", asset_path, slot, size_in_bytes)
        return slot

    def inline(self, asset_path: str) -> Optional[int]:
        """Measure ``asset_path`` on disk and consider it at the build threshold."""

        existing = self._slots.get(asset_path)
        if existing is not None:
            return existing
        if self.threshold <= 0:
            return None
        try:
            size = (self.client_dir / asset_path).stat().st_size
        except OSError as exc:
            raise AssetReadFailure(asset_path, str(exc)) from exc
        return self.consider(asset_path, size, self.threshold)
