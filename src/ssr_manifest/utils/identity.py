"""Map logical module paths onto the graph key of their physical file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from ..artifact import ArtifactGraph
from ..errors import MissingManifestEntry, UnresolvableSymlink

logger = logging.getLogger(__name__)


class IdentityReconciler:
    """Collapse symlink-aliased paths to a single artifact graph key.

    A module reached through a linked package shows up under a different
    path string than the same module reached directly. Lookups go through
    :meth:`canonicalize`, which resolves both the queried path and every
    graph key to their physical location and matches on that. When several
    keys alias one file, the first in manifest order wins.
    """

    def __init__(self, graph: ArtifactGraph) -> None:
        self.graph = graph
        self._physical_index: Optional[Dict[str, str]] = None
        self._cache: Dict[str, str] = {}

    def _physical(self, path: str) -> Path:
        return Path(os.path.realpath(self.graph.root / path))

    def _index(self) -> Dict[str, str]:
        if self._physical_index is None:
            index: Dict[str, str] = {}
            for key in self.graph:
                index.setdefault(str(self._physical(key)), key)
            self._physical_index = index
        return self._physical_index

    def canonicalize(self, path: str) -> str:
        """Return the graph key that ``path`` refers to.

        Raises :class:`MissingManifestEntry` when no graph entry matches and
        :class:`UnresolvableSymlink` when the filesystem refuses to resolve
        the path (symlink loops, permission errors).
        """

        cached = self._cache.get(path)
        if cached is not None:
            return cached

        candidate = self.graph.root / path
        attempted = os.path.realpath(candidate)
        try:
            physical = candidate.resolve(strict=True)
        except FileNotFoundError:
            # bundler-internal keys have no file on disk
            if path in self.graph:
                self._cache[path] = path
                return path
            raise MissingManifestEntry(path) from None
        except (OSError, RuntimeError) as exc:
            raise UnresolvableSymlink(path, attempted, str(exc)) from exc

        key = self._index().get(str(physical))
        if key is None:
            raise MissingManifestEntry(path)

        logger.debug("Resolved %s to graph entry %s", path, key)
        self._cache[path] = key
        return key
