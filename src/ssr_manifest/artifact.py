"""Structured records consumed and emitted by the server manifest build."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional

FONT_SUFFIXES = (".woff", ".woff2", ".ttf", ".otf")

MethodTable = Dict[str, List[str]]


class EdgeKind(str, Enum):
    """Whether an import is linked statically or loaded on demand."""

    STATIC = "static"
    DEFERRED = "deferred"


@dataclass(frozen=True, slots=True)
class ImportEdge:
    target: str
    kind: EdgeKind = EdgeKind.STATIC


@dataclass(slots=True)
class ChunkRecord:
    """Compiler output recorded for one source module."""

    compiled_file: str
    imports: List[ImportEdge] = field(default_factory=list)
    css_assets: List[str] = field(default_factory=list)
    assets: List[str] = field(default_factory=list)
    is_dynamic_entry: bool = False

    @property
    def static_imports(self) -> List[str]:
        return [edge.target for edge in self.imports if edge.kind is EdgeKind.STATIC]

    @property
    def font_assets(self) -> List[str]:
        return [asset for asset in self.assets if asset.lower().endswith(FONT_SUFFIXES)]


class ArtifactGraph:
    """Read-only view over the compiler's dependency manifest.

    Keys are source module paths relative to the project root; values are
    :class:`ChunkRecord` instances. Iteration follows manifest order.
    """

    def __init__(self, entries: Dict[str, ChunkRecord], root: Path) -> None:
        self._entries = dict(entries)
        self.root = root

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __getitem__(self, key: str) -> ChunkRecord:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(slots=True)
class RouteNode:
    """A page definition: visual component plus optional logic modules."""

    component: Optional[str] = None
    universal: Optional[str] = None
    server: Optional[str] = None


@dataclass(slots=True)
class Route:
    id: str
    endpoint: Optional[str] = None
    node: Optional[RouteNode] = None


@dataclass(slots=True)
class RouteManifest:
    nodes: List[RouteNode] = field(default_factory=list)
    routes: List[Route] = field(default_factory=list)
    matchers: Dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class ResolvedEntry:
    """Transitive asset requirements of one entry module.

    Lists are ordered by first visit and hold no duplicates.
    """

    file: str
    imported_chunks: List[str] = field(default_factory=list)
    stylesheets: List[str] = field(default_factory=list)
    fonts: List[str] = field(default_factory=list)


@dataclass(slots=True)
class NodeManifestRecord:
    """Everything written into one ``nodes/<index>.js`` module."""

    index: int
    component: Optional[str] = None
    file: Optional[str] = None
    universal: Optional[str] = None
    server: Optional[str] = None
    imports: List[str] = field(default_factory=list)
    stylesheets: List[str] = field(default_factory=list)
    fonts: List[str] = field(default_factory=list)
    inline_styles: Dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class BuildReport:
    """Top-level summary of a server manifest build."""

    out_dir: str
    entries: Dict[str, str] = field(default_factory=dict)
    nodes: List[NodeManifestRecord] = field(default_factory=list)
    stylesheets: Dict[str, int] = field(default_factory=dict)
    methods: MethodTable = field(default_factory=dict)
    metadata: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable dictionary."""

        return asdict(self)

    def to_json(self, output_path: Path) -> Path:
        """Persist the report to disk and return the destination path."""

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        return output_path
