"""Filesystem path helpers shared by the emitters."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


def posixify(path: PathLike) -> str:
    return str(path).replace("\\", "/")


def relative_posix(target: PathLike, start: PathLike) -> str:
    """Return ``target`` relative to the directory ``start`` with forward slashes."""

    return posixify(os.path.relpath(target, start))


def resolve_entry(entry: PathLike) -> Optional[Path]:
    """Locate a file configured without its extension.

    ``src/hooks.server`` matches ``src/hooks.server.js`` or
    ``src/hooks.server.ts``; a directory matches its ``index`` file.
    """

    path = Path(entry)
    if path.exists():
        if path.is_dir():
            return resolve_entry(path / "index")
        return path

    directory = path.parent
    if directory.is_dir():
        for candidate in sorted(directory.iterdir()):
            if candidate.is_file() and candidate.stem == path.name:
                return candidate
    return None
