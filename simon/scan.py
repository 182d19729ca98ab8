"""Recursive media discovery with extension filtering.

Directory symlinks are followed; each directory is entered at most once.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Lower-case extensions and strip any leading dot."""
    return frozenset(ext.lower().lstrip(".") for ext in extensions if ext.strip("."))


def _walk(
    directory: Path,
    wanted: frozenset[str],
    out: list[Path],
    seen: set[tuple[int, int]],
) -> None:
    try:
        with os.scandir(directory) as entries:
            children = sorted(entries, key=lambda entry: entry.name)
    except OSError as exc:
        logger.warning("skipping unreadable directory %s: %s", directory, exc)
        return

    for child in children:
        path = Path(child.path)
        try:
            is_dir = child.is_dir()
            identity = _identity(child.stat()) if is_dir else None
        except OSError:
            continue
        if identity is not None:
            if identity in seen:
                logger.debug("not revisiting %s", path)
                continue
            seen.add(identity)
            _walk(path, wanted, out, seen)
        elif path.suffix[1:].lower() in wanted:
            out.append(path)


def _identity(stat: os.stat_result) -> tuple[int, int]:
    return stat.st_dev, stat.st_ino


def find_files(root: str | Path, extensions: Iterable[str]) -> list[Path]:
    """Return files under ``root`` whose suffix is in ``extensions``, sorted."""
    directory = Path(root).expanduser()
    if not directory.is_dir():
        logger.warning("media directory %s does not exist", directory)
        return []
    root_dir = directory.resolve()
    found: list[Path] = []
    _walk(root_dir, normalize_extensions(extensions), found, {_identity(root_dir.stat())})
    found.sort()
    return found


def find_files_in(roots: Iterable[str | Path], extensions: Iterable[str]) -> list[Path]:
    """Concatenate ``find_files`` results for several roots, in root order."""
    wanted = tuple(extensions)
    found: list[Path] = []
    for root in roots:
        found.extend(find_files(root, wanted))
    return found


__all__ = ["find_files", "find_files_in", "normalize_extensions"]
