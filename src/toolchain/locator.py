"""Deterministic artifact discovery by file extension.

Candidates are ordered shallowest first, then by relative POSIX path, so two
calls over an unchanged tree always return the same file. Hidden directories
and ``node_modules`` are never descended into.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.errors import ArtifactNotFound

logger = logging.getLogger(__name__)

_SKIPPED_DIRS = {"node_modules"}


def _normalize_extension(extension: str) -> str:
    return extension.lstrip(".")


def _should_descend(path: Path) -> bool:
    name = path.name
    return not name.startswith(".") and name not in _SKIPPED_DIRS


def collect_artifacts(root: Path, extension: str) -> list[Path]:
    ext = _normalize_extension(extension)
    root = Path(root)
    if not root.is_dir():
        return []

    matches: list[Path] = []
    level = [root]
    while level:
        next_level: list[Path] = []
        found: list[Path] = []
        for directory in level:
            for entry in directory.iterdir():
                if entry.is_dir():
                    if _should_descend(entry):
                        next_level.append(entry)
                elif entry.is_file() and entry.suffix == f".{ext}":
                    found.append(entry)
        found.sort(key=lambda item: item.relative_to(root).as_posix())
        matches.extend(found)
        level = sorted(next_level, key=lambda item: item.relative_to(root).as_posix())
    return matches


def find_artifact(root: Path, extension: str) -> Path:
    matches = collect_artifacts(root, extension)
    if not matches:
        raise ArtifactNotFound(_normalize_extension(extension), Path(root))
    logger.debug("Located .%s artifact: %s", _normalize_extension(extension), matches[0])
    return matches[0]


__all__ = ["collect_artifacts", "find_artifact"]
