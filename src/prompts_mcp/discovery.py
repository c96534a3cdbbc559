"""Artifact file discovery."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

ARTIFACT_EXTENSION = ".md"


def discover_artifact_files(
    directory: Path,
    kind: str = "Artifacts",
    extension: str = ARTIFACT_EXTENSION,
) -> dict[str, Path]:
    """Discover artifact files within a directory.

    Returns dict mapping artifact name (the file stem) -> file path, in
    filename order. Only regular files whose suffix matches ``extension``
    (case-insensitively) are included; subdirectories are not searched.

    When two files map to the same name (``notes.md`` and ``notes.MD``),
    the first in filename order is kept and the other is skipped with a
    warning.

    A missing directory is not an error: a warning is logged and an empty
    dict is returned.

    Args:
        directory: Directory to scan.
        kind: Label used in log messages (e.g. "Templates").
        extension: File suffix to accept, including the dot.
    """
    files: dict[str, Path] = {}
    if not directory.is_dir():
        logger.warning("%s directory not found: %s", kind, directory)
        return files

    for item in sorted(directory.iterdir()):
        if not item.is_file() or item.suffix.lower() != extension.lower():
            continue

        name = item.stem
        existing = files.get(name)
        if existing is not None:
            logger.warning(
                "Ignoring %s: name '%s' is already provided by %s",
                item,
                name,
                existing.name,
            )
            continue

        files[name] = item

    return files
