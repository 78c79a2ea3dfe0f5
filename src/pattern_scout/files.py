"""Candidate file discovery.

Walks a source tree and returns the files belonging to one file-type
category, in sorted order so repeated runs see the same sample.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from .logging import logger


class FileType(str, Enum):
    """File-type categories a caller can ask about."""

    COMPONENT = "component"
    HOOK = "hook"
    SERVICE = "service"
    API = "api"
    TEST = "test"


# Suffix matchers per file type. Compound suffixes (".test.ts") are matched
# against the whole filename, not just the last extension.
FILE_TYPE_SUFFIXES: dict[str, tuple[str, ...]] = {
    FileType.COMPONENT.value: (".tsx", ".jsx"),
    FileType.HOOK.value: (".ts", ".tsx", ".js", ".jsx"),
    FileType.SERVICE.value: (".ts", ".js"),
    FileType.API.value: (".ts", ".js"),
    FileType.TEST.value: (".test.ts", ".test.tsx", ".spec.ts", ".spec.tsx"),
}

DEFAULT_SUFFIXES = (".ts", ".tsx", ".js", ".jsx")

# Dependency caches and build output; hidden entries are skipped separately.
IGNORE_DIRS = {
    "node_modules", "bower_components", "jspm_packages", "vendor",
    "dist", "build", "__pycache__",
}


def suffixes_for(file_type: str) -> tuple[str, ...]:
    """Return the suffix matchers for a file type, falling back to the default set."""
    suffixes = FILE_TYPE_SUFFIXES.get(file_type)
    if suffixes is None:
        logger.warning(
            "Unknown file type %r, using default extensions %s",
            file_type, ", ".join(DEFAULT_SUFFIXES),
        )
        return DEFAULT_SUFFIXES
    return suffixes


def _skip_unreadable(error: OSError) -> None:
    logger.debug("Skipping unreadable directory %s: %s", error.filename, error)


def resolve_files(root: str | Path, file_type: str) -> list[Path]:
    """List files under ``root`` matching ``file_type``, sorted lexically.

    Hidden entries and dependency directories are pruned. Subdirectories
    that cannot be listed are skipped rather than aborting the walk.

    Raises:
        NotADirectoryError: if ``root`` does not exist or is not a directory.
        PermissionError: if ``root`` itself cannot be listed.
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")
    # os.walk would swallow this for the root too
    os.listdir(root)

    suffixes = suffixes_for(file_type)
    matched: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root, onerror=_skip_unreadable):
        dirnames[:] = [
            d for d in dirnames
            if not d.startswith(".") and d not in IGNORE_DIRS
        ]
        for fname in filenames:
            if fname.startswith("."):
                continue
            if fname.endswith(suffixes):
                matched.append(Path(dirpath) / fname)

    return sorted(matched, key=lambda p: p.as_posix())
