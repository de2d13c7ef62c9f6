# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Filesystem glob expansion for wildcard include targets."""

from __future__ import annotations

import glob
import os
from pathlib import Path

# ###############
# Public Interface
# ###############

GLOB_CHARS = frozenset("*?[")


def has_glob(pattern: str) -> bool:
    """Return True if *pattern* contains a wildcard character."""
    return any(char in GLOB_CHARS for char in pattern)


def expand_glob(pattern: str, base_dir: Path) -> list[str]:
    """Expand *pattern* into the files it matches.

    Args:
        pattern: A glob pattern, absolute or relative to *base_dir*.
        base_dir: Directory relative patterns are anchored at, and the
            directory the returned paths are relative to.

    Returns:
        Sorted POSIX paths of the matching regular files, relative to *base_dir*.
    """
    absolute = pattern if os.path.isabs(pattern) else os.path.join(base_dir, pattern)
    matches = [Path(match) for match in glob.glob(absolute, recursive=True)]
    return sorted(
        Path(os.path.relpath(match, base_dir)).as_posix()
        for match in matches
        if match.is_file()
    )
