# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reference and include resolution: locating, naming, post-processing, and merging."""

from oasmerge.resolver.engine import MergeError, MergeWarning, Merger, merge
from oasmerge.resolver.includes import process_include
from oasmerge.resolver.locator import Locator, LocatorError, TargetKind, locate, root_location
from oasmerge.resolver.naming import candidate_name, reserved_names, resolve_names

__all__ = [
    "Locator",
    "LocatorError",
    "MergeError",
    "MergeWarning",
    "Merger",
    "TargetKind",
    "candidate_name",
    "locate",
    "merge",
    "process_include",
    "reserved_names",
    "resolve_names",
    "root_location",
]
