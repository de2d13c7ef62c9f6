# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""oasmerge: flatten a multi-file OpenAPI description into a single document."""

from oasmerge.config.settings import ConfigError, MergeConfig, load_config
from oasmerge.documents.codec import DocumentError
from oasmerge.resolver.engine import MergeError, MergeWarning, Merger, merge

__all__ = [
    "ConfigError",
    "DocumentError",
    "MergeConfig",
    "MergeError",
    "MergeWarning",
    "Merger",
    "load_config",
    "merge",
]
