# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Merge configuration for oasmerge."""

from oasmerge.config.settings import (
    ConfigError,
    IncludeClassConfig,
    KeyFilter,
    MergeConfig,
    load_config,
)

__all__ = [
    "ConfigError",
    "IncludeClassConfig",
    "KeyFilter",
    "MergeConfig",
    "load_config",
]
