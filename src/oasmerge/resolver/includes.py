# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Post-processing of content pulled in by ``$include.<class>`` directives."""

from __future__ import annotations

import logging
from collections.abc import Callable

from oasmerge.config.settings import IncludeClassConfig, KeyFilter, MergeConfig
from oasmerge.model.nodes import Node, is_mapping

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def process_include(
    content: Node,
    class_name: str | None,
    config: MergeConfig,
    warn: Callable[[str], None] | None = None,
) -> Node:
    """Apply the rules configured for *class_name* to included *content*.

    Filtering runs first, then the key prefix, then the key suffix.  Content
    without a class, sequences and scalars are returned unchanged.

    Args:
        content: Resolved include content.
        class_name: The ``.class`` part of the include key, if any.
        config: The merge configuration holding per-class rules.
        warn: Called with a message when *class_name* has no configuration.

    Returns:
        The processed content.
    """
    if class_name is None or not is_mapping(content):
        return content
    rules = config.include.get(class_name)
    if rules is None:
        message = f"$include class '{class_name}' specified, but no configuration found"
        if warn is not None:
            warn(message)
        else:
            logger.warning(message)
        return content
    return apply_rules(content, rules)


def apply_rules(content: dict, rules: IncludeClassConfig) -> dict:
    """Filter and rename the top-level keys of *content*."""
    if rules.filter is not None:
        content = filter_keys(content, rules.filter)
    if rules.prefix:
        content = {_affix(rules.prefix, key, before=True): value for key, value in content.items()}
    if rules.suffix:
        content = {_affix(rules.suffix, key, before=False): value for key, value in content.items()}
    return content


def filter_keys(content: dict, key_filter: KeyFilter) -> dict:
    """Keep the top-level entries whose keys pass *key_filter*."""
    return {key: value for key, value in content.items() if key_filter.keeps(key)}


# ################
# Implementation
# ################


def _affix(affix: str, key: object, *, before: bool) -> str:
    return f"{affix}{key}" if before else f"{key}{affix}"
