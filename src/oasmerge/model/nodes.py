# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Helpers for generic document nodes (mappings, sequences, and scalars).

A document node is whatever the YAML/JSON codec produces: ``dict`` for
mappings (insertion ordered), ``list`` for sequences, and plain scalars.
All helpers here are pure: they return new containers and never mutate
their arguments.
"""

from __future__ import annotations

import copy
from typing import Any

# ###############
# Public Interface
# ###############

Node = Any


class PointerError(LookupError):
    """Raised when a JSON pointer fragment does not resolve inside a document."""


class IncludedList(list):
    """A sequence produced by an include directive.

    An enclosing sequence splices the items of an ``IncludedList`` in place
    instead of nesting it as a single element.
    """


def is_mapping(node: Node) -> bool:
    """Return True if *node* is a mapping node."""
    return isinstance(node, dict)


def is_sequence(node: Node) -> bool:
    """Return True if *node* is a sequence node."""
    return isinstance(node, list)


def plain(node: Node) -> Node:
    """Return *node* with a top-level :class:`IncludedList` marker removed."""
    if isinstance(node, IncludedList):
        return list(node)
    return node


def merge_or_overwrite(base: Node, overlay: Node) -> Node:
    """Merge *overlay* onto *base*.

    Two mappings are merged recursively key by key, with *overlay* winning
    on scalar conflicts.  Any other combination returns *overlay* (a later
    value overwrites an earlier one).  A missing *base* (``None``) is
    treated like an absent value.
    """
    if is_mapping(base) and is_mapping(overlay):
        merged = dict(base)
        for key, value in overlay.items():
            merged[key] = merge_or_overwrite(merged[key], value) if key in merged else value
        return merged
    return overlay


def merge_under(base: Node, introduced: Node) -> Node:
    """Merge *introduced* into *base* without overwriting what *base* holds.

    Keys missing from *base* are appended in the order of *introduced*.
    Keys present in both are merged recursively when both values are
    mappings; otherwise the value from *base* is kept.
    """
    if not (is_mapping(base) and is_mapping(introduced)):
        return base
    merged = dict(base)
    for key, value in introduced.items():
        if key not in merged:
            merged[key] = value
        elif is_mapping(merged[key]) and is_mapping(value):
            merged[key] = merge_under(merged[key], value)
    return merged


def unescape_token(token: str) -> str:
    """Decode a single RFC 6901 pointer token."""
    return token.replace("~1", "/").replace("~0", "~")


def pointer_tokens(fragment: str) -> list[str]:
    """Split a JSON pointer fragment (without the leading ``#``) into decoded tokens.

    ``""`` and ``"/"`` both address the whole document and yield no tokens.
    """
    if fragment in ("", "/"):
        return []
    return [unescape_token(token) for token in fragment.lstrip("/").split("/")]


def slice_fragment(document: Node, fragment: str) -> Node:
    """Return a deep copy of the part of *document* addressed by *fragment*.

    Args:
        document: The document to slice.
        fragment: JSON pointer text after the ``#`` (e.g. ``"/paths/~1pets"``).

    Returns:
        A deep copy of the addressed node.

    Raises:
        PointerError: If a token does not resolve.
    """
    current = document
    for token in pointer_tokens(fragment):
        if is_mapping(current):
            key = _mapping_key(current, token)
            if key is None:
                raise PointerError(f"Key '{token}' not found while resolving '#{fragment}'")
            current = current[key]
        elif is_sequence(current):
            try:
                current = current[int(token)]
            except (ValueError, IndexError):
                raise PointerError(f"Invalid sequence index '{token}' while resolving '#{fragment}'") from None
        else:
            raise PointerError(f"Cannot descend into a scalar at '{token}' while resolving '#{fragment}'")
    return copy.deepcopy(current)


# ################
# Implementation
# ################


def _mapping_key(mapping: dict[Any, Any], token: str) -> Any:
    """Find the key for *token*, accepting non-string YAML keys such as ``200``."""
    if token in mapping:
        return token
    for key in mapping:
        if not isinstance(key, str) and str(key) == token:
            return key
    return None
