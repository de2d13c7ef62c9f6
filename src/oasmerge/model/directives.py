# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Directive grammar: which mapping keys are references or inclusions.

Two directive kinds are recognised on mapping keys:

* **Reference**: the key ``$ref``, or any key of a ``discriminator.mapping``
  mapping.  Its value is rewritten to a local pointer into the shared
  ``components`` section.

* **Include**: ``$include``, optionally followed by ``#tag`` (to allow several
  includes in one mapping) and ``.class`` (to select post-processing rules),
  e.g. ``$include#extra.public``.  The referenced content is spliced in place.

Every key goes through :func:`classify_key` once; the engine branches on the
returned :class:`DirectiveKind`.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

# ###############
# Public Interface
# ###############

REF_KEY = "$ref"

INCLUDE_PATTERN = re.compile(r"^\$include(?:#(?P<tag>\w+))?(?:\.(?P<class_name>\w+))?$")

DEFAULT_REF_CLASS = "schemas"


class DirectiveKind(Enum):
    """Classification of a mapping key."""

    PLAIN = "plain"
    REFERENCE = "reference"
    INCLUDE = "include"


@dataclass(frozen=True)
class Directive:
    """A classified mapping key.

    Attributes:
        kind: What the key is.
        key: The original key.
        tag: The ``#tag`` part of an include key, if any.
        class_name: The ``.class`` part of an include key, if any.
    """

    kind: DirectiveKind
    key: Any
    tag: str | None = None
    class_name: str | None = None


def classify_key(key: Any, path: Sequence[Any] = ()) -> Directive:
    """Classify *key* found in the mapping located at *path*.

    Args:
        key: The mapping key.
        path: JSON path (sequence of keys and indices) of the mapping holding *key*.

    Returns:
        The :class:`Directive` for the key.  Non-string keys are always plain.
    """
    if not isinstance(key, str):
        return Directive(DirectiveKind.PLAIN, key)
    if key == REF_KEY or is_discriminator_mapping(path):
        return Directive(DirectiveKind.REFERENCE, key)
    match = INCLUDE_PATTERN.match(key)
    if match:
        return Directive(
            DirectiveKind.INCLUDE,
            key,
            tag=match.group("tag"),
            class_name=match.group("class_name"),
        )
    return Directive(DirectiveKind.PLAIN, key)


def is_discriminator_mapping(path: Sequence[Any]) -> bool:
    """Return True if *path* addresses a ``discriminator.mapping`` mapping."""
    return len(path) >= 2 and path[-2] == "discriminator" and path[-1] == "mapping"


def ref_class(path: Sequence[Any]) -> str:
    """Return the component class (output section) for a reference at *path*.

    *path* is the JSON path of the mapping that holds the reference.  Keys are
    scanned from the innermost outwards and the first context rule that fits
    decides the class; ``schemas`` is the fallback.
    """
    if is_discriminator_mapping(path):
        return "schemas"
    last = len(path) - 1
    for index in range(last, -1, -1):
        key = path[index]
        distance = last - index
        if index == 0 and key == "components" and distance == 2:
            return str(path[1])
        if index == 0 and key == "paths" and distance == 1:
            return "pathItems"
        if not isinstance(key, str):
            continue
        rule = _CONTEXT_RULES.get(key)
        if rule is not None and rule[1] == distance:
            return rule[0]
    return DEFAULT_REF_CLASS


# ################
# Implementation
# ################

# key -> (class, distance between the key and the node holding the reference)
_CONTEXT_RULES: dict[str, tuple[str, int]] = {
    "schema": ("schemas", 0),
    "items": ("schemas", 0),
    "not": ("schemas", 0),
    "additionalProperties": ("schemas", 0),
    "properties": ("schemas", 1),
    "patternProperties": ("schemas", 1),
    "allOf": ("schemas", 1),
    "anyOf": ("schemas", 1),
    "oneOf": ("schemas", 1),
    "$defs": ("schemas", 1),
    "definitions": ("schemas", 1),
    "parameters": ("parameters", 1),
    "responses": ("responses", 1),
    "requestBody": ("requestBodies", 0),
    "headers": ("headers", 1),
    "examples": ("examples", 1),
    "links": ("links", 1),
    "callbacks": ("callbacks", 1),
    "securitySchemes": ("securitySchemes", 1),
}
