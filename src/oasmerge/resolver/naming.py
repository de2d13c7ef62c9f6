# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assignment of final, unique component names.

Naming runs between the two engine passes, on the complete registry of the
discovery pass, because whether a name is free depends on every component in
the document graph.

Rules, applied per class (output section) independently:

1. The candidate name is the last segment of the fragment, or the file name
   without extension when the target has no fragment.  Characters outside
   ``[A-Za-z0-9._-]`` become ``_``.
2. Names already used by the root document's own ``components`` section are
   reserved for the components that point exactly at those entries.
3. Remaining components are named in first-registration order.  The first one
   keeps its candidate; later collisions get ``<candidate>_2``, ``<candidate>_3``
   and so on, whichever is the first free name.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable, Mapping
from urllib.parse import unquote, urlparse

from oasmerge.model.components import Component, ComponentKey
from oasmerge.model.nodes import Node, pointer_tokens
from oasmerge.resolver.locator import is_remote

# ###############
# Public Interface
# ###############

FALLBACK_NAME = "component"


def candidate_name(component: Component) -> str:
    """Return the name *component* would get in the absence of conflicts."""
    tokens = [token for token in pointer_tokens(component.fragment) if token]
    if tokens:
        raw = tokens[-1]
    else:
        path = unquote(urlparse(component.location).path) if is_remote(component.location) else component.location
        raw = posixpath.splitext(posixpath.basename(path))[0]
    name = _INVALID_CHARS.sub("_", raw)
    return name or FALLBACK_NAME


def reserved_names(root_location: str, root_document: Node) -> dict[ComponentKey, str]:
    """Return the names claimed by entries of the root document's ``components`` section.

    Returns:
        A mapping from the component key that points exactly at an entry
        (``(class, "<root>#/components/<class>/<name>")``) to that entry's name.
    """
    reserved: dict[ComponentKey, str] = {}
    if not isinstance(root_document, dict):
        return reserved
    components = root_document.get("components")
    if not isinstance(components, dict):
        return reserved
    for class_name, entries in components.items():
        if not isinstance(entries, dict):
            continue
        for name in entries:
            pointer = f"/components/{_escape(str(class_name))}/{_escape(str(name))}"
            reserved[(str(class_name), f"{root_location}#{pointer}")] = str(name)
    return reserved


def resolve_names(
    components: Iterable[Component],
    reserved: Mapping[ComponentKey, str] | None = None,
) -> dict[ComponentKey, str]:
    """Assign a unique name within its class to every component.

    Args:
        components: The discovery pass snapshot, in first-registration order.
        reserved: Names claimed by the root document (see :func:`reserved_names`).

    Returns:
        A mapping from component key to final name.
    """
    reserved = reserved or {}
    taken: dict[str, set[str]] = {}
    for (class_name, _), name in reserved.items():
        taken.setdefault(class_name, set()).add(name)

    names: dict[ComponentKey, str] = {}
    for component in components:
        if component.key in names:
            continue
        if component.key in reserved:
            names[component.key] = reserved[component.key]
            continue
        used = taken.setdefault(component.class_name, set())
        name = _first_free(candidate_name(component), used)
        used.add(name)
        names[component.key] = name
    return names


# ################
# Implementation
# ################

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _first_free(candidate: str, used: set[str]) -> str:
    if candidate not in used:
        return candidate
    counter = 2
    while f"{candidate}_{counter}" in used:
        counter += 1
    return f"{candidate}_{counter}"
