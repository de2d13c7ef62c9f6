# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document model: node helpers, directive grammar, and the component registry."""

from oasmerge.model.components import Component, ComponentKey, ComponentRegistry
from oasmerge.model.directives import (
    INCLUDE_PATTERN,
    REF_KEY,
    Directive,
    DirectiveKind,
    classify_key,
    is_discriminator_mapping,
    ref_class,
)
from oasmerge.model.nodes import (
    IncludedList,
    Node,
    PointerError,
    merge_or_overwrite,
    merge_under,
    slice_fragment,
)

__all__ = [
    # Nodes
    "Node",
    "IncludedList",
    "PointerError",
    "merge_or_overwrite",
    "merge_under",
    "slice_fragment",
    # Directives
    "REF_KEY",
    "INCLUDE_PATTERN",
    "Directive",
    "DirectiveKind",
    "classify_key",
    "is_discriminator_mapping",
    "ref_class",
    # Components
    "Component",
    "ComponentKey",
    "ComponentRegistry",
]
