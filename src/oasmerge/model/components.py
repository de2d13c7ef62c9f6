# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Component registry: bookkeeping for deduplicated shared content.

A component is keyed by ``(class, href)`` where *class* is the output section
(``schemas``, ``parameters``, ...) and *href* the absolute target of the
reference.  The registry lives for one pass of the engine; the only state
carried from the first pass to the second is the name table produced by
:mod:`oasmerge.resolver.naming`.
"""

from __future__ import annotations

from dataclasses import dataclass

from oasmerge.model.nodes import Node, plain

# ###############
# Public Interface
# ###############

ComponentKey = tuple[str, str]


@dataclass
class Component:
    """One deduplicated unit of shared content.

    Attributes:
        class_name: Output section the component belongs to.
        href: Absolute target (location plus ``#fragment``) used for deduplication.
        location: The document the content comes from (no fragment).
        fragment: JSON pointer inside *location*.
        content: Resolved content; ``None`` until the engine fills it in.
        name: Final name in the output section; ``None`` during discovery.
    """

    class_name: str
    href: str
    location: str
    fragment: str = ""
    content: Node = None
    name: str | None = None

    @property
    def key(self) -> ComponentKey:
        return (self.class_name, self.href)

    @property
    def local_ref(self) -> str | None:
        """The pointer into the output ``components`` section, once named."""
        if self.name is None:
            return None
        return f"#/components/{self.class_name}/{self.name}"


class ComponentRegistry:
    """Pass-scoped table of components in first-registration order."""

    def __init__(self, names: dict[ComponentKey, str] | None = None) -> None:
        """Create an empty registry.

        Args:
            names: Final names from the naming stage.  When given, every
                component receives its name at creation.
        """
        self._names = names
        self._components: dict[ComponentKey, Component] = {}

    def __len__(self) -> int:
        return len(self._components)

    @property
    def named(self) -> bool:
        """True if components receive final names at creation (assembly pass)."""
        return self._names is not None

    def exists(self, key: ComponentKey) -> bool:
        """Return True if a component for *key* was created in this pass."""
        return key in self._components

    def get_or_create(self, class_name: str, href: str, location: str, fragment: str = "") -> Component:
        """Return the component for ``(class_name, href)``, creating it if needed."""
        key = (class_name, href)
        component = self._components.get(key)
        if component is None:
            name = self._names.get(key) if self._names is not None else None
            component = Component(class_name=class_name, href=href, location=location, fragment=fragment, name=name)
            self._components[key] = component
        return component

    def snapshot(self) -> list[Component]:
        """Return the components in first-registration order."""
        return list(self._components.values())

    def build_output_section(self) -> dict[str, dict[str, Node]]:
        """Assemble ``{class: {name: content}}`` for the output document.

        Components without a name (discovery pass) are skipped.  Sections and
        entries appear in first-registration order.
        """
        section: dict[str, dict[str, Node]] = {}
        for component in self._components.values():
            if component.name is None:
                continue
            section.setdefault(component.class_name, {})[component.name] = plain(component.content)
        return section
