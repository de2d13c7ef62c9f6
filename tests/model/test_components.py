# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the component registry."""

from oasmerge.model.components import Component, ComponentRegistry

# ###############
# Component
# ###############


def test_component_local_ref_requires_name() -> None:
    component = Component(class_name="schemas", href="/api/pet.yaml", location="/api/pet.yaml")
    assert component.local_ref is None
    component.name = "pet"
    assert component.local_ref == "#/components/schemas/pet"


def test_component_key() -> None:
    component = Component(class_name="parameters", href="/api/p.yaml#/limit", location="/api/p.yaml")
    assert component.key == ("parameters", "/api/p.yaml#/limit")


# ###############
# Registry bookkeeping
# ###############


def test_get_or_create_is_idempotent() -> None:
    registry = ComponentRegistry()
    first = registry.get_or_create("schemas", "/api/pet.yaml", "/api/pet.yaml")
    second = registry.get_or_create("schemas", "/api/pet.yaml", "/api/pet.yaml")
    assert first is second
    assert len(registry) == 1


def test_exists_is_keyed_by_class_and_target() -> None:
    registry = ComponentRegistry()
    registry.get_or_create("schemas", "/api/pet.yaml", "/api/pet.yaml")
    assert registry.exists(("schemas", "/api/pet.yaml"))
    assert not registry.exists(("responses", "/api/pet.yaml"))


def test_snapshot_preserves_registration_order() -> None:
    registry = ComponentRegistry()
    for href in ("/c.yaml", "/a.yaml", "/b.yaml"):
        registry.get_or_create("schemas", href, href)
    registry.get_or_create("schemas", "/a.yaml", "/a.yaml")
    assert [component.href for component in registry.snapshot()] == ["/c.yaml", "/a.yaml", "/b.yaml"]


def test_discovery_registry_is_unnamed() -> None:
    registry = ComponentRegistry()
    component = registry.get_or_create("schemas", "/a.yaml", "/a.yaml")
    assert not registry.named
    assert component.name is None
    assert registry.build_output_section() == {}


# ###############
# Output section
# ###############


def test_named_registry_assigns_names_at_creation() -> None:
    registry = ComponentRegistry({("schemas", "/a.yaml"): "A"})
    component = registry.get_or_create("schemas", "/a.yaml", "/a.yaml")
    assert registry.named
    assert component.name == "A"


def test_build_output_section_groups_by_class() -> None:
    names = {
        ("schemas", "/pet.yaml"): "Pet",
        ("parameters", "/limit.yaml"): "limit",
        ("schemas", "/tag.yaml"): "Tag",
    }
    registry = ComponentRegistry(names)
    registry.get_or_create("schemas", "/pet.yaml", "/pet.yaml").content = {"type": "object"}
    registry.get_or_create("parameters", "/limit.yaml", "/limit.yaml").content = {"name": "limit"}
    registry.get_or_create("schemas", "/tag.yaml", "/tag.yaml").content = {"type": "string"}

    section = registry.build_output_section()
    assert section == {
        "schemas": {"Pet": {"type": "object"}, "Tag": {"type": "string"}},
        "parameters": {"limit": {"name": "limit"}},
    }
    assert list(section) == ["schemas", "parameters"]
