# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reading and writing YAML/JSON documents as generic node trees."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from oasmerge.model.nodes import Node

# ###############
# Public Interface
# ###############

YAML_LINE_WIDTH = 1000


class DocumentError(Exception):
    """Raised when a document cannot be read, parsed, or written."""


def parse(text: str, source_label: str = "<string>") -> Node:
    """Parse YAML or JSON *text* into a node tree.

    JSON is a subset of YAML, so a single safe YAML loader handles both.
    Mapping key order is preserved.

    Raises:
        DocumentError: If the text is not valid YAML.
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DocumentError(f"Invalid document {source_label}: {exc}") from exc


def serialize(node: Node, fmt: str = "yaml") -> str:
    """Serialize *node* as ``"yaml"`` or ``"json"`` text, keeping key order."""
    if fmt == "json":
        return json.dumps(node, indent=2, ensure_ascii=False, default=str) + "\n"
    if fmt != "yaml":
        raise ValueError(f"Unsupported output format: {fmt!r}")
    return yaml.dump(
        node,
        Dumper=_NoAliasDumper,
        sort_keys=False,
        allow_unicode=True,
        width=YAML_LINE_WIDTH,
        default_flow_style=False,
    )


def format_for(path: Path) -> str:
    """Return the serialization format implied by *path*'s suffix."""
    return "json" if path.suffix.lower() == ".json" else "yaml"


def load_document(path: Path) -> Node:
    """Load and parse the document at *path*.

    Raises:
        DocumentError: If the file does not exist, cannot be read, or is not parseable.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DocumentError(f"Document not found: {path}") from None
    except OSError as exc:
        raise DocumentError(f"Cannot read document '{path}': {exc}") from exc
    return parse(text, source_label=str(path))


def write_document(node: Node, path: Path) -> None:
    """Write *node* to *path*, creating parent directories as needed.

    Raises:
        DocumentError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(serialize(node, format_for(path)), encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Cannot write document '{path}': {exc}") from exc


# ################
# Implementation
# ################


class _NoAliasDumper(yaml.SafeDumper):
    """Safe dumper that writes repeated objects in full instead of as anchors."""

    def ignore_aliases(self, data: object) -> bool:
        return True
