# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution engine: flattening a multi-file document into one.

The merge runs in two passes over the root document:

1. **Discovery**: every reachable reference is registered as a component in
   a fresh :class:`~oasmerge.model.components.ComponentRegistry`.  No names
   exist yet, so reference values are left as they are.
2. **Naming**: :func:`~oasmerge.resolver.naming.resolve_names` assigns every
   component its final name from the complete discovery snapshot.
3. **Assembly**: the walk runs again with a registry that knows the final
   names.  References are rewritten to ``#/components/<class>/<name>`` and the
   registry's output section is merged into the document's ``components``.

Inside a pass, a component's content is resolved only when the component is
first created.  Meeting the same target again, including from inside its own
content, just rewrites the reference; this is what terminates cyclic schemas.

Include directives are expanded in place.  Sequence content replaces a mapping
whose only key is the include, or is spliced into an enclosing sequence; any
other mix of sequence and mapping content is a :class:`MergeError`.
"""

from __future__ import annotations

import copy
import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests

from oasmerge.config.settings import MergeConfig
from oasmerge.documents.codec import load_document
from oasmerge.documents.fetch import Fetcher
from oasmerge.documents.files import expand_glob
from oasmerge.model.components import ComponentRegistry
from oasmerge.model.directives import (
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
    is_mapping,
    is_sequence,
    merge_or_overwrite,
    merge_under,
    plain,
    pointer_tokens,
    slice_fragment,
)
from oasmerge.resolver.includes import process_include
from oasmerge.resolver.locator import (
    Locator,
    LocatorError,
    TargetKind,
    is_remote,
    locate,
    relative_label,
    root_location,
)
from oasmerge.resolver.naming import reserved_names, resolve_names

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class MergeError(Exception):
    """Raised when the document graph cannot be merged.

    Covers sequence content merged into a mapping that holds other keys,
    circular includes, and components that did not receive a name.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class MergeWarning:
    """A recoverable problem met during a merge.

    Attributes:
        message: Human-readable description of the problem.
    """

    message: str


class Merger:
    """Merge a root document and everything it references into one document."""

    def __init__(
        self,
        config: MergeConfig | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        """Create a merger.

        Args:
            config: Include post-processing rules and the inline policy.
            session: HTTP session used to fetch remote documents.
        """
        self.config = config if config is not None else MergeConfig()
        self.warnings: list[MergeWarning] = []
        self._session = session

    def merge(self, document: Node, document_path: str | Path) -> Node:
        """Merge *document* into a single self-contained document.

        Args:
            document: The parsed root document.
            document_path: Path or URL the root document was read from.  Relative
                targets in the root document are resolved against it.

        Returns:
            The merged document.  Its ``components`` section holds every
            referenced component, grouped by class.  :attr:`warnings` lists
            the recoverable problems met on the way.

        Raises:
            MergeError: On structural conflicts or circular includes.
            DocumentError: If a local document is missing or unparseable.
        """
        self.warnings = []
        root = root_location(document_path)
        store = _DocumentStore(Fetcher(self._session, report=self._warn), root, document)

        discovery = _Pass(self, store, ComponentRegistry(), root)
        discovery.resolve(document, root, ())

        names = resolve_names(discovery.registry.snapshot(), reserved_names(root, document))

        assembly = _Pass(self, store, ComponentRegistry(names), root)
        merged = plain(assembly.resolve(document, root, ()))
        section = assembly.registry.build_output_section()
        if not section:
            return merged
        if not is_mapping(merged):
            raise MergeError("The root document must be a mapping to hold a components section")
        merged["components"] = merge_or_overwrite(merged.get("components"), section)
        return merged

    def _warn(self, message: str) -> None:
        # Both passes meet the same problems; report each one once.
        if any(warning.message == message for warning in self.warnings):
            return
        logger.warning(message)
        self.warnings.append(MergeWarning(message))


def merge(document: Node, document_path: str | Path, config: MergeConfig | None = None) -> Node:
    """Merge *document* read from *document_path*; see :meth:`Merger.merge`."""
    return Merger(config).merge(document, document_path)


# ################
# Implementation
# ################

JsonPath = tuple[Any, ...]


class _DocumentStore:
    """Per-merge cache of parsed documents keyed by absolute location."""

    def __init__(self, fetcher: Fetcher, root: str, document: Node) -> None:
        self._fetcher = fetcher
        self._documents: dict[str, Node] = {root: copy.deepcopy(document)}

    def read(self, location: str) -> Node:
        """Return a deep copy of the document at *location*."""
        if location not in self._documents:
            if is_remote(location):
                self._documents[location] = self._fetcher.fetch(location)
            else:
                self._documents[location] = load_document(Path(location))
        return copy.deepcopy(self._documents[location])


class _Pass:
    """One walk over the document graph with its own component registry."""

    def __init__(self, merger: Merger, store: _DocumentStore, registry: ComponentRegistry, root: str) -> None:
        self._merger = merger
        self._store = store
        self.registry = registry
        self._base_dir = root if is_remote(root) else posixpath.dirname(root)
        # Include targets currently being expanded (cycle guard).
        self._including: list[str] = []

    # -- walk --------------------------------------------------------------

    def resolve(self, node: Node, location: str, path: JsonPath) -> Node:
        """Return a merged copy of *node*, found in the document at *location*."""
        if is_sequence(node):
            items: list[Node] = []
            for index, item in enumerate(node):
                merged = self.resolve(item, location, (*path, index))
                if isinstance(merged, IncludedList):
                    items.extend(merged)
                else:
                    items.append(merged)
            return items
        if not is_mapping(node):
            return node

        result: Node = {}
        for key, value in node.items():
            directive = classify_key(key, path)
            if directive.kind is DirectiveKind.REFERENCE:
                result = self._reference(result, key, value, location, path)
            elif directive.kind is DirectiveKind.INCLUDE:
                result = self._include(result, directive, value, location, path)
            else:
                merged = self.resolve(value, location, (*path, key))
                _require_mapping(result, f"Cannot merge key '{key}' into non-mapping content at {_format(path)}")
                result[key] = plain(merge_or_overwrite(result.get(key), merged))
        return result

    # -- references --------------------------------------------------------

    def _reference(self, result: Node, key: Any, value: Any, location: str, path: JsonPath) -> Node:
        self._trace("ref    ", path, location)
        _require_mapping(result, f"Cannot merge key '{key}' into non-mapping content at {_format(path)}")
        result[key] = value

        if is_discriminator_mapping(path) and _is_schema_name(value):
            # OAS 3.0 allows bare schema names as discriminator mapping values.
            return result

        try:
            locator = locate(value, location)
        except LocatorError as exc:
            self._merger._warn(f"Cannot resolve reference at {_format(path)}: {exc}")
            return result

        class_name = self._class_for(locator, path)
        if class_name in self._merger.config.inline_classes:
            del result[key]
            include = Directive(DirectiveKind.INCLUDE, key)
            return self._include(result, include, value, location, path)

        existed = self.registry.exists((class_name, locator.href))
        component = self.registry.get_or_create(class_name, locator.href, locator.location, locator.fragment)
        if component.local_ref is not None:
            result[key] = component.local_ref
        elif self.registry.named:
            raise MergeError(f"Component '{locator.href}' ({class_name}) did not receive a name")

        if not existed:
            content = self._read(locator, path)
            # Component content starts a fresh include stack; re-entry is bounded by the registry.
            including, self._including = self._including, []
            try:
                component.content = plain(self.resolve(content, locator.location, (*path, key)))
            finally:
                self._including = including
        return result

    def _class_for(self, locator: Locator, path: JsonPath) -> str:
        tokens = pointer_tokens(locator.fragment)
        if len(tokens) >= 3 and tokens[0] == "components":
            return tokens[1]
        return ref_class(path)

    # -- includes ----------------------------------------------------------

    def _include(self, result: Node, directive: Directive, value: Any, location: str, path: JsonPath) -> Node:
        self._trace("include", path, location)
        try:
            locator = locate(value, location)
        except LocatorError as exc:
            self._merger._warn(f"Cannot resolve include at {_format(path)}: {exc}")
            _require_mapping(
                result,
                f"Cannot merge key '{directive.key}' into non-mapping content at {_format(path)}",
            )
            result[directive.key] = value
            return result

        if locator.is_glob:
            content: Node = self._expand_glob(locator, location, path)
        else:
            content = self._expand(locator, path)
        if content is None:
            content = {}

        if is_sequence(content):
            if is_sequence(result):
                return IncludedList([*result, *content])
            if not result:
                return IncludedList(content)
            raise MergeError(
                f"Cannot merge sequence content into a mapping with other keys. "
                f"{directive.key}: {value} at {_format(path)}"
            )

        _require_mapping(
            result,
            f"Cannot merge mapping content into non-mapping content. {directive.key}: {value} at {_format(path)}",
        )
        processed = process_include(content, directive.class_name, self._merger.config, warn=self._merger._warn)
        if is_mapping(processed):
            return merge_under(result, processed)
        if not result:
            return processed
        raise MergeError(
            f"Cannot merge scalar content into a mapping with other keys. {directive.key}: {value} at {_format(path)}"
        )

    def _expand(self, locator: Locator, path: JsonPath) -> Node:
        """Read, slice, and resolve the content of a single include target."""
        if locator.href in self._including:
            raise MergeError(f"Circular include of '{locator.href}' at {_format(path)}")
        self._including.append(locator.href)
        try:
            content = self._read(locator, path)
            return self.resolve(content, locator.location, path)
        finally:
            self._including.pop()

    def _expand_glob(self, locator: Locator, location: str, path: JsonPath) -> dict[str, Node]:
        """Include every file matching a wildcard target, keyed by file stem."""
        base_dir = posixpath.dirname(location)
        matches = expand_glob(locator.location, Path(base_dir))
        if not matches:
            self._merger._warn(f"No files match include pattern '{locator.location}' at {_format(path)}")
        content: dict[str, Node] = {}
        for match in matches:
            file_location = posixpath.normpath(posixpath.join(base_dir, match))
            stem = posixpath.splitext(posixpath.basename(match))[0]
            single = Locator(TargetKind.FILE, file_location, locator.fragment)
            content[stem] = plain(self._expand(single, (*path, stem)))
        return content

    # -- helpers -----------------------------------------------------------

    def _read(self, locator: Locator, path: JsonPath) -> Node:
        document = self._store.read(locator.location)
        try:
            return slice_fragment(document, locator.fragment)
        except PointerError as exc:
            self._merger._warn(f"Cannot resolve '{locator.href}' at {_format(path)}: {exc}")
            return {}

    def _trace(self, label: str, path: JsonPath, location: str) -> None:
        logger.debug("%s: %s file=%s", label, _format(path), relative_label(location, self._base_dir))


def _require_mapping(result: Node, message: str) -> None:
    if not is_mapping(result):
        raise MergeError(message)


def _is_schema_name(value: Any) -> bool:
    return isinstance(value, str) and not any(char in value for char in "#/.")


def _format(path: JsonPath) -> str:
    return "$" + "".join(f".{key}" for key in path)
