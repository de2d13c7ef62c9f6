# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Normalization of directive targets into absolute locations.

Three target forms are recognised:

* **In-document pointers**: ``#/components/schemas/Pet``.  The location is the
  containing document itself.
* **Network URLs**: ``https://example.com/api/pet.yaml#/Pet``.  Used as is.
* **Files**: ``../schemas/pet.yaml#/Pet``.  Joined to the directory of the
  containing document, as a URL join when that document was fetched over the
  network and as a POSIX path join otherwise.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from urllib.parse import urljoin, urlparse

from oasmerge.documents.files import has_glob

# ###############
# Public Interface
# ###############

REMOTE_SCHEMES = ("http", "https")


class LocatorError(Exception):
    """Raised when a target string cannot be turned into a location."""


class TargetKind(Enum):
    """Syntactic form of a directive target."""

    POINTER = "pointer"
    URL = "url"
    FILE = "file"


@dataclass(frozen=True)
class Locator:
    """An absolute target with its fragment separated out.

    Attributes:
        kind: The syntactic form of the original target.
        location: Absolute POSIX path or absolute URL, without fragment.
        fragment: JSON pointer text after ``#`` (empty for the whole document).
    """

    kind: TargetKind
    location: str
    fragment: str = ""

    @property
    def href(self) -> str:
        """Canonical absolute target, used as the deduplication key."""
        if self.fragment in ("", "/"):
            return self.location
        return f"{self.location}#{self.fragment}"

    @property
    def is_remote(self) -> bool:
        return is_remote(self.location)

    @property
    def is_glob(self) -> bool:
        return not self.is_remote and has_glob(self.location)


def is_remote(location: str) -> bool:
    """Return True if *location* is an HTTP(S) URL."""
    return urlparse(location).scheme in REMOTE_SCHEMES


def classify_target(target: str) -> TargetKind:
    """Return the syntactic form of *target*."""
    if target.startswith("#"):
        return TargetKind.POINTER
    if is_remote(target):
        return TargetKind.URL
    return TargetKind.FILE


def root_location(path: str | Path) -> str:
    """Return the absolute location of a root document given as a path or URL."""
    text = str(path)
    if is_remote(text):
        return text
    return Path(text).resolve().as_posix()


def locate(target: object, containing: str) -> Locator:
    """Resolve *target* relative to the *containing* document.

    Args:
        target: The directive value.
        containing: Absolute location of the document holding the directive.

    Returns:
        The absolute :class:`Locator`.

    Raises:
        LocatorError: If *target* is not a usable target string.
    """
    if not isinstance(target, str) or not target.strip():
        raise LocatorError(f"Invalid target {target!r}: expected a non-empty string")
    if target.count("#") > 1:
        raise LocatorError(f"Invalid target '{target}': more than one '#'")

    resource, _, fragment = target.partition("#")
    if fragment and not fragment.startswith("/"):
        raise LocatorError(f"Invalid target '{target}': fragment must be a JSON pointer starting with '/'")

    kind = classify_target(target)
    if kind is TargetKind.POINTER:
        return Locator(kind, containing, fragment)

    scheme = urlparse(resource).scheme
    if kind is TargetKind.FILE and len(scheme) > 1:
        raise LocatorError(f"Invalid target '{target}': unsupported scheme '{scheme}'")

    if kind is TargetKind.URL:
        location = resource
    elif is_remote(containing):
        location = urljoin(containing, resource)
    else:
        location = posixpath.normpath(posixpath.join(posixpath.dirname(containing), resource.replace("\\", "/")))
    return Locator(kind, location, fragment)


def relative_label(location: str, base_dir: str) -> str:
    """Return *location* relative to *base_dir* for log messages."""
    if is_remote(location):
        return location
    return posixpath.relpath(location, base_dir)
