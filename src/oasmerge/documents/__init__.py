# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document collaborators: codec, remote fetching, and glob expansion."""

from oasmerge.documents.codec import (
    DocumentError,
    format_for,
    load_document,
    parse,
    serialize,
    write_document,
)
from oasmerge.documents.fetch import Fetcher
from oasmerge.documents.files import expand_glob, has_glob

__all__ = [
    "DocumentError",
    "Fetcher",
    "expand_glob",
    "format_for",
    "has_glob",
    "load_document",
    "parse",
    "serialize",
    "write_document",
]
