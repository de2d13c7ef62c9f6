# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Fetching remote documents over HTTP(S).

A :class:`Fetcher` caches parsed documents by URL for its own lifetime, so one
merge never downloads the same resource twice.  Failures never raise: the
problem is logged and reported, and an empty mapping is returned instead.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Callable
from urllib.parse import urlparse

import requests

from oasmerge.documents.codec import DocumentError, parse
from oasmerge.model.nodes import Node

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_TIMEOUT = 30.0


class Fetcher:
    """Download and parse remote documents with a per-instance cache."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        report: Callable[[str], None] | None = None,
    ) -> None:
        """Create a fetcher.

        Args:
            session: HTTP session to use; a new :class:`requests.Session` by default.
            timeout: Per-request timeout in seconds.
            report: Called with a message for every failed or doubtful fetch,
                in addition to logging.
        """
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._report = report
        self._cache: dict[str, Node] = {}

    def fetch(self, url: str) -> Node:
        """Return the parsed document at *url*, or ``{}`` if it cannot be fetched.

        Every call returns a fresh deep copy, so callers may modify the result.
        """
        if url not in self._cache:
            self._cache[url] = self._download(url)
        return copy.deepcopy(self._cache[url])

    def _download(self, url: str) -> Node:
        logger.info("fetching: %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            self._warn(f"Failed to fetch {url}: {exc}")
            return {}
        if not response.ok:
            self._warn(f"{response.status_code} returned: {url}")
            return {}

        suffix = urlparse(url).path.lower().rsplit(".", 1)[-1]
        try:
            if suffix == "json":
                return json.loads(response.text)
            if suffix not in ("yml", "yaml"):
                self._warn(f"Cannot determine the file type of {url}; assuming YAML")
            return parse(response.text, source_label=url)
        except (ValueError, DocumentError) as exc:
            self._warn(f"Cannot parse document fetched from {url}: {exc}")
            return {}

    def _warn(self, message: str) -> None:
        logger.warning(message)
        if self._report is not None:
            self._report(message)
