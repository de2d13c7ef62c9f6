# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Merge configuration model and YAML loader.

Example configuration file::

    include:
      public:
        filter:
          allow: "^/v1/"
          deny: "internal"
        prefix: "/api"
    inline-classes:
      - pathItems
"""

from __future__ import annotations

import re
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# ###############
# Public Interface
# ###############


class ConfigError(Exception):
    """Raised when a merge configuration cannot be read or is invalid."""


class KeyFilter(BaseModel):
    """Allow/deny regular expressions applied to the top-level keys of included content."""

    model_config = ConfigDict(extra="forbid")

    allow: str | None = None
    deny: str | None = None

    @field_validator("allow", "deny")
    @classmethod
    def check_pattern(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValueError(f"invalid regular expression {value!r}: {exc}") from exc
        return value

    def keeps(self, key: object) -> bool:
        """Return True if *key* passes the filter."""
        text = str(key)
        if self.allow is not None and not re.search(self.allow, text):
            return False
        if self.deny is not None and re.search(self.deny, text):
            return False
        return True


class IncludeClassConfig(BaseModel):
    """Post-processing rules for ``$include.<class>`` directives."""

    model_config = ConfigDict(extra="forbid")

    filter: KeyFilter | None = None
    prefix: str = ""
    suffix: str = ""

    @field_validator("filter", mode="before")
    @classmethod
    def allow_shorthand(cls, value: object) -> object:
        # A bare string is an allow pattern.
        if isinstance(value, str):
            return {"allow": value}
        return value


class MergeConfig(BaseModel):
    """Top-level merge configuration."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    include: dict[str, IncludeClassConfig] = Field(default_factory=dict)
    inline_classes: list[str] = Field(alias="inline-classes", default_factory=list)


def load_config(path: Path) -> MergeConfig:
    """Load and validate a merge configuration file.

    An empty file is treated as an empty configuration.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A validated MergeConfig instance.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file '{path}': {exc}") from exc

    if data is None:
        data = {}

    try:
        return MergeConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file '{path}': {exc}") from exc
