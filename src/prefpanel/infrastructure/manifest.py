"""Manifest loading: the descriptor file an add-on ships its preferences in.

Accepts ``package.json``-style JSON or the same structure as YAML::

    {
      "id": "jid1-example@jetpack",
      "preferences-branch": "example",
      "preferences": [{"name": "debug", "title": "Debug mode", "type": "bool", "value": false}]
    }
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from ruamel.yaml import YAML, YAMLError

_BRANCH_RE = re.compile(r"^[\w{@}-]+$")

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class ManifestError(ValueError):
    """The manifest file could not be read or does not have the expected shape."""


class Manifest(BaseModel):
    """Add-on id, preference branch and raw (unvalidated) descriptors."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    preferences_branch: str | None = Field(default=None, alias="preferences-branch")
    preferences: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("preferences_branch")
    @classmethod
    def _check_branch(cls, value: str | None) -> str | None:
        if value is not None and not _BRANCH_RE.match(value):
            msg = "preferences-branch may only contain letters, digits, '-', '_', '@' and braces"
            raise ValueError(msg)
        return value

    @property
    def branch(self) -> str:
        """Preference branch name; the add-on id unless overridden."""
        return self.preferences_branch or self.id


def load_manifest(path: Path) -> Manifest:
    """Read and validate a manifest. Raises :class:`ManifestError`."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read manifest {path}: {exc}"
        raise ManifestError(msg) from exc

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = YAML(typ="safe").load(raw)
        else:
            data = json.loads(raw)
    except (ValueError, YAMLError) as exc:
        msg = f"Invalid manifest {path}: {exc}"
        raise ManifestError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Manifest {path} must contain an object"
        raise ManifestError(msg)

    try:
        return Manifest.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid manifest {path}: {exc.errors()[0]['msg']}"
        raise ManifestError(msg) from exc
