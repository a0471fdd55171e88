"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, prefpanel.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class HostConfig(BaseModel):
    """[host] section: where preferences live and where settings are injected."""

    model_config = {"frozen": True}

    branch_root: str = "extensions"
    anchor_id: str = "detail-downloads"


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    path: str = ".prefpanel/prefs.db"


class TagsConfig(BaseModel):
    """[tags] section: behaviour of multiple-select tag inputs."""

    model_config = {"frozen": True}

    trigger_keys: list[str] = Field(default_factory=lambda: ["enter", "tab"])
    sortable: bool = True
    case_sensitive: bool = True


class PanelConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    host: HostConfig = Field(default_factory=HostConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    tags: TagsConfig = Field(default_factory=TagsConfig)
