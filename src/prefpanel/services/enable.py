"""Entry point wiring validation, default seeding and panel rendering.

``enable()`` validates synchronously, so schema errors raise to the caller
before any preference is written. Everything after that completes through
the returned future, which resolves once the add-on manager has answered
and the options-displayed subscription is in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any

from prefpanel.config.models import HostConfig, TagsConfig
from prefpanel.domain.validation import validate
from prefpanel.infrastructure.addons import Addon, AddonManager, StaticAddonManager
from prefpanel.infrastructure.preferences import MemoryPreferenceService, PreferenceService
from prefpanel.plugins.event_bus import HostEventBus
from prefpanel.services.defaults import set_defaults
from prefpanel.services.renderer import OptionsPanel, inject_options

logger = logging.getLogger(__name__)

Localizer = Callable[[Any], None]


@dataclass
class Host:
    """The host capabilities an options panel is rendered against.

    Attributes:
        preferences: Preference service holding default and user values.
        events: Event bus delivering options-displayed events.
        addons: Add-on manager consulted before subscribing.
        localize: Localization pass run on the document after each render.
        config: Branch root and settings anchor.
        tags: Tag input behaviour for ``multiple-select`` settings.
        panels: Most recent panel rendered per add-on id.
    """

    preferences: PreferenceService
    events: HostEventBus = field(default_factory=HostEventBus)
    addons: AddonManager = field(default_factory=StaticAddonManager)
    localize: Localizer | None = None
    config: HostConfig = field(default_factory=HostConfig)
    tags: TagsConfig = field(default_factory=TagsConfig)
    panels: dict[str, OptionsPanel] = field(default_factory=dict)

    @classmethod
    def in_memory(cls, **kwargs: Any) -> Host:
        """Host backed by a :class:`MemoryPreferenceService`."""
        return cls(preferences=MemoryPreferenceService(), **kwargs)


def enable(
    preferences: Iterable[Mapping[str, Any]],
    addon_id: str,
    *,
    host: Host,
    preferences_branch: str | None = None,
) -> Future[dict[str, str]]:
    """Validate, seed defaults, and render the options panel on display.

    Raises:
        PreferenceSchemaError: Synchronously, before anything is written.

    Returns:
        Future resolving to ``{"id": addon_id}`` once subscribed.
    """
    descriptors = validate(preferences)
    branch = preferences_branch or addon_id

    set_defaults(descriptors, host.preferences, branch, branch_root=host.config.branch_root)

    enabled: Future[dict[str, str]] = Future()

    def on_options_displayed(document: Any) -> None:
        anchor = document.getElementById(host.config.anchor_id)
        if anchor is None:
            logger.warning(
                "No element #%s in options document for %s", host.config.anchor_id, addon_id
            )
            return
        host.panels[addon_id] = inject_options(
            descriptors,
            host.preferences,
            branch,
            document,
            anchor.parentNode,
            addon_id,
            events=host.events,
            tags=host.tags,
            branch_root=host.config.branch_root,
        )
        if host.localize is not None:
            host.localize(document)

    def on_addon(addon: Addon | None) -> None:
        if addon is None:
            logger.debug("Add-on manager does not know %s; subscribing anyway", addon_id)
        host.events.on_panel_display(addon_id, on_options_displayed)
        enabled.set_result({"id": addon_id})

    host.addons.get_addon_by_id(addon_id, on_addon)
    return enabled


def disable(addon_id: str, *, host: Host) -> bool:
    """Remove the options-displayed subscription made by :func:`enable`."""
    host.panels.pop(addon_id, None)
    return host.events.off_panel_display(addon_id)
