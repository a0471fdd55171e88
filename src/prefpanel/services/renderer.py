"""Options renderer: builds inline ``setting`` rows for visible descriptors.

Each descriptor becomes one ``setting`` element carrying the common
attributes (``pref-name``, ``data-jetpack-id``, ``pref``, ``type``,
``title``, ``desc``) plus a type-specific control. Hidden descriptors are
skipped here; their defaults are still seeded by
:func:`prefpanel.services.defaults.set_defaults`.

Input is assumed to have passed :func:`prefpanel.domain.validation.validate`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from prefpanel.config.models import TagsConfig
from prefpanel.domain.descriptors import (
    BoolIntPref,
    BoolPref,
    ColorPref,
    ControlPref,
    Descriptor,
    DirectoryPref,
    FilePref,
    IntegerPref,
    MenulistPref,
    MultipleSelectPref,
    RadioPref,
    StringPref,
)
from prefpanel.domain.tags import Tag, TagSet, parse_stored_tags
from prefpanel.infrastructure.document import HTML_NS
from prefpanel.infrastructure.preferences import PreferenceTypeError
from prefpanel.plugins.event_bus import command_topic
from prefpanel.services._helpers import DEFAULT_BRANCH_ROOT, pref_root

if TYPE_CHECKING:
    from prefpanel.infrastructure.preferences import PreferenceBranch, PreferenceService
    from prefpanel.plugins.event_bus import HostEventBus

logger = logging.getLogger(__name__)


@dataclass
class OptionsPanel:
    """Handle on one rendered options panel.

    Attributes:
        addon_id: Add-on the panel belongs to.
        settings: ``setting`` elements by preference name, in render order.
        tag_sets: Live tag sets of the ``multiple-select`` settings.
    """

    addon_id: str
    settings: dict[str, Any] = field(default_factory=dict)
    tag_sets: dict[str, TagSet] = field(default_factory=dict)
    _commands: dict[str, Callable[[], None]] = field(default_factory=dict, repr=False)

    def press(self, name: str) -> None:
        """Activate the control button for preference *name*."""
        try:
            command = self._commands[name]
        except KeyError:
            msg = f"No control named {name!r} in the options panel for {self.addon_id}"
            raise KeyError(msg) from None
        command()


def inject_options(
    preferences: Iterable[Descriptor],
    preferences_service: PreferenceService,
    preferences_branch: str,
    document: Any,
    parent: Any,
    addon_id: str,
    *,
    events: HostEventBus | None = None,
    tags: TagsConfig | None = None,
    branch_root: str = DEFAULT_BRANCH_ROOT,
) -> OptionsPanel:
    """Append a ``setting`` element to *parent* for every visible descriptor.

    Control buttons broadcast ``<addon_id>-cmdPressed`` on *events* when
    pressed. Tag inputs write their full tag list back to the user branch
    on every change.
    """
    root = pref_root(preferences_branch, branch_root)
    branch = preferences_service.get_branch(root)
    tags = tags or TagsConfig()
    panel = OptionsPanel(addon_id=addon_id)

    for pref in preferences:
        if pref.hidden:
            continue

        setting = document.createElement("setting")
        setting.setAttribute("pref-name", pref.name)
        setting.setAttribute("data-jetpack-id", addon_id)
        setting.setAttribute("pref", root + pref.name)
        setting.setAttribute("type", pref.type)
        setting.setAttribute("title", pref.title)
        if pref.description:
            setting.setAttribute("desc", pref.description)

        match pref:
            case FilePref() | DirectoryPref():
                setting.setAttribute("fullpath", "true")
            case ControlPref():
                button = _control_button(document, pref, addon_id)
                setting.appendChild(button)
                panel._commands[pref.name] = _broadcaster(events, addon_id, pref.name)
            case BoolIntPref():
                if pref.on is not None:
                    setting.setAttribute("on", _attr(pref.on))
                if pref.off is not None:
                    setting.setAttribute("off", _attr(pref.off))
            case MenulistPref():
                menulist = document.createElement("menulist")
                menupopup = document.createElement("menupopup")
                for option in pref.options:
                    menuitem = document.createElement("menuitem")
                    menuitem.setAttribute("value", _attr(option.value))
                    menuitem.setAttribute("label", _attr(option.label))
                    menupopup.appendChild(menuitem)
                menulist.appendChild(menupopup)
                setting.appendChild(menulist)
            case MultipleSelectPref():
                ul, tag_set = _tag_input(document, pref, branch, tags)
                setting.appendChild(ul)
                panel.tag_sets[pref.name] = tag_set
            case RadioPref():
                radiogroup = document.createElement("radiogroup")
                for option in pref.options:
                    radio = document.createElement("radio")
                    radio.setAttribute("value", _attr(option.value))
                    radio.setAttribute("label", _attr(option.label))
                    radiogroup.appendChild(radio)
                setting.appendChild(radiogroup)
            case BoolPref() | IntegerPref() | StringPref() | ColorPref():
                pass

        parent.appendChild(setting)
        panel.settings[pref.name] = setting

    logger.debug("Injected %d settings for %s", len(panel.settings), addon_id)
    return panel


# ---------------------------------------------------------------------------
# Controls
# ---------------------------------------------------------------------------


def _control_button(document: Any, pref: ControlPref, addon_id: str) -> Any:
    button = document.createElement("button")
    button.setAttribute("pref-name", pref.name)
    button.setAttribute("data-jetpack-id", addon_id)
    button.setAttribute("label", pref.label)
    button.setAttribute(
        "oncommand",
        f"Services.obs.notifyObservers(null, '{command_topic(addon_id)}', '{pref.name}');",
    )
    return button


def _broadcaster(events: HostEventBus | None, addon_id: str, name: str) -> Callable[[], None]:
    topic = command_topic(addon_id)

    def press() -> None:
        if events is None:
            logger.debug("No event bus; dropping %s for %s", topic, name)
            return
        events.notify(topic, name)

    return press


def _tag_input(
    document: Any,
    pref: MultipleSelectPref,
    branch: PreferenceBranch,
    tags: TagsConfig,
) -> tuple[Any, TagSet]:
    """Build the tag ``ul`` and its :class:`TagSet`, wired to save on change."""
    ul = document.createElementNS(HTML_NS, "ul")
    ul.setAttribute("data-name", pref.name)
    ul.setAttribute("data-allow-new-tags", _attr(bool(pref.open)))
    ul.setAttribute("data-sortable", _attr(tags.sortable))
    ul.setAttribute("data-trigger-keys", ",".join(tags.trigger_keys))

    try:
        stored = branch.get_string(pref.name, None)
    except PreferenceTypeError:
        logger.debug("Stored value for %s is not a string pref", pref.name)
        stored = None

    tag_set = TagSet(
        source=[(option.value, _attr(option.label)) for option in pref.options],
        allow_new_tags=bool(pref.open),
        case_sensitive=tags.case_sensitive,
        sortable=tags.sortable,
    )
    tag_set.fill(parse_stored_tags(stored))

    def save(changed: TagSet, action: str, _tag: Tag | None) -> None:
        branch.set_string(pref.name, changed.dumps())
        _mirror_tags(document, ul, changed)
        logger.debug("Tags %s for %s: %s", action, pref.name, changed.labels)

    save(tag_set, "reset", None)
    tag_set.on_change = save
    return ul, tag_set


def _mirror_tags(document: Any, ul: Any, tag_set: TagSet) -> None:
    """Replace the ``li`` children of *ul* with one per tag."""
    while ul.firstChild is not None:
        ul.removeChild(ul.firstChild)
    for tag in tag_set.tags:
        li = document.createElementNS(HTML_NS, "li")
        li.setAttribute("data-value", _attr(tag.value))
        li.setAttribute("label", tag.label)
        ul.appendChild(li)


def _attr(value: Any) -> str:
    """Attribute text for *value*; booleans use the host's lowercase spelling."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
