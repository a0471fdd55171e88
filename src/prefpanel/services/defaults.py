"""Default preference seeding, the runtime stand-in for a defaults manifest.

Each descriptor's ``value`` goes into the *default* branch, with the
storage primitive picked from the value's runtime type. Values are written
unconditionally on every call; user values live on a separate layer and
are never touched here.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from prefpanel.services._helpers import DEFAULT_BRANCH_ROOT, pref_field, pref_root

if TYPE_CHECKING:
    from prefpanel.infrastructure.preferences import PreferenceService

logger = logging.getLogger(__name__)


def set_defaults(
    preferences: Iterable[Any],
    preferences_service: PreferenceService,
    preferences_branch: str,
    *,
    branch_root: str = DEFAULT_BRANCH_ROOT,
) -> list[str]:
    """Seed default values and return the names that were written.

    - ``bool`` is stored as a bool pref.
    - integral numbers are stored as int prefs; fractional ones are skipped.
    - ``str`` is stored as a string pref.
    - ``dict``/``list`` values are stored as their JSON text.
    - ``None`` and any other type are skipped.
    """
    branch = preferences_service.get_default_branch(pref_root(preferences_branch, branch_root))
    written: list[str] = []
    for pref in preferences:
        name = pref_field(pref, "name")
        value = pref_field(pref, "value")
        if isinstance(value, bool):
            branch.set_bool(name, value)
        elif isinstance(value, int):
            branch.set_int(name, value)
        elif isinstance(value, float):
            # must be integer, ignore otherwise
            if not value.is_integer():
                logger.debug("Skipping non-integer default for %s: %r", name, value)
                continue
            branch.set_int(name, int(value))
        elif isinstance(value, str):
            branch.set_string(name, value)
        elif isinstance(value, (dict, list, tuple)):
            branch.set_string(name, json.dumps(value, separators=(",", ":")))
        else:
            continue
        written.append(name)
    return written
