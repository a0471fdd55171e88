"""Host preference service: typed, prefix-scoped branches over two layers.

Every preference lives in one of two layers. The *default* layer holds
values seeded at startup; the *user* layer holds values the user changed.
A user branch reads through to the default layer when no user value is
set, while a default branch only ever sees defaults.

Concrete services implement three storage primitives (``_read``,
``_write``, ``_keys``); :class:`PreferenceBranch` supplies the typed API.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class PrefKind(StrEnum):
    """Storage primitive of a preference value."""

    BOOL = "bool"
    INT = "int"
    STRING = "string"


class Layer(StrEnum):
    DEFAULT = "default"
    USER = "user"


class PreferenceTypeError(TypeError):
    """A preference was read with a getter that does not match its kind."""


_MISSING = object()


class PreferenceService(ABC):
    """Base class for preference stores exposing prefix-scoped branches."""

    def get_branch(self, prefix: str) -> PreferenceBranch:
        """Branch for user values, falling back to defaults on read."""
        return PreferenceBranch(self, prefix, Layer.USER)

    def get_default_branch(self, prefix: str) -> PreferenceBranch:
        """Branch over the default layer only."""
        return PreferenceBranch(self, prefix, Layer.DEFAULT)

    def lookup(self, key: str) -> tuple[PrefKind, Any] | None:
        """Effective ``(kind, value)`` for a full key: user value, else default."""
        found = self._read(Layer.USER, key)
        if found is None:
            found = self._read(Layer.DEFAULT, key)
        return found

    def has_user_value(self, key: str) -> bool:
        return self._read(Layer.USER, key) is not None

    def reset_user_value(self, key: str) -> None:
        """Drop the user value for *key* so reads fall back to the default."""
        self._delete(Layer.USER, key)

    @abstractmethod
    def _read(self, layer: Layer, key: str) -> tuple[PrefKind, Any] | None:
        """Return ``(kind, value)`` for *key* in *layer*, or None."""
        ...

    @abstractmethod
    def _write(self, layer: Layer, key: str, kind: PrefKind, value: Any) -> None:
        """Store *value* under *key* in *layer*, replacing any previous value."""
        ...

    @abstractmethod
    def _delete(self, layer: Layer, key: str) -> None:
        ...

    @abstractmethod
    def _keys(self, layer: Layer, prefix: str) -> list[str]:
        """Full keys in *layer* starting with *prefix*, sorted."""
        ...


class PreferenceBranch:
    """Typed access to the preferences under one dotted prefix.

    Names passed to the getters and setters are relative to ``root``;
    ``branch.set_bool("debug", True)`` on ``extensions.myaddon.`` writes
    ``extensions.myaddon.debug``.
    """

    def __init__(self, service: PreferenceService, root: str, layer: Layer) -> None:
        self._service = service
        self.root = root
        self.layer = layer

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_bool(self, name: str, value: bool) -> None:
        self._set(name, PrefKind.BOOL, bool(value))

    def set_int(self, name: str, value: int) -> None:
        self._set(name, PrefKind.INT, int(value))

    def set_string(self, name: str, value: str) -> None:
        self._set(name, PrefKind.STRING, str(value))

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    def get_bool(self, name: str, default: Any = _MISSING) -> bool:
        return self._get(name, PrefKind.BOOL, default)

    def get_int(self, name: str, default: Any = _MISSING) -> int:
        return self._get(name, PrefKind.INT, default)

    def get_string(self, name: str, default: Any = _MISSING) -> str:
        return self._get(name, PrefKind.STRING, default)

    def get_kind(self, name: str) -> PrefKind | None:
        found = self._lookup(self.root + name)
        return found[0] if found else None

    def has(self, name: str) -> bool:
        return self._lookup(self.root + name) is not None

    def names(self) -> list[str]:
        """Relative names visible through this branch, sorted."""
        keys = set(self._service._keys(self.layer, self.root))
        if self.layer is Layer.USER:
            keys.update(self._service._keys(Layer.DEFAULT, self.root))
        return sorted(k[len(self.root) :] for k in keys)

    def items(self) -> list[tuple[str, PrefKind, Any]]:
        """``(name, kind, value)`` for every visible preference."""
        result: list[tuple[str, PrefKind, Any]] = []
        for name in self.names():
            found = self._lookup(self.root + name)
            if found is not None:
                result.append((name, found[0], found[1]))
        return result

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _lookup(self, key: str) -> tuple[PrefKind, Any] | None:
        if self.layer is Layer.USER:
            return self._service.lookup(key)
        return self._service._read(Layer.DEFAULT, key)

    def _set(self, name: str, kind: PrefKind, value: Any) -> None:
        key = self.root + name
        self._service._write(self.layer, key, kind, value)
        logger.debug("Set %s pref %s (%s)", self.layer, key, kind)

    def _get(self, name: str, kind: PrefKind, default: Any) -> Any:
        key = self.root + name
        found = self._lookup(key)
        if found is None:
            if default is _MISSING:
                raise KeyError(key)
            return default
        stored_kind, value = found
        if stored_kind is not kind:
            msg = f"Preference {key} is a {stored_kind} pref, not {kind}"
            raise PreferenceTypeError(msg)
        return value


class MemoryPreferenceService(PreferenceService):
    """Dict-backed preference service; state lives for the process only."""

    def __init__(self) -> None:
        self._layers: dict[Layer, dict[str, tuple[PrefKind, Any]]] = {
            Layer.DEFAULT: {},
            Layer.USER: {},
        }

    def _read(self, layer: Layer, key: str) -> tuple[PrefKind, Any] | None:
        return self._layers[layer].get(key)

    def _write(self, layer: Layer, key: str, kind: PrefKind, value: Any) -> None:
        self._layers[layer][key] = (kind, value)

    def _delete(self, layer: Layer, key: str) -> None:
        self._layers[layer].pop(key, None)

    def _keys(self, layer: Layer, prefix: str) -> list[str]:
        return sorted(k for k in self._layers[layer] if k.startswith(prefix))
