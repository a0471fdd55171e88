"""Preference service persisted in the ``prefs`` table."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert

from prefpanel.infrastructure.database.schema import prefs
from prefpanel.infrastructure.preferences import Layer, PreferenceService, PrefKind

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class SqlPreferenceService(PreferenceService):
    """SQLite-backed preference service. Each write commits immediately."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _read(self, layer: Layer, key: str) -> tuple[PrefKind, Any] | None:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(prefs.c.kind, prefs.c.value).where(
                    prefs.c.layer == layer.value, prefs.c.key == key
                )
            ).first()
        if row is None:
            return None
        return PrefKind(row.kind), json.loads(row.value)

    def _write(self, layer: Layer, key: str, kind: PrefKind, value: Any) -> None:
        encoded = json.dumps(value)
        modified = datetime.now(UTC).isoformat()
        stmt = insert(prefs).values(
            layer=layer.value, key=key, kind=kind.value, value=encoded, modified=modified
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[prefs.c.layer, prefs.c.key],
            set_={"kind": kind.value, "value": encoded, "modified": modified},
        )
        with self._engine.begin() as conn:
            conn.execute(stmt)

    def _delete(self, layer: Layer, key: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(prefs).where(prefs.c.layer == layer.value, prefs.c.key == key))

    def _keys(self, layer: Layer, prefix: str) -> list[str]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(prefs.c.key)
                .where(prefs.c.layer == layer.value, prefs.c.key.startswith(prefix, autoescape=True))
                .order_by(prefs.c.key)
            ).fetchall()
        return [row.key for row in rows]
