"""Tests for preference services: in-memory and SQLite-backed."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import inspect

from prefpanel.infrastructure.database import SqlPreferenceService, init_database
from prefpanel.infrastructure.preferences import (
    MemoryPreferenceService,
    PreferenceService,
    PreferenceTypeError,
    PrefKind,
)

ROOT = "extensions.test."


@pytest.fixture(params=["memory", "sqlite"])
def service(request: pytest.FixtureRequest, tmp_path: Path) -> PreferenceService:
    if request.param == "memory":
        return MemoryPreferenceService()
    engine = init_database(tmp_path / "store" / "prefs.db")
    request.addfinalizer(engine.dispose)
    return SqlPreferenceService(engine)


class TestTypedAccess:
    def test_round_trip_each_kind(self, service: PreferenceService) -> None:
        branch = service.get_branch(ROOT)
        branch.set_bool("flag", True)
        branch.set_int("count", 7)
        branch.set_string("text", "héllo")
        assert branch.get_bool("flag") is True
        assert branch.get_int("count") == 7
        assert branch.get_string("text") == "héllo"
        assert branch.get_kind("count") is PrefKind.INT

    def test_missing_raises_or_defaults(self, service: PreferenceService) -> None:
        branch = service.get_branch(ROOT)
        with pytest.raises(KeyError):
            branch.get_string("nope")
        assert branch.get_string("nope", None) is None
        assert branch.has("nope") is False

    def test_kind_mismatch(self, service: PreferenceService) -> None:
        branch = service.get_branch(ROOT)
        branch.set_bool("flag", False)
        with pytest.raises(PreferenceTypeError):
            branch.get_string("flag")

    def test_last_write_wins(self, service: PreferenceService) -> None:
        branch = service.get_branch(ROOT)
        branch.set_string("text", "one")
        branch.set_string("text", "two")
        assert branch.get_string("text") == "two"


class TestLayers:
    def test_user_branch_falls_back_to_default(self, service: PreferenceService) -> None:
        service.get_default_branch(ROOT).set_int("count", 1)
        assert service.get_branch(ROOT).get_int("count") == 1

    def test_user_value_shadows_default(self, service: PreferenceService) -> None:
        service.get_default_branch(ROOT).set_int("count", 1)
        service.get_branch(ROOT).set_int("count", 5)
        assert service.get_branch(ROOT).get_int("count") == 5
        assert service.get_default_branch(ROOT).get_int("count") == 1
        assert service.has_user_value(ROOT + "count") is True

    def test_default_branch_ignores_user_values(self, service: PreferenceService) -> None:
        service.get_branch(ROOT).set_bool("only_user", True)
        assert service.get_default_branch(ROOT).has("only_user") is False

    def test_reset_user_value(self, service: PreferenceService) -> None:
        service.get_default_branch(ROOT).set_string("text", "default")
        service.get_branch(ROOT).set_string("text", "user")
        service.reset_user_value(ROOT + "text")
        assert service.get_branch(ROOT).get_string("text") == "default"
        assert service.has_user_value(ROOT + "text") is False


class TestBranchListing:
    def test_names_are_relative_and_scoped(self, service: PreferenceService) -> None:
        service.get_default_branch(ROOT).set_int("b", 1)
        service.get_branch(ROOT).set_int("a", 2)
        service.get_branch("extensions.other.").set_int("c", 3)
        assert service.get_branch(ROOT).names() == ["a", "b"]
        assert service.get_default_branch(ROOT).names() == ["b"]

    def test_items(self, service: PreferenceService) -> None:
        service.get_default_branch(ROOT).set_string("s", "x")
        service.get_branch(ROOT).set_bool("f", True)
        assert service.get_branch(ROOT).items() == [
            ("f", PrefKind.BOOL, True),
            ("s", PrefKind.STRING, "x"),
        ]

    def test_prefix_wildcards_are_literal(self, service: PreferenceService) -> None:
        service.get_branch("extensions.a_b.").set_int("x", 1)
        service.get_branch("extensions.aXb.").set_int("y", 2)
        assert service.get_branch("extensions.a_b.").names() == ["x"]


class TestSqlPersistence:
    def test_values_survive_reopen(self, tmp_path: Path) -> None:
        db = tmp_path / "prefs.db"
        engine = init_database(db)
        SqlPreferenceService(engine).get_branch(ROOT).set_string("text", "kept")
        engine.dispose()

        engine = init_database(db)
        try:
            assert SqlPreferenceService(engine).get_branch(ROOT).get_string("text") == "kept"
        finally:
            engine.dispose()

    def test_schema(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "prefs.db")
        try:
            inspector = inspect(engine)
            assert "prefs" in inspector.get_table_names()
            pk = inspector.get_pk_constraint("prefs")
            assert pk["constrained_columns"] == ["layer", "key"]
        finally:
            engine.dispose()
