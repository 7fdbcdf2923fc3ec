"""Property-based tests for the database store.

**Feature: price-alerts**
"""

import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from vboxtrade.db.store import DataStore


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


class TestDatabaseSchemaCompleteness:
    """
    **Feature: price-alerts, Property 10: Database Schema Completeness**

    *For any* fresh database, all required tables should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        tables = temp_db.get_tables()

        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_creates_missing_parent_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "dir" / "test.db"
            DataStore(db_path)
            assert db_path.exists()


class TestKeyValueRoundTrip:
    """
    **Feature: price-alerts, Property 11: Key-Value Round Trip**

    *For any* key and blob written, reading the key returns the same bytes;
    a later write replaces the earlier one.
    """

    def test_absent_key_returns_none(self, temp_db: DataStore):
        assert temp_db.get("price_alerts") is None

    @given(
        key=st.text(
            alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd")),
            min_size=1,
            max_size=30,
        ),
        value=st.binary(max_size=2048),
    )
    @settings(max_examples=50)
    def test_set_then_get(self, key: str, value: bytes):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")

            assert store.set(key, value) is True
            assert store.get(key) == value

    def test_overwrite_replaces_value(self, temp_db: DataStore):
        temp_db.set("price_alerts", b"[1]")
        temp_db.set("price_alerts", b"[]")

        assert temp_db.get("price_alerts") == b"[]"

    def test_keys_are_independent(self, temp_db: DataStore):
        temp_db.set("a", b"first")
        temp_db.set("b", b"second")

        assert temp_db.get("a") == b"first"
        assert temp_db.get("b") == b"second"

    def test_value_survives_reopen(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "test.db"
            DataStore(db_path).set("price_alerts", b"persisted")

            assert DataStore(db_path).get("price_alerts") == b"persisted"

    def test_failed_write_returns_false(self, temp_db: DataStore):
        conn = temp_db._get_connection()
        try:
            conn.execute("DROP TABLE kv")
            conn.commit()
        finally:
            conn.close()

        assert temp_db.set("price_alerts", b"[]") is False
