"""Tests for the SQLite-backed visit store."""

import sqlite3
from pathlib import Path

import pytest

from troubleshoot_hub.config import STORAGE_KEY
from troubleshoot_hub.core.database.schema import create_schema, get_metadata, set_metadata
from troubleshoot_hub.core.visits.store import SqliteVisitStore, decode_visits, encode_visits
from troubleshoot_hub.models.node import VisitRecord
from troubleshoot_hub.protocols import VisitStoreProtocol


@pytest.fixture
def conn() -> sqlite3.Connection:
    c = sqlite3.connect(":memory:")
    create_schema(c)
    return c


def test_store_satisfies_protocol(conn: sqlite3.Connection) -> None:
    assert isinstance(SqliteVisitStore(conn), VisitStoreProtocol)


def test_missing_entry_loads_empty(conn: sqlite3.Connection) -> None:
    assert SqliteVisitStore(conn).load() == {}


def test_save_then_load(conn: sqlite3.Connection) -> None:
    store = SqliteVisitStore(conn)
    records = {
        "/svls": VisitRecord(path="/svls", title="SVLS", count=2, first_visit=1, last_visit=5),
        "/elb": VisitRecord(path="/elb", title="ELB", count=1, first_visit=3, last_visit=3),
    }
    store.save(records)
    assert store.load() == records
    assert get_metadata(conn, STORAGE_KEY) is not None


def test_store_survives_reconnect(tmp_path: Path) -> None:
    db = tmp_path / "hub.db"
    record = VisitRecord(path="/", title="Home", count=1, first_visit=1, last_visit=1)
    conn = sqlite3.connect(str(db))
    create_schema(conn)
    SqliteVisitStore(conn).save({"/": record})
    conn.close()

    conn = sqlite3.connect(str(db))
    assert SqliteVisitStore(conn).load() == {"/": record}


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '{"/": {"count": 1}}', '{"/": "x"}'])
def test_corrupt_entry_raises_value_error(conn: sqlite3.Connection, raw: str) -> None:
    set_metadata(conn, STORAGE_KEY, raw)
    with pytest.raises(ValueError):
        SqliteVisitStore(conn).load()


def test_encoding_is_stable() -> None:
    record = VisitRecord(path="/", title="Home", count=1, first_visit=1, last_visit=2)
    raw = encode_visits({"/": record})
    assert raw == encode_visits(decode_visits(raw))
