"""Durable storage for the visit mapping."""

import json
import sqlite3

from troubleshoot_hub.config import STORAGE_KEY
from troubleshoot_hub.core.database.schema import get_metadata, set_metadata
from troubleshoot_hub.models.node import VisitRecord


def decode_visits(raw: str) -> dict[str, VisitRecord]:
    """Parse the serialized mapping of path to visit record."""
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            msg = f"Visit data must be an object, got {type(data).__name__}"
            raise ValueError(msg)
        return {path: VisitRecord.from_dict(path, entry) for path, entry in data.items()}
    except (KeyError, TypeError, json.JSONDecodeError) as e:
        msg = f"Corrupt visit data: {e}"
        raise ValueError(msg) from e


def encode_visits(records: dict[str, VisitRecord]) -> str:
    data = {path: record.to_dict() for path, record in records.items()}
    return json.dumps(data, sort_keys=True, separators=(",", ":"))


class SqliteVisitStore:
    """Keep the visit mapping as one JSON value in the metadata table."""

    def __init__(self, conn: sqlite3.Connection, *, key: str = STORAGE_KEY) -> None:
        self.conn = conn
        self.key = key

    def load(self) -> dict[str, VisitRecord]:
        raw = get_metadata(self.conn, self.key)
        if raw is None:
            return {}
        return decode_visits(raw)

    def save(self, records: dict[str, VisitRecord]) -> None:
        set_metadata(self.conn, self.key, encode_visits(records))
