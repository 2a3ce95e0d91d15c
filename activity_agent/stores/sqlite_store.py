"""SQLite-backed activity store for local runs."""

from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from activity_agent.errors import ActivityStoreError
from activity_agent.models import ActivityContent, ActivityPage, ActivityRecord, ActivityType
from activity_agent.stores.base import ActivityStore

SCHEMA_VERSION = 1


class SqliteActivityStore(ActivityStore):
    """Small SQLite wrapper with explicit schema management.

    Pages are returned newest first, like the hosted platform, and the
    cursor is the id of the last row on the page.
    """

    def __init__(self, path: Path, page_size: int = 50) -> None:
        self._path = path
        self._page_size = page_size

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create or migrate schema."""

        with self._connect() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if row is None:
                self._create_schema(conn)
                conn.execute("INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION,))
            elif row["version"] != SCHEMA_VERSION:
                raise RuntimeError(
                    f"Unsupported schema version {row['version']} (expected {SCHEMA_VERSION})"
                )

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS activities (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id TEXT NOT NULL,
                type TEXT NOT NULL,
                content_json TEXT NOT NULL,
                created_at TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_activities_session ON activities(session_id, id);
            """
        )

    async def create_activity(self, session_id: str, content: ActivityContent) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT INTO activities(session_id, type, content_json, created_at) VALUES (?, ?, ?, ?)",
                    (session_id, content.type.value, json.dumps(content.to_payload()), _utc_now_iso()),
                )
        except sqlite3.Error as exc:
            raise ActivityStoreError(f"Failed to create activity: {exc}") from exc

    async def list_activities(self, session_id: str, after: str | None = None) -> ActivityPage:
        query = "SELECT id, session_id, type, content_json, created_at FROM activities WHERE session_id = ?"
        params: list[object] = [session_id]
        if after is not None:
            query += " AND id < ?"
            params.append(int(after))
        query += " ORDER BY id DESC LIMIT ?"
        params.append(self._page_size + 1)

        try:
            with self._connect() as conn:
                rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as exc:
            raise ActivityStoreError(f"Failed to list activities: {exc}") from exc

        has_more = len(rows) > self._page_size
        rows = rows[: self._page_size]
        records = [
            ActivityRecord(
                id=str(row["id"]),
                session_id=row["session_id"],
                type=ActivityType(row["type"]),
                content=json.loads(row["content_json"]),
                created_at=datetime.fromisoformat(row["created_at"]),
            )
            for row in rows
        ]
        next_cursor = records[-1].id if has_more and records else None
        return ActivityPage(records=records, next_cursor=next_cursor)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
