from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import ClassVar, Sequence

from catalog_routes.content.domain.models import ContentKey
from catalog_routes.synthesis.application.contracts import ArtifactEntry
from catalog_routes.synthesis.application.ports import ManifestStorePort


class SQLiteManifestStore(ManifestStorePort):
    """Per-build artifact manifest. Every run replaces the whole table."""

    RECOVERY_SUFFIX: ClassVar[str] = ".corrupt"

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path))
        try:
            self._ensure_schema()
        except Exception:
            self._conn.close()
            raise

    @classmethod
    def create_with_recovery(cls, db_path: str | Path) -> tuple[SQLiteManifestStore, bool, str | None]:
        try:
            return cls(db_path), False, None
        except sqlite3.DatabaseError:
            original = Path(db_path)
            if not original.exists():
                raise
            backup = original.with_suffix(
                f"{original.suffix}{cls.RECOVERY_SUFFIX}.{datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S')}"
            )
            original.replace(backup)
            return cls(db_path), True, str(backup)

    def _ensure_schema(self) -> None:
        cur = self._conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS artifacts (
                locale TEXT NOT NULL,
                content_type TEXT NOT NULL,
                brand_slug TEXT NOT NULL DEFAULT '',
                item_id TEXT NOT NULL,
                file_path TEXT NOT NULL UNIQUE,
                origin TEXT NOT NULL CHECK (origin IN ('build', 'synthesized')),
                recorded_at TEXT NOT NULL,
                PRIMARY KEY (locale, content_type, brand_slug, item_id)
            )
            """
        )
        self._conn.commit()

    def replace_all(self, entries: Sequence[ArtifactEntry]) -> None:
        recorded_at = datetime.now(timezone.utc).isoformat()
        cur = self._conn.cursor()
        try:
            cur.execute("BEGIN IMMEDIATE")
            cur.execute("DELETE FROM artifacts")
            cur.executemany(
                """
                INSERT INTO artifacts (locale, content_type, brand_slug, item_id, file_path, origin, recorded_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        e.content_key.locale,
                        e.content_key.content_type,
                        e.content_key.brand_slug or "",
                        e.content_key.item_id,
                        e.file_path,
                        e.origin,
                        recorded_at,
                    )
                    for e in entries
                ],
            )
            self._conn.commit()
        except sqlite3.Error:
            self._conn.rollback()
            raise

    def list_entries(self) -> list[ArtifactEntry]:
        cur = self._conn.cursor()
        cur.execute(
            """
            SELECT locale, content_type, brand_slug, item_id, file_path, origin
            FROM artifacts
            ORDER BY locale, brand_slug, content_type, item_id
            """
        )
        return [
            ArtifactEntry(
                content_key=ContentKey(
                    locale=str(row[0]),
                    content_type=row[1],
                    item_id=str(row[3]),
                    brand_slug=str(row[2]) or None,
                ),
                file_path=str(row[4]),
                origin=row[5],
            )
            for row in cur.fetchall()
        ]

    def close(self) -> None:
        self._conn.close()
