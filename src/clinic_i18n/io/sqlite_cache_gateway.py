"""SQLite-backed cache gateway shared by every client pointing at the same database."""

import logging
import sqlite3
from pathlib import Path
from typing import Mapping

from clinic_i18n.exceptions import CacheGatewayError
from clinic_i18n.io.cache_gateway import CacheGateway

logger = logging.getLogger(__name__)


class SqliteCacheGateway(CacheGateway):
    """
    Owns the `ui_translations` table and its merge-only write path.

    Merge writes use INSERT OR IGNORE on the (language, source_text) primary
    key, so concurrent writers from other processes can only add keys; the
    first stored value for a key wins. A connection is opened per operation
    because dispatch runs on pool threads.
    """

    def __init__(self, db_path: Path, timeout: float = 5.0) -> None:
        self.db_path = Path(db_path)
        self.timeout = timeout

    def ensure_schema(self) -> None:
        """Create the table if it does not exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with self._connect() as connection:
                connection.execute(
                    """
                    CREATE TABLE IF NOT EXISTS ui_translations (
                        language TEXT NOT NULL,
                        source_text TEXT NOT NULL,
                        translated_text TEXT NOT NULL,
                        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
                        PRIMARY KEY (language, source_text)
                    );
                    """
                )
        except (sqlite3.Error, OSError) as e:
            raise CacheGatewayError(
                f"Error creating schema in {self.db_path}: {e}", operation="schema"
            ) from e

    def read_all(self, language: str) -> dict[str, str]:
        try:
            with self._connect() as connection:
                rows = connection.execute(
                    """
                    SELECT source_text, translated_text
                    FROM ui_translations
                    WHERE language = ?
                    """,
                    (language,),
                ).fetchall()
        except sqlite3.Error as e:
            raise CacheGatewayError(
                f"Error reading translations for {language}: {e}",
                language=language,
                operation="read",
            ) from e
        return {row["source_text"]: row["translated_text"] for row in rows}

    def merge_write(self, language: str, entries: Mapping[str, str]) -> None:
        if not entries:
            return
        try:
            with self._connect() as connection:
                cur = connection.executemany(
                    """
                    INSERT OR IGNORE INTO ui_translations (language, source_text, translated_text)
                    VALUES (?, ?, ?)
                    """,
                    [(language, source, translated) for source, translated in entries.items()],
                )
                logger.debug("Merged %d of %d entries for %s", cur.rowcount, len(entries), language)
        except sqlite3.Error as e:
            raise CacheGatewayError(
                f"Error writing translations for {language}: {e}",
                language=language,
                operation="write",
            ) from e

    def count(self, language: str) -> int:
        """Number of stored entries for a language."""
        try:
            with self._connect() as connection:
                row = connection.execute(
                    "SELECT COUNT(*) FROM ui_translations WHERE language = ?", (language,)
                ).fetchone()
        except sqlite3.Error as e:
            raise CacheGatewayError(
                f"Error counting translations for {language}: {e}",
                language=language,
                operation="read",
            ) from e
        return row[0]

    def _connect(self) -> "_ConnectionScope":
        connection = sqlite3.connect(self.db_path, timeout=self.timeout)
        connection.row_factory = sqlite3.Row
        return _ConnectionScope(connection)


class _ConnectionScope:
    """Commit-or-rollback, then close. sqlite3's own context manager never closes."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection

    def __enter__(self) -> sqlite3.Connection:
        return self.connection

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self.connection.commit()
            else:
                self.connection.rollback()
        finally:
            self.connection.close()
