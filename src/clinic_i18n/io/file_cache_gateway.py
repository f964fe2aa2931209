"""File-based cache gateway storing one JSON document per language."""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from clinic_i18n.exceptions import CacheGatewayError
from clinic_i18n.io.cache_gateway import CacheGateway

logger = logging.getLogger(__name__)


class FileCacheGateway(CacheGateway):
    """
    Gateway keeping each language document as `ui_<language>.json` in a directory.

    Point several clients at the same (network) directory to share the cache.
    Writes re-read the document, union the new keys in and atomically replace
    the file, so entries written by others since our last read survive.

    Format:
    {
        "version": 1,
        "language": "he",
        "updated_at": "2026-01-19T12:34:56+00:00",
        "entries": {
            "Patient name": "שם המטופל"
        }
    }
    """

    CACHE_VERSION = 1
    DOCUMENT_PREFIX = "ui_"

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self._lock = threading.Lock()

    def read_all(self, language: str) -> dict[str, str]:
        """Load the language document, or {} if it does not exist yet."""
        with self._lock:
            return self._load_entries(language)

    def merge_write(self, language: str, entries: Mapping[str, str]) -> None:
        """Union entries into the document without replacing existing keys."""
        if not entries:
            return

        with self._lock:
            stored = self._load_entries(language)
            added = 0
            for source_text, translated_text in entries.items():
                if source_text not in stored:
                    stored[source_text] = translated_text
                    added += 1

            if added == 0:
                return

            data = {
                "version": self.CACHE_VERSION,
                "language": language,
                "updated_at": datetime.now(timezone.utc).isoformat(),
                "entries": stored,
            }
            self._write_document(language, data)
            logger.debug("Merged %d new entries into %s", added, self._document_path(language))

    def _load_entries(self, language: str) -> dict[str, str]:
        path = self._document_path(language)
        if not path.exists():
            return {}

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            raise CacheGatewayError(
                f"Error reading cache document {path}: {e}",
                language=language,
                operation="read",
            ) from e

        entries = data.get("entries", {}) if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            raise CacheGatewayError(
                f"Malformed cache document {path}: 'entries' is not an object",
                language=language,
                operation="read",
            )
        return {str(key): str(value) for key, value in entries.items()}

    def _write_document(self, language: str, data: dict) -> None:
        path = self._document_path(language)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=path.name, suffix=".tmp", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, indent=2, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise CacheGatewayError(
                f"Error writing cache document {path}: {e}",
                language=language,
                operation="write",
            ) from e

    def _document_path(self, language: str) -> Path:
        """Get the document path for a given language."""
        return self.directory / f"{self.DOCUMENT_PREFIX}{language}.json"
