"""In-memory cache gateway for testing and offline sessions."""

import threading
from typing import Mapping, Optional

from clinic_i18n.io.cache_gateway import CacheGateway


class InMemoryCacheGateway(CacheGateway):
    """
    Process-local gateway with the same merge semantics as the shared backends.

    Used for testing and when no persistent backend is configured. Thread-safe,
    since dispatch workers call it from the thread pool.
    """

    def __init__(self, documents: Optional[Mapping[str, Mapping[str, str]]] = None):
        # Structure: {language: {source_text: translated_text}}
        self._documents: dict[str, dict[str, str]] = {
            language: dict(entries) for language, entries in (documents or {}).items()
        }
        self._lock = threading.Lock()

    def read_all(self, language: str) -> dict[str, str]:
        with self._lock:
            return dict(self._documents.get(language, {}))

    def merge_write(self, language: str, entries: Mapping[str, str]) -> None:
        with self._lock:
            document = self._documents.setdefault(language, {})
            for source_text, translated_text in entries.items():
                document.setdefault(source_text, translated_text)

    def languages(self) -> list[str]:
        """Languages that have a document."""
        with self._lock:
            return list(self._documents)
