"""Cache Gateway abstraction - shared persistent store of UI translations."""

from abc import ABC, abstractmethod
from typing import Mapping


class CacheGateway(ABC):
    """
    Abstract interface to the persistent, multi-writer translation cache.

    One logical document per target language, shaped {source_text: translated_text}.
    Every client in the fleet reads and writes the same documents, so writes
    are additive merges: a key that already holds a value is never replaced.

    Implementations (InMemoryCacheGateway, FileCacheGateway, SqliteCacheGateway)
    raise CacheGatewayError on any storage failure.
    """

    @abstractmethod
    def read_all(self, language: str) -> dict[str, str]:
        """
        Fetch the full persisted translation map for a language.

        Args:
            language: Target language code.

        Returns:
            Mapping of source text to translated text. Empty if no document
            exists for the language yet.
        """
        pass

    @abstractmethod
    def merge_write(self, language: str, entries: Mapping[str, str]) -> None:
        """
        Union new entries into the language document.

        Keys already present keep their stored value (first writer wins).
        Keys written concurrently by other clients are never removed.

        Args:
            language: Target language code.
            entries: Mapping of source text to translated text.
        """
        pass

    def close(self) -> None:
        """Release any held resources."""
