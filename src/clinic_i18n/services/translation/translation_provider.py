"""Translation Provider - Abstract batch translator for UI strings."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence


@dataclass
class BatchTranslationResult:
    """Result of a batch translation request."""

    texts: list[str] = field(default_factory=list)
    model: str = ""
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """True if translation failed."""
        return self.error is not None


class TranslationProvider(ABC):
    """
    Abstract service translating a batch of source-language strings.

    Implementations (GoogleTranslateProvider, GeminiTranslationProvider) handle
    the API calls. They report failures through BatchTranslationResult.error
    rather than raising; on success `texts` has the same length and order as
    the request.
    """

    @abstractmethod
    def translate_batch(
        self,
        texts: Sequence[str],
        target_language: str,
        api_key: str,
        source_language: str = "en",
    ) -> BatchTranslationResult:
        """
        Translate every string in one request.

        Args:
            texts: Source strings, in the order results must come back.
            target_language: Language code to translate into.
            api_key: Provider API key for authentication.
            source_language: Language the strings are written in.

        Returns:
            BatchTranslationResult with translated texts or error message.
        """
        pass
