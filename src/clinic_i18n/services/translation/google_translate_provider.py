"""Google Translate Provider - Batch translation via the Cloud Translation v2 REST API."""

import logging
from typing import Optional, Sequence

import requests

from clinic_i18n.services.translation.translation_provider import BatchTranslationResult, TranslationProvider

logger = logging.getLogger(__name__)


class GoogleTranslateProvider(TranslationProvider):
    """
    Translation provider posting the whole batch as repeated `q` values.

    The v2 endpoint returns `data.translations` in request order, one item
    per input string.
    """

    ENDPOINT = "https://translation.googleapis.com/language/translate/v2"
    MODEL_NAME = "google-translate-v2"

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 10.0):
        self._session = session or requests.Session()
        self.timeout = timeout

    def translate_batch(
        self,
        texts: Sequence[str],
        target_language: str,
        api_key: str,
        source_language: str = "en",
    ) -> BatchTranslationResult:
        if not texts:
            return BatchTranslationResult(texts=[], model=self.MODEL_NAME)

        logger.info("Requesting %d translations %s->%s", len(texts), source_language, target_language)
        try:
            response = self._session.post(
                self.ENDPOINT,
                params={"key": api_key},
                json={
                    "q": list(texts),
                    "target": target_language,
                    "source": source_language,
                    "format": "text",
                },
                timeout=self.timeout,
            )
        except requests.Timeout:
            return self._error("Request timed out. Please check your connection.")
        except requests.RequestException as e:
            return self._error(f"Translation request failed: {e}")

        if response.status_code in (401, 403):
            return self._error(f"Invalid API key or request (HTTP {response.status_code})")
        if response.status_code == 429:
            return self._error("API quota exceeded. Please try again later.")
        if not response.ok:
            return self._error(f"Translation API responded with {response.status_code}")

        try:
            items = response.json()["data"]["translations"]
            translated = [item["translatedText"] for item in items]
        except (ValueError, KeyError, TypeError) as e:
            return self._error(f"Malformed translation response: {e}")

        return BatchTranslationResult(texts=translated, model=self.MODEL_NAME)

    def _error(self, message: str) -> BatchTranslationResult:
        logger.error("Google Translate batch failed: %s", message)
        return BatchTranslationResult(texts=[], model=self.MODEL_NAME, error=message)
