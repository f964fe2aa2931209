"""Gemini Translation Provider - Batch UI-string translation via Google Gemini API."""

import json
import logging
import time
from typing import Sequence

import google.genai as genai
from google.genai import types

from clinic_i18n.core.language import display_name
from clinic_i18n.services.translation.translation_provider import BatchTranslationResult, TranslationProvider

logger = logging.getLogger(__name__)


class GeminiTranslationProvider(TranslationProvider):
    """
    Translation provider using Google Gemini API.

    The batch is sent as a JSON array and the model is asked for a JSON array
    of the same length back. Low temperature keeps short UI labels consistent.
    """

    MODEL_NAME = "gemini-2.0-flash"

    TRANSLATION_PROMPT = """Translate each user-interface string in the JSON array below from {source} to {target}.
These are labels, buttons and messages of a clinical application; keep them short and natural.
Return only a JSON array of strings with exactly {count} items, in the same order as the input.

Input:
{payload}"""

    def __init__(self, max_retries: int = 3, retry_delay: float = 2.0):
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    def translate_batch(
        self,
        texts: Sequence[str],
        target_language: str,
        api_key: str,
        source_language: str = "en",
    ) -> BatchTranslationResult:
        """
        Translate a batch of UI strings using Gemini API.

        Args:
            texts: Source strings, in request order.
            target_language: Language code to translate into.
            api_key: Gemini API key for authentication.
            source_language: Language the strings are written in.

        Returns:
            BatchTranslationResult with translated texts or error message.
        """
        if not texts:
            return BatchTranslationResult(texts=[], model=self.MODEL_NAME)

        prompt = self.TRANSLATION_PROMPT.format(
            source=display_name(source_language),
            target=display_name(target_language),
            count=len(texts),
            payload=json.dumps(list(texts), ensure_ascii=False),
        )

        retry_delay = self.retry_delay
        attempt = 0

        while attempt < self.max_retries:
            attempt += 1
            try:
                client = genai.Client(api_key=api_key)
                logger.debug(
                    "Gemini batch request attempt %d/%d: %d strings to %s",
                    attempt, self.max_retries, len(texts), target_language,
                )

                response = client.models.generate_content(
                    model=self.MODEL_NAME,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        temperature=0.2,
                        top_p=0.95,
                        max_output_tokens=8192,
                        response_mime_type="application/json",
                    ),
                )

                if not response.text:
                    return self._error("Empty response from API")

                return self._parse_response(response.text)

            except Exception as e:
                error_msg = str(e).lower()
                logger.warning(
                    "Gemini batch attempt %d/%d failed (%s): %s",
                    attempt, self.max_retries, type(e).__name__, e,
                )

                is_rate_limit = (
                    "429" in error_msg
                    or "resource_exhausted" in error_msg
                    or "quota" in error_msg
                    or "rate_limit" in error_msg
                )

                if is_rate_limit and attempt < self.max_retries:
                    logger.info("Rate limit detected. Retrying in %s seconds...", retry_delay)
                    time.sleep(retry_delay)
                    retry_delay *= 2  # Exponential backoff
                    continue

                if "api_key" in error_msg or "authentication" in error_msg or "invalid" in error_msg:
                    return self._error(f"Invalid API key or request: {e}")
                elif is_rate_limit:
                    return self._error("API quota exceeded. Please try again later.")
                elif "deadline" in error_msg or "timeout" in error_msg:
                    return self._error("Request timed out. Please check your connection.")
                else:
                    return self._error(f"Translation failed: {e}")

        return self._error("Translation failed: retries exhausted")

    def _parse_response(self, raw: str) -> BatchTranslationResult:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            return self._error(f"Response is not valid JSON: {e}")

        if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
            return self._error("Response is not a JSON array of strings")

        return BatchTranslationResult(texts=[item.strip() for item in parsed], model=self.MODEL_NAME)

    def _error(self, message: str) -> BatchTranslationResult:
        return BatchTranslationResult(texts=[], model=self.MODEL_NAME, error=message)
