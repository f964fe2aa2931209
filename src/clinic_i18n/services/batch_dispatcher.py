"""Batch Dispatcher - Resolves pending UI strings against the shared cache and the provider."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from clinic_i18n.core.language import SOURCE_LANGUAGE
from clinic_i18n.core.registration_tracker import RegistrationTracker
from clinic_i18n.core.translation_store import TranslationStore
from clinic_i18n.exceptions import CacheGatewayError
from clinic_i18n.io.cache_gateway import CacheGateway
from clinic_i18n.services.text_processing import clean_translation
from clinic_i18n.services.translation.translation_provider import TranslationProvider

logger = logging.getLogger(__name__)


@dataclass
class DispatchOutcome:
    """Everything one dispatch cycle learned, ready to be applied to a TranslationStore."""

    language: str
    requested: list[str]
    persisted: dict[str, str] = field(default_factory=dict)
    translated: dict[str, str] = field(default_factory=dict)
    unresolved: list[str] = field(default_factory=list)
    provider_called: bool = False
    read_error: Optional[str] = None
    provider_error: Optional[str] = None
    write_error: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """True if every requested string now has a translation."""
        return not self.unresolved


class BatchDispatcher:
    """
    Turns one pending snapshot into at most one provider call.

    Cycle:
    1. Read the language document from the persistent gateway (once).
    2. Anything already known, locally or persistently, is not sent.
    3. Send the remaining strings to the provider in a single ordered batch.
    4. Pair results by position; a length mismatch discards the whole batch.
    5. Merge new pairs back into the gateway, best effort.

    `resolve` does the I/O and never touches a TranslationStore, so it can run
    on a worker thread. `apply` merges an outcome into the store on the thread
    that owns it. Gateway and provider failures are logged and recorded on the
    outcome; they never propagate.
    """

    def __init__(
        self,
        gateway: CacheGateway,
        provider: Optional[TranslationProvider] = None,
        source_language: str = SOURCE_LANGUAGE,
        postprocess: Callable[[str, str], str] = clean_translation,
    ):
        self.gateway = gateway
        self.provider = provider
        self.source_language = source_language
        self.postprocess = postprocess

    def resolve(
        self,
        language: str,
        snapshot: Sequence[str],
        known_keys: Iterable[str] = (),
        api_key: Optional[str] = None,
    ) -> DispatchOutcome:
        """
        Resolve a snapshot of pending strings for one language.

        Args:
            language: Target language of the snapshot.
            snapshot: Pending source strings, in registration order.
            known_keys: Source strings the session store already holds.
            api_key: Provider key; None means the provider is not configured.

        Returns:
            DispatchOutcome describing persisted entries, new translations
            and anything left unresolved.
        """
        outcome = DispatchOutcome(language=language, requested=list(snapshot))
        if not snapshot:
            return outcome

        try:
            outcome.persisted = self.gateway.read_all(language)
            logger.info(
                "Persistent cache for %s holds %d strings", language, len(outcome.persisted)
            )
        except CacheGatewayError as e:
            # Treated as an empty persistent cache: costlier, still correct.
            outcome.read_error = str(e)
            logger.warning("Persistent cache read failed for %s, falling back to provider: %s", language, e)

        resolved = set(known_keys)
        resolved.update(key for key, value in outcome.persisted.items() if value)
        missing = _dedupe(source for source in snapshot if source not in resolved)

        logger.info(
            "Batch for %s: %d requested, %d to translate via provider",
            language, len(snapshot), len(missing),
        )
        if not missing:
            return outcome

        if self.provider is None or not api_key:
            logger.warning("No translation provider configured; %d strings stay in %s", len(missing), self.source_language)
            outcome.unresolved = missing
            return outcome

        outcome.provider_called = True
        try:
            result = self.provider.translate_batch(
                missing, language, api_key, source_language=self.source_language
            )
        except Exception as e:
            logger.exception("Translation provider raised for %s", language)
            outcome.provider_error = f"Translation failed: {e}"
            outcome.unresolved = missing
            return outcome

        if result.is_error:
            logger.error("Translation provider failed for %s: %s", language, result.error)
            outcome.provider_error = result.error
            outcome.unresolved = missing
            return outcome

        if len(result.texts) != len(missing):
            outcome.provider_error = (
                f"Provider returned {len(result.texts)} translations for {len(missing)} strings"
            )
            logger.error("Discarding batch for %s: %s", language, outcome.provider_error)
            outcome.unresolved = missing
            return outcome

        for source, translated in zip(missing, result.texts):
            translated = self.postprocess(translated, language)
            if translated:
                outcome.translated[source] = translated
            else:
                outcome.unresolved.append(source)

        if outcome.translated:
            try:
                self.gateway.merge_write(language, outcome.translated)
            except CacheGatewayError as e:
                # The session store still gets the values; the next session pays again.
                outcome.write_error = str(e)
                logger.warning("Persistent cache write failed for %s: %s", language, e)

        return outcome

    def apply(self, store: TranslationStore, outcome: DispatchOutcome) -> int:
        """
        Merge an outcome into the session store.

        Returns:
            Number of entries that were added or changed.
        """
        persisted = {key: value for key, value in outcome.persisted.items() if value}
        changed = store.merge(outcome.language, persisted)
        changed += store.merge(outcome.language, outcome.translated)
        return changed

    def dispatch(
        self,
        store: TranslationStore,
        tracker: RegistrationTracker,
        language: str,
        api_key: Optional[str] = None,
    ) -> Optional[DispatchOutcome]:
        """
        Run one whole cycle synchronously: take the pending set, resolve it, apply it.

        Returns:
            The outcome, or None if nothing was pending.
        """
        snapshot = tracker.take(language)
        if not snapshot:
            return None
        outcome = self.resolve(language, snapshot, store.known_keys(language), api_key)
        self.apply(store, outcome)
        return outcome


def _dedupe(sources: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(sources))
