"""Language Context - Owns the active language and drives register/lookup/dispatch."""

import logging
from typing import Optional

from PySide6.QtCore import QObject, QThreadPool, QTimer, Signal, Slot

from clinic_i18n.core import RegistrationTracker, TranslationStore
from clinic_i18n.exceptions import TranslationContextError
from clinic_i18n.services import BatchDispatcher, DispatchOutcome, SettingsManager
from clinic_i18n.services.api_workers import DispatchWorker

logger = logging.getLogger(__name__)


class _DispatchRequest(QObject):
    """Helper class to hold dispatch request context and handle results safely."""

    def __init__(self, language: str, parent: "LanguageContext"):
        super().__init__()
        self.language = language
        self.parent_ref = parent

    @Slot(object)
    def on_dispatch_result(self, outcome):
        """Handle dispatch outcome safely."""
        context = self.parent_ref
        if context:
            try:
                context._handle_dispatch_result(outcome, self.language)
            except RuntimeError:
                # Context might be destroyed, ignore
                pass

    @Slot(str)
    def on_dispatch_error(self, error: str):
        """Handle dispatch error safely."""
        context = self.parent_ref
        if context:
            try:
                context._handle_dispatch_error(error, self.language)
            except RuntimeError:
                pass


class LanguageContext(QObject):
    """
    Session-wide translation context for every widget.

    Responsibilities:
    - Hold the active language and persist the user's choice.
    - `register`/`lookup` during rendering: synchronous, no I/O.
    - After a rendering pass settles, hand the pending set to a DispatchWorker.
    - Keep at most one dispatch in flight per language; strings registered
      meanwhile wait for the next cycle.
    - Apply dispatch outcomes on the GUI thread and tell widgets to re-render.
    """

    language_changed = Signal(str)
    translations_updated = Signal(str)
    dispatch_started = Signal(str)
    dispatch_finished = Signal(str)
    dispatch_failed = Signal(str, str)

    def __init__(
        self,
        dispatcher: BatchDispatcher,
        settings_manager: SettingsManager,
        store: Optional[TranslationStore] = None,
        tracker: Optional[RegistrationTracker] = None,
        thread_pool: Optional[QThreadPool] = None,
        flush_delay_ms: Optional[int] = None,
        language: Optional[str] = None,
    ):
        super().__init__()

        self.dispatcher = dispatcher
        self.settings_manager = settings_manager
        self.store = store if store is not None else TranslationStore()
        self.tracker = tracker if tracker is not None else RegistrationTracker(
            self.store, settings_manager.get_source_language()
        )

        self._language = language or settings_manager.get_language()
        self._closed = False

        # Thread pool for async dispatch I/O
        self.thread_pool = thread_pool if thread_pool is not None else QThreadPool.globalInstance()

        # Languages with a dispatch cycle in flight
        self._in_flight: set[str] = set()

        # Keep references to helper objects so they don't get garbage collected
        # while workers are running in background threads
        self._request_helpers: dict[str, _DispatchRequest] = {}

        if flush_delay_ms is None:
            flush_delay_ms = settings_manager.get_flush_delay_ms()
        self._flush_timer = QTimer(self)
        self._flush_timer.setSingleShot(True)
        self._flush_timer.setInterval(flush_delay_ms)
        self._flush_timer.timeout.connect(self.render_pass_settled)

    @property
    def language(self) -> str:
        return self._language

    @property
    def source_language(self) -> str:
        return self.tracker.source_language

    @property
    def is_closed(self) -> bool:
        return self._closed

    def is_dispatching(self, language: Optional[str] = None) -> bool:
        """True if a cycle is in flight for `language` (default: the active one)."""
        return (language or self._language) in self._in_flight

    def set_language(self, language: str) -> None:
        """
        Switch the active language.

        An in-flight dispatch for the previous language is left to finish; its
        results still land in the store under that language.
        """
        self._ensure_open()
        if language == self._language:
            return

        logger.info("Switching UI language %s -> %s", self._language, language)
        self._language = language
        self.settings_manager.set_language(language)
        self.language_changed.emit(language)

        if self.tracker.has_pending(language):
            self._schedule_flush()

    def register(self, source_text: str) -> None:
        """
        Note that `source_text` is displayed in the current rendering pass.

        Call on every render; repeated calls are free. Never blocks.
        """
        self._ensure_open()
        if self.tracker.register(self._language, source_text):
            self._schedule_flush()

    def lookup(self, source_text: str) -> str:
        """Text to display: the translation if known, otherwise the source text."""
        self._ensure_open()
        translated = self.store.get(self._language, source_text)
        return translated if translated else source_text

    def text(self, source_text: str) -> str:
        """Register and look up in one call, for widgets that build strings inline."""
        self.register(source_text)
        return self.lookup(source_text)

    @Slot()
    def render_pass_settled(self) -> None:
        """
        Called once the current rendering pass has committed.

        Starts a dispatch cycle for the active language if anything is pending
        and no cycle for that language is already running.
        """
        if self._closed:
            return

        self._flush_timer.stop()
        language = self._language

        if language in self._in_flight:
            # Picked up when the running cycle finishes
            return
        if not self.tracker.has_pending(language):
            return

        snapshot = self.tracker.take(language)
        known_keys = self.store.known_keys(language)
        api_key = self.settings_manager.get_provider_api_key()

        self._in_flight.add(language)
        self.dispatch_started.emit(language)
        logger.debug("Dispatching %d strings for %s", len(snapshot), language)

        # Run I/O in background thread
        worker = DispatchWorker(
            dispatcher=self.dispatcher,
            language=language,
            snapshot=snapshot,
            known_keys=known_keys,
            api_key=api_key,
        )

        # Use helper object to manage signal connections safely
        # IMPORTANT: Store reference so it doesn't get garbage collected while worker runs
        request_helper = _DispatchRequest(language, self)
        self._request_helpers[language] = request_helper

        worker.signals.dispatch_result.connect(request_helper.on_dispatch_result)
        worker.signals.error.connect(request_helper.on_dispatch_error)

        # Start the worker
        self.thread_pool.start(worker)

    def close(self) -> None:
        """End the session: drop cached translations and pending work."""
        if self._closed:
            return
        self._closed = True
        self._flush_timer.stop()
        self.store.clear()
        self.tracker.clear()
        self._request_helpers.clear()
        self._in_flight.clear()

    def _handle_dispatch_result(self, outcome: DispatchOutcome, language: str) -> None:
        """
        Handle dispatch outcome from worker thread (runs in main thread).

        Args:
            outcome: What the cycle resolved
            language: Language the cycle ran for
        """
        self._finish_cycle(language)
        if self._closed:
            return

        changed = self.dispatcher.apply(self.store, outcome)
        logger.info(
            "Dispatch for %s done: %d new entries, %d unresolved",
            language, changed, len(outcome.unresolved),
        )

        if outcome.provider_error:
            self.dispatch_failed.emit(language, outcome.provider_error)
        self.dispatch_finished.emit(language)

        if changed:
            self.translations_updated.emit(language)

        self._continue_pending(language)

    def _handle_dispatch_error(self, error: str, language: str) -> None:
        """
        Handle unexpected worker error.

        The snapshot is lost; its strings are still absent from the store, so
        the next render registers them again.
        """
        self._finish_cycle(language)
        if self._closed:
            return

        logger.error("Dispatch for %s failed: %s", language, error)
        self.dispatch_failed.emit(language, error)
        self.dispatch_finished.emit(language)
        self._continue_pending(language)

    def _finish_cycle(self, language: str) -> None:
        self._in_flight.discard(language)
        self._request_helpers.pop(language, None)

    def _continue_pending(self, language: str) -> None:
        """Start the next cycle if strings arrived while this one was running."""
        if language == self._language and self.tracker.has_pending(language):
            self._schedule_flush()

    def _schedule_flush(self) -> None:
        if not self._flush_timer.isActive():
            self._flush_timer.start()

    def _ensure_open(self) -> None:
        if self._closed:
            raise TranslationContextError("LanguageContext used after close()")


_installed_context: Optional[LanguageContext] = None


def install_context(context: Optional[LanguageContext]) -> None:
    """Make `context` the one returned by current_context() and used by tr()."""
    global _installed_context
    _installed_context = context


def current_context() -> LanguageContext:
    """
    The installed LanguageContext.

    Raises:
        TranslationContextError: No context has been installed.
    """
    if _installed_context is None:
        raise TranslationContextError("No LanguageContext installed; call install_context() at startup")
    return _installed_context


def tr(source_text: str) -> str:
    """Register and translate `source_text` against the installed context."""
    return current_context().text(source_text)
