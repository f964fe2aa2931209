"""Async workers for non-blocking dispatch using Qt threading."""

from typing import Iterable, Optional, Sequence

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

from clinic_i18n.services.batch_dispatcher import BatchDispatcher


class WorkerSignals(QObject):
    """
    Signals for communicating results from worker threads.

    QRunnable doesn't inherit from QObject, so we need a separate
    QObject to hold the signals.
    """
    finished = Signal()
    error = Signal(str)
    dispatch_result = Signal(object)  # DispatchOutcome


class DispatchWorker(QRunnable):
    """
    Worker that runs one dispatch cycle's I/O in a background thread.

    Receives an immutable snapshot of pending strings and known keys; the
    session store is only touched later, on the GUI thread, by whoever
    receives `dispatch_result`.
    """

    def __init__(
        self,
        dispatcher: BatchDispatcher,
        language: str,
        snapshot: Sequence[str],
        known_keys: Iterable[str],
        api_key: Optional[str],
    ):
        super().__init__()
        self.dispatcher = dispatcher
        self.language = language
        self.snapshot = tuple(snapshot)
        self.known_keys = frozenset(known_keys)
        self.api_key = api_key
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        """Resolve the snapshot against the gateway and provider."""
        try:
            outcome = self.dispatcher.resolve(
                language=self.language,
                snapshot=self.snapshot,
                known_keys=self.known_keys,
                api_key=self.api_key,
            )
            self.signals.dispatch_result.emit(outcome)
        except Exception as e:
            # Catch any unexpected exceptions not handled by the dispatcher
            self.signals.error.emit(f"Unexpected dispatch error: {str(e)}")
        finally:
            self.signals.finished.emit()
