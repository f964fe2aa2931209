"""Unit tests for DispatchWorker."""

from unittest.mock import MagicMock

from clinic_i18n.services import DispatchOutcome, DispatchWorker


def test_worker_emits_outcome_and_finished():
    dispatcher = MagicMock()
    outcome = DispatchOutcome(language="he", requested=["a"], translated={"a": "A"})
    dispatcher.resolve.return_value = outcome
    worker = DispatchWorker(dispatcher, "he", ["a"], {"b"}, "test-key-123")

    results, finished = MagicMock(), MagicMock()
    worker.signals.dispatch_result.connect(results)
    worker.signals.finished.connect(finished)
    worker.run()

    dispatcher.resolve.assert_called_once_with(
        language="he", snapshot=("a",), known_keys=frozenset({"b"}), api_key="test-key-123"
    )
    results.assert_called_once_with(outcome)
    finished.assert_called_once()


def test_worker_reports_unexpected_errors():
    dispatcher = MagicMock()
    dispatcher.resolve.side_effect = ValueError("bad snapshot")
    worker = DispatchWorker(dispatcher, "he", ["a"], (), None)

    errors, finished = MagicMock(), MagicMock()
    worker.signals.error.connect(errors)
    worker.signals.finished.connect(finished)
    worker.run()

    errors.assert_called_once_with("Unexpected dispatch error: bad snapshot")
    finished.assert_called_once()


def test_worker_snapshots_are_immutable():
    snapshot = ["a"]
    worker = DispatchWorker(MagicMock(), "he", snapshot, ["x"], None)
    snapshot.append("b")
    assert worker.snapshot == ("a",)
    assert worker.known_keys == frozenset({"x"})
