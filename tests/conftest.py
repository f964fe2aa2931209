"""Shared fixtures: a Qt application and a thread pool that runs workers inline."""

import os
from unittest.mock import MagicMock

import pytest
from PySide6.QtWidgets import QApplication


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """Ensure a QApplication exists for signals, timers and widgets."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


class SyncThreadPool:
    """Stands in for QThreadPool: runs each worker immediately on the calling thread."""

    def __init__(self, hold: bool = False):
        self.hold = hold
        self.started = []

    def start(self, worker):
        self.started.append(worker)
        if not self.hold:
            worker.run()

    def run_held(self):
        """Run workers queued while `hold` was set, in start order."""
        held, self.started = self.started, []
        for worker in held:
            worker.run()


@pytest.fixture
def sync_pool():
    return SyncThreadPool()


@pytest.fixture
def settings_manager():
    """Provide a settings manager stub with a provider key configured."""
    manager = MagicMock()
    manager.get_source_language = MagicMock(return_value="en")
    manager.get_language = MagicMock(return_value="he")
    manager.get_provider_api_key = MagicMock(return_value="test-key-123")
    manager.get_flush_delay_ms = MagicMock(return_value=50)
    manager.set_language = MagicMock()
    return manager


@pytest.fixture
def held_pool():
    """Thread pool that queues workers until run_held() is called."""
    return SyncThreadPool(hold=True)
