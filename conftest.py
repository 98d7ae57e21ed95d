"""Shared pytest fixtures for Qt application lifecycle."""

import sys

import pytest
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session")
def app():
    """Provide a single QCoreApplication for all tests."""
    instance = QCoreApplication.instance()
    if instance is None:
        instance = QCoreApplication(sys.argv)

    yield instance

    QCoreApplication.processEvents()


class ManualScheduler:
    """Collects scheduled callbacks so tests can run timers by hand."""

    def __init__(self):
        self.pending = []
        self.delays = []

    def __call__(self, delay_ms, callback):
        self.delays.append(delay_ms)
        self.pending.append(callback)

    def run_next(self):
        callback = self.pending.pop(0)
        callback()

    def run_all(self):
        while self.pending:
            self.run_next()


@pytest.fixture
def scheduler():
    return ManualScheduler()
