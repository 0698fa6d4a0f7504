# tests/conftest.py
"""
Pytest configuration and fixtures.
Qt runs on the offscreen platform so the widgets can be built without a display.
"""

import os
import sys
import time
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QApplication

from achievement_app.storage import DashboardStorage, MemoryStore


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def storage(memory_store):
    return DashboardStorage(memory_store)


def wait_until(predicate, timeout_ms: int = 2000) -> bool:
    deadline = time.monotonic() + timeout_ms / 1000
    while time.monotonic() < deadline:
        if predicate():
            return True
        QTest.qWait(10)
    return predicate()


@pytest.fixture
def wait_for(qapp):
    return wait_until
