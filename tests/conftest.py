# tests/conftest.py

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from datetime import date

import pytest

from tasklist.models.task import Task
from tasklist.store.task_store import TaskStore


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the whole run; Qt allows only a single instance."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture()
def tasks() -> list[Task]:
    """The two-task scenario: one active personal task, one finished work task."""
    return [
        Task(id="1", title="Buy milk", category="Personal", completed=False,
             created_at=date(2024, 1, 1)),
        Task(id="2", title="Write report", description="Quarterly numbers",
             category="Work", completed=True, priority="high",
             created_at=date(2024, 1, 2)),
    ]


@pytest.fixture()
def store(tasks: list[Task]) -> TaskStore:
    return TaskStore(tasks)
