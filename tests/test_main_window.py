# tests/test_main_window.py

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path

import pytest

from tasklist.config import Settings
from tasklist.store.task_store import TaskStore
from tasklist.ui.main_window import (
    ALL_CATEGORIES_LABEL,
    NO_CATEGORY_LABEL,
    HIDE_COMPLETED_TEXT,
    SHOW_ALL_TEXT,
    AddEditTaskDialog,
    MainWindow,
)


@pytest.fixture()
def window(qapp, store: TaskStore):
    win = MainWindow(store=store, settings=Settings(app_name="Test"))
    yield win
    win.close()
    win.deleteLater()


def _ids(win: MainWindow) -> list[str]:
    return [t.id for t in win.visible_tasks()]


def _rendered_ids(win: MainWindow) -> list[str]:
    from PySide6.QtCore import Qt

    return [win.task_list.item(i).data(Qt.UserRole) for i in range(win.task_list.count())]


def test_initial_render(window: MainWindow) -> None:
    assert window.windowTitle() == "Test"
    assert _rendered_ids(window) == ["1", "2"]
    assert window.total_label.text() == "2"
    assert window.completed_label.text() == "1"
    assert window.remaining_label.text() == "1"
    assert window.toggle_completed_btn.text() == HIDE_COMPLETED_TEXT
    assert window.empty_state.isHidden()
    assert not window.task_list.isHidden()


def test_category_options_derived_from_store(window: MainWindow) -> None:
    cb = window.category_cb
    labels = [cb.itemText(i) for i in range(cb.count())]
    values = [cb.itemData(i) for i in range(cb.count())]
    assert labels == [ALL_CATEGORIES_LABEL, "Personal", "Work"]
    assert values == ["all", "Personal", "Work"]


def test_search_field_filters(window: MainWindow) -> None:
    window.search.setText("milk")
    assert window.search_term == "milk"
    assert _rendered_ids(window) == ["1"]
    window.search.setText("")
    assert _rendered_ids(window) == ["1", "2"]


def test_category_selection_filters(window: MainWindow) -> None:
    window.category_cb.setCurrentIndex(window.category_cb.findData("Work"))
    assert window.category_filter == "Work"
    assert _rendered_ids(window) == ["2"]


def test_visibility_toggle(window: MainWindow) -> None:
    window.toggle_completed_btn.click()
    assert window.show_completed is False
    assert window.toggle_completed_btn.text() == SHOW_ALL_TEXT
    assert _rendered_ids(window) == ["1"]
    window.toggle_completed_btn.click()
    assert _rendered_ids(window) == ["1", "2"]


def test_checkbox_toggles_completion_and_stats(window: MainWindow, store: TaskStore) -> None:
    window.card_for("1").checkbox.click()
    assert store.get("1").completed is True
    assert window.completed_label.text() == "2"
    assert window.remaining_label.text() == "0"
    assert window.card_for("1").accent == "success"


def test_stats_ignore_filters(window: MainWindow) -> None:
    window.set_search_term("zzz")
    assert window.total_label.text() == "2"
    assert window.completed_label.text() == "1"


def test_delete_button(window: MainWindow, store: TaskStore) -> None:
    window.card_for("2").delete_btn.click()
    assert [t.id for t in store.list()] == ["1"]
    assert _rendered_ids(window) == ["1"]
    assert window.total_label.text() == "1"


def test_deleting_selected_category_falls_back_to_all(window: MainWindow) -> None:
    window.set_category_filter("Work")
    window.delete_task("2")
    assert window.category_filter == "all"
    cb = window.category_cb
    assert [cb.itemData(i) for i in range(cb.count())] == ["all", "Personal"]
    assert _rendered_ids(window) == ["1"]


def test_empty_state(window: MainWindow) -> None:
    window.set_search_term("nothing matches this")
    assert window.task_list.count() == 0
    assert window.task_list.isHidden()
    assert not window.empty_state.isHidden()
    window.set_search_term("")
    assert window.empty_state.isHidden()


def test_stale_id_actions_are_noops(window: MainWindow) -> None:
    window.delete_task("2")
    window.delete_task("2")
    window.toggle_task("2")
    assert _ids(window) == ["1"]


def test_add_and_edit_go_through_store(window: MainWindow, store: TaskStore) -> None:
    t = window.add_task(
        {"title": "Gym", "description": None, "priority": "low", "category": "Health", "due_date": None}
    )
    assert t is not None
    assert _rendered_ids(window)[-1] == t.id
    assert "Health" in [window.category_cb.itemData(i) for i in range(window.category_cb.count())]

    window.edit_task(t.id, {"title": "Gym session", "due_date": date(2024, 5, 1)})
    assert store.get(t.id).title == "Gym session"
    card = window.card_for(t.id)
    assert card.title_label.text() == "Gym session"
    assert card.due_badge.text() == "01/05/2024"


def test_card_rendering(window: MainWindow) -> None:
    card = window.card_for("2")
    assert card.checkbox.isChecked()
    assert card.title_label.font().strikeOut()
    assert card.desc_label.text() == "Quarterly numbers"
    assert card.priority_badge.text() == "Cao"
    assert card.category_badge.text() == "Work"
    assert card.due_badge is None

    active = window.card_for("1")
    assert not active.title_label.font().strikeOut()
    assert active.desc_label is None
    assert active.accent == "primary"


def test_export_visible_csv(window: MainWindow, tmp_path: Path) -> None:
    window.set_category_filter("Work")
    path = tmp_path / "out.csv"
    assert window.export_visible(path) == 1
    with path.open(encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["id"] for r in rows] == ["2"]


def test_dialog_collects_data(qapp) -> None:
    dlg = AddEditTaskDialog(categories=["all", "Work"])
    assert [dlg.category_cb.itemText(i) for i in range(dlg.category_cb.count())] == ["Work"]
    assert dlg.priority_cb.currentData() == "medium"

    dlg.title_edit.setText("  New thing ")
    dlg.desc_edit.setPlainText("")
    dlg.priority_cb.setCurrentIndex(dlg.priority_cb.findData("high"))
    dlg.category_cb.setCurrentText("Work")
    dlg.no_due_cb.setChecked(True)
    data = dlg.get_task_data()
    assert data == {
        "title": "New thing",
        "description": None,
        "priority": "high",
        "category": "Work",
        "due_date": None,
    }
    assert not dlg.due_date.isEnabled()


def test_dialog_loads_existing_task(qapp, store: TaskStore) -> None:
    t = store.get("2")
    t.due_date = date(2024, 1, 18)
    dlg = AddEditTaskDialog(task=t, categories=store.categories())
    data = dlg.get_task_data()
    assert data["title"] == "Write report"
    assert data["priority"] == "high"
    assert data["category"] == "Work"
    assert data["due_date"] == date(2024, 1, 18)
    assert dlg.windowTitle() == "Sửa task"


def test_uncategorized_task_gets_placeholder_label(window: MainWindow) -> None:
    t = window.add_task({"title": "Loose end", "category": ""})
    cb = window.category_cb
    idx = cb.findData("")
    assert cb.itemText(idx) == NO_CATEGORY_LABEL
    assert window.card_for(t.id).category_badge.text() == NO_CATEGORY_LABEL

    cb.setCurrentIndex(idx)
    assert window.category_filter == ""
    assert _rendered_ids(window) == [t.id]
