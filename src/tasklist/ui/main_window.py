import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, Signal, QDate
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QListWidget,
    QListWidgetItem,
    QLineEdit,
    QDialog,
    QFormLayout,
    QComboBox,
    QTextEdit,
    QDateEdit,
    QDialogButtonBox,
    QMessageBox,
    QFileDialog,
    QMenuBar,
    QMenu,
    QAbstractItemView,
    QFrame,
    QStatusBar,
    QCheckBox,
)
from PySide6.QtGui import QFont, QAction

from tasklist.config import Settings
from tasklist.models.task import ALL_CATEGORIES, PRIORITIES, Task, TaskValidationError
from tasklist.services import export as export_service
from tasklist.services.filters import (
    card_accent,
    compute_stats,
    format_date,
    priority_label,
    priority_tier,
    visible,
)
from tasklist.store.task_store import TaskStore

logger = logging.getLogger(__name__)

# UI / UX constants
TIER_COLORS = {
    "destructive": "#ef4444",  # red
    "warning": "#f59e0b",  # amber
    "success": "#22c55e",  # green
    "primary": "#3b82f6",  # blue
    "muted": "#94a3b8",  # slate
}
ALL_CATEGORIES_LABEL = "Tất cả"
NO_CATEGORY_LABEL = "Chưa phân loại"
HIDE_COMPLETED_TEXT = "Ẩn hoàn thành"
SHOW_ALL_TEXT = "Hiện tất cả"
EMPTY_TITLE = "Không có task nào"
EMPTY_HINT = "Hãy tạo task đầu tiên của bạn!"

APP_STYLE = """
QFrame#header {
background: qlineargradient(spread:pad, x1:0, y1:0, x2:1, y2:1, stop:0 #2563eb, stop:1 #7c3aed);
border-radius: 12px;
}


QFrame#header QLabel {
color: white;
}


QFrame#taskCard,
QFrame#emptyState {
background: #ffffff;
border-radius: 10px;
border: 1px solid rgba(15, 23, 34, 0.08);
}


QFrame#taskCard[completed="true"] QLabel {
color: #64748b;
}


QListWidget {
background: transparent;
border: none;
}


QListWidget::item {
margin: 6px 0;
}


QListWidget::item:selected {
background: transparent;
}


QLabel.badge {
border-radius: 8px;
padding: 2px 8px;
font-size: 9pt;
}


QPushButton {
border: 1px solid #e6eef8;
padding: 6px 10px;
border-radius: 10px;
background: #ffffff;
}


QPushButton#addBtn {
background: qlineargradient(spread:pad, x1:0, y1:0, x2:1, y2:0, stop:0 #2563eb, stop:1 #3b82f6);
color: white;
border: none;
}


QPushButton#deleteBtn {
color: #ef4444;
}


QLineEdit,
QComboBox,
QDateEdit,
QTextEdit {
background: #fbfdff;
border: 1px solid #e6eef8;
border-radius: 8px;
padding: 6px;
}


QStatusBar {
background: transparent;
}
"""


def category_label(category: str) -> str:
    if category == ALL_CATEGORIES:
        return ALL_CATEGORIES_LABEL
    return category or NO_CATEGORY_LABEL


def _badge(text: str, tier: Optional[str] = None) -> QLabel:
    lbl = QLabel(text)
    lbl.setProperty("class", "badge")
    if tier:
        lbl.setStyleSheet(f"background: {TIER_COLORS[tier]}; color: white;")
    else:
        lbl.setStyleSheet("border: 1px solid #e2e8f0;")
    return lbl


class TaskCard(QFrame):
    """One rendered task: checkbox, text, badges and edit/delete buttons.

    The card only emits the task id; MainWindow applies the mutation and
    re-renders, so a card never outlives the state it was built from.
    """

    toggled = Signal(str)
    edit_requested = Signal(str)
    delete_requested = Signal(str)

    def __init__(self, task: Task, parent=None):
        super().__init__(parent)
        self.task_id = task.id
        self.setObjectName("taskCard")
        self.setProperty("completed", "true" if task.completed else "false")
        self.accent = card_accent(task)
        self.setStyleSheet(
            f"QFrame#taskCard {{ border-left: 4px solid {TIER_COLORS[self.accent]}; }}"
        )
        self._build(task)

    def _build(self, task: Task):
        row = QHBoxLayout(self)
        row.setContentsMargins(12, 10, 12, 10)

        self.checkbox = QCheckBox()
        self.checkbox.setChecked(task.completed)
        self.checkbox.clicked.connect(lambda: self.toggled.emit(self.task_id))
        row.addWidget(self.checkbox, 0, Qt.AlignTop)

        body = QVBoxLayout()
        self.title_label = QLabel(task.title)
        self.title_label.setWordWrap(True)
        fnt = QFont("Segoe UI Semibold", 12)
        fnt.setStrikeOut(task.completed)
        self.title_label.setFont(fnt)
        body.addWidget(self.title_label)

        self.desc_label = None
        if task.description:
            self.desc_label = QLabel(task.description)
            self.desc_label.setWordWrap(True)
            dfnt = self.desc_label.font()
            dfnt.setStrikeOut(task.completed)
            self.desc_label.setFont(dfnt)
            body.addWidget(self.desc_label)

        badges = QHBoxLayout()
        self.category_badge = _badge(category_label(task.category))
        self.priority_badge = _badge(
            priority_label(task.priority), priority_tier(task.priority)
        )
        badges.addWidget(self.category_badge)
        badges.addWidget(self.priority_badge)
        self.due_badge = None
        if task.due_date:
            self.due_badge = _badge(format_date(task.due_date))
            badges.addWidget(self.due_badge)
        badges.addStretch()
        body.addLayout(badges)
        row.addLayout(body, 1)

        self.edit_btn = QPushButton("Sửa")
        self.edit_btn.clicked.connect(lambda: self.edit_requested.emit(self.task_id))
        self.delete_btn = QPushButton("Xóa")
        self.delete_btn.setObjectName("deleteBtn")
        self.delete_btn.clicked.connect(lambda: self.delete_requested.emit(self.task_id))
        row.addWidget(self.edit_btn, 0, Qt.AlignTop)
        row.addWidget(self.delete_btn, 0, Qt.AlignTop)

        self.setToolTip(f"Tạo ngày: {format_date(task.created_at)}")


class AddEditTaskDialog(QDialog):
    def __init__(self, parent=None, task: Task = None, categories=None):
        super().__init__(parent)
        self.setWindowTitle("Sửa task" if task else "Thêm task")
        self.task = task
        self.categories = [c for c in (categories or []) if c != ALL_CATEGORIES]
        self.build_ui()
        if task:
            self.load_task(task)

    def build_ui(self):
        self.form = QFormLayout(self)
        self.title_edit = QLineEdit()
        self.desc_edit = QTextEdit()
        self.priority_cb = QComboBox()
        for key in reversed(PRIORITIES):
            self.priority_cb.addItem(priority_label(key), key)
        self.priority_cb.setCurrentIndex(self.priority_cb.findData("medium"))
        self.category_cb = QComboBox()
        self.category_cb.setEditable(True)
        self.category_cb.addItems(self.categories)
        self.due_date = QDateEdit()
        self.due_date.setCalendarPopup(True)
        self.due_date.setDisplayFormat("dd/MM/yyyy")
        self.due_date.setDate(QDate.currentDate())

        # when checked -> task has no due date
        self.no_due_cb = QCheckBox("Không có hạn")
        self.no_due_cb.toggled.connect(self._on_no_due_toggled)

        self.form.addRow("Tiêu đề*", self.title_edit)
        self.form.addRow("Mô tả", self.desc_edit)
        self.form.addRow("Độ ưu tiên", self.priority_cb)
        self.form.addRow("Danh mục", self.category_cb)
        self.form.addRow("Hạn", self.due_date)
        self.form.addRow("", self.no_due_cb)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        self.form.addRow(self.buttons)

    def _on_no_due_toggled(self, checked: bool):
        self.due_date.setEnabled(not checked)

    def load_task(self, task: Task):
        self.title_edit.setText(task.title)
        self.desc_edit.setPlainText(task.description or "")
        idx = self.priority_cb.findData(task.priority)
        if idx >= 0:
            self.priority_cb.setCurrentIndex(idx)
        self.category_cb.setCurrentText(task.category)
        if task.due_date:
            self.due_date.setDate(QDate(task.due_date.year, task.due_date.month, task.due_date.day))
            self.no_due_cb.setChecked(False)
        else:
            self.no_due_cb.setChecked(True)

    def accept(self):
        if not self.title_edit.text().strip():
            QMessageBox.warning(self, "Kiểm tra", "Tiêu đề là bắt buộc.")
            return
        super().accept()

    def get_task_data(self):
        d = None
        if not self.no_due_cb.isChecked() and self.due_date.date().isValid():
            d = self.due_date.date().toPython()
        return {
            "title": self.title_edit.text().strip(),
            "description": self.desc_edit.toPlainText().strip() or None,
            "priority": self.priority_cb.currentData(),
            "category": self.category_cb.currentText().strip(),
            "due_date": d,
        }


class MainWindow(QMainWindow):
    def __init__(self, store: TaskStore = None, settings: Settings = None):
        super().__init__()
        self.settings = settings or Settings()
        self.setWindowTitle(self.settings.app_name)
        self.setFont(QFont("Segoe UI", 10))
        self.setStyleSheet(APP_STYLE)

        # one store per window; nothing is shared across sessions
        self.store = store if store is not None else TaskStore()

        # transient UI state only
        self.search_term = ""
        self.category_filter = ALL_CATEGORIES
        self.show_completed = True
        self._cards = {}  # id -> TaskCard for the current render

        self._setup_ui()
        self.render()

    def _setup_ui(self):
        # Menu
        menubar = QMenuBar(self)
        file_menu = QMenu("&File", self)
        export_csv = QAction("Export CSV", self)
        export_csv.triggered.connect(self.on_export_csv)
        export_xlsx = QAction("Export Excel (.xlsx)", self)
        export_xlsx.triggered.connect(self.on_export_xlsx)
        file_menu.addAction(export_csv)
        file_menu.addAction(export_xlsx)
        menubar.addMenu(file_menu)
        self.setMenuBar(menubar)

        central = QWidget()
        v = QVBoxLayout(central)

        # header with stats
        header = QFrame()
        header.setObjectName("header")
        hv = QVBoxLayout(header)
        title = QLabel("Task Manager")
        title.setFont(QFont("Segoe UI Semibold", 22))
        title.setAlignment(Qt.AlignCenter)
        subtitle = QLabel("Quản lý công việc hiệu quả")
        subtitle.setAlignment(Qt.AlignCenter)
        hv.addWidget(title)
        hv.addWidget(subtitle)

        stats = QHBoxLayout()
        stats.addStretch()
        self.total_label = self._stat_block(stats, "Tổng task")
        self.completed_label = self._stat_block(stats, "Hoàn thành")
        self.remaining_label = self._stat_block(stats, "Còn lại")
        stats.addStretch()
        hv.addLayout(stats)
        v.addWidget(header)

        # toolbar
        toolbar = QHBoxLayout()
        self.search = QLineEdit()
        self.search.setPlaceholderText("Tìm kiếm task...")
        self.search.textChanged.connect(self.set_search_term)

        self.category_cb = QComboBox()
        self.category_cb.currentIndexChanged.connect(self._on_category_index_changed)

        self.toggle_completed_btn = QPushButton(HIDE_COMPLETED_TEXT)
        self.toggle_completed_btn.clicked.connect(self.toggle_show_completed)

        add_btn = QPushButton("+ Thêm task")
        add_btn.setObjectName("addBtn")
        add_btn.clicked.connect(self.on_add_task)
        add_btn.setShortcut("Ctrl+N")
        self.add_btn = add_btn

        toolbar.addWidget(self.search, 1)
        toolbar.addWidget(self.category_cb)
        toolbar.addWidget(self.toggle_completed_btn)
        toolbar.addWidget(add_btn)
        v.addLayout(toolbar)

        # task list
        self.task_list = QListWidget()
        self.task_list.setSelectionMode(QAbstractItemView.NoSelection)
        self.task_list.setVerticalScrollMode(QAbstractItemView.ScrollPerPixel)
        v.addWidget(self.task_list, 1)

        # empty state
        self.empty_state = QFrame()
        self.empty_state.setObjectName("emptyState")
        ev = QVBoxLayout(self.empty_state)
        self.empty_title = QLabel(EMPTY_TITLE)
        self.empty_title.setFont(QFont("Segoe UI Semibold", 12))
        self.empty_title.setAlignment(Qt.AlignCenter)
        empty_hint = QLabel(EMPTY_HINT)
        empty_hint.setAlignment(Qt.AlignCenter)
        ev.addWidget(self.empty_title)
        ev.addWidget(empty_hint)
        v.addWidget(self.empty_state)
        v.addStretch()

        self.setCentralWidget(central)

        # status bar
        self.status = QStatusBar(self)
        self.setStatusBar(self.status)

    def _stat_block(self, layout: QHBoxLayout, caption: str) -> QLabel:
        box = QVBoxLayout()
        value = QLabel("0")
        value.setFont(QFont("Segoe UI Semibold", 20))
        value.setAlignment(Qt.AlignCenter)
        cap = QLabel(caption)
        cap.setAlignment(Qt.AlignCenter)
        box.addWidget(value)
        box.addWidget(cap)
        layout.addLayout(box)
        layout.addSpacing(24)
        return value

    # -- derived state --
    def visible_tasks(self):
        return visible(
            self.store.list(),
            self.search_term,
            self.category_filter,
            self.show_completed,
        )

    def card_for(self, task_id: str):
        return self._cards.get(task_id)

    # -- rendering --
    def render(self):
        self._refresh_stats()
        self._refresh_categories()
        self.toggle_completed_btn.setText(
            HIDE_COMPLETED_TEXT if self.show_completed else SHOW_ALL_TEXT
        )

        tasks = self.visible_tasks()
        self.task_list.clear()
        self._cards = {}
        for t in tasks:
            card = TaskCard(t)
            card.toggled.connect(self.toggle_task)
            card.delete_requested.connect(self.delete_task)
            card.edit_requested.connect(self.on_edit_task)
            item = QListWidgetItem()
            item.setData(Qt.UserRole, t.id)
            item.setSizeHint(card.sizeHint())
            self.task_list.addItem(item)
            self.task_list.setItemWidget(item, card)
            self._cards[t.id] = card

        self.task_list.setHidden(not tasks)
        self.empty_state.setHidden(bool(tasks))
        self.status.showMessage(f"Hiển thị {len(tasks)} / {len(self.store)} task")

    def _refresh_stats(self):
        stats = compute_stats(self.store.list())
        self.total_label.setText(str(stats.total))
        self.completed_label.setText(str(stats.completed))
        self.remaining_label.setText(str(stats.remaining))

    def _refresh_categories(self):
        # options always derived from the live collection
        categories = self.store.categories()
        if self.category_filter not in categories:
            self.category_filter = ALL_CATEGORIES
        self.category_cb.blockSignals(True)
        try:
            self.category_cb.clear()
            for c in categories:
                self.category_cb.addItem(category_label(c), c)
            self.category_cb.setCurrentIndex(self.category_cb.findData(self.category_filter))
        finally:
            self.category_cb.blockSignals(False)

    # -- filter inputs --
    def set_search_term(self, text: str):
        self.search_term = text
        self.render()

    def _on_category_index_changed(self, index: int):
        if index < 0:
            return
        self.set_category_filter(self.category_cb.itemData(index))

    def set_category_filter(self, category: str):
        self.category_filter = category
        self.render()

    def toggle_show_completed(self):
        self.show_completed = not self.show_completed
        self.render()

    # -- task actions --
    def toggle_task(self, task_id: str):
        self.store.toggle_completion(task_id)
        self.render()

    def delete_task(self, task_id: str):
        self.store.delete(task_id)
        self.render()

    def add_task(self, data: dict):
        try:
            t = self.store.add(**data)
        except TaskValidationError as e:
            QMessageBox.warning(self, "Kiểm tra", str(e))
            return None
        self.render()
        return t

    def edit_task(self, task_id: str, data: dict):
        try:
            t = self.store.update(task_id, **data)
        except TaskValidationError as e:
            QMessageBox.warning(self, "Kiểm tra", str(e))
            return None
        self.render()
        return t

    def on_add_task(self):
        dlg = AddEditTaskDialog(self, categories=self.store.categories())
        if dlg.exec() == QDialog.Accepted:
            self.add_task(dlg.get_task_data())

    def on_edit_task(self, task_id: str):
        t = self.store.get(task_id)
        if t is None:
            return
        dlg = AddEditTaskDialog(self, task=t, categories=self.store.categories())
        if dlg.exec() == QDialog.Accepted:
            self.edit_task(task_id, dlg.get_task_data())

    # Export handlers
    def export_visible(self, path) -> int:
        path = Path(path)
        tasks = self.visible_tasks()
        if path.suffix.lower() == ".xlsx":
            return export_service.export_tasks_to_excel(tasks, path)
        return export_service.export_tasks_to_csv(tasks, path)

    def _export_with_dialog(self, caption: str, default_name: str, file_filter: str):
        path, _ = QFileDialog.getSaveFileName(
            self, caption, str(Path.home() / default_name), file_filter
        )
        if not path:
            return
        try:
            count = self.export_visible(path)
        except (OSError, ValueError, ImportError) as e:
            logger.exception("Export to %s failed", path)
            QMessageBox.critical(self, "Export", f"Export failed: {e}")
            return
        QMessageBox.information(self, "Export", f"Exported {count} tasks to {path}")

    def on_export_csv(self):
        self._export_with_dialog("Export CSV", "tasks.csv", "CSV Files (*.csv)")

    def on_export_xlsx(self):
        self._export_with_dialog("Export Excel", "tasks.xlsx", "Excel Files (*.xlsx)")
