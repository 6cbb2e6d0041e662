"""Derived state for the task list: visible subset, header stats, styling tiers.

Everything here is pure; nothing mutates the tasks it is given.
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from tasklist.models.task import ALL_CATEGORIES, Task

DISPLAY_DATE_FORMAT = "%d/%m/%Y"

PRIORITY_LABELS = {
    "high": "Cao",
    "medium": "Trung bình",
    "low": "Thấp",
}
PRIORITY_TIERS = {
    "high": "destructive",
    "medium": "warning",
    "low": "success",
}
DEFAULT_TIER = "muted"


@dataclass(frozen=True)
class TaskStats:
    total: int
    completed: int

    @property
    def remaining(self) -> int:
        return self.total - self.completed


def matches_search(task: Task, term: str) -> bool:
    if not term:
        return True
    q = term.lower()
    if q in task.title.lower():
        return True
    return task.description is not None and q in task.description.lower()


def matches_category(task: Task, category: str) -> bool:
    return category == ALL_CATEGORIES or task.category == category


def matches_visibility(task: Task, show_completed: bool) -> bool:
    return show_completed or not task.completed


def visible(
    tasks: Iterable[Task],
    search_term: str = "",
    category_filter: str = ALL_CATEGORIES,
    show_completed: bool = True,
) -> List[Task]:
    """Return the tasks passing search, category and visibility filters.

    Relative order of the input is preserved.
    """
    return [
        t
        for t in tasks
        if matches_search(t, search_term)
        and matches_category(t, category_filter)
        and matches_visibility(t, show_completed)
    ]


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    # always over the full collection, never the filtered view
    total = 0
    completed = 0
    for t in tasks:
        total += 1
        if t.completed:
            completed += 1
    return TaskStats(total=total, completed=completed)


def priority_label(priority: str) -> str:
    return PRIORITY_LABELS.get(priority, priority)


def priority_tier(priority: str) -> str:
    return PRIORITY_TIERS.get(priority, DEFAULT_TIER)


def card_accent(task: Task) -> str:
    if task.completed:
        return "success"
    if task.priority == "high":
        return "destructive"
    return "primary"


def format_date(d: Optional[date]) -> str:
    return d.strftime(DISPLAY_DATE_FORMAT) if d else "—"
