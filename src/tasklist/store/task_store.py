"""In-memory task collection for one UI session.

Insertion order is the display order. Operations on an id that is not in
the collection are silent no-ops (a stale reference after delete is the
only way to reach them from the UI).
"""
import logging
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional, Tuple

from tasklist.models.fixtures import seed_tasks
from tasklist.models.task import ALL_CATEGORIES, Task, TaskValidationError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "priority", "category", "due_date", "completed")


class TaskStore:
    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = []
        seen = set()
        for t in seed_tasks() if tasks is None else tasks:
            if t.id in seen:
                raise TaskValidationError(f"Duplicate task id: {t.id!r}")
            t.validate()
            seen.add(t.id)
            self._tasks.append(t)
        logger.debug("TaskStore initialised with %d task(s)", len(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def __contains__(self, task_id) -> bool:
        return self._index_of(task_id) is not None

    def _index_of(self, task_id: str) -> Optional[int]:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    # -- reads --
    def list(self) -> Tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    def categories(self) -> List[str]:
        """Return "all" followed by the categories in use, first-seen order.

        Always derived from the current collection.
        """
        cats = [ALL_CATEGORIES]
        for t in self._tasks:
            if t.category not in cats:
                cats.append(t.category)
        return cats

    # -- mutations --
    def toggle_completion(self, task_id: str) -> None:
        t = self.get(task_id)
        if t is None:
            logger.debug("toggle_completion: no task %r", task_id)
            return
        t.completed = not t.completed
        logger.debug("Task %r completed=%s", task_id, t.completed)

    def delete(self, task_id: str) -> None:
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("delete: no task %r", task_id)
            return
        removed = self._tasks.pop(idx)
        logger.debug("Deleted task %r (%s)", removed.id, removed.title)

    def add(
        self,
        title: str,
        *,
        description: Optional[str] = None,
        priority: str = "medium",
        category: str = "",
        due_date=None,
    ) -> Task:
        t = Task.create(
            title,
            description=description,
            priority=priority,
            category=category,
            due_date=due_date,
        )
        while t.id in self:
            t = replace(t, id=Task().id)
        self._tasks.append(t)
        logger.info("Added task %r (%s)", t.id, t.title)
        return t

    def update(self, task_id: str, **fields) -> Optional[Task]:
        """Replace editable fields of a task in place.

        id, created_at and position are kept. Invalid values raise
        TaskValidationError and leave the stored task untouched.
        """
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise TypeError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("update: no task %r", task_id)
            return None
        current = self._tasks[idx]
        candidate = replace(current, **fields)
        candidate.validate()
        for name in EDITABLE_FIELDS:
            setattr(current, name, getattr(candidate, name))
        logger.info("Updated task %r (%s)", current.id, current.title)
        return current
