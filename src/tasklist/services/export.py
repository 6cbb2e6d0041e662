# src/tasklist/services/export.py
import csv
import logging
from pathlib import Path
from typing import Iterable, List

import pandas as pd

from tasklist.models.task import Task

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "id",
    "title",
    "description",
    "completed",
    "priority",
    "category",
    "due_date",
    "created_at",
]


def _task_row(t: Task) -> dict:
    return {
        "id": t.id,
        "title": t.title,
        "description": t.description or "",
        "completed": t.completed,
        "priority": t.priority,
        "category": t.category,
        "due_date": t.due_date.isoformat() if t.due_date else "",
        "created_at": t.created_at.isoformat(),
    }


def export_tasks_to_csv(tasks: Iterable[Task], filepath) -> int:
    path = Path(filepath)
    rows: List[dict] = [_task_row(t) for t in tasks]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        writer.writerows(rows)
    logger.info("Exported %d task(s) to %s", len(rows), path)
    return len(rows)


def export_tasks_to_excel(tasks: Iterable[Task], filepath) -> int:
    # use pandas for ease; needs openpyxl as the xlsx engine
    rows = [_task_row(t) for t in tasks]
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    df.to_excel(filepath, index=False)
    logger.info("Exported %d task(s) to %s", len(rows), filepath)
    return len(rows)
