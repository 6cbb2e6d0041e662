from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Optional
import uuid

PRIORITIES = ("low", "medium", "high")
ALL_CATEGORIES = "all"  # category filter sentinel


class TaskValidationError(ValueError):
    """Raised when a task would break the title/priority/id invariants."""


def parse_iso_date(value) -> Optional[date]:
    # accepts date objects, "YYYY-MM-DD" strings, or empty values
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


@dataclass
class Task:
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    title: str = ""
    description: Optional[str] = None
    completed: bool = False
    priority: str = "medium"  # low|medium|high
    category: str = ""
    due_date: Optional[date] = None
    created_at: date = field(default_factory=date.today)

    def __setattr__(self, name, value):
        # id is fixed once the dataclass __init__ has assigned it
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Task.id cannot be reassigned")
        super().__setattr__(name, value)

    @classmethod
    def create(cls, title: str, **kwargs) -> "Task":
        """Build a validated task.

        Title is stripped and must not be empty; priority must be one of
        PRIORITIES. An empty description is stored as None.
        """
        task = cls(title=title, **kwargs)
        task.validate()
        return task

    def validate(self) -> None:
        self.title = (self.title or "").strip()
        if not self.title:
            raise TaskValidationError("Title is required.")
        if self.priority not in PRIORITIES:
            raise TaskValidationError(f"Unknown priority: {self.priority!r}")
        if not self.description:
            self.description = None

    def to_dict(self):
        d = asdict(self)
        d["due_date"] = self.due_date.isoformat() if self.due_date else None
        d["created_at"] = self.created_at.isoformat()
        return d

    @staticmethod
    def from_dict(d):
        # fixture records spell the date fields in camelCase
        data = dict(d)
        if "dueDate" in data:
            data["due_date"] = data.pop("dueDate")
        if "createdAt" in data:
            data["created_at"] = data.pop("createdAt")
        data["due_date"] = parse_iso_date(data.get("due_date"))
        created = parse_iso_date(data.get("created_at"))
        if created is None:
            data.pop("created_at", None)
        else:
            data["created_at"] = created
        data["id"] = str(data["id"])
        data["completed"] = bool(data.get("completed", False))
        return Task.create(**data)
