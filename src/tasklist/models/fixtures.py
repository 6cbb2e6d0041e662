"""Seed data loaded into every new session."""
from typing import List

from tasklist.models.task import Task

FIXTURE_TASKS = [
    {
        "id": "1",
        "title": "Hoàn thành báo cáo dự án",
        "description": "Viết báo cáo chi tiết về tiến độ dự án Q4",
        "completed": False,
        "priority": "high",
        "category": "Công việc",
        "dueDate": "2024-01-20",
        "createdAt": "2024-01-15",
    },
    {
        "id": "2",
        "title": "Mua sắm thực phẩm",
        "description": "Mua rau củ, thịt cá cho tuần này",
        "completed": True,
        "priority": "medium",
        "category": "Cá nhân",
        "dueDate": "2024-01-18",
        "createdAt": "2024-01-14",
    },
    {
        "id": "3",
        "title": "Học React Native",
        "description": "Hoàn thành khóa học online về React Native",
        "completed": False,
        "priority": "low",
        "category": "Học tập",
        "createdAt": "2024-01-10",
    },
]


def seed_tasks() -> List[Task]:
    # fresh objects each call so sessions never share state
    return [Task.from_dict(raw) for raw in FIXTURE_TASKS]
