import enum
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import uuid4


class Priority(str, enum.Enum):
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    P4 = "P4"


def new_task_id() -> str:
    return uuid4().hex[:12]


@dataclass
class Task:
    name: str
    assignee: str
    due_date: date
    due_time: str
    priority: Priority
    id: str = field(default_factory=new_task_id)
    completed: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
