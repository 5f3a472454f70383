from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .config import today
from .models import Priority

DEFAULT_NAME = "Untitled Task"
DEFAULT_ASSIGNEE = "Unassigned"
DEFAULT_TIME = "9:00 AM"
DEFAULT_PRIORITY = Priority.P3

# "H:MM AM|PM", hour 1..12
TIME_PATTERN = r"^(1[0-2]|[1-9]):[0-5]\d (AM|PM)$"


class CamelModel(BaseModel):
    # dueDate / dueTime on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)


class ParsedTask(CamelModel):
    name: str = Field(DEFAULT_NAME, min_length=1)
    assignee: str = Field(DEFAULT_ASSIGNEE, min_length=1)
    due_date: date = Field(default_factory=today)
    due_time: str = Field(DEFAULT_TIME, pattern=TIME_PATTERN)
    priority: Priority = DEFAULT_PRIORITY


class TaskCreate(ParsedTask):
    pass


class TaskUpdate(CamelModel):
    name: str | None = Field(None, min_length=1)
    assignee: str | None = Field(None, min_length=1)
    due_date: date | None = None
    due_time: str | None = Field(None, pattern=TIME_PATTERN)
    priority: Priority | None = None
    completed: bool | None = None


class TaskOut(ParsedTask):
    id: str
    completed: bool
    created_at: datetime


class TaskStats(BaseModel):
    total: int
    pending: int
    completed: int
    urgent: int  # pending P1 tasks


class TextIn(CamelModel):
    text: str
