from datetime import date

from app.models import Priority
from app.schemas import TaskCreate, TaskUpdate
from app.store import TaskStore


def test_store_assigns_ids_and_flags():
    s = TaskStore()
    a = s.add(TaskCreate(name="One"))
    b = s.add(TaskCreate(name="Two"))
    assert a.id != b.id
    assert a.completed is False
    assert a.created_at is not None
    assert [t.name for t in s.list_tasks()] == ["One", "Two"]


def test_store_toggle_flips_back_and_forth():
    s = TaskStore()
    t = s.add(TaskCreate(name="One"))
    assert s.toggle(t.id).completed is True
    assert s.toggle(t.id).completed is False


def test_store_update_is_partial():
    s = TaskStore()
    t = s.add(TaskCreate(name="One", assignee="Ana", due_date=date(2025, 6, 20)))
    out = s.update(t.id, TaskUpdate(due_date=date(2025, 7, 1), priority=Priority.P4))
    assert out.due_date == date(2025, 7, 1)
    assert out.priority == "P4"
    assert out.assignee == "Ana"


def test_store_missing_ids():
    s = TaskStore()
    assert s.get("missing") is None
    assert s.update("missing", TaskUpdate(name="x")) is None
    assert s.toggle("missing") is None
    assert s.delete("missing") is False


def test_store_stats_counts_pending_p1_as_urgent():
    s = TaskStore()
    done = s.add(TaskCreate(name="Done", priority=Priority.P1))
    s.add(TaskCreate(name="Open", priority=Priority.P1))
    s.add(TaskCreate(name="Later", priority=Priority.P3))
    s.toggle(done.id)
    stats = s.stats()
    assert (stats.total, stats.pending, stats.completed, stats.urgent) == (3, 2, 1, 1)
