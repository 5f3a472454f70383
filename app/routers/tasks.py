from fastapi import APIRouter, Depends, HTTPException, Query

from ..models import Priority
from ..schemas import TaskCreate, TaskOut, TaskStats, TaskUpdate
from ..store import TaskStore, get_store

router = APIRouter()


@router.post("", response_model=TaskOut)
async def create_task(payload: TaskCreate, store: TaskStore = Depends(get_store)):
    return store.add(payload)


@router.get("", response_model=list[TaskOut])
async def list_tasks(
    completed: bool | None = Query(None, description="Filter by completion"),
    priority: Priority | None = Query(None, description="Filter by priority"),
    store: TaskStore = Depends(get_store),
):
    return store.list_tasks(completed=completed, priority=priority)


# declared before /{task_id} so "stats" is not taken for an id
@router.get("/stats", response_model=TaskStats)
async def task_stats(store: TaskStore = Depends(get_store)):
    return store.stats()


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(task_id: str, store: TaskStore = Depends(get_store)):
    task = store.get(task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    return task


@router.patch("/{task_id}", response_model=TaskOut)
async def update_task(task_id: str, payload: TaskUpdate, store: TaskStore = Depends(get_store)):
    task = store.update(task_id, payload)
    if not task:
        raise HTTPException(404, "Task not found")
    return task


@router.post("/{task_id}/toggle", response_model=TaskOut)
async def toggle_task(task_id: str, store: TaskStore = Depends(get_store)):
    task = store.toggle(task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    return task


@router.delete("/{task_id}")
async def delete_task(task_id: str, store: TaskStore = Depends(get_store)):
    ok = store.delete(task_id)
    if not ok:
        raise HTTPException(404, "Task not found")
    return {"deleted": True}
