from fastapi import APIRouter, Depends

from ..nlp.parser import parse_task
from ..schemas import ParsedTask, TaskCreate, TaskOut, TextIn
from ..store import TaskStore, get_store

router = APIRouter()


@router.post("/parse", response_model=ParsedTask)
async def parse(payload: TextIn):
    """Preview what a sentence would turn into, without storing it."""
    return parse_task(payload.text)


@router.post("/ingest", response_model=TaskOut)
async def ingest(payload: TextIn, store: TaskStore = Depends(get_store)):
    parsed = parse_task(payload.text)
    return store.add(TaskCreate(**parsed.model_dump()))
