from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from todo_backend.auth import require_user_id
from todo_backend.schemas import TaskCreate, TaskRename, TaskResponse, TaskListResponse
from todo_backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


def _clean_title(value: str) -> str:
    title = str(value or "").strip()
    if not title:
        raise HTTPException(status_code=400, detail="Task title must not be empty")
    return title


@router.get("/v1/tasks", response_model=TaskListResponse)
async def list_tasks(
    day: date = Query(..., alias="date"),
    user_id: str = Depends(require_user_id),
):
    items = await repositories.list_tasks_for_date(user_id, day.isoformat())
    return {"items": items}


@router.post("/v1/tasks", response_model=TaskResponse)
async def create_task(payload: TaskCreate, user_id: str = Depends(require_user_id)):
    title = _clean_title(payload.title)
    try:
        record = await repositories.create_task(user_id, title, payload.task_date)
    except Exception as exc:
        logger.exception("Failed to create task: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    logger.info("Created task %s for %s", record["id"], record["task_date"])
    return record


@router.post("/v1/tasks/{task_id}/toggle", response_model=TaskResponse)
async def toggle_task(task_id: str, user_id: str = Depends(require_user_id)):
    try:
        record = await repositories.toggle_task(user_id, task_id)
    except Exception as exc:
        logger.exception("Failed to toggle task: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if not record:
        raise HTTPException(status_code=404, detail="Task not found")
    return record


@router.patch("/v1/tasks/{task_id}", response_model=TaskResponse)
async def rename_task(task_id: str, payload: TaskRename, user_id: str = Depends(require_user_id)):
    title = _clean_title(payload.title)
    try:
        record = await repositories.rename_task(user_id, task_id, title)
    except Exception as exc:
        logger.exception("Failed to rename task: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if not record:
        raise HTTPException(status_code=404, detail="Task not found")
    return record


@router.delete("/v1/tasks/{task_id}")
async def delete_task(task_id: str, user_id: str = Depends(require_user_id)):
    try:
        deleted = await repositories.delete_task(user_id, task_id)
    except Exception as exc:
        logger.exception("Failed to delete task: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if not deleted:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"ok": True}
