from __future__ import annotations

from fastapi import APIRouter, Depends

from todo_backend.auth import require_user_id
from todo_backend.schemas import TaskProgressListResponse
from todo_backend import repositories

router = APIRouter()


@router.get("/v1/progress", response_model=TaskProgressListResponse)
async def list_progress(user_id: str = Depends(require_user_id)):
    items = await repositories.list_task_progress(user_id)
    return {"items": items}
