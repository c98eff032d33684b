from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel


class TaskCreate(BaseModel):
    title: str
    task_date: date


class TaskRename(BaseModel):
    title: str


class TaskResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    is_completed: bool
    task_date: str
    created_at: str
    updated_at: str


class TaskListResponse(BaseModel):
    items: List[TaskResponse]


class TaskProgressResponse(BaseModel):
    date: str
    total_tasks: int
    completed_tasks: int
    pct_completed: int


class TaskProgressListResponse(BaseModel):
    items: List[TaskProgressResponse]
