from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    is_completed: bool
    task_date: str
    owner_id: str = ""
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Task":
        return cls(
            id=str(payload["id"]),
            title=str(payload.get("title") or ""),
            is_completed=bool(payload.get("is_completed")),
            task_date=str(payload.get("task_date") or ""),
            owner_id=str(payload.get("owner_id") or ""),
            created_at=str(payload.get("created_at") or ""),
            updated_at=str(payload.get("updated_at") or ""),
        )


@dataclass(frozen=True)
class DailyAggregate:
    date: str
    total_tasks: int
    completed_tasks: int
    pct_completed: int = 0

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "DailyAggregate":
        return cls(
            date=str(payload["date"]),
            total_tasks=int(payload.get("total_tasks") or 0),
            completed_tasks=int(payload.get("completed_tasks") or 0),
            pct_completed=int(payload.get("pct_completed") or 0),
        )
