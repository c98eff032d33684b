from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import uuid4

from sqlalchemy import text as sql_text

from todo_backend.db import get_sessionmaker
from todo_backend.db_init import TASKS_TABLE

TASK_SELECT_COLUMNS = [
    "id",
    "owner_id",
    "title",
    "is_completed",
    "task_date",
    "created_at",
    "updated_at",
]


def _new_id() -> str:
    return uuid4().hex


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _date_key(value) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def pct_completed(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    # round half up, kept in integers
    return (200 * completed + total) // (2 * total)


def _normalize_task_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    payload["is_completed"] = bool(payload.get("is_completed"))
    payload["task_date"] = _date_key(payload.get("task_date"))
    for key in ("created_at", "updated_at"):
        value = payload.get(key)
        if value is not None and hasattr(value, "isoformat"):
            payload[key] = value.isoformat()
    return payload


async def list_tasks_for_date(owner_id: str, day_iso: str) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(TASK_SELECT_COLUMNS)}
                FROM {TASKS_TABLE}
                WHERE owner_id = :owner_id
                  AND task_date = :task_date
                ORDER BY created_at ASC
                """
            ),
            {"owner_id": owner_id, "task_date": day_iso},
        )).mappings().all()
    return [_normalize_task_row(row) for row in rows]


async def get_task(owner_id: str, task_id: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(TASK_SELECT_COLUMNS)}
                FROM {TASKS_TABLE}
                WHERE id = :id AND owner_id = :owner_id
                """
            ),
            {"id": task_id, "owner_id": owner_id},
        )).mappings().fetchone()
    return _normalize_task_row(row) if row else {}


async def create_task(owner_id: str, title: str, task_date) -> dict:
    now = _now_iso()
    record = {
        "id": _new_id(),
        "owner_id": owner_id,
        "title": title,
        "is_completed": 0,
        "task_date": _date_key(task_date),
        "created_at": now,
        "updated_at": now,
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {TASKS_TABLE}
                (id, owner_id, title, is_completed, task_date, created_at, updated_at)
                VALUES
                (:id, :owner_id, :title, :is_completed, :task_date, :created_at, :updated_at)
                """
            ),
            record,
        )
        await session.commit()
    return _normalize_task_row(record)


async def _execute_write(statement: str, params: dict) -> int:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(sql_text(statement), params)
        changed = result.rowcount or 0
        await session.commit()
    return changed


async def toggle_task(owner_id: str, task_id: str) -> dict:
    changed = await _execute_write(
        f"""
        UPDATE {TASKS_TABLE}
        SET is_completed = 1 - is_completed, updated_at = :updated_at
        WHERE id = :id AND owner_id = :owner_id
        """,
        {"id": task_id, "owner_id": owner_id, "updated_at": _now_iso()},
    )
    if not changed:
        return {}
    return await get_task(owner_id, task_id)


async def rename_task(owner_id: str, task_id: str, title: str) -> dict:
    changed = await _execute_write(
        f"""
        UPDATE {TASKS_TABLE}
        SET title = :title, updated_at = :updated_at
        WHERE id = :id AND owner_id = :owner_id
        """,
        {"id": task_id, "owner_id": owner_id, "title": title, "updated_at": _now_iso()},
    )
    if not changed:
        return {}
    return await get_task(owner_id, task_id)


async def delete_task(owner_id: str, task_id: str) -> bool:
    changed = await _execute_write(
        f"DELETE FROM {TASKS_TABLE} WHERE owner_id = :owner_id AND id = :task_id",
        {"owner_id": owner_id, "task_id": task_id},
    )
    return bool(changed)


async def list_task_progress(owner_id: str) -> list[dict]:
    """Per-day totals for one owner, newest first.

    Days without tasks never appear; completed counts come from the same
    GROUP BY so they can never exceed the totals.
    """
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT
                    task_date,
                    COUNT(*) AS total_tasks,
                    SUM(CASE WHEN is_completed = 1 THEN 1 ELSE 0 END) AS completed_tasks
                FROM {TASKS_TABLE}
                WHERE owner_id = :owner_id
                GROUP BY task_date
                ORDER BY task_date DESC
                """
            ),
            {"owner_id": owner_id},
        )).mappings().all()
    items = []
    for row in rows:
        total = int(row.get("total_tasks") or 0)
        completed = int(row.get("completed_tasks") or 0)
        items.append(
            {
                "date": _date_key(row.get("task_date")),
                "total_tasks": total,
                "completed_tasks": completed,
                "pct_completed": pct_completed(completed, total),
            }
        )
    return items
