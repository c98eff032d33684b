from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from todo_dashboard.dates import month_prefix, shift_key
from todo_dashboard.models import DailyAggregate, Task

MAX_STREAK_DAYS = 365


@dataclass(frozen=True)
class ProgressSummary:
    total_completed: int
    completed_this_month: int
    current_streak: int


def pct_completed(completed, total):
    if total <= 0:
        return 0
    # round half up without going through floats
    return (200 * completed + total) // (2 * total)


def total_completed(aggregates: Iterable[DailyAggregate]) -> int:
    return sum(item.completed_tasks for item in aggregates)


def completed_in_month(aggregates: Iterable[DailyAggregate], year: int, month: int) -> int:
    prefix = month_prefix(year, month)
    return sum(item.completed_tasks for item in aggregates if item.date.startswith(prefix))


def current_streak(aggregates: Iterable[DailyAggregate], today_key: str) -> int:
    """Count consecutive days ending at ``today_key`` with at least one completion.

    The walk goes strictly backward one calendar day at a time. A day that is
    missing from ``aggregates`` ends the streak exactly like a day whose tasks
    are all still open, and that includes today itself.
    """
    by_date = {item.date: item for item in aggregates}
    streak = 0
    cursor = today_key
    for _ in range(MAX_STREAK_DAYS):
        item = by_date.get(cursor)
        if item is None or item.completed_tasks <= 0:
            break
        streak += 1
        cursor = shift_key(cursor, -1)
    return streak


def day_progress(tasks: Iterable[Task]):
    items = list(tasks)
    total = len(items)
    completed = sum(1 for task in items if task.is_completed)
    return completed, total, pct_completed(completed, total)


def aggregate_tasks(tasks: Iterable[Task]) -> list[DailyAggregate]:
    counts: dict[str, list[int]] = {}
    for task in tasks:
        bucket = counts.setdefault(task.task_date, [0, 0])
        bucket[0] += 1
        bucket[1] += int(task.is_completed)
    return [
        DailyAggregate(
            date=day,
            total_tasks=total,
            completed_tasks=completed,
            pct_completed=pct_completed(completed, total),
        )
        for day, (total, completed) in sorted(counts.items())
    ]


def build_progress_summary(aggregates: Iterable[DailyAggregate], today_key: str) -> ProgressSummary:
    items = list(aggregates)
    year, month = int(today_key[:4]), int(today_key[5:7])
    return ProgressSummary(
        total_completed=total_completed(items),
        completed_this_month=completed_in_month(items, year, month),
        current_streak=current_streak(items, today_key),
    )
