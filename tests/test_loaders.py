"""Tests for data shaping helpers used by the dashboard tabs."""

from todo_dashboard.data.loaders import HISTORY_COLUMNS, progress_frame
from todo_dashboard.models import DailyAggregate


def test_empty_history_has_columns():
    frame = progress_frame([])
    assert frame.empty
    assert list(frame.columns) == HISTORY_COLUMNS


def test_history_is_newest_first():
    frame = progress_frame(
        [
            DailyAggregate("2024-03-08", 1, 1, 100),
            DailyAggregate("2024-03-10", 4, 1, 25),
            DailyAggregate("2024-03-09", 2, 0, 0),
        ]
    )
    assert frame["date"].tolist() == ["2024-03-10", "2024-03-09", "2024-03-08"]
    assert frame.loc[0, "pct_completed"] == 25
