"""Tests for dashboard start-up helpers."""

import logging
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from todo_dashboard import auth
from todo_dashboard.logging_config import QUIET_LOGGERS, configure_logging


@pytest.fixture
def restore_levels():
    names = ("todo_dashboard",) + QUIET_LOGGERS
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_configure_logging_quiets_streamlit(monkeypatch, restore_levels):
    monkeypatch.setenv("DASHBOARD_LOG_LEVEL", "debug")
    configure_logging()
    assert logging.getLogger("todo_dashboard").level == logging.DEBUG
    for name in ("streamlit", "urllib3", "requests"):
        assert logging.getLogger(name).level == logging.WARNING


def test_unknown_log_level_falls_back_to_info(monkeypatch, restore_levels):
    monkeypatch.setenv("DASHBOARD_LOG_LEVEL", "chatty")
    configure_logging()
    assert logging.getLogger("todo_dashboard").level == logging.INFO


@pytest.mark.parametrize(
    "reported,expected",
    [("Asia/Tokyo", ZoneInfo("Asia/Tokyo")), ("Not/AZone", None), (None, None)],
)
def test_viewer_timezone(monkeypatch, reported, expected):
    monkeypatch.setattr(auth, "st", SimpleNamespace(context=SimpleNamespace(timezone=reported)))
    assert auth.viewer_timezone() == expected
