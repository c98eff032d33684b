"""Tests for the task views, driven through Streamlit's AppTest harness.

The views talk to an in-memory client, so every call they make can be
counted and any of them can be made to fail.
"""

from dataclasses import replace
from uuid import uuid4

import pytest
from streamlit.testing.v1 import AppTest

from todo_dashboard.context import DashboardContext
from todo_dashboard.errors import TransportError
from todo_dashboard.models import DailyAggregate, Task
from todo_dashboard.tabs import today_tab

from conftest import ALICE

TODAY = "2024-03-10"


class MemoryClient:
    def __init__(self, tasks=(), fail=()):
        # a fresh base_url keeps st.cache_data entries apart between tests
        self.base_url = f"http://memory/{uuid4().hex}"
        self.tasks = list(tasks)
        self.fail = set(fail)
        self.calls = []

    def _record(self, name, value):
        self.calls.append((name, value))
        if name in self.fail:
            raise TransportError(f"{name} failed")

    def _replace(self, task_id, **changes):
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                self.tasks[index] = replace(task, **changes)
                return self.tasks[index]
        raise AssertionError(f"unknown task {task_id}")

    def calls_to(self, name):
        return [value for called, value in self.calls if called == name]

    def list_for_date(self, user_id, date_key):
        return [task for task in self.tasks if task.task_date == date_key]

    def list_aggregates(self, user_id):
        days = sorted({task.task_date for task in self.tasks}, reverse=True)
        items = []
        for day in days:
            tasks = self.list_for_date(user_id, day)
            done = sum(1 for task in tasks if task.is_completed)
            items.append(DailyAggregate(day, len(tasks), done))
        return items

    def create(self, user_id, title, date_key):
        self._record("create", title)
        task = Task(id=f"t{len(self.tasks) + 1}", title=title, is_completed=False, task_date=date_key)
        self.tasks.append(task)
        return task

    def toggle_completion(self, user_id, task_id):
        self._record("toggle", task_id)
        current = next(task for task in self.tasks if task.id == task_id)
        return self._replace(task_id, is_completed=not current.is_completed)

    def rename(self, user_id, task_id, new_title):
        self._record("rename", new_title)
        return self._replace(task_id, title=new_title)

    def delete(self, user_id, task_id):
        self._record("delete", task_id)
        self.tasks = [task for task in self.tasks if task.id != task_id]


def _today_script():
    import streamlit as st

    from todo_dashboard.tabs.today_tab import render_today_tab

    render_today_tab(st.session_state["ctx"])


def _calendar_script():
    import streamlit as st

    from todo_dashboard.tabs.calendar_tab import render_calendar_tab

    render_calendar_tab(st.session_state["ctx"])


def start(script, client):
    at = AppTest.from_function(script, default_timeout=30)
    at.session_state["ctx"] = DashboardContext(
        client=client, user_id=ALICE, user_name="Alice", today_key=TODAY
    )
    return at.run()


def stretch(done=False, day=TODAY):
    return Task(id="t1", title="Stretch", is_completed=done, task_date=day)


def submit_new_task(at, title, version=0):
    at.text_input(key=f"today.new_title.{version}").input(title)
    next(button for button in at.button if button.label == "Add").click()
    return at.run()


class TestAddTask:

    def test_add_empties_the_input(self):
        client = MemoryClient()
        at = submit_new_task(start(_today_script, client), "Buy milk")
        assert client.calls_to("create") == ["Buy milk"]
        assert at.text_input(key="today.new_title.1").value == ""
        assert not at.error

    def test_failed_add_keeps_text_and_shows_error(self):
        client = MemoryClient(fail={"create"})
        at = submit_new_task(start(_today_script, client), "Buy milk")
        assert at.error
        assert at.text_input(key="today.new_title.0").value == "Buy milk"

    def test_retry_after_failed_add_reaches_the_client(self):
        client = MemoryClient(fail={"create"})
        at = submit_new_task(start(_today_script, client), "Buy milk")
        next(button for button in at.button if button.label == "Add").click()
        at = at.run()
        assert client.calls_to("create") == ["Buy milk", "Buy milk"]
        assert at.error

    def test_same_title_right_after_success_is_dropped(self, monkeypatch):
        monkeypatch.setattr(today_tab, "DUPLICATE_SUBMIT_WINDOW", 60.0)
        client = MemoryClient()
        at = submit_new_task(start(_today_script, client), "Buy milk")
        submit_new_task(at, "Buy milk", version=1)
        assert client.calls_to("create") == ["Buy milk"]

    def test_same_title_after_window_is_created(self, monkeypatch):
        monkeypatch.setattr(today_tab, "DUPLICATE_SUBMIT_WINDOW", 0.0)
        client = MemoryClient()
        at = submit_new_task(start(_today_script, client), "Buy milk")
        submit_new_task(at, "Buy milk", version=1)
        assert client.calls_to("create") == ["Buy milk", "Buy milk"]

    def test_blank_title_never_reaches_client(self):
        client = MemoryClient()
        at = submit_new_task(start(_today_script, client), "   ")
        assert at.warning
        assert client.calls_to("create") == []


class TestToggle:

    def test_one_click_sends_one_toggle(self):
        client = MemoryClient(tasks=[stretch()])
        at = start(_today_script, client)
        at.checkbox(key="today.done.t1.0.0").check()
        at = at.run()
        at = at.run()
        assert client.calls_to("toggle") == ["t1"]
        assert at.checkbox(key="today.done.t1.1.0").value is True

    def test_failed_toggle_is_not_resent_on_later_runs(self):
        client = MemoryClient(tasks=[stretch()], fail={"toggle"})
        at = start(_today_script, client)
        at.checkbox(key="today.done.t1.0.0").check()
        at = at.run()
        assert at.error
        assert at.checkbox(key="today.done.t1.0.1").value is False
        at = at.run()
        at = at.run()
        assert client.calls_to("toggle") == ["t1"]


class TestRenameAndDelete:

    def _open_editor(self, client):
        at = start(_today_script, client)
        at.button(key="today.rename.t1").click()
        return at.run()

    def test_rename(self):
        client = MemoryClient(tasks=[stretch()])
        at = self._open_editor(client)
        at.text_input(key="today.edit.t1").input("Stretch longer")
        at.button(key="today.save.t1").click()
        at = at.run()
        assert client.calls_to("rename") == ["Stretch longer"]
        assert "today.edit.t1" not in [widget.key for widget in at.text_input]

    def test_failed_rename_keeps_edited_text(self):
        client = MemoryClient(tasks=[stretch()], fail={"rename"})
        at = self._open_editor(client)
        at.text_input(key="today.edit.t1").input("Stretch longer")
        at.button(key="today.save.t1").click()
        at = at.run()
        assert at.error
        assert at.text_input(key="today.edit.t1").value == "Stretch longer"

    def test_blank_rename_closes_editor_without_request(self):
        client = MemoryClient(tasks=[stretch()])
        at = self._open_editor(client)
        at.text_input(key="today.edit.t1").input("   ")
        at.button(key="today.save.t1").click()
        at = at.run()
        assert client.calls_to("rename") == []

    def test_failed_delete_shows_error(self):
        client = MemoryClient(tasks=[stretch()], fail={"delete"})
        at = start(_today_script, client)
        at.button(key="today.delete.t1").click()
        at = at.run()
        assert at.error
        assert len(client.tasks) == 1


class TestCalendarDayDetail:

    def test_selected_day_rows_cannot_be_toggled(self):
        client = MemoryClient(tasks=[stretch()])
        at = start(_calendar_script, client)
        assert at.checkbox(key="calendar.done.t1.0.0").disabled

    @pytest.mark.parametrize("done", [False, True])
    def test_delete_from_selected_day(self, done):
        client = MemoryClient(tasks=[stretch(done=done)])
        at = start(_calendar_script, client)
        at.button(key="calendar.delete.t1").click()
        at.run()
        assert client.calls_to("delete") == ["t1"]
        assert client.tasks == []

    def test_rename_from_selected_day(self):
        client = MemoryClient(tasks=[stretch()])
        at = start(_calendar_script, client)
        at.button(key="calendar.rename.t1").click()
        at = at.run()
        at.text_input(key="calendar.edit.t1").input("Morning stretch")
        at.button(key="calendar.save.t1").click()
        at.run()
        assert client.calls_to("rename") == ["Morning stretch"]

    def test_titles_are_escaped(self):
        client = MemoryClient(tasks=[replace(stretch(), title="<b>Stretch</b>")])
        at = start(_calendar_script, client)
        rendered = [element.value for element in at.markdown]
        assert any("&lt;b&gt;Stretch&lt;/b&gt;" in value for value in rendered)
        assert not any("<b>Stretch</b>" in value for value in rendered)
