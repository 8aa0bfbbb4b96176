"""Tests for the ClickUp repository facade."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from clickup_tasks.clickup import (
    ClickUpClient,
    ClickUpCustomItem,
    ClickUpList,
    ClickUpSpace,
    ClickUpTask,
    ClickUpTaskState,
    ClickUpWorkspace,
    TaskType,
)
from clickup_tasks.config import RepositorySettings
from clickup_tasks.errors import ClickUpApiError, InvalidTimeFormatError, RepositoryError
from clickup_tasks.repository import ClickUpRepository
from clickup_tasks.service import ClickUpTaskService
from fakes import FakeClickUpApiClient

WORKSPACE_ID = "9001"


def _repository(
    fake_api: FakeClickUpApiClient, **settings: Any
) -> ClickUpRepository:
    settings.setdefault("workspace_id", WORKSPACE_ID)
    return ClickUpRepository(ClickUpTaskService(fake_api), RepositorySettings(**settings))


@pytest.fixture
def loaded_api(
    fake_api: FakeClickUpApiClient,
    task_payload: dict[str, Any],
    space_payload: dict[str, Any],
) -> FakeClickUpApiClient:
    """Fake API holding one open task, one closed task, a space and a custom item."""
    open_task = ClickUpTask.model_validate(task_payload)
    closed_task = ClickUpTask.model_validate(
        {**task_payload, "id": "86abc999", "custom_id": "DEV-7", "date_closed": "1700007200000"}
    )
    fake_api.tasks = {open_task.id: open_task, closed_task.id: closed_task}
    fake_api.spaces = {"901": ClickUpSpace.model_validate(space_payload)}
    fake_api.custom_items = {WORKSPACE_ID: [ClickUpCustomItem(id="1001", name="Bug")]}
    return fake_api


class TestFindTask:
    """Test finding a single task."""

    def test_attaches_custom_item_and_repository(self, loaded_api: FakeClickUpApiClient) -> None:
        repository = _repository(loaded_api)

        task = repository.find_task("86abc123")

        assert task is not None
        assert task.custom_item == ClickUpCustomItem(id="1001", name="Bug")
        assert task.task_type == TaskType.BUG
        assert task.repository is repository
        assert ("fetch_custom_item", "1001", WORKSPACE_ID) in loaded_api.calls

    def test_passes_custom_id_mode(self, loaded_api: FakeClickUpApiClient) -> None:
        repository = _repository(loaded_api, use_custom_task_ids=True)

        repository.find_task("86abc123")

        assert loaded_api.calls[0] == ("fetch_task", "86abc123", True, WORKSPACE_ID)

    def test_without_custom_item(self, fake_api: FakeClickUpApiClient) -> None:
        fake_api.tasks = {"t1": ClickUpTask(id="t1", name="Plain")}

        task = _repository(fake_api).find_task("t1")

        assert task is not None
        assert task.custom_item is None
        assert task.task_type == TaskType.FEATURE
        assert [call[0] for call in fake_api.calls] == ["fetch_task"]

    def test_missing_task_returns_none(self, fake_api: FakeClickUpApiClient) -> None:
        assert _repository(fake_api).find_task("unknown") is None

    def test_missing_custom_item_falls_back_to_feature(
        self, loaded_api: FakeClickUpApiClient
    ) -> None:
        loaded_api.custom_items = {}
        repository = _repository(loaded_api)

        task = repository.find_task("86abc123")

        assert task is not None
        assert task.custom_item is None
        assert task.task_type == TaskType.FEATURE
        assert task.repository is repository

    def test_forbidden_custom_items_keep_task(
        self,
        make_client: Callable[..., ClickUpClient],
        task_payload: dict[str, Any],
    ) -> None:
        """Test a workspace whose plan does not expose custom task types."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/custom_item"):
                return httpx.Response(403, json={"err": "Team not authorized"})
            return httpx.Response(200, json=task_payload)

        repository = ClickUpRepository(
            ClickUpTaskService(make_client(handler)),
            RepositorySettings(workspace_id=WORKSPACE_ID),
        )

        task = repository.find_task("86abc123")

        assert task is not None
        assert task.id == "86abc123"
        assert task.task_type == TaskType.FEATURE

    def test_presentable_id_follows_settings(self, loaded_api: FakeClickUpApiClient) -> None:
        with_custom_ids = _repository(loaded_api, use_custom_task_ids=True).find_task("86abc123")
        without_custom_ids = _repository(loaded_api).find_task("86abc123")

        assert with_custom_ids.presentable_id == "DEV-42"
        assert without_custom_ids.presentable_id == "86abc123"


class TestGetIssues:
    """Test listing tasks."""

    def test_no_workspace_returns_empty(self, loaded_api: FakeClickUpApiClient) -> None:
        repository = _repository(loaded_api, workspace_id=None)

        assert repository.get_issues() == []
        assert loaded_api.calls == []

    def test_drops_closed_tasks(self, loaded_api: FakeClickUpApiClient) -> None:
        issues = _repository(loaded_api).get_issues()

        assert [task.id for task in issues] == ["86abc123"]

    def test_with_closed(self, loaded_api: FakeClickUpApiClient) -> None:
        issues = _repository(loaded_api).get_issues(with_closed=True)

        assert {task.id for task in issues} == {"86abc123", "86abc999"}

    def test_attaches_repository(self, loaded_api: FakeClickUpApiClient) -> None:
        repository = _repository(loaded_api, use_custom_task_ids=True)

        issues = repository.get_issues(with_closed=True)

        assert all(task.repository is repository for task in issues)
        assert {task.presentable_id for task in issues} == {"DEV-42", "DEV-7"}

    def test_passes_page_and_assignee(self, loaded_api: FakeClickUpApiClient) -> None:
        repository = _repository(loaded_api, assignee_id="183")

        repository.get_issues(query="login", offset=250, limit=50)

        assert loaded_api.calls == [("fetch_tasks", WORKSPACE_ID, "183", 2, False)]

    def test_api_error_returns_empty(self, loaded_api: FakeClickUpApiClient) -> None:
        loaded_api.fail_with = ClickUpApiError("boom", status_code=500)

        assert _repository(loaded_api).get_issues() == []


class TestTaskStates:
    """Test reading and changing task states."""

    def test_available_states_come_from_space(self, loaded_api: FakeClickUpApiClient) -> None:
        states = _repository(loaded_api).get_available_task_states("86abc123")

        assert [state.status for state in states] == ["to do", "in progress", "complete"]
        assert ("fetch_space", "901") in loaded_api.calls

    def test_available_states_without_space(self, fake_api: FakeClickUpApiClient) -> None:
        fake_api.tasks = {"t1": ClickUpTask(id="t1", name="Orphan")}

        with pytest.raises(RepositoryError):
            _repository(fake_api).get_available_task_states("t1")

    def test_available_states_propagate_api_errors(self, fake_api: FakeClickUpApiClient) -> None:
        with pytest.raises(ClickUpApiError):
            _repository(fake_api).get_available_task_states("unknown")

    def test_set_task_state_uses_label(self, loaded_api: FakeClickUpApiClient) -> None:
        state = ClickUpTaskState(id="s3", status="complete", type="closed")

        _repository(loaded_api, use_custom_task_ids=True).set_task_state("DEV-42", state)

        assert loaded_api.status_updates == [("DEV-42", "complete", WORKSPACE_ID, True)]

    def test_set_task_state_wraps_api_error(self, loaded_api: FakeClickUpApiClient) -> None:
        loaded_api.fail_with = ClickUpApiError("forbidden", status_code=403)

        with pytest.raises(RepositoryError, match="Failed to update task state") as exc_info:
            _repository(loaded_api).set_task_state("86abc123", ClickUpTaskState(status="complete"))

        assert isinstance(exc_info.value.__cause__, ClickUpApiError)

    def test_set_task_state_requires_workspace(self, loaded_api: FakeClickUpApiClient) -> None:
        with pytest.raises(RepositoryError):
            _repository(loaded_api, workspace_id=None).set_task_state(
                "86abc123", ClickUpTaskState(status="complete")
            )
        assert loaded_api.status_updates == []


class TestUpdateTimeSpent:
    """Test logging time."""

    def test_tracks_parsed_duration(self, fake_api: FakeClickUpApiClient) -> None:
        _repository(fake_api).update_time_spent("86abc123", "2h 30m", comment="pairing")

        assert fake_api.tracked_time == [("86abc123", 9_000_000, WORKSPACE_ID, False)]

    def test_invalid_format_propagates(self, fake_api: FakeClickUpApiClient) -> None:
        with pytest.raises(InvalidTimeFormatError):
            _repository(fake_api).update_time_spent("86abc123", "2 hours")
        assert fake_api.tracked_time == []

    def test_wraps_api_error(self, fake_api: FakeClickUpApiClient) -> None:
        fake_api.fail_with = ClickUpApiError("boom", status_code=500)

        with pytest.raises(RepositoryError, match="Failed to update time spent"):
            _repository(fake_api).update_time_spent("86abc123", "1h")

    def test_requires_workspace(self, fake_api: FakeClickUpApiClient) -> None:
        with pytest.raises(RepositoryError):
            _repository(fake_api, workspace_id=None).update_time_spent("86abc123", "1h")


class TestSettingsQueries:
    """Test the lookups used while configuring."""

    def test_connection_errors_propagate(self, fake_api: FakeClickUpApiClient) -> None:
        fake_api.fail_with = ClickUpApiError("unauthorized", status_code=401)

        with pytest.raises(ClickUpApiError):
            _repository(fake_api).test_connection()

    def test_fetch_workspaces(self, fake_api: FakeClickUpApiClient) -> None:
        fake_api.workspaces = [ClickUpWorkspace(id=WORKSPACE_ID, name="Acme")]

        assert _repository(fake_api, workspace_id=None).fetch_workspaces()[0].name == "Acme"

    def test_fetch_spaces_defaults_to_selected_workspace(
        self, loaded_api: FakeClickUpApiClient
    ) -> None:
        spaces = _repository(loaded_api).fetch_spaces()

        assert [space.name for space in spaces] == ["Engineering"]
        assert loaded_api.calls == [("fetch_spaces", WORKSPACE_ID)]

    def test_fetch_spaces_without_workspace(self, fake_api: FakeClickUpApiClient) -> None:
        with pytest.raises(RepositoryError):
            _repository(fake_api, workspace_id=None).fetch_spaces()

    def test_fetch_lists(self, fake_api: FakeClickUpApiClient) -> None:
        fake_api.lists = {"901": [ClickUpList(id="l1", name="Backlog")]}

        lists = _repository(fake_api, space_id="901").fetch_lists()

        assert lists == [ClickUpList(id="l1", name="Backlog")]

    def test_fetch_lists_without_space(self, fake_api: FakeClickUpApiClient) -> None:
        with pytest.raises(RepositoryError):
            _repository(fake_api).fetch_lists()
