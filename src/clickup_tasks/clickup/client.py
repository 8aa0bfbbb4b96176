"""ClickUp API client."""

import logging
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from clickup_tasks.clickup.models import (
    ClickUpCustomItem,
    ClickUpList,
    ClickUpSpace,
    ClickUpTask,
    ClickUpWorkspace,
    CustomItemsEnvelope,
    ListsEnvelope,
    SpacesEnvelope,
    TasksEnvelope,
    WorkspacesEnvelope,
)
from clickup_tasks.errors import ClickUpApiError, ConnectionTestError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ClickUpApiClient(Protocol):
    """Operations the task service needs from the ClickUp API."""

    def fetch_task(
        self, task_id: str, use_custom_task_ids: bool, workspace_id: str | None
    ) -> ClickUpTask: ...

    def fetch_tasks(
        self,
        workspace_id: str,
        assignee_id: str | None,
        page: int,
        use_custom_task_ids: bool,
    ) -> list[ClickUpTask]: ...

    def fetch_workspaces(self) -> list[ClickUpWorkspace]: ...

    def fetch_space(self, space_id: str) -> ClickUpSpace: ...

    def fetch_spaces(self, workspace_id: str) -> list[ClickUpSpace]: ...

    def fetch_lists(self, space_id: str) -> list[ClickUpList]: ...

    def fetch_custom_items(self, workspace_id: str) -> list[ClickUpCustomItem]: ...

    def fetch_custom_item(self, custom_item_id: str, workspace_id: str) -> ClickUpCustomItem: ...

    def track_time_spent(
        self,
        task_id: str,
        time_spent_millis: int,
        workspace_id: str,
        use_custom_task_ids: bool,
    ) -> None: ...

    def update_task_status(
        self,
        task_id: str,
        status_name: str,
        workspace_id: str,
        use_custom_task_ids: bool,
    ) -> None: ...

    def test_connection(self) -> None: ...


class ClickUpClient:
    """Client for ClickUp API v2.

    Every call except test_connection raises ClickUpApiError on a non-2xx
    status, including the time tracking and status update writes.
    """

    BASE_URL = "https://api.clickup.com/api/v2"

    def __init__(
        self,
        api_token: str,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize ClickUp client.

        Args:
            api_token: Personal API token. Sent verbatim in the Authorization
                header, without a "Bearer" prefix.
            transport: Optional httpx transport, e.g. a MockTransport in tests.
            timeout: Request timeout in seconds.

        Raises:
            ValueError: If no API token is given.
        """
        if not api_token:
            raise ValueError("ClickUp API token not provided")

        self.client = httpx.Client(
            base_url=self.BASE_URL,
            headers={"Authorization": api_token},
            timeout=timeout,
            transport=transport,
        )

    def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        logger.debug(f"{method} {path} params={params}")
        try:
            return self.client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            raise ClickUpApiError(f"{method} {path} failed: {e}") from e

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        response = self._send(method, path, params=params, json=json)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ClickUpApiError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
            ) from e
        return response

    @staticmethod
    def _decode(response: httpx.Response, model: type[ModelT]) -> ModelT:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ClickUpApiError(
                f"Unexpected response from {response.request.url}: {e}",
                status_code=response.status_code,
            ) from e

    def fetch_task(
        self, task_id: str, use_custom_task_ids: bool, workspace_id: str | None
    ) -> ClickUpTask:
        """Fetch a single task.

        Args:
            task_id: Task ID, or custom task ID when use_custom_task_ids is set.
            use_custom_task_ids: Whether task_id is a custom task ID.
            workspace_id: Workspace ID; required by the API for custom task IDs.

        Returns:
            The task.

        Raises:
            ClickUpApiError: If API request fails.
        """
        params: dict[str, Any] = {}
        if use_custom_task_ids and workspace_id is not None:
            params["custom_task_ids"] = "true"
            params["team_id"] = workspace_id

        response = self._request("GET", f"/task/{task_id}", params=params)
        return self._decode(response, ClickUpTask)

    def fetch_tasks(
        self,
        workspace_id: str,
        assignee_id: str | None,
        page: int,
        use_custom_task_ids: bool,
    ) -> list[ClickUpTask]:
        """Fetch one page of tasks of a workspace.

        The page and assignee filter are only sent together, when an assignee
        is given.

        Args:
            workspace_id: Workspace ID.
            assignee_id: Optional assignee user ID.
            page: Zero-based page number (the API page size is 100).
            use_custom_task_ids: Whether to request custom task IDs.

        Returns:
            List of tasks.

        Raises:
            ClickUpApiError: If API request fails.
        """
        params: dict[str, Any] = {"subtasks": "true", "archived": "false"}
        if assignee_id:
            params["page"] = page
            params["assignees[]"] = assignee_id
        if use_custom_task_ids:
            params["custom_task_ids"] = "true"

        response = self._request("GET", f"/team/{workspace_id}/task", params=params)
        return self._decode(response, TasksEnvelope).tasks

    def fetch_workspaces(self) -> list[ClickUpWorkspace]:
        """Fetch all authorized workspaces.

        Raises:
            ClickUpApiError: If API request fails.
        """
        response = self._request("GET", "/team")
        return self._decode(response, WorkspacesEnvelope).teams

    def fetch_space(self, space_id: str) -> ClickUpSpace:
        """Fetch a space with its statuses.

        Raises:
            ClickUpApiError: If API request fails.
        """
        response = self._request("GET", f"/space/{space_id}")
        return self._decode(response, ClickUpSpace)

    def fetch_spaces(self, workspace_id: str) -> list[ClickUpSpace]:
        """Fetch the non-archived spaces of a workspace.

        Raises:
            ClickUpApiError: If API request fails.
        """
        response = self._request(
            "GET", f"/team/{workspace_id}/space", params={"archived": "false"}
        )
        return self._decode(response, SpacesEnvelope).spaces

    def fetch_lists(self, space_id: str) -> list[ClickUpList]:
        """Fetch the non-archived folderless lists of a space.

        Raises:
            ClickUpApiError: If API request fails.
        """
        response = self._request(
            "GET", f"/space/{space_id}/list", params={"archived": "false"}
        )
        return self._decode(response, ListsEnvelope).lists

    def fetch_custom_items(self, workspace_id: str) -> list[ClickUpCustomItem]:
        """Fetch the custom items (custom task types) of a workspace.

        Raises:
            ClickUpApiError: If API request fails.
        """
        response = self._request("GET", f"/team/{workspace_id}/custom_item")
        return self._decode(response, CustomItemsEnvelope).custom_items

    def fetch_custom_item(self, custom_item_id: str, workspace_id: str) -> ClickUpCustomItem:
        """Fetch a single custom item of a workspace.

        The API has no single-item endpoint, so the workspace's items are
        fetched and searched.

        Raises:
            ClickUpApiError: If API request fails or the item does not exist.
        """
        for item in self.fetch_custom_items(workspace_id):
            if item.id == custom_item_id:
                return item
        raise ClickUpApiError(
            f"Custom item {custom_item_id} not found in workspace {workspace_id}"
        )

    def track_time_spent(
        self,
        task_id: str,
        time_spent_millis: int,
        workspace_id: str,
        use_custom_task_ids: bool,
    ) -> None:
        """Add a time tracking entry to a task.

        Args:
            task_id: Task ID.
            time_spent_millis: Duration in milliseconds.
            workspace_id: Workspace ID.
            use_custom_task_ids: Whether task_id is a custom task ID.

        Raises:
            ClickUpApiError: If API request fails.
        """
        params: dict[str, Any] = {}
        if use_custom_task_ids:
            params["custom_task_ids"] = "true"
            params["team_id"] = workspace_id

        self._request(
            "POST",
            f"/task/{task_id}/time",
            params=params,
            json={"time": str(time_spent_millis)},
        )
        logger.info(f"Tracked {time_spent_millis} ms on task {task_id}")

    def update_task_status(
        self,
        task_id: str,
        status_name: str,
        workspace_id: str,
        use_custom_task_ids: bool,
    ) -> None:
        """Move a task to another status.

        Args:
            task_id: Task ID.
            status_name: Status label (not the status id).
            workspace_id: Workspace ID.
            use_custom_task_ids: Whether task_id is a custom task ID.

        Raises:
            ClickUpApiError: If API request fails.
        """
        params: dict[str, Any] = {"team_id": workspace_id}
        if use_custom_task_ids:
            params["custom_task_ids"] = "true"

        self._request(
            "PUT",
            f"/task/{task_id}",
            params=params,
            json={"status": status_name},
        )
        logger.info(f"Task {task_id} moved to status '{status_name}'")

    def test_connection(self) -> None:
        """Check that the token grants access to the API.

        Raises:
            ConnectionTestError: If the API answers with a non-2xx status.
            ClickUpApiError: If the request cannot be sent.
        """
        response = self._send("GET", "/team")
        if not 200 <= response.status_code < 300:
            raise ConnectionTestError(response.status_code)

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> "ClickUpClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
