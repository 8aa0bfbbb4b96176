"""Task operations on top of a ClickUp API client."""

import logging

from clickup_tasks.clickup.client import ClickUpApiClient
from clickup_tasks.clickup.models import (
    ClickUpCustomItem,
    ClickUpList,
    ClickUpSpace,
    ClickUpTask,
    ClickUpWorkspace,
)
from clickup_tasks.service.duration import parse_time_spent

logger = logging.getLogger(__name__)

# ClickUp always pages task listings by 100
CLICKUP_PAGE_SIZE = 100


def page_for_offset(offset: int) -> int:
    """Translate an item offset into a ClickUp page number.

    Raises:
        ValueError: If offset is negative.
    """
    if offset < 0:
        raise ValueError(f"Offset must not be negative: {offset}")
    return offset // CLICKUP_PAGE_SIZE


class ClickUpTaskService:
    """Service layer between the API client and its consumers."""

    def __init__(self, api_client: ClickUpApiClient) -> None:
        """Initialize task service.

        Args:
            api_client: Any implementation of the ClickUp API operations.
        """
        self.api_client = api_client

    def get_task(
        self, task_id: str, use_custom_task_ids: bool, workspace_id: str | None
    ) -> ClickUpTask:
        return self.api_client.fetch_task(task_id, use_custom_task_ids, workspace_id)

    def get_tasks(
        self,
        workspace_id: str,
        assignee_id: str | None,
        offset: int,
        use_custom_task_ids: bool,
    ) -> list[ClickUpTask]:
        """Fetch the page of tasks containing the given offset.

        Only a single page is fetched per call; callers wanting more than 100
        tasks must call again with a larger offset.

        Args:
            workspace_id: Workspace ID.
            assignee_id: Optional assignee user ID.
            offset: Index of the first wanted task.
            use_custom_task_ids: Whether to request custom task IDs.

        Returns:
            List of tasks.
        """
        page = page_for_offset(offset)
        logger.debug(f"Fetching tasks of workspace {workspace_id}, offset {offset} -> page {page}")
        return self.api_client.fetch_tasks(workspace_id, assignee_id, page, use_custom_task_ids)

    def get_workspaces(self) -> list[ClickUpWorkspace]:
        return self.api_client.fetch_workspaces()

    def get_space(self, space_id: str) -> ClickUpSpace:
        return self.api_client.fetch_space(space_id)

    def get_spaces(self, workspace_id: str) -> list[ClickUpSpace]:
        return self.api_client.fetch_spaces(workspace_id)

    def get_lists(self, space_id: str) -> list[ClickUpList]:
        return self.api_client.fetch_lists(space_id)

    def get_custom_items(self, workspace_id: str) -> list[ClickUpCustomItem]:
        return self.api_client.fetch_custom_items(workspace_id)

    def get_custom_item(self, custom_item_id: str, workspace_id: str) -> ClickUpCustomItem:
        return self.api_client.fetch_custom_item(custom_item_id, workspace_id)

    def update_time_spent(
        self,
        task_id: str,
        time_spent: str,
        workspace_id: str,
        use_custom_task_ids: bool,
    ) -> None:
        """Track time spent on a task.

        Args:
            task_id: Task ID.
            time_spent: Time in the format "Xh Ym", e.g. "3h 15m".
            workspace_id: Workspace ID.
            use_custom_task_ids: Whether task_id is a custom task ID.

        Raises:
            InvalidTimeFormatError: If time_spent cannot be parsed.
            ClickUpApiError: If the API request fails.
        """
        millis = parse_time_spent(time_spent)
        self.api_client.track_time_spent(task_id, millis, workspace_id, use_custom_task_ids)

    def update_task_status(
        self,
        task_id: str,
        status_name: str,
        workspace_id: str,
        use_custom_task_ids: bool,
    ) -> None:
        self.api_client.update_task_status(task_id, status_name, workspace_id, use_custom_task_ids)

    def test_connection(self) -> None:
        self.api_client.test_connection()
