"""Task repository backed by ClickUp.

Answers the questions a task-management host asks (find a task, list issues,
available states, move a task, log time) using the task service and the
selections stored in the settings.
"""

import logging

from clickup_tasks.clickup.models import (
    ClickUpList,
    ClickUpSpace,
    ClickUpTask,
    ClickUpTaskState,
    ClickUpWorkspace,
)
from clickup_tasks.config import RepositorySettings
from clickup_tasks.errors import ClickUpApiError, RepositoryError
from clickup_tasks.service import ClickUpTaskService

logger = logging.getLogger(__name__)


class ClickUpRepository:
    """Host-facing facade over ClickUpTaskService."""

    def __init__(self, service: ClickUpTaskService, settings: RepositorySettings) -> None:
        """Initialize repository.

        Args:
            service: Task service used for all API calls.
            settings: Selected workspace, assignee, space, list and id mode.
        """
        self.service = service
        self.settings = settings

    @property
    def uses_custom_task_ids(self) -> bool:
        return self.settings.use_custom_task_ids

    def _require_workspace(self) -> str:
        if not self.settings.workspace_id:
            raise RepositoryError("No ClickUp workspace selected")
        return self.settings.workspace_id

    def find_task(self, task_id: str) -> ClickUpTask | None:
        """Find a task by id.

        Args:
            task_id: Task ID, or custom task ID when custom ids are enabled.

        Returns:
            The task with its custom item attached, or None if the task could
            not be loaded. A custom item that cannot be loaded is left unset.
        """
        try:
            task = self.service.get_task(
                task_id, self.uses_custom_task_ids, self.settings.workspace_id
            )
        except ClickUpApiError as e:
            logger.error(f"Error fetching task with ID {task_id}: {e}")
            return None

        if task.custom_item_id and self.settings.workspace_id:
            try:
                task.custom_item = self.service.get_custom_item(
                    task.custom_item_id, self.settings.workspace_id
                )
            except ClickUpApiError as e:
                logger.warning(
                    f"Custom item {task.custom_item_id} of task {task_id} unavailable: {e}"
                )

        task.attach_repository(self)
        return task

    def get_issues(
        self,
        query: str | None = None,
        offset: int = 0,
        limit: int = 100,
        with_closed: bool = False,
    ) -> list[ClickUpTask]:
        """List tasks of the selected workspace, filtered by the selected assignee.

        One ClickUp page is fetched per call. The query and limit are not
        supported by the task listing endpoint and are ignored.

        Args:
            query: Search text (ignored).
            offset: Index of the first wanted task.
            limit: Maximum number of tasks (ignored).
            with_closed: Whether to include closed tasks.

        Returns:
            List of tasks, empty if nothing is configured or the request fails.
        """
        if not self.settings.workspace_id:
            logger.debug("No workspace selected, returning no issues")
            return []

        logger.debug(f"get_issues called with query={query!r}, offset={offset}, limit={limit}")
        try:
            tasks = self.service.get_tasks(
                self.settings.workspace_id,
                self.settings.assignee_id,
                offset,
                self.uses_custom_task_ids,
            )
        except ClickUpApiError as e:
            logger.error(f"Error fetching tasks with query {query!r}: {e}")
            return []

        for task in tasks:
            task.attach_repository(self)

        if not with_closed:
            tasks = [task for task in tasks if not task.is_closed]
        return tasks

    def get_available_task_states(self, task_id: str) -> list[ClickUpTaskState]:
        """Get the statuses a task can be moved to.

        The statuses are those of the space the task belongs to.

        Raises:
            ClickUpApiError: If the task or its space cannot be loaded.
            RepositoryError: If the task carries no space.
        """
        task = self.service.get_task(
            task_id, self.uses_custom_task_ids, self.settings.workspace_id
        )
        if task.space is None:
            raise RepositoryError(f"Task {task_id} has no space")

        space = self.service.get_space(task.space.id)
        logger.info(
            f"Available task states for {task_id}: "
            + ", ".join(state.status for state in space.statuses)
        )
        return space.statuses

    def set_task_state(self, task_id: str, state: ClickUpTaskState) -> None:
        """Move a task to the given state.

        Raises:
            RepositoryError: If no workspace is selected or the update fails.
        """
        workspace_id = self._require_workspace()
        logger.info(f"Updating task state for task ID {task_id} to '{state.status}'")
        try:
            self.service.update_task_status(
                task_id, state.status, workspace_id, self.uses_custom_task_ids
            )
        except ClickUpApiError as e:
            logger.error(f"Error updating task state for task ID {task_id}: {e}")
            raise RepositoryError("Failed to update task state") from e

    def update_time_spent(self, task_id: str, time_spent: str, comment: str = "") -> None:
        """Log time spent on a task.

        Args:
            task_id: Task ID.
            time_spent: Time in the format "Xh Ym".
            comment: Not supported by the ClickUp API; ignored.

        Raises:
            InvalidTimeFormatError: If time_spent cannot be parsed.
            RepositoryError: If no workspace is selected or the update fails.
        """
        workspace_id = self._require_workspace()
        if comment:
            logger.debug("Time tracking comments are not supported, ignoring comment")

        logger.info(f"Updating time spent for task ID {task_id}: {time_spent}")
        try:
            self.service.update_time_spent(
                task_id, time_spent, workspace_id, self.uses_custom_task_ids
            )
        except ClickUpApiError as e:
            logger.error(f"Error updating time spent for task ID {task_id}: {e}")
            raise RepositoryError("Failed to update time spent") from e

    def test_connection(self) -> None:
        """Check the API token.

        Raises:
            ClickUpApiError: If the connection test fails.
        """
        self.service.test_connection()

    def fetch_workspaces(self) -> list[ClickUpWorkspace]:
        return self.service.get_workspaces()

    def fetch_spaces(self, workspace_id: str | None = None) -> list[ClickUpSpace]:
        return self.service.get_spaces(workspace_id or self._require_workspace())

    def fetch_lists(self, space_id: str | None = None) -> list[ClickUpList]:
        space_id = space_id or self.settings.space_id
        if not space_id:
            raise RepositoryError("No ClickUp space selected")
        return self.service.get_lists(space_id)
