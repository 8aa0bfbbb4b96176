"""ClickUp API integration."""

from clickup_tasks.clickup.client import ClickUpApiClient, ClickUpClient
from clickup_tasks.clickup.models import (
    ClickUpCustomItem,
    ClickUpList,
    ClickUpSpace,
    ClickUpSpaceRef,
    ClickUpTask,
    ClickUpTaskState,
    ClickUpTeamMember,
    ClickUpUser,
    ClickUpWorkspace,
    TaskType,
    classify_task_type,
)

__all__ = [
    "ClickUpApiClient",
    "ClickUpClient",
    "ClickUpCustomItem",
    "ClickUpList",
    "ClickUpSpace",
    "ClickUpSpaceRef",
    "ClickUpTask",
    "ClickUpTaskState",
    "ClickUpTeamMember",
    "ClickUpUser",
    "ClickUpWorkspace",
    "TaskType",
    "classify_task_type",
]
