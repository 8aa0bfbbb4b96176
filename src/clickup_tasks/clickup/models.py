"""Pydantic models for ClickUp API responses."""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

if TYPE_CHECKING:
    from clickup_tasks.repository import ClickUpRepository


class TaskType(str, Enum):
    """Presentational task type."""

    BUG = "BUG"
    FEATURE = "FEATURE"
    EXCEPTION = "EXCEPTION"
    OTHER = "OTHER"


_BUG_PATTERN = re.compile(r"bug|bugs|issue|issues|defect|defects")
_FEATURE_PATTERN = re.compile(
    r"task|tasks|story|stories|user story|user stories|feature|features"
)
_EXCEPTION_PATTERN = re.compile(
    r"ex|exception|exceptions|error|errors|incident|incidents"
)


def classify_task_type(custom_item_name: str | None) -> TaskType:
    """Derive a task type from the name of its custom item.

    Args:
        custom_item_name: Name of the custom item (task type) attached to the
            task, or None when the task has none.

    Returns:
        The matching task type. Tasks without a custom item are features.
    """
    if custom_item_name is None:
        return TaskType.FEATURE

    name = custom_item_name.lower()
    if _BUG_PATTERN.fullmatch(name):
        return TaskType.BUG
    if _FEATURE_PATTERN.fullmatch(name):
        return TaskType.FEATURE
    if _EXCEPTION_PATTERN.fullmatch(name):
        return TaskType.EXCEPTION
    return TaskType.OTHER


def _from_epoch_millis(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)


class ClickUpModel(BaseModel):
    """Base for ClickUp models; numeric ids arrive as JSON numbers."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class ClickUpUser(ClickUpModel):
    """ClickUp user model."""

    id: str
    username: str | None = None
    email: str | None = None

    def __str__(self) -> str:
        return self.username or self.id


class ClickUpTeamMember(ClickUpModel):
    """Member entry of a workspace."""

    user: ClickUpUser


class ClickUpWorkspace(ClickUpModel):
    """ClickUp workspace (called a team in the API)."""

    id: str
    name: str
    members: list[ClickUpTeamMember] = Field(default_factory=list)


class ClickUpTaskState(ClickUpModel):
    """Task status as defined on a space."""

    id: str | None = None
    status: str
    type: str | None = None


class ClickUpSpace(ClickUpModel):
    """ClickUp space model."""

    id: str
    name: str
    statuses: list[ClickUpTaskState] = Field(default_factory=list)


class ClickUpSpaceRef(ClickUpModel):
    """Space reference embedded in a task; carries only the id."""

    id: str


class ClickUpList(ClickUpModel):
    """ClickUp list model."""

    id: str
    name: str


class ClickUpCustomItem(ClickUpModel):
    """Custom item (custom task type) of a workspace."""

    id: str
    name: str


class ClickUpTask(ClickUpModel):
    """ClickUp task model."""

    id: str
    custom_id: str | None = None
    custom_item_id: str | None = None
    name: str
    description: str | None = None
    date_created: str | None = None
    date_updated: str | None = None
    date_closed: str | None = None
    status: ClickUpTaskState | None = None
    url: str | None = None
    space: ClickUpSpaceRef | None = None
    custom_item: ClickUpCustomItem | None = None

    _repository: Any = PrivateAttr(default=None)

    @property
    def repository(self) -> "ClickUpRepository | None":
        """Repository this task was loaded through, if any."""
        return self._repository

    def attach_repository(self, repository: "ClickUpRepository") -> None:
        """Remember the repository the task was loaded through."""
        self._repository = repository

    @property
    def summary(self) -> str:
        return self.name

    @property
    def issue_url(self) -> str | None:
        return self.url

    @property
    def is_closed(self) -> bool:
        """A task is closed as soon as it carries a closed date."""
        return self.date_closed is not None

    @property
    def created(self) -> datetime | None:
        return _from_epoch_millis(self.date_created)

    @property
    def updated(self) -> datetime | None:
        return _from_epoch_millis(self.date_updated)

    @property
    def task_type(self) -> TaskType:
        """Task type derived from the attached custom item."""
        return classify_task_type(self.custom_item.name if self.custom_item else None)

    @property
    def presentable_id(self) -> str:
        """Id shown to the user.

        The custom id is preferred when the owning repository works with
        custom task ids and the task has one.
        """
        if self._repository is not None and self._repository.uses_custom_task_ids:
            if self.custom_id:
                return self.custom_id
        return self.id or ""


class TasksEnvelope(ClickUpModel):
    """Response body of the task listing endpoint."""

    tasks: list[ClickUpTask]


class WorkspacesEnvelope(ClickUpModel):
    """Response body of the authorized workspaces endpoint."""

    teams: list[ClickUpWorkspace]


class SpacesEnvelope(ClickUpModel):
    """Response body of the spaces endpoint."""

    spaces: list[ClickUpSpace]


class ListsEnvelope(ClickUpModel):
    """Response body of the folderless lists endpoint."""

    lists: list[ClickUpList]


class CustomItemsEnvelope(ClickUpModel):
    """Response body of the custom items endpoint."""

    custom_items: list[ClickUpCustomItem]
