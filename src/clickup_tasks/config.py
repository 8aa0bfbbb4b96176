"""Configuration management for the ClickUp task tools."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel

from clickup_tasks.utils.storage import StorageManager

TOKEN_SERVICE = "clickup"


class RepositorySettings(BaseModel):
    """Selections made in the settings, passed explicitly to every call."""

    workspace_id: str | None = None
    assignee_id: str | None = None
    space_id: str | None = None
    list_id: str | None = None
    use_custom_task_ids: bool = False


class Config:
    """Manages persisted repository settings and the API token."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize configuration.

        Args:
            config_dir: Directory for storing configuration.
        """
        self.storage = StorageManager(config_dir)
        self._settings = RepositorySettings(**self.storage.load_settings())

    @property
    def settings(self) -> RepositorySettings:
        """Current settings. Returns a copy; use the update methods to change them."""
        return self._settings.model_copy()

    def update_settings(self, **changes: Any) -> RepositorySettings:
        """Change some settings and save them.

        Args:
            **changes: Field values, e.g. ``assignee_id="123"``.

        Returns:
            The updated settings.
        """
        data = self._settings.model_dump()
        data.update(changes)
        self._settings = RepositorySettings(**data)
        self.storage.save_settings(self._settings.model_dump())
        return self.settings

    def select_workspace(self, workspace_id: str) -> RepositorySettings:
        """Select a workspace.

        Choosing a different workspace drops the assignee, space and list, as
        they belong to the previous one.
        """
        if workspace_id == self._settings.workspace_id:
            return self.settings
        return self.update_settings(
            workspace_id=workspace_id, assignee_id=None, space_id=None, list_id=None
        )

    def select_space(self, space_id: str) -> RepositorySettings:
        """Select a space; a different space drops the selected list."""
        if space_id == self._settings.space_id:
            return self.settings
        return self.update_settings(space_id=space_id, list_id=None)

    def clear_selected_workspace(self) -> RepositorySettings:
        return self.update_settings(
            workspace_id=None, assignee_id=None, space_id=None, list_id=None
        )

    def clear_selected_space(self) -> RepositorySettings:
        return self.update_settings(space_id=None, list_id=None)

    @property
    def api_token(self) -> str | None:
        return self.storage.get_token(TOKEN_SERVICE)

    def set_api_token(self, token: str) -> None:
        self.storage.set_token(TOKEN_SERVICE, token)
