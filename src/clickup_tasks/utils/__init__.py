"""Utility modules for the ClickUp task tools."""

from clickup_tasks.utils.logging import get_logger, setup_logging
from clickup_tasks.utils.storage import StorageManager

__all__ = ["get_logger", "setup_logging", "StorageManager"]
