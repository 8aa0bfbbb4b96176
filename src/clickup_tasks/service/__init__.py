"""Task service and time parsing."""

from clickup_tasks.service.duration import parse_time_spent
from clickup_tasks.service.task_service import (
    CLICKUP_PAGE_SIZE,
    ClickUpTaskService,
    page_for_offset,
)

__all__ = ["CLICKUP_PAGE_SIZE", "ClickUpTaskService", "page_for_offset", "parse_time_spent"]
