"""Exceptions raised by the ClickUp client, service and repository."""


class ClickUpApiError(OSError):
    """A ClickUp API call failed.

    Raised for transport errors, non-2xx responses and payloads that do not
    decode into the expected model. The underlying exception is chained.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConnectionTestError(ClickUpApiError):
    """The connection test returned a status outside the 2xx range."""

    def __init__(self, status_code: int) -> None:
        super().__init__(
            f"Cannot connect to ClickUp API. Status code: {status_code}",
            status_code=status_code,
        )


class InvalidTimeFormatError(ValueError):
    """Time spent text could not be parsed."""

    EXPECTED_FORMAT = "Xh Ym"

    def __init__(self, text: str) -> None:
        super().__init__(
            f"Invalid time format: '{text}'. Expected format: '{self.EXPECTED_FORMAT}'"
        )
        self.text = text


class RepositoryError(Exception):
    """A repository operation failed; wraps the API error for presentation."""
