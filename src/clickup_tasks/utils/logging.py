"""Logging configuration for the ClickUp task tools."""

import logging
from collections.abc import Iterable
from pathlib import Path

from clickup_tasks.utils.storage import DEFAULT_CONFIG_DIR

LOG_FILE_NAME = "clickup-tasks.log"


def redact(secret: str) -> str:
    """Mask a secret, keeping its first and last four characters.

    Args:
        secret: Token or key to mask.

    Returns:
        Masked value, or "****" for short secrets.
    """
    if len(secret) <= 8:
        return "****"
    return f"{secret[:4]}...{secret[-4:]}"


class RedactingFilter(logging.Filter):
    """Replaces known secrets in log records with their masked form."""

    def __init__(self, secrets: Iterable[str]) -> None:
        super().__init__()
        self.secrets = [secret for secret in secrets if secret]

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True

        message = record.getMessage()
        for secret in self.secrets:
            message = message.replace(secret, redact(secret))
        record.msg = message
        record.args = None
        return True


def setup_logging(
    log_level: int = logging.INFO,
    config_dir: Path | None = None,
    secrets: Iterable[str] = (),
) -> None:
    """Configure logging for the application.

    Args:
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG).
        config_dir: Directory to store log files. Defaults to ~/.clickup-tasks/
        secrets: Values masked in every handler's output, e.g. the API token.
    """
    if config_dir is None:
        config_dir = DEFAULT_CONFIG_DIR

    config_dir.mkdir(parents=True, exist_ok=True)
    redacting_filter = RedactingFilter(secrets)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler = logging.FileHandler(config_dir / LOG_FILE_NAME)
    file_handler.setLevel(log_level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    file_handler.addFilter(redacting_filter)
    root_logger.addHandler(file_handler)

    # Console output stays quiet unless verbose; the CLI talks through rich
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level if log_level <= logging.DEBUG else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))
    console_handler.addFilter(redacting_filter)
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO, including the full URL
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
