"""Logging configuration"""

from pathlib import Path
from typing import Optional

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(logs_dir: Optional[Path] = None):
    """
    Add file sinks next to loguru's default stderr sink.
    """
    if logs_dir is None:
        project_root = Path(__file__).resolve().parent.parent.parent
        logs_dir = project_root / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    # everything, rotated at midnight
    logger.add(
        logs_dir / "application.log",
        rotation="00:00",
        retention="30 days",
        compression="zip",
        encoding="utf-8",
        level="INFO",
        format=LOG_FORMAT,
        enqueue=True,
    )

    logger.add(
        logs_dir / "error.log",
        rotation="00:00",
        retention="90 days",
        compression="zip",
        encoding="utf-8",
        level="ERROR",
        format=LOG_FORMAT,
        enqueue=True,
    )

    def scheduler_filter(record):
        """Only scheduled-run and scheduler messages"""
        message = record["message"]
        return any(prefix in message for prefix in ["[Scheduled]", "[Scheduler]"])

    logger.add(
        logs_dir / "scheduler.log",
        rotation="00:00",
        retention="90 days",
        compression="zip",
        encoding="utf-8",
        level="INFO",
        filter=scheduler_filter,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
        enqueue=True,
    )

    logger.info(f"Logging configured, log files are written to {logs_dir}")
