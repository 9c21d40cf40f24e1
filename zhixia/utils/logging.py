"""Logging configuration for Zhixia."""

import logging
import sys
from pathlib import Path
from datetime import datetime, timedelta
from typing import Optional


def cleanup_old_logs(log_dir: Path = None, days_to_keep: int = 7) -> int:
    """
    Clean up log files older than specified days.

    Args:
        log_dir: Directory containing logs (defaults to ~/.zhixia/logs)
        days_to_keep: Number of days to keep logs (default 7)

    Returns:
        Number of files deleted
    """
    if log_dir is None:
        log_dir = Path.home() / ".zhixia" / "logs"

    if not log_dir.exists():
        return 0

    cutoff_time = datetime.now() - timedelta(days=days_to_keep)
    files_deleted = 0

    for log_file in log_dir.glob("*.log"):
        try:
            file_mtime = datetime.fromtimestamp(log_file.stat().st_mtime)
            if file_mtime < cutoff_time:
                log_file.unlink()
                files_deleted += 1
        except OSError:
            # File vanished or is locked; leave it for the next run
            continue

    return files_deleted


def setup_logging(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    console_output: bool = False
) -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        log_file: Path to log file (defaults to ~/.zhixia/logs/zhixia_YYYYMMDD.log)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        console_output: Whether to also output to console

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("zhixia")
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    files_deleted = 0
    if log_file is None:
        log_dir = Path.home() / ".zhixia" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        files_deleted = cleanup_old_logs(log_dir)

        timestamp = datetime.now().strftime("%Y%m%d")
        log_file = log_dir / f"zhixia_{timestamp}.log"

    log_file.parent.mkdir(parents=True, exist_ok=True)

    # File handler with detailed format
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_format = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)

    # Console handler if requested (simpler format)
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_format = logging.Formatter('%(levelname)s: %(message)s')
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

    logger.info("=" * 60)
    logger.info(f"Zhixia logging started - Level: {level}")
    logger.info(f"Log file: {log_file}")
    if files_deleted > 0:
        logger.info(f"Cleaned up {files_deleted} old log files")
    logger.info("=" * 60)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance. If the logger hasn't been set up yet, sets it up with default configuration.

    Args:
        name: Logger name (defaults to 'zhixia')

    Returns:
        Logger instance
    """
    logger_name = f"zhixia.{name}" if name else "zhixia"
    logger = logging.getLogger(logger_name)

    root_logger = logging.getLogger("zhixia")
    if not root_logger.handlers:
        setup_logging(level="DEBUG")

    return logger
