"""
Logging setup for the agent tools.

The package logger writes to stderr, since stdout carries the JSON response
envelope. When LOG_DIR is set it also keeps a daily rotated log, a
size-capped error log and a monthly audit file of broadcast attempts.
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


# Log formats
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_dir() -> Optional[Path]:
    """Directory for log files, or None when file logging is disabled."""
    value = os.getenv("LOG_DIR")
    if not value:
        return None
    log_dir = Path(value)
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_log_level(default: int = logging.WARNING) -> int:
    """Resolve LOG_LEVEL (name or number) into a logging level."""
    value = os.getenv("LOG_LEVEL")
    if not value:
        return default
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    detailed: bool = False,
) -> logging.Logger:
    """
    Attach a stderr handler and, with LOG_DIR, rotating file handlers.

    Args:
        name: Logger name, usually "agent_tools"
        level: Threshold for the console and main file handler
        log_file: File name inside LOG_DIR (defaults to <name>.log)
        console: Add the stderr handler
        detailed: Include file and line number in each record

    Returns:
        The configured logger; an already configured one is returned untouched

    Example:
        >>> logger = setup_logger("agent_tools", level=logging.DEBUG)
        >>> logger.debug("Nonce: 12")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    log_format = DETAILED_FORMAT if detailed else SIMPLE_FORMAT
    formatter = logging.Formatter(log_format, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    log_dir = get_log_dir()
    if log_dir is None:
        return logger

    # File handler with daily rotation
    if log_file is None:
        log_file = f"{name}.log"

    file_handler = TimedRotatingFileHandler(
        log_dir / log_file,
        when="midnight",
        interval=1,
        backupCount=30,  # Keep 30 days of logs
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Separate error log
    error_handler = RotatingFileHandler(
        log_dir / f"{name}_errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(error_handler)

    return logger


def setup_broadcast_logger() -> logging.Logger:
    """
    Setup logger for broadcast attempts.

    Writes to a monthly audit file when LOG_DIR is set; otherwise the
    records propagate to the package logger only.
    """
    logger = logging.getLogger("agent_tools.broadcasts")
    logger.setLevel(logging.INFO)

    if logger.handlers:
        return logger

    log_dir = get_log_dir()
    if log_dir is not None:
        formatter = logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT)
        audit_path = log_dir / f"broadcasts_{datetime.now().strftime('%Y%m')}.log"
        audit_handler = logging.FileHandler(audit_path, encoding="utf-8")
        audit_handler.setLevel(logging.INFO)
        audit_handler.setFormatter(formatter)
        logger.addHandler(audit_handler)

    return logger


def log_broadcast(
    logger: logging.Logger,
    function: str,
    fee: int,
    nonce: int,
    txid: Optional[str] = None,
    success: bool = True,
    reason: Optional[str] = None,
):
    """
    Log a broadcast attempt in structured format.

    Args:
        logger: Broadcast logger instance
        function: Contract identifier and function, e.g. "SP...ft-stx-swap::cancel"
        fee: Fee in uSTX
        nonce: Account nonce used
        txid: Transaction id
        success: Whether the node accepted the transaction
        reason: Rejection reason reported by the node
    """
    status = "SUCCESS" if success else "FAILED"
    msg = f"{status} | {function} | Fee: {fee} uSTX | Nonce: {nonce}"
    if txid:
        msg += f" | TX: {txid}"
    if reason:
        msg += f" | Reason: {reason}"

    if success:
        logger.info(msg)
    else:
        logger.error(msg)


def configure_tool_logging(debug: bool = False) -> logging.Logger:
    """Configure the package logger for a script run."""
    level = logging.DEBUG if debug else get_log_level()
    return setup_logger("agent_tools", level=level, detailed=debug)
