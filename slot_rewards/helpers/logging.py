"""Logger module."""

import logging
import os
import sys

import colorlog

loggers: dict[str, logging.Logger] = {}

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _default_level() -> str:
    return (os.getenv("LOG_LEVEL") or "INFO").upper()


def _default_color() -> bool:
    return (os.getenv("LOG_COLOR") or "").strip().lower() in {"1", "true", "yes", "on"}


def get_logger(
    name: str,
    log_handler: str = "stdout",
    log_level: str | None = None,
    log_color: bool | None = None,
) -> logging.Logger:
    """Get logger.

    Args:
        name: The name of the logger.
        log_handler: The log handler type ('stdout').
        log_level: The logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR',
            'CRITICAL'). Falls back to the LOG_LEVEL environment variable.
        log_color: Whether to use colored output. Falls back to LOG_COLOR.

    Returns:
        logging.Logger: Configured logger instance.

    Raises:
        ValueError: If invalid handler or log level is provided.
    """
    if name in loggers:
        return loggers[name]

    level_name = log_level or _default_level()
    color = _default_color() if log_color is None else log_color

    if log_handler != "stdout":
        err_msg = f"Invalid handler: {log_handler}"
        raise ValueError(err_msg)

    if level_name not in LOG_LEVELS:
        err_msg = f"Invalid log level: {level_name}"
        raise ValueError(err_msg)

    logger = colorlog.getLogger(name) if color else logging.getLogger(name)
    handler = (
        colorlog.StreamHandler(sys.stdout)
        if color
        else logging.StreamHandler(sys.stdout)
    )

    level = LOG_LEVELS[level_name]
    logger.setLevel(level)
    handler.setLevel(level)

    if color:
        formatter: logging.Formatter = colorlog.ColoredFormatter(
            f"%(log_color)s {LOG_FORMAT}",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )
    else:
        formatter = logging.Formatter(LOG_FORMAT)

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    loggers[name] = logger
    return logger


def set_log_level(log_level: str, prefix: str = "slot_rewards") -> None:
    """Apply ``log_level`` to loggers already handed out under ``prefix``.

    Module loggers are created at import time, before settings are loaded, so
    the configured level is pushed onto them once the settings are known.

    Raises:
        ValueError: If the log level is invalid.
    """
    level_name = log_level.upper()
    if level_name not in LOG_LEVELS:
        err_msg = f"Invalid log level: {log_level}"
        raise ValueError(err_msg)

    level = LOG_LEVELS[level_name]
    for name, logger in loggers.items():
        if name == prefix or name.startswith(f"{prefix}."):
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)


__all__ = ["LOG_LEVELS", "get_logger", "set_log_level"]
