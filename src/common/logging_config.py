################################################################################
# File Name: logging_config.py
# Purpose/Description: Server log configuration (console + log directory file)
# Author: Michael Cornelison
# Creation Date: 2026-10-17
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Logging configuration module.

Configures the standard logging module for the server process:
- Configurable log level
- Console output plus a file in the application log directory
- PII masking on every handler
- key=value context suffixes

Logging is configured twice during a normal start: once with console output
only (so configuration errors are visible) and again after the application
paths are known, adding the server log file.

Usage:
    from common.logging_config import setupLogging, getLogger

    setupLogging(level='INFO', logFile='/var/lib/serverboot/logs/server.log')
    logger = getLogger(__name__)
    logWithContext(logger, 'info', "Host started", version='1.2.0')
"""

import logging
import re
import sys
from pathlib import Path
from typing import Any

DEFAULT_FORMAT = '%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

PII_PATTERNS = {
    'email': re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b'),
    'phone': re.compile(r'\b\d{3}[-.]?\d{3}[-.]?\d{4}\b'),
}


class PIIMaskingFilter(logging.Filter):
    """Logging filter that masks email addresses and phone numbers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = maskPII(record.msg)
        return True


def maskPII(message: str) -> str:
    """
    Mask PII patterns in a message.

    Args:
        message: Text to mask

    Returns:
        Text with every PII match replaced by a marker
    """
    for name, pattern in PII_PATTERNS.items():
        message = pattern.sub(f'[{name.upper()}_MASKED]', message)
    return message


def setupLogging(
    level: str = 'INFO',
    logFile: str | None = None,
    logFormat: str | None = None,
    enablePIIMasking: bool = True
) -> logging.Logger:
    """
    Configure application logging.

    Existing root handlers are closed and replaced, so calling this again after the log
    directory is known swaps in the file handler cleanly.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        logFile: Optional file path for log output
        logFormat: Custom format string
        enablePIIMasking: Whether to mask PII in logs

    Returns:
        Root logger instance
    """
    rootLogger = logging.getLogger()
    rootLogger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in rootLogger.handlers[:]:
        rootLogger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        fmt=logFormat or DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT
    )

    consoleHandler = logging.StreamHandler(sys.stdout)
    consoleHandler.setFormatter(formatter)
    if enablePIIMasking:
        consoleHandler.addFilter(PIIMaskingFilter())
    rootLogger.addHandler(consoleHandler)

    if logFile:
        logPath = Path(logFile)
        logPath.parent.mkdir(parents=True, exist_ok=True)

        fileHandler = logging.FileHandler(logPath, encoding='utf-8')
        fileHandler.setFormatter(formatter)
        if enablePIIMasking:
            fileHandler.addFilter(PIIMaskingFilter())
        rootLogger.addHandler(fileHandler)

    rootLogger.info(f"Logging configured | level={level} | file={logFile}")

    return rootLogger


def getLogger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def logWithContext(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: Any
) -> None:
    """
    Log a message with structured context.

    Args:
        logger: Logger instance
        level: Log level
        message: Log message
        **context: Additional context fields
    """
    logFunc = getattr(logger, level.lower(), logger.info)

    if context:
        contextStr = ' | ' + ' '.join(f'{k}={v}' for k, v in context.items())
        logFunc(message + contextStr)
    else:
        logFunc(message)
