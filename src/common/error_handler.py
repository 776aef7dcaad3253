################################################################################
# File Name: error_handler.py
# Purpose/Description: Bootstrap error taxonomy, classification and reporting
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
Error handling module.

Provides the error taxonomy used by the bootstrap:
- Custom exception classes by error type
- Error classification (config, startup, lifecycle, restart, system)
- Structured error reporting
- Rendering of exceptions (with their cause chain) for crash reports

Nothing in the bootstrap is retried. Every failure either degrades
(platform probe) or ends the process after diagnostics are captured.

Usage:
    from common.error_handler import StartupError, handleError

    try:
        host.init(progress)
    except Exception as e:
        raise StartupError(f"Host init failed: {e}") from e
"""

import logging
import traceback
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Categories of errors for classification."""
    CONFIGURATION = 'config'      # Config/path errors, fail fast
    STARTUP = 'startup'           # Host init/startup tasks failed, fatal
    LIFECYCLE = 'lifecycle'       # State machine misuse
    RESTART = 'restart'           # Successor process could not be spawned
    SYSTEM = 'system'             # Unexpected errors


# ================================================================================
# Custom Exception Classes
# ================================================================================

class BaseError(Exception):
    """Base exception for all custom errors."""

    category: ErrorCategory = ErrorCategory.SYSTEM

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def toDict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            'type': self.__class__.__name__,
            'category': self.category.value,
            'message': self.message,
            'details': self.details
        }


class ConfigurationError(BaseError):
    """Configuration or path resolution failure."""
    category = ErrorCategory.CONFIGURATION


class StartupError(BaseError):
    """Application host failed during init or startup tasks."""
    category = ErrorCategory.STARTUP


class LifecycleError(BaseError):
    """Invalid lifecycle state transition or repeated run."""
    category = ErrorCategory.LIFECYCLE


class RestartError(BaseError):
    """Successor process could not be launched."""
    category = ErrorCategory.RESTART


# ================================================================================
# Error Classification
# ================================================================================

def classifyError(error: BaseException) -> ErrorCategory:
    """
    Classify an error into a category.

    Args:
        error: Exception to classify

    Returns:
        ErrorCategory for the error
    """
    if isinstance(error, BaseError):
        return error.category

    errorMessage = str(error).lower()

    if isinstance(error, (FileNotFoundError, PermissionError)):
        return ErrorCategory.CONFIGURATION

    if any(term in errorMessage for term in ['config', 'missing', 'required']):
        return ErrorCategory.CONFIGURATION

    return ErrorCategory.SYSTEM


# ================================================================================
# Error Rendering
# ================================================================================

def renderException(error: BaseException) -> str:
    """
    Render an exception with its full cause chain and traceback.

    The rendered text is what crash reports persist and what fault
    signatures are matched against.

    Args:
        error: Exception to render

    Returns:
        Multi-line string including type, message, causes and frames
    """
    lines = traceback.format_exception(type(error), error, error.__traceback__)
    return ''.join(lines).rstrip('\n')


def formatError(error: BaseException) -> str:
    """
    Format an error for a single log line.

    Args:
        error: Exception to format

    Returns:
        Formatted error string
    """
    category = classifyError(error)

    if isinstance(error, BaseError):
        details = f" | details={error.details}" if error.details else ""
        return f"[{category.value.upper()}] {error.message}{details}"

    return f"[{category.value.upper()}] {type(error).__name__}: {error}"


def handleError(
    error: BaseException,
    context: dict[str, Any] | None = None,
    reraise: bool = True
) -> dict[str, Any]:
    """
    Handle an error with logging and classification.

    Args:
        error: Exception that occurred
        context: Additional context information
        reraise: Whether to re-raise the exception

    Returns:
        Error details dictionary

    Raises:
        The original exception if reraise is True
    """
    category = classifyError(error)
    context = context or {}

    errorDetails = {
        'type': type(error).__name__,
        'category': category.value,
        'message': str(error),
        'context': context,
        'traceback': renderException(error)
    }

    if category == ErrorCategory.CONFIGURATION:
        logger.error(f"Configuration error: {error}")
    elif category == ErrorCategory.RESTART:
        logger.error(f"Restart error: {error}")
    else:
        logger.error(f"Error: {error}", exc_info=error)

    if reraise:
        raise error

    return errorDetails
