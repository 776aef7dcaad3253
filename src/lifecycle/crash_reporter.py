################################################################################
# File Name: crash_reporter.py
# Purpose/Description: Unhandled fault capture, crash reports and exit policy
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# ================================================================================
################################################################################

"""
Crash reporting at the process fault boundary.

FaultBoundary installs itself as sys.excepthook and threading.excepthook.
For every unhandled exception it:

1. writes a crash report through UnhandledExceptionWriter (log + file in the
   log directory, or the system temp directory before paths are resolved)
2. leaves the process alive when a debugger/tracer is attached
3. leaves the process alive when the rendered fault matches one of the two
   known background-thread signatures (file watcher, I/O completion callback)
4. otherwise exits immediately with the fault's native error code

The boundary runs on whichever thread faulted and makes no assumption about
the lifecycle state of the main thread.

Usage:
    boundary = FaultBoundary(context)
    boundary.install()
"""

import errno
import logging
import os
import sys
import tempfile
import threading
import uuid
from collections.abc import Callable
from datetime import datetime
from types import TracebackType

from common.error_handler import classifyError, renderException

from .context import BootstrapContext

logger = logging.getLogger(__name__)

# Background-thread faults that must not take the process down
FILE_WATCH_FAULT_SIGNATURE = 'InotifyWatcher'
IO_COMPLETION_FAULT_SIGNATURE = '_IOCompletionCallback'
SUPPRESSED_FAULT_SIGNATURES = (FILE_WATCH_FAULT_SIGNATURE, IO_COMPLETION_FAULT_SIGNATURE)

# EX_SOFTWARE from sysexits.h
EXIT_CODE_UNHANDLED_FAULT = 70

CRASH_REPORT_PREFIX = 'unhandled_'


def nativeErrorCode(error: BaseException) -> int:
    """
    Map an exception to the process exit code that represents it.

    Args:
        error: The unhandled exception

    Returns:
        errno for OS errors, the code of a SystemExit, else EX_SOFTWARE
    """
    if isinstance(error, OSError) and isinstance(error.errno, int) and error.errno > 0:
        return error.errno
    if isinstance(error, SystemExit):
        if isinstance(error.code, int):
            return error.code
        return 0 if error.code is None else 1
    if isinstance(error, MemoryError):
        return errno.ENOMEM
    return EXIT_CODE_UNHANDLED_FAULT


def isSuppressedFault(renderedMessage: str) -> bool:
    """Return True if the rendered fault contains a known benign signature."""
    lowered = renderedMessage.lower()
    return any(signature.lower() in lowered for signature in SUPPRESSED_FAULT_SIGNATURES)


def isDebuggerAttached() -> bool:
    """Return True when a debugger or tracer is hooked into this thread."""
    return sys.gettrace() is not None


class UnhandledExceptionWriter:
    """
    Persists a diagnostic report for an unhandled exception.

    Example:
        path = UnhandledExceptionWriter(context).log(error)
    """

    def __init__(self, context: BootstrapContext, stream=None):
        """
        Args:
            context: Bootstrap context (paths may not be attached yet)
            stream: Console stream for the report header (default: sys.stderr)
        """
        self._context = context
        self._stream = stream

    def _reportDirectory(self) -> str:
        paths = self._context.paths
        if paths is not None:
            return paths.logDirectoryPath
        return tempfile.gettempdir()

    def log(self, error: BaseException) -> str | None:
        """
        Log the exception and write a crash report file.

        Never raises: write failures are logged.

        Args:
            error: The unhandled exception

        Returns:
            Path of the written report, or None if it could not be written
        """
        rendered = renderException(error)
        category = classifyError(error).value

        self._context.logger.error(
            f"UnhandledException | category={category} | thread={threading.current_thread().name}",
            exc_info=(type(error), error, error.__traceback__)
        )

        stream = self._stream or sys.stderr
        try:
            stream.write(f"UnhandledException: {type(error).__name__}: {error}\n")
            stream.flush()
        except (OSError, ValueError):
            pass

        timestamp = datetime.now().strftime('%Y%m%d%H%M%S')
        reportPath = os.path.join(
            self._reportDirectory(),
            f"{CRASH_REPORT_PREFIX}{timestamp}_{uuid.uuid4().hex}.txt"
        )

        lines = [
            f"Time: {datetime.now().isoformat()}",
            f"Process: {os.getpid()}",
            f"Thread: {threading.current_thread().name}",
            f"Category: {category}",
            f"Command line: {' '.join(self._context.commandLine)}",
        ]
        paths = self._context.paths
        if paths is not None:
            lines.append(f"Program data path: {paths.dataDirectoryPath}")
        lines.extend(['', rendered, ''])

        try:
            os.makedirs(os.path.dirname(reportPath), exist_ok=True)
            with open(reportPath, 'w', encoding='utf-8') as f:
                f.write('\n'.join(lines))
        except OSError as e:
            self._context.logger.error(f"Could not write crash report to {reportPath}: {e}")
            return None

        self._context.logger.info(f"Crash report written to {reportPath}")
        return reportPath


class FaultBoundary:
    """
    Process-wide last-resort handler for unhandled exceptions.

    Attributes:
        isInstalled: Whether the hooks are currently installed
        lastReportPath: Path of the most recent crash report
    """

    def __init__(
        self,
        context: BootstrapContext,
        writer: UnhandledExceptionWriter | None = None,
        exitFunction: Callable[[int], None] = os._exit,
        debuggerCheck: Callable[[], bool] = isDebuggerAttached
    ):
        self._context = context
        self._writer = writer or UnhandledExceptionWriter(context)
        self._exit = exitFunction
        self._debuggerCheck = debuggerCheck
        self._previousExceptHook = None
        self._previousThreadHook = None
        self._lock = threading.Lock()
        self.isInstalled = False
        self.lastReportPath: str | None = None

    def install(self) -> None:
        """Install the hooks. Safe to call repeatedly."""
        with self._lock:
            if self.isInstalled:
                return
            self._previousExceptHook = sys.excepthook
            self._previousThreadHook = threading.excepthook
            sys.excepthook = self._handleUncaughtException
            threading.excepthook = self._handleThreadException
            self.isInstalled = True

    def uninstall(self) -> None:
        """Restore the hooks that were active before install()."""
        with self._lock:
            if not self.isInstalled:
                return
            sys.excepthook = self._previousExceptHook
            threading.excepthook = self._previousThreadHook
            self.isInstalled = False

    def _handleUncaughtException(
        self,
        excType: type[BaseException],
        excValue: BaseException,
        excTraceback: TracebackType | None
    ) -> None:
        if issubclass(excType, KeyboardInterrupt):
            self._previousExceptHook(excType, excValue, excTraceback)
            return
        if excValue.__traceback__ is None:
            excValue = excValue.with_traceback(excTraceback)
        self.handleFault(excValue)

    def _handleThreadException(self, args: threading.ExceptHookArgs) -> None:
        if args.exc_value is None or issubclass(args.exc_type, SystemExit):
            self._previousThreadHook(args)
            return
        self.handleFault(args.exc_value)

    def handleFault(self, error: BaseException) -> bool:
        """
        Report a fault and apply the exit policy.

        Args:
            error: The unhandled exception

        Returns:
            True if the process was told to exit, False if it stays alive
        """
        try:
            self.lastReportPath = self._writer.log(error)
        except Exception as e:
            logger.error(f"Crash report failed: {e}")

        if self._debuggerCheck():
            logger.warning("Debugger attached, not exiting after unhandled exception")
            return False

        if isSuppressedFault(renderException(error)):
            logger.warning("Unhandled background fault with a known signature, process continues")
            return False

        exitCode = nativeErrorCode(error)
        logger.critical(f"Exiting after unhandled exception | exit_code={exitCode}")
        _flushLogHandlers()
        self._exit(exitCode)
        return True


def _flushLogHandlers() -> None:
    for handler in logging.getLogger().handlers:
        try:
            handler.flush()
        except (OSError, ValueError):
            pass
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError, AttributeError):
            pass
