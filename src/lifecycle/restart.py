################################################################################
# File Name: restart.py
# Purpose/Description: Successor process resolution and launch (re-exec)
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Pass original arguments through unsplit on restart
# ================================================================================
################################################################################

"""
Restart via re-exec.

After the application host is disposed, a restart launches a new instance
as a detached sibling process and the current process exits. The successor
command comes from -restartpath/-restartargs when given, otherwise from the
original command line.

The original arguments are passed to the successor as a list, exactly as
received. The re-quoted argument string is only used for logging. Only an
explicit -restartargs value is split with shell rules.

Launching is single-shot: a failure is logged and never retried.

Usage:
    command = resolveRestartCommand(options, commandLine)
    startNewInstance(command)
"""

import logging
import shlex
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from common.error_handler import RestartError

from .startup_options import OPTION_RESTART_ARGS, OPTION_RESTART_PATH, StartupOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestartCommand:
    """
    Executable and arguments for the successor process.

    Attributes:
        executablePath: Program to launch
        argumentString: Arguments as one display string (re-quoted)
        arguments: Argument vector passed as-is, or None to split
            argumentString with shell rules
    """
    executablePath: str
    argumentString: str
    arguments: tuple[str, ...] | None = None

    def toArgv(self) -> list[str]:
        """
        Build the argv list for the successor.

        Raises:
            ValueError: If argumentString must be split and has unbalanced quotes
        """
        if self.arguments is not None:
            return [self.executablePath, *self.arguments]
        return [self.executablePath, *shlex.split(self.argumentString)]


def normalizeCommandLineArgument(arg: str) -> str:
    """
    Quote an argument if it contains whitespace.

    Example:
        >>> normalizeCommandLineArgument('foo bar')
        '"foo bar"'
        >>> normalizeCommandLineArgument('--flag=1')
        '--flag=1'
    """
    if not any(ch.isspace() for ch in arg):
        return arg
    return f'"{arg}"'


def resolveRestartCommand(
    options: StartupOptions,
    commandLine: Sequence[str]
) -> RestartCommand:
    """
    Work out how to launch the successor.

    Without -restartargs the successor gets the original arguments unchanged:
    commandLine[1:] when the original program is relaunched, or the arguments
    after the script name (options.arguments[1:]) when -restartpath names a
    different launcher, so the launcher does not receive the old script path.

    Args:
        options: Parsed startup options
        commandLine: Original command line, program first

    Returns:
        RestartCommand

    Raises:
        RestartError: If no executable can be determined
    """
    executablePath = options.getOption(OPTION_RESTART_PATH)
    if executablePath and executablePath.strip():
        originalArguments = options.arguments[1:]
    else:
        if not commandLine:
            raise RestartError("No executable available for restart")
        executablePath = commandLine[0]
        originalArguments = tuple(commandLine[1:])

    if options.containsOption(OPTION_RESTART_ARGS):
        return RestartCommand(
            executablePath=executablePath,
            argumentString=options.getOption(OPTION_RESTART_ARGS) or '',
        )

    argumentString = ' '.join(normalizeCommandLineArgument(arg) for arg in originalArguments)
    return RestartCommand(
        executablePath=executablePath,
        argumentString=argumentString,
        arguments=tuple(originalArguments),
    )


def spawnDetached(argv: list[str]) -> subprocess.Popen:
    """Start argv in its own session so it outlives this process."""
    return subprocess.Popen(
        argv,
        stdin=subprocess.DEVNULL,
        close_fds=True,
        start_new_session=True,
    )


def startNewInstance(
    command: RestartCommand,
    spawner: Callable[[list[str]], object] = spawnDetached
) -> bool:
    """
    Launch the successor process.

    Args:
        command: Resolved restart command
        spawner: Process launcher

    Returns:
        True if the process was launched, False if the launch failed
    """
    logger.info("Starting new instance")
    logger.info(f"Executable: {command.executablePath}")
    logger.info(f"Arguments: {command.argumentString}")

    try:
        argv = command.toArgv()
        spawner(argv)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to start new instance: {e}")
        return False

    return True
