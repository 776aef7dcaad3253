################################################################################
# File Name: startup_options.py
# Purpose/Description: Read-only view of the command-line flags
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
Startup options parsed from the raw argument vector.

Server flags are single-dash words (``-programdata /srv/data``). A flag is
present when an argument equals its name exactly; its value is the argument
that follows it, if any. Flags the bootstrap does not know about are kept and
passed through to the application host untouched.

Usage:
    options = StartupOptions(sys.argv)
    dataDir = options.getOption(OPTION_PROGRAM_DATA)
    if options.containsOption(OPTION_VERSION):
        ...
"""

from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType

OPTION_PROGRAM_DATA = '-programdata'
OPTION_VERSION = '-v'
OPTION_RESTART_PATH = '-restartpath'
OPTION_RESTART_ARGS = '-restartargs'
OPTION_CONFIG = '-config'
OPTION_ENV_FILE = '-envfile'
OPTION_LOG_LEVEL = '-loglevel'


class StartupOptions(Mapping[str, str | None]):
    """
    Immutable flag -> value mapping.

    Every argument that starts with '-' is recorded as a flag. Its value is the
    next argument, whatever it looks like, so ``-restartargs "-v -x"`` keeps
    the whole string as the value.

    Attributes:
        arguments: The full argument vector, program name first
    """

    def __init__(self, arguments: Sequence[str]):
        self.arguments: tuple[str, ...] = tuple(arguments)

        parsed: dict[str, str | None] = {}
        # argument 0 is the program name
        for index in range(1, len(self.arguments)):
            arg = self.arguments[index]
            if not arg.startswith('-') or arg in parsed:
                continue
            nextIndex = index + 1
            parsed[arg] = self.arguments[nextIndex] if nextIndex < len(self.arguments) else None

        self._options = MappingProxyType(parsed)

    def containsOption(self, name: str) -> bool:
        """Return True if the flag appears on the command line."""
        return name in self._options

    def getOption(self, name: str) -> str | None:
        """Return the value following the flag, or None."""
        return self._options.get(name)

    def __getitem__(self, name: str) -> str | None:
        return self._options[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"StartupOptions({dict(self._options)!r})"
