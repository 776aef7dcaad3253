################################################################################
# File Name: platform_utils.py
# Purpose/Description: Platform probing (OS kind and CPU architecture)
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
Platform detection utilities.

This module queries the operating system once (a uname call) and classifies
the result into an EnvironmentDescriptor. Probing never fails: when uname is
unavailable or raises, the descriptor degrades to best-effort defaults.

Usage:
    from environment.platform_utils import PlatformProber

    prober = PlatformProber()
    descriptor = prober.probe()
    print(f"Running on {descriptor.operatingSystem.value} ({descriptor.architecture.value})")
"""

import logging
import os
import platform
import re
import sys
import threading
from collections.abc import Callable, Sequence
from typing import Any

from .types import Architecture, EnvironmentDescriptor, OperatingSystemKind, UnixName

logger = logging.getLogger(__name__)

# 32-bit x86 machine names (i386 .. i686)
ARCH_X86_PATTERN = re.compile(r'(i|I)[3-6]86')

SYSTEM_NAME_MAP: dict[str, OperatingSystemKind] = {
    'darwin': OperatingSystemKind.MACOS,
    'linux': OperatingSystemKind.LINUX,
    'bsd': OperatingSystemKind.BSD,
}


def is64BitProcess() -> bool:
    """Return True when the interpreter runs as a 64-bit process."""
    return sys.maxsize > 2**32


def readUnixName() -> UnixName:
    """
    Call uname and return the system and machine names.

    Raises:
        AttributeError: On platforms without os.uname
        OSError: If the underlying call fails
    """
    result = os.uname()
    return UnixName(
        systemName=result.sysname or '',
        machineName=result.machine or '',
    )


def classifyOperatingSystem(systemName: str) -> OperatingSystemKind:
    """
    Map a uname system name to an OS kind.

    Matching is exact but case-insensitive; "FreeBSD" is therefore UNKNOWN.

    Args:
        systemName: Value of uname sysname

    Returns:
        Classified OperatingSystemKind
    """
    return SYSTEM_NAME_MAP.get((systemName or '').lower(), OperatingSystemKind.UNKNOWN)


def classifyArchitecture(
    machineName: str,
    is64Bit: Callable[[], bool] = is64BitProcess
) -> Architecture:
    """
    Map a uname machine name to an architecture.

    Rules are applied in order:
        1. i386..i686 anywhere in the name -> X86
        2. "x86_64" (any case) -> X64
        3. starts with "arm" (any case) -> ARM
        4. 64-bit process -> X64
        5. otherwise -> X86

    Args:
        machineName: Value of uname machine (may be empty)
        is64Bit: Fallback probe used by rules 4 and 5

    Returns:
        Classified Architecture
    """
    machineName = machineName or ''
    lowered = machineName.lower()

    if ARCH_X86_PATTERN.search(machineName):
        return Architecture.X86
    if lowered == 'x86_64':
        return Architecture.X64
    if lowered.startswith('arm'):
        return Architecture.ARM
    if is64Bit():
        return Architecture.X64
    return Architecture.X86


class PlatformProber:
    """
    Probes the platform once and caches the descriptor.

    The uname call happens at most once per prober, even when it fails; the
    bootstrap context owns a single prober for the process.

    Attributes:
        callCount: Number of times the uname reader was invoked

    Example:
        prober = PlatformProber()
        assert prober.probe() is prober.probe()
    """

    def __init__(
        self,
        unameReader: Callable[[], UnixName] = readUnixName,
        is64Bit: Callable[[], bool] = is64BitProcess
    ):
        """
        Initialize the prober.

        Args:
            unameReader: Callable returning the raw uname fields
            is64Bit: Callable reporting 64-bit process capability
        """
        self._unameReader = unameReader
        self._is64Bit = is64Bit
        self._unixName: UnixName | None = None
        self._descriptor: EnvironmentDescriptor | None = None
        self._lock = threading.Lock()
        self.callCount = 0

    def getUnixName(self) -> UnixName:
        """Return the cached uname fields, calling uname on first use."""
        with self._lock:
            if self._unixName is None:
                self._unixName = self._readOnce()
            return self._unixName

    def _readOnce(self) -> UnixName:
        self.callCount += 1
        try:
            return self._unameReader()
        except (AttributeError, OSError) as e:
            logger.warning(f"Error getting unix name: {e}")
        except Exception as e:
            logger.error(f"Unexpected error getting unix name: {e}", exc_info=True)
        return UnixName()

    def probe(self) -> EnvironmentDescriptor:
        """
        Return the environment descriptor for this process.

        Returns:
            Cached EnvironmentDescriptor
        """
        unixName = self.getUnixName()

        with self._lock:
            if self._descriptor is None:
                self._descriptor = EnvironmentDescriptor(
                    operatingSystem=classifyOperatingSystem(unixName.systemName),
                    architecture=classifyArchitecture(unixName.machineName, self._is64Bit),
                    systemName=unixName.systemName,
                    machineName=unixName.machineName,
                )
                logger.debug(f"Environment probed: {self._descriptor.toDict()}")
            return self._descriptor


def getUserId() -> str | None:
    """Return the numeric user id as a string, or None where unsupported."""
    getuid = getattr(os, 'getuid', None)
    if getuid is None:
        return None
    return str(getuid())


def logEnvironmentInfo(
    log: logging.Logger,
    paths: Any,
    environment: EnvironmentDescriptor,
    commandLine: Sequence[str]
) -> None:
    """
    Log a startup summary of the process environment.

    Args:
        log: Logger to write to
        paths: ApplicationPaths in use
        environment: Probed environment descriptor
        commandLine: Original command line of this process
    """
    log.info(f"Command line: {' '.join(commandLine)}")
    log.info(
        f"Operating system: {environment.operatingSystem.value} "
        f"({environment.systemName or 'n/a'} {platform.release()})"
    )
    log.info(f"Architecture: {environment.architecture.value} ({environment.machineName or 'n/a'})")
    log.info(f"64-Bit process: {is64BitProcess()}")
    log.info(f"Python: {platform.python_implementation()} {platform.python_version()}")
    log.info(f"Process id: {os.getpid()} | user id: {getUserId()}")
    log.info(f"Program data path: {paths.dataDirectoryPath}")
    log.info(f"Log directory path: {paths.logDirectoryPath}")
    log.info(f"Temp directory path: {paths.tempDirectoryPath}")
    log.info(f"Application directory: {paths.installDirectoryPath}")
