################################################################################
# File Name: app_paths.py
# Purpose/Description: Application path resolution (data, install, temp, logs)
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
Application path resolution.

Computes the writable data directory and the installation directory. The
data directory is either the -programdata override (used verbatim) or a
per-user directory following the platform's conventions. Every other
writable location hangs off the data directory:

    <data>/logs
    <data>/config
    <data>/cache
    <data>/cache/temp

Usage:
    from lifecycle.app_paths import resolvePaths

    paths = resolvePaths(__file__, options.getOption('-programdata'), 'serverboot')
    paths.createDirectories()
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from common.error_handler import ConfigurationError

logger = logging.getLogger(__name__)

LOG_DIRECTORY_NAME = 'logs'
CONFIG_DIRECTORY_NAME = 'config'
CACHE_DIRECTORY_NAME = 'cache'
TEMP_DIRECTORY_NAME = 'temp'


@dataclass(frozen=True)
class ApplicationPaths:
    """
    Resolved application directories. Never mutated after construction.

    Attributes:
        dataDirectoryPath: Writable program data root
        installDirectoryPath: Directory containing the executable
        tempDirectoryPath: Scratch directory under the cache
        logDirectoryPath: Directory for server logs and crash reports
    """
    dataDirectoryPath: str
    installDirectoryPath: str
    tempDirectoryPath: str
    logDirectoryPath: str

    @property
    def configDirectoryPath(self) -> str:
        return os.path.join(self.dataDirectoryPath, CONFIG_DIRECTORY_NAME)

    @property
    def cacheDirectoryPath(self) -> str:
        return os.path.join(self.dataDirectoryPath, CACHE_DIRECTORY_NAME)

    def createDirectories(self) -> None:
        """Create every writable directory. Safe to call repeatedly."""
        for directory in (
            self.dataDirectoryPath,
            self.logDirectoryPath,
            self.configDirectoryPath,
            self.cacheDirectoryPath,
            self.tempDirectoryPath,
        ):
            Path(directory).mkdir(parents=True, exist_ok=True)
        logger.debug(f"Application directories ready under {self.dataDirectoryPath}")

    def toDict(self) -> dict[str, str]:
        """Convert to dictionary for logging."""
        return {
            'dataDirectoryPath': self.dataDirectoryPath,
            'installDirectoryPath': self.installDirectoryPath,
            'tempDirectoryPath': self.tempDirectoryPath,
            'logDirectoryPath': self.logDirectoryPath,
        }


def getDefaultDataPath(
    appName: str,
    platformName: str | None = None,
    environ: dict[str, str] | None = None,
    homeDirectory: str | None = None
) -> str:
    """
    Compute the platform-conventional per-user data directory.

    Args:
        appName: Directory name for the application
        platformName: sys.platform value (defaults to the running platform)
        environ: Environment variables (defaults to os.environ)
        homeDirectory: User home (defaults to Path.home())

    Returns:
        Absolute data directory path
    """
    platformName = platformName or sys.platform
    environ = os.environ if environ is None else environ
    home = homeDirectory or str(Path.home())

    if platformName == 'darwin':
        return os.path.join(home, 'Library', 'Application Support', appName)

    if platformName.startswith('win'):
        appData = environ.get('APPDATA')
        if appData:
            return os.path.join(appData, appName)
        return os.path.join(home, 'AppData', 'Roaming', appName)

    xdgDataHome = environ.get('XDG_DATA_HOME')
    if xdgDataHome:
        return os.path.join(xdgDataHome, appName)
    return os.path.join(home, '.local', 'share', appName)


def resolvePaths(
    executableLocation: str | None,
    overrideDataDir: str | None,
    appName: str = 'serverboot'
) -> ApplicationPaths:
    """
    Build the ApplicationPaths for this process.

    Args:
        executableLocation: Path of the running program
        overrideDataDir: Value of -programdata; used verbatim when non-empty
        appName: Application directory name for the default data path

    Returns:
        ApplicationPaths

    Raises:
        ConfigurationError: If the executable location is unknown
    """
    if not executableLocation:
        raise ConfigurationError(
            "Cannot determine the executable location",
            details={'executableLocation': executableLocation}
        )

    if overrideDataDir:
        dataDirectory = overrideDataDir
    else:
        dataDirectory = getDefaultDataPath(appName)

    installDirectory = os.path.dirname(os.path.abspath(executableLocation))

    paths = ApplicationPaths(
        dataDirectoryPath=dataDirectory,
        installDirectoryPath=installDirectory,
        tempDirectoryPath=os.path.join(dataDirectory, CACHE_DIRECTORY_NAME, TEMP_DIRECTORY_NAME),
        logDirectoryPath=os.path.join(dataDirectory, LOG_DIRECTORY_NAME),
    )
    logger.debug(f"Application paths resolved: {paths.toDict()}")
    return paths
