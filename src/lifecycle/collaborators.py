################################################################################
# File Name: collaborators.py
# Purpose/Description: Services injected into the application host
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
Collaborators handed to the application host at construction.

The bootstrap builds these once and passes them in a HostCollaborators
bundle. The hosted server owns the real work.

- HostFileSystem: temp file naming and directory helpers rooted at the
  application temp directory
- PowerManagement: standby inhibition requests (logged only)
- NetworkManager: local address discovery
- NullImageEncoder: placeholder encoder until the host installs a real one
"""

import logging
import os
import socket
import threading
import uuid
from dataclasses import dataclass
from pathlib import Path

from environment.types import EnvironmentDescriptor, OperatingSystemKind

logger = logging.getLogger(__name__)


class HostFileSystem:
    """
    File-system helpers rooted at the application temp directory.

    Attributes:
        tempDirectory: Directory for scratch files
        isCaseSensitive: Whether paths differ by case on this OS
    """

    def __init__(self, environment: EnvironmentDescriptor, tempDirectory: str):
        self._environment = environment
        self.tempDirectory = tempDirectory
        self.isCaseSensitive = environment.operatingSystem != OperatingSystemKind.MACOS

    def getTempFilePath(self, extension: str = '') -> str:
        """Return a unique path inside the temp directory (not created)."""
        if extension and not extension.startswith('.'):
            extension = '.' + extension
        return os.path.join(self.tempDirectory, uuid.uuid4().hex + extension)

    def ensureDirectory(self, path: str) -> str:
        Path(path).mkdir(parents=True, exist_ok=True)
        return path

    def deleteFile(self, path: str) -> bool:
        """
        Delete a file if it exists.

        Returns:
            True if a file was removed
        """
        try:
            os.remove(path)
            return True
        except FileNotFoundError:
            return False

    def areEqual(self, path1: str, path2: str) -> bool:
        """Compare two paths using this platform's case rules."""
        left = os.path.normpath(path1)
        right = os.path.normpath(path2)
        if self.isCaseSensitive:
            return left == right
        return left.lower() == right.lower()


class PowerManagement:
    """Tracks standby inhibition requested by the host."""

    def __init__(self):
        self._lock = threading.Lock()
        self._inhibitCount = 0

    def preventSystemStandby(self) -> None:
        with self._lock:
            self._inhibitCount += 1
            logger.debug(f"System standby inhibited | holders={self._inhibitCount}")

    def allowSystemStandby(self) -> None:
        with self._lock:
            if self._inhibitCount > 0:
                self._inhibitCount -= 1
            logger.debug(f"System standby released | holders={self._inhibitCount}")

    @property
    def isStandbyInhibited(self) -> bool:
        with self._lock:
            return self._inhibitCount > 0


class NetworkManager:
    """Discovers addresses the server can bind to or advertise."""

    def getHostName(self) -> str:
        return socket.gethostname()

    def getLocalIpAddresses(self) -> list[str]:
        """
        Return the non-loopback IPv4/IPv6 addresses of this host.

        Lookup failures degrade to an empty list.
        """
        try:
            infos = socket.getaddrinfo(self.getHostName(), None)
        except OSError as e:
            logger.warning(f"Could not resolve local addresses: {e}")
            return []

        addresses: list[str] = []
        for family, _, _, _, sockaddr in infos:
            if family not in (socket.AF_INET, socket.AF_INET6):
                continue
            address = str(sockaddr[0])
            if address.startswith('127.') or address == '::1' or address in addresses:
                continue
            addresses.append(address)
        return addresses


class NullImageEncoder:
    """Image encoder placeholder that supports no formats."""

    name = 'Null Image Encoder'
    supportedInputFormats: tuple[str, ...] = ()
    supportedOutputFormats: tuple[str, ...] = ()

    def encodeImage(self, inputPath: str, outputPath: str, **options) -> str:
        raise NotImplementedError(f"{self.name} cannot encode {inputPath}")


@dataclass(frozen=True)
class HostCollaborators:
    """Services injected into the application host."""
    fileSystem: HostFileSystem
    powerManagement: PowerManagement
    networkManager: NetworkManager
    imageEncoder: NullImageEncoder


def createCollaborators(environment: EnvironmentDescriptor, tempDirectory: str) -> HostCollaborators:
    """
    Build the default collaborator bundle.

    Args:
        environment: Probed environment descriptor
        tempDirectory: Application temp directory

    Returns:
        HostCollaborators
    """
    return HostCollaborators(
        fileSystem=HostFileSystem(environment, tempDirectory),
        powerManagement=PowerManagement(),
        networkManager=NetworkManager(),
        imageEncoder=NullImageEncoder(),
    )
