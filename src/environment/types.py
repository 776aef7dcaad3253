################################################################################
# File Name: types.py
# Purpose/Description: Environment descriptor types
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
Types describing the host operating environment.
"""

from dataclasses import dataclass
from enum import Enum


class OperatingSystemKind(Enum):
    """Operating system families the server distinguishes."""
    LINUX = 'Linux'
    MACOS = 'MacOS'
    BSD = 'BSD'
    UNKNOWN = 'Unknown'


class Architecture(Enum):
    """CPU architectures the server distinguishes."""
    X86 = 'X86'
    X64 = 'X64'
    ARM = 'Arm'
    UNKNOWN = 'Unknown'


@dataclass(frozen=True)
class UnixName:
    """Raw uname fields; empty strings when the call was unavailable."""
    systemName: str = ''
    machineName: str = ''


@dataclass(frozen=True)
class EnvironmentDescriptor:
    """
    Immutable description of the OS and architecture.

    Attributes:
        operatingSystem: Classified OS family
        architecture: Classified CPU architecture
        systemName: Raw system name reported by the OS
        machineName: Raw machine name reported by the OS
    """
    operatingSystem: OperatingSystemKind = OperatingSystemKind.UNKNOWN
    architecture: Architecture = Architecture.UNKNOWN
    systemName: str = ''
    machineName: str = ''

    def toDict(self) -> dict[str, str]:
        """Convert to dictionary for logging."""
        return {
            'operatingSystem': self.operatingSystem.value,
            'architecture': self.architecture.value,
            'systemName': self.systemName,
            'machineName': self.machineName,
        }
