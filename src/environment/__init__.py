################################################################################
# File Name: __init__.py
# Purpose/Description: Environment probing package initialization
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
Environment probing package.

Usage:
    from environment import PlatformProber

    descriptor = PlatformProber().probe()
"""

from .platform_utils import (
    PlatformProber,
    classifyArchitecture,
    classifyOperatingSystem,
    getUserId,
    is64BitProcess,
    logEnvironmentInfo,
    readUnixName,
)
from .types import Architecture, EnvironmentDescriptor, OperatingSystemKind, UnixName

__all__ = [
    'Architecture',
    'EnvironmentDescriptor',
    'OperatingSystemKind',
    'UnixName',
    'PlatformProber',
    'classifyArchitecture',
    'classifyOperatingSystem',
    'getUserId',
    'is64BitProcess',
    'logEnvironmentInfo',
    'readUnixName',
]
