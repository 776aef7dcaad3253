################################################################################
# File Name: __init__.py
# Purpose/Description: Lifecycle package initialization
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
Server lifecycle package.

Contains the lifecycle controller and everything it drives: startup options,
application paths, the shutdown signal, the fault boundary and restart.

Usage:
    from lifecycle import BootstrapContext, LifecycleController, StartupOptions

    context = BootstrapContext(StartupOptions(sys.argv))
    exitCode = LifecycleController(context, hostFactory=MyHost).run()
"""

from .app_paths import ApplicationPaths, getDefaultDataPath, resolvePaths
from .collaborators import (
    HostCollaborators,
    HostFileSystem,
    NetworkManager,
    NullImageEncoder,
    PowerManagement,
    createCollaborators,
)
from .context import BootstrapContext
from .controller import EXIT_CODE_CLEAN, EXIT_CODE_FORCED, LifecycleController, LifecycleState
from .crash_reporter import (
    EXIT_CODE_UNHANDLED_FAULT,
    FaultBoundary,
    UnhandledExceptionWriter,
    isSuppressedFault,
    nativeErrorCode,
)
from .host import ApplicationHost, IdleApplicationHost, InitProgress, loadHostFactory, runToCompletion
from .restart import RestartCommand, normalizeCommandLineArgument, resolveRestartCommand, startNewInstance
from .shutdown_signal import ShutdownOutcome, ShutdownSignal
from .startup_options import StartupOptions
from .storage_provider import StorageProvider, selectStorageProvider

__all__ = [
    'ApplicationHost',
    'ApplicationPaths',
    'BootstrapContext',
    'EXIT_CODE_CLEAN',
    'EXIT_CODE_FORCED',
    'EXIT_CODE_UNHANDLED_FAULT',
    'FaultBoundary',
    'HostCollaborators',
    'HostFileSystem',
    'IdleApplicationHost',
    'InitProgress',
    'LifecycleController',
    'LifecycleState',
    'NetworkManager',
    'NullImageEncoder',
    'PowerManagement',
    'RestartCommand',
    'ShutdownOutcome',
    'ShutdownSignal',
    'StartupOptions',
    'StorageProvider',
    'UnhandledExceptionWriter',
    'createCollaborators',
    'getDefaultDataPath',
    'isSuppressedFault',
    'loadHostFactory',
    'nativeErrorCode',
    'normalizeCommandLineArgument',
    'resolvePaths',
    'resolveRestartCommand',
    'runToCompletion',
    'selectStorageProvider',
    'startNewInstance',
]
