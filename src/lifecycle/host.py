################################################################################
# File Name: host.py
# Purpose/Description: Application host contract, factory loading, task helpers
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
Application host contract.

The application host is the composed server. The bootstrap only ever:
- constructs it through a factory
- reads applicationVersion
- calls init(progress), then runStartupTasks()
- calls dispose()

init() and runStartupTasks() may return None, a coroutine/awaitable or a
concurrent.futures.Future; runToCompletion() drives any of these to
completion on the calling thread.

Usage:
    factory = loadHostFactory('mypackage.server:MediaServerHost')
    host = factory(paths=paths, environment=env, options=options,
                   collaborators=collaborators, controller=controller)
"""

import asyncio
import importlib
import inspect
import logging
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any, Protocol, runtime_checkable

from common.error_handler import ConfigurationError

logger = logging.getLogger(__name__)

IDLE_HOST_VERSION = '0.1.0'


@runtime_checkable
class ApplicationHost(Protocol):
    """What the lifecycle controller needs from the composed server."""

    @property
    def applicationVersion(self) -> str: ...

    def init(self, progress: 'InitProgress') -> Any: ...

    def runStartupTasks(self) -> Any: ...

    def dispose(self) -> None: ...


HostFactory = Callable[..., ApplicationHost]


class InitProgress:
    """
    Progress sink passed to ApplicationHost.init().

    Reports are clamped to 0..100 and logged at debug level. An optional
    callback receives every report.
    """

    def __init__(self, onReport: Callable[[float], None] | None = None):
        self._onReport = onReport
        self.lastValue = 0.0

    def report(self, value: float) -> None:
        value = max(0.0, min(100.0, float(value)))
        self.lastValue = value
        logger.debug(f"Host init progress: {value:.1f}%")
        if self._onReport is not None:
            self._onReport(value)


def runToCompletion(result: Any) -> Any:
    """
    Wait for a host call's result synchronously.

    Args:
        result: None, a plain value, an awaitable or a Future

    Returns:
        The final value
    """
    if isinstance(result, Future):
        return result.result()
    if inspect.isawaitable(result):
        return asyncio.run(_awaitResult(result))
    return result


async def _awaitResult(awaitable: Any) -> Any:
    return await awaitable


def loadHostFactory(factoryPath: str) -> HostFactory:
    """
    Resolve a 'module:attribute' string to a host factory.

    Args:
        factoryPath: Import path, e.g. 'lifecycle.host:IdleApplicationHost'

    Returns:
        The callable

    Raises:
        ConfigurationError: If the path is malformed or cannot be imported
    """
    moduleName, sep, attributeName = factoryPath.partition(':')
    if not sep or not moduleName or not attributeName:
        raise ConfigurationError(
            f"Host factory must look like 'module:attribute', got {factoryPath!r}"
        )

    try:
        module = importlib.import_module(moduleName)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import host module {moduleName!r}: {e}") from e

    factory = module
    for part in attributeName.split('.'):
        factory = getattr(factory, part, None)
        if factory is None:
            raise ConfigurationError(f"{moduleName!r} has no attribute {attributeName!r}")

    if not callable(factory):
        raise ConfigurationError(f"Host factory {factoryPath!r} is not callable")

    return factory


class IdleApplicationHost:
    """
    Minimal host that starts, idles until shutdown and disposes.

    Used when no server host is configured, so the bootstrap can be run and
    exercised on its own.
    """

    def __init__(
        self,
        paths: Any,
        environment: Any,
        options: Any,
        collaborators: Any,
        controller: Any = None
    ):
        self.paths = paths
        self.environment = environment
        self.options = options
        self.collaborators = collaborators
        self.controller = controller
        self.isInitialized = False
        self.isStarted = False
        self.isDisposed = False

    @property
    def applicationVersion(self) -> str:
        return IDLE_HOST_VERSION

    def init(self, progress: InitProgress) -> None:
        progress.report(0)
        self.collaborators.fileSystem.ensureDirectory(self.paths.tempDirectoryPath)
        progress.report(100)
        self.isInitialized = True
        logger.info("Idle host initialized")

    def runStartupTasks(self) -> None:
        self.isStarted = True
        logger.info(
            f"Idle host running | addresses="
            f"{self.collaborators.networkManager.getLocalIpAddresses()}"
        )

    def dispose(self) -> None:
        if self.isDisposed:
            return
        self.isDisposed = True
        logger.info("Idle host disposed")
