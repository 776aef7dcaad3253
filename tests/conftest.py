################################################################################
# File Name: conftest.py
# Purpose/Description: Pytest fixtures and configuration
# Author: Michael Cornelison
# Creation Date: 2026-10-17
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Pytest configuration and shared fixtures.

Fixtures defined here are available to all test files automatically.

Usage:
    def test_something(bootstrapContext, hostCalls):
        pass
"""

import logging
import os
import sys
import threading
from pathlib import Path
from typing import Any, Generator
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
srcPath = Path(__file__).parent.parent / 'src'
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

from lifecycle.context import BootstrapContext
from lifecycle.startup_options import StartupOptions


# ================================================================================
# Fake Application Host
# ================================================================================

class FakeHost:
    """
    Application host double that records every call.

    By default runStartupTasks() requests a shutdown so run() returns.
    """

    def __init__(
        self,
        paths: Any,
        environment: Any,
        options: Any,
        collaborators: Any,
        controller: Any = None,
        calls: list[str] | None = None,
        version: str = '4.1.0',
        initError: Exception | None = None,
        startupError: Exception | None = None,
        disposeError: Exception | None = None,
        onStarted: str = 'shutdown'
    ):
        self.paths = paths
        self.environment = environment
        self.options = options
        self.collaborators = collaborators
        self.controller = controller
        self.calls = calls if calls is not None else []
        self._version = version
        self._initError = initError
        self._startupError = startupError
        self._disposeError = disposeError
        self._onStarted = onStarted
        self.restartCommandAtDispose: Any = 'unset'

    @property
    def applicationVersion(self) -> str:
        return self._version

    def init(self, progress: Any) -> None:
        self.calls.append('init')
        progress.report(50)
        if self._initError is not None:
            raise self._initError

    def runStartupTasks(self) -> None:
        self.calls.append('runStartupTasks')
        if self._startupError is not None:
            raise self._startupError
        if self._onStarted == 'shutdown':
            self.controller.shutdown()
        elif self._onStarted == 'restart':
            self.controller.restart()

    def dispose(self) -> None:
        self.calls.append('dispose')
        self.restartCommandAtDispose = self.controller.restartCommand
        if self._disposeError is not None:
            raise self._disposeError


# ================================================================================
# Context Fixtures
# ================================================================================

@pytest.fixture
def dataDir(tmp_path: Path) -> Path:
    """Program data directory passed with -programdata."""
    return tmp_path / 'data'


@pytest.fixture
def executableLocation(tmp_path: Path) -> str:
    """Fake location of the running program."""
    return str(tmp_path / 'app' / 'server.py')


@pytest.fixture
def commandLine(dataDir: Path) -> list[str]:
    """Original command line used for restart resolution."""
    return ['/usr/bin/python3', 'server.py', '-programdata', str(dataDir), 'my media']


@pytest.fixture
def makeContext(commandLine: list[str]):
    """
    Factory for BootstrapContext instances.

    Usage:
        context = makeContext(['prog', '-v'])
    """
    def factory(argv: list[str] | None = None, config: dict | None = None) -> BootstrapContext:
        arguments = argv if argv is not None else commandLine[1:]
        return BootstrapContext(
            StartupOptions(arguments),
            commandLine=commandLine,
            config=config or {},
        )

    return factory


@pytest.fixture
def bootstrapContext(makeContext) -> BootstrapContext:
    """Context with -programdata pointing at the test data directory."""
    return makeContext()


@pytest.fixture
def hostCalls() -> list[str]:
    """Shared list FakeHost instances append their calls to."""
    return []


@pytest.fixture
def fakeHostFactory(hostCalls: list[str]):
    """
    Build host factories around FakeHost.

    Usage:
        factory = fakeHostFactory(onStarted='restart')
    """
    created: list[FakeHost] = []

    def build(**overrides: Any):
        def factory(**kwargs: Any) -> FakeHost:
            host = FakeHost(calls=hostCalls, **kwargs, **overrides)
            created.append(host)
            return host
        factory.created = created
        return factory

    return build


@pytest.fixture
def mockFaultBoundary() -> MagicMock:
    """Fault boundary double so tests never touch the real hooks."""
    return MagicMock()


@pytest.fixture
def mockLogger() -> MagicMock:
    """
    Provide mock logger for testing log calls.

    Returns:
        MagicMock logger instance
    """
    return MagicMock(spec=logging.Logger)


# ================================================================================
# Global State Guards
# ================================================================================

@pytest.fixture(autouse=True)
def restoreExceptionHooks() -> Generator[None, None, None]:
    """Put sys.excepthook and threading.excepthook back after every test."""
    originalHook = sys.excepthook
    originalThreadHook = threading.excepthook
    yield
    sys.excepthook = originalHook
    threading.excepthook = originalThreadHook


@pytest.fixture(autouse=True)
def restoreRootHandlers() -> Generator[None, None, None]:
    """Undo setupLogging() changes to the root logger."""
    root = logging.getLogger()
    originalHandlers = list(root.handlers)
    originalLevel = root.level
    yield
    # pytest removes its own capture handlers at the end of each phase
    for handler in list(root.handlers):
        if handler not in originalHandlers and type(handler).__module__.startswith('logging'):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(originalLevel)


@pytest.fixture
def cleanEnv() -> Generator[None, None, None]:
    """Remove bootstrap variables from the environment for the test."""
    varsToRemove = ['SERVERBOOT_HOST_FACTORY', 'SERVERBOOT_LOG_LEVEL', 'XDG_DATA_HOME', 'TEST_VAR']

    saved = {var: os.environ.pop(var, None) for var in varsToRemove}

    yield

    for var, value in saved.items():
        if value is not None:
            os.environ[var] = value
        else:
            os.environ.pop(var, None)


# ================================================================================
# Pytest Configuration
# ================================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
