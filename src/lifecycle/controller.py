################################################################################
# File Name: controller.py
# Purpose/Description: Lifecycle controller (init -> run -> shutdown -> restart)
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
Lifecycle Controller for the server process.

Drives the application host through its whole life:

    INITIALIZING -> RUNNING -> SHUTTING_DOWN -> TERMINATED

- INITIALIZING: install the fault boundary (first side effect), select the
  storage provider, resolve paths, configure logging, probe the platform and
  construct the host
- -v: print the host version and terminate without starting the host
- RUNNING: host.init(progress) to completion, then host.runStartupTasks() to
  completion, then block on the shutdown signal
- SHUTTING_DOWN: dispose the host (always, even when startup failed)
- TERMINATED: when a restart was requested, launch the successor strictly
  after disposal

shutdown() and restart() may be called from any thread or signal handler.

Usage:
    controller = LifecycleController(context, hostFactory=MediaServerHost)
    controller.registerSignalHandlers()
    try:
        exitCode = controller.run()
    finally:
        controller.restoreSignalHandlers()
"""

import logging
import os
import signal
import sys
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any

from common.config_validator import getConfigValue
from common.error_handler import LifecycleError, RestartError, StartupError, formatError
from common.logging_config import logWithContext
from environment.platform_utils import logEnvironmentInfo
from environment.types import EnvironmentDescriptor

from .app_paths import ApplicationPaths, resolvePaths
from .collaborators import HostCollaborators, createCollaborators
from .context import BootstrapContext
from .crash_reporter import FaultBoundary
from .host import ApplicationHost, HostFactory, InitProgress, runToCompletion
from .restart import RestartCommand, resolveRestartCommand, spawnDetached, startNewInstance
from .shutdown_signal import ShutdownOutcome, ShutdownSignal
from .startup_options import OPTION_PROGRAM_DATA, OPTION_VERSION
from .storage_provider import selectStorageProvider

logger = logging.getLogger(__name__)


# ================================================================================
# Enums and Constants
# ================================================================================

class LifecycleState(Enum):
    """Lifecycle states, in the only order they may be entered."""
    INITIALIZING = 0
    RUNNING = 1
    SHUTTING_DOWN = 2
    TERMINATED = 3


EXIT_CODE_CLEAN = 0
EXIT_CODE_FORCED = 1


# ================================================================================
# LifecycleController Class
# ================================================================================

class LifecycleController:
    """
    Owns the lifecycle state, the shutdown signal and the restart intent.

    One run() per instance. The application host is owned exclusively by the
    controller; nothing else disposes it.

    Attributes:
        state: Current LifecycleState
        restartRequested: Whether restart() has been called
        restartCommand: Successor command once resolved (after disposal)
        restartLaunched: Whether the successor process was started
    """

    def __init__(
        self,
        context: BootstrapContext,
        hostFactory: HostFactory,
        executableLocation: str | None = None,
        faultBoundary: FaultBoundary | None = None,
        configureLogging: Callable[[ApplicationPaths], None] | None = None,
        collaboratorsFactory: Callable[[EnvironmentDescriptor, str], HostCollaborators] = createCollaborators,
        spawner: Callable[[list[str]], object] = spawnDetached,
        exitFunction: Callable[[int], None] = os._exit,
        output: Any = None
    ):
        """
        Initialize the controller.

        Args:
            context: Bootstrap context created at process entry
            hostFactory: Builds the application host (keyword arguments)
            executableLocation: Path of the running program (default: sys.argv[0])
            faultBoundary: Fault boundary to install (default: one for context)
            configureLogging: Called with the resolved paths to attach file logging
            collaboratorsFactory: Builds the services injected into the host
            spawner: Launches the successor process on restart
            exitFunction: Used for the forced exit on a second signal
            output: Stream the -v version is printed to (default: sys.stdout)
        """
        self._context = context
        self._hostFactory = hostFactory
        self._executableLocation = executableLocation or (
            os.path.abspath(sys.argv[0]) if sys.argv and sys.argv[0] else None
        )
        self._faultBoundary = faultBoundary or FaultBoundary(context)
        self._configureLogging = configureLogging
        self._collaboratorsFactory = collaboratorsFactory
        self._spawner = spawner
        self._exit = exitFunction
        self._output = output

        self._state = LifecycleState.INITIALIZING
        self._stateLock = threading.Lock()
        self._runLock = threading.Lock()
        self._hasRun = False

        self._shutdownSignal = ShutdownSignal()
        self._restartLock = threading.Lock()
        self._restartRequested = False
        self.restartCommand: RestartCommand | None = None
        self.restartLaunched = False

        self._host: ApplicationHost | None = None
        self._environment: EnvironmentDescriptor | None = None

        self._originalSigintHandler: Any = None
        self._originalSigtermHandler: Any = None
        self._signalCount = 0

    # ================================================================================
    # Properties
    # ================================================================================

    @property
    def state(self) -> LifecycleState:
        with self._stateLock:
            return self._state

    @property
    def isRunning(self) -> bool:
        return self.state == LifecycleState.RUNNING

    @property
    def restartRequested(self) -> bool:
        with self._restartLock:
            return self._restartRequested

    @property
    def shutdownSignal(self) -> ShutdownSignal:
        return self._shutdownSignal

    @property
    def paths(self) -> ApplicationPaths | None:
        return self._context.paths

    @property
    def environment(self) -> EnvironmentDescriptor | None:
        return self._environment

    @property
    def host(self) -> ApplicationHost | None:
        return self._host

    # ================================================================================
    # Public Operations
    # ================================================================================

    def shutdown(self) -> bool:
        """
        Request a clean shutdown. Idempotent and thread-safe.

        Returns:
            True if this call fired the shutdown signal
        """
        outcome = ShutdownOutcome.RESTART if self.restartRequested else ShutdownOutcome.CLEAN
        fired = self._shutdownSignal.fire(outcome)
        if fired:
            logWithContext(logger, 'info', "Shutdown requested", outcome=outcome.value)
        return fired

    def restart(self) -> bool:
        """
        Request a shutdown followed by a restart. Idempotent and thread-safe.

        Still takes effect when shutdown is already in progress, as long as
        the host has not finished disposing.

        Returns:
            True if this call fired the shutdown signal
        """
        with self._restartLock:
            if not self._restartRequested:
                self._restartRequested = True
                logger.info("Restart requested")
        return self.shutdown()

    # ================================================================================
    # Signal Handling
    # ================================================================================

    def registerSignalHandlers(self) -> None:
        """
        Register SIGINT/SIGTERM handlers.

        First signal requests a clean shutdown, a second signal forces an
        immediate exit. Must be called from the main thread.
        """
        self._originalSigintHandler = signal.signal(signal.SIGINT, self._handleShutdownSignal)
        # SIGTERM is not available on Windows
        if hasattr(signal, 'SIGTERM'):
            self._originalSigtermHandler = signal.signal(signal.SIGTERM, self._handleShutdownSignal)
        logger.debug("Signal handlers registered")

    def restoreSignalHandlers(self) -> None:
        """Restore the original signal handlers."""
        if self._originalSigintHandler is not None:
            signal.signal(signal.SIGINT, self._originalSigintHandler)
            self._originalSigintHandler = None
        if self._originalSigtermHandler is not None and hasattr(signal, 'SIGTERM'):
            signal.signal(signal.SIGTERM, self._originalSigtermHandler)
            self._originalSigtermHandler = None
        logger.debug("Signal handlers restored")

    def _handleShutdownSignal(self, signum: int, frame: Any) -> None:
        try:
            signalName = signal.Signals(signum).name
        except ValueError:
            signalName = str(signum)

        self._signalCount += 1
        if self._signalCount > 1:
            logger.warning(f"Received second signal ({signalName}), forcing immediate exit")
            self._exit(getConfigValue(self._context.config, 'shutdown.forceExitCode', EXIT_CODE_FORCED))
            return

        logger.info(f"Received signal {signalName}, initiating shutdown")
        # The handler may interrupt a thread that holds the signal's lock
        threading.Thread(target=self.shutdown, name='shutdown-signal', daemon=True).start()

    # ================================================================================
    # Lifecycle
    # ================================================================================

    def _transition(self, newState: LifecycleState) -> None:
        with self._stateLock:
            if newState.value <= self._state.value:
                raise LifecycleError(
                    f"Invalid lifecycle transition {self._state.name} -> {newState.name}"
                )
            oldState = self._state
            self._state = newState
        logger.info(f"Lifecycle state {oldState.name} -> {newState.name}")

    def run(self) -> int:
        """
        Run the full lifecycle on the calling thread.

        Returns:
            Exit code (0 for clean shutdown, restart and -v)

        Raises:
            LifecycleError: If run() was already called on this controller
            StartupError: If host init or startup tasks fail
        """
        with self._runLock:
            if self._hasRun:
                raise LifecycleError("Lifecycle controller has already been run")
            self._hasRun = True

        self._faultBoundary.install()

        host: ApplicationHost | None = None
        try:
            host = self._initialize()

            if self._context.options.containsOption(OPTION_VERSION):
                print(host.applicationVersion, file=self._output or sys.stdout)
                return EXIT_CODE_CLEAN

            self._transition(LifecycleState.RUNNING)
            self._startHost(host)

            logger.info("Startup complete, waiting for shutdown signal")
            outcome = self._shutdownSignal.wait()
            logger.info(f"Shutdown signal received | outcome={outcome.value if outcome else None}")

        finally:
            self._transition(LifecycleState.SHUTTING_DOWN)
            if host is not None:
                self._disposeHost(host)
            self._transition(LifecycleState.TERMINATED)

        if self.restartRequested:
            self._startSuccessor()

        return EXIT_CODE_CLEAN

    def _initialize(self) -> ApplicationHost:
        selectStorageProvider()

        appName = getConfigValue(self._context.config, 'application.name', 'serverboot')
        paths = resolvePaths(
            self._executableLocation,
            self._context.options.getOption(OPTION_PROGRAM_DATA),
            appName
        )
        self._context.attachPaths(paths)
        paths.createDirectories()

        if self._configureLogging is not None:
            self._configureLogging(paths)

        environment = self._context.prober.probe()
        self._environment = environment
        logEnvironmentInfo(logger, paths, environment, self._context.commandLine)

        collaborators = self._collaboratorsFactory(environment, paths.tempDirectoryPath)

        host = self._hostFactory(
            paths=paths,
            environment=environment,
            options=self._context.options,
            collaborators=collaborators,
            controller=self,
        )
        self._host = host
        logWithContext(logger, 'info', "Application host constructed", version=host.applicationVersion)
        return host

    def _startHost(self, host: ApplicationHost) -> None:
        logger.info("Initializing application host")
        try:
            runToCompletion(host.init(InitProgress()))
        except Exception as e:
            raise StartupError(f"Application host init failed: {e}") from e

        logger.info("Running startup tasks")
        try:
            runToCompletion(host.runStartupTasks())
        except Exception as e:
            raise StartupError(f"Application host startup tasks failed: {e}") from e

    def _disposeHost(self, host: ApplicationHost) -> None:
        logger.info("Disposing app host")
        try:
            host.dispose()
        except Exception as e:
            logger.error(f"Error disposing application host: {formatError(e)}", exc_info=True)

    def _startSuccessor(self) -> None:
        try:
            self.restartCommand = resolveRestartCommand(
                self._context.options, self._context.commandLine
            )
        except RestartError as e:
            logger.error(f"Cannot resolve restart command: {formatError(e)}")
            return

        self.restartLaunched = startNewInstance(self.restartCommand, self._spawner)
