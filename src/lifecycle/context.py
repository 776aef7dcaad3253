################################################################################
# File Name: context.py
# Purpose/Description: Process bootstrap context shared by controller and faults
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
Bootstrap context.

Created once at process entry and passed by reference to the lifecycle
controller and the fault boundary. Holds what used to be process-wide state:
the parsed options, the platform prober (and its cached descriptor), the
resolved paths and the logger.

paths starts as None and is attached exactly once when resolved; the fault
boundary must handle None since a fault may occur before that.
"""

import logging
import sys
import threading
from collections.abc import Sequence
from typing import Any

from environment.platform_utils import PlatformProber

from .app_paths import ApplicationPaths
from .startup_options import StartupOptions


class BootstrapContext:
    """
    Shared bootstrap state.

    Attributes:
        commandLine: Original command line (interpreter first)
        options: Parsed StartupOptions
        prober: The process's single PlatformProber
        config: Validated bootstrap configuration
        logger: Logger used by the bootstrap
    """

    def __init__(
        self,
        options: StartupOptions,
        commandLine: Sequence[str] | None = None,
        config: dict[str, Any] | None = None,
        prober: PlatformProber | None = None,
        logger: logging.Logger | None = None
    ):
        self.options = options
        self.commandLine: tuple[str, ...] = tuple(
            commandLine if commandLine is not None else getattr(sys, 'orig_argv', sys.argv)
        )
        self.config = config or {}
        self.prober = prober or PlatformProber()
        self.logger = logger or logging.getLogger('serverboot')
        self._paths: ApplicationPaths | None = None
        self._lock = threading.Lock()

    @property
    def paths(self) -> ApplicationPaths | None:
        return self._paths

    def attachPaths(self, paths: ApplicationPaths) -> None:
        """
        Record the resolved paths.

        Raises:
            ValueError: If different paths were already attached
        """
        with self._lock:
            if self._paths is not None and self._paths != paths:
                raise ValueError("Application paths are already attached")
            self._paths = paths
