################################################################################
# File Name: main.py
# Purpose/Description: Server process entry point
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
Main application entry point.

Boots the server process:
- Installs the fault boundary before anything else
- Parses startup options (-programdata, -v, -restartpath, -restartargs,
  -config, -envfile, -loglevel)
- Loads and validates the bootstrap configuration
- Runs the lifecycle controller with SIGINT/SIGTERM handling
- Returns the exit code (a restart has already launched the successor)

Usage:
    python src/main.py
    python src/main.py -programdata /srv/serverboot
    python src/main.py -v
    python src/main.py -config my_config.json -loglevel DEBUG
"""

import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

# Resolve project paths relative to this script (not CWD)
srcPath = Path(__file__).resolve().parent
projectRoot = srcPath.parent
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

DEFAULT_CONFIG = str(srcPath / 'bootstrap_config.json')
DEFAULT_ENV = str(projectRoot / '.env')

from common.config_validator import ConfigValidationError, ConfigValidator, getConfigValue
from common.error_handler import ConfigurationError, handleError
from common.logging_config import getLogger, setupLogging
from common.secrets_loader import loadConfigWithSecrets
from lifecycle.app_paths import ApplicationPaths
from lifecycle.context import BootstrapContext
from lifecycle.controller import LifecycleController
from lifecycle.crash_reporter import FaultBoundary
from lifecycle.host import HostFactory, loadHostFactory
from lifecycle.startup_options import (
    OPTION_CONFIG,
    OPTION_ENV_FILE,
    OPTION_LOG_LEVEL,
    StartupOptions,
)

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1


def loadConfiguration(configPath: str, envPath: str | None = None) -> dict[str, Any]:
    """
    Load and validate the bootstrap configuration.

    A missing file is not an error: defaults are used.

    Args:
        configPath: Path to configuration file
        envPath: Path to environment file

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigurationError: If configuration is unreadable or invalid
    """
    logger = getLogger(__name__)

    try:
        config = loadConfigWithSecrets(configPath, envPath, allowMissing=True)
        config = ConfigValidator().validate(config)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        raise ConfigurationError(f"Configuration file is not valid JSON: {e}") from e
    except ConfigValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Configuration file could not be read: {e}") from e

    logger.info(f"Configuration loaded from {configPath}")
    return config


def createLoggingConfigurator(config: dict[str, Any], level: str):
    """
    Build the callback that adds the server log file once paths are known.

    Args:
        config: Validated configuration
        level: Effective log level

    Returns:
        Callable taking ApplicationPaths
    """
    def configure(paths: ApplicationPaths) -> None:
        setupLogging(
            level=level,
            logFile=os.path.join(paths.logDirectoryPath, getConfigValue(config, 'logging.fileName')),
            enablePIIMasking=getConfigValue(config, 'logging.maskPII', True),
        )

    return configure


def main(argv: Sequence[str] | None = None, hostFactory: HostFactory | None = None) -> int:
    """
    Main entry point.

    Args:
        argv: Argument vector, program name first (default: sys.argv)
        hostFactory: Application host factory (default: from configuration)

    Returns:
        Exit code (0 for success, non-zero for errors)

    Raises:
        StartupError: If the host fails to start; reaches the fault boundary
    """
    options = StartupOptions(sys.argv if argv is None else argv)
    context = BootstrapContext(options)

    faultBoundary = FaultBoundary(context)
    faultBoundary.install()

    setupLogging(level=options.getOption(OPTION_LOG_LEVEL) or 'INFO')
    logger = getLogger(__name__)

    logger.info("=" * 60)
    logger.info("Server starting...")
    logger.info("=" * 60)

    try:
        config = loadConfiguration(
            options.getOption(OPTION_CONFIG) or DEFAULT_CONFIG,
            options.getOption(OPTION_ENV_FILE) or DEFAULT_ENV
        )
        context.config = config

        if hostFactory is None:
            hostFactory = loadHostFactory(getConfigValue(config, 'application.hostFactory'))

    except ConfigurationError as e:
        handleError(
            e,
            context={'configPath': options.getOption(OPTION_CONFIG) or DEFAULT_CONFIG},
            reraise=False
        )
        return EXIT_CONFIG_ERROR

    level = options.getOption(OPTION_LOG_LEVEL) or getConfigValue(config, 'logging.level', 'INFO')

    controller = LifecycleController(
        context,
        hostFactory=hostFactory,
        executableLocation=os.path.abspath(__file__),
        faultBoundary=faultBoundary,
        configureLogging=createLoggingConfigurator(config, level),
    )

    controller.registerSignalHandlers()
    try:
        exitCode = controller.run()
    finally:
        controller.restoreSignalHandlers()

    if controller.restartLaunched:
        logger.info("Successor launched, exiting")
    logger.info(f"Server finished | exit_code={exitCode}")
    return exitCode


if __name__ == '__main__':
    sys.exit(main())
