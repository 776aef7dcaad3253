################################################################################
# File Name: secrets_loader.py
# Purpose/Description: .env loading and ${VAR} resolution for bootstrap config
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
Secrets management module.

- Loads environment variables from a .env file (never overriding the
  real environment)
- Resolves ${VAR_NAME} and ${VAR_NAME:default} placeholders in the
  bootstrap configuration
- Never logs secret values

Usage:
    from common.secrets_loader import loadConfigWithSecrets

    config = loadConfigWithSecrets('bootstrap_config.json', '.env')
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r'\$\{([^}:]+)(?::([^}]*))?\}')


def loadEnvFile(envPath: str | None = None) -> dict[str, str]:
    """
    Load environment variables from a .env file.

    Args:
        envPath: Path to .env file. Defaults to .env in current directory.

    Returns:
        Names of the variables that were loaded, mapped to a redaction marker

    Note:
        Does not override existing environment variables.
    """
    envFile = Path(envPath or '.env')
    loadedVars: dict[str, str] = {}

    if not envFile.is_file():
        logger.debug(f".env file not found at {envFile}")
        return loadedVars

    with open(envFile, encoding='utf-8') as f:
        for lineNum, line in enumerate(f, 1):
            line = line.strip()

            if not line or line.startswith('#'):
                continue

            if '=' not in line:
                logger.warning(f"Invalid line {lineNum} in {envFile}: missing '='")
                continue

            key, _, value = line.partition('=')
            key = key.strip()
            value = value.strip()

            if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
                value = value[1:-1]

            if key not in os.environ:
                os.environ[key] = value
                loadedVars[key] = '[LOADED]'

    logger.info(f"Loaded {len(loadedVars)} variables from {envFile}")
    return loadedVars


def resolveSecrets(config: Any) -> Any:
    """
    Recursively resolve ${VAR_NAME} placeholders in configuration.

    Args:
        config: Configuration value (dict, list, str, or other)

    Returns:
        Configuration with placeholders resolved
    """
    if isinstance(config, dict):
        return {key: resolveSecrets(value) for key, value in config.items()}
    if isinstance(config, list):
        return [resolveSecrets(item) for item in config]
    if isinstance(config, str):
        return _resolveString(config)
    return config


def _resolveString(value: str) -> str:
    def replacer(match: re.Match) -> str:
        varName = match.group(1)
        defaultValue = match.group(2)

        envValue = os.environ.get(varName)
        if envValue is not None:
            return envValue
        if defaultValue is not None:
            return defaultValue

        logger.warning(f"Environment variable {varName} not set and no default")
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replacer, value)


def loadConfigWithSecrets(
    configPath: str,
    envPath: str | None = None,
    allowMissing: bool = False
) -> dict[str, Any]:
    """
    Load a JSON configuration file and resolve all secret placeholders.

    Args:
        configPath: Path to configuration JSON file
        envPath: Optional path to .env file
        allowMissing: Return an empty configuration when the file is absent

    Returns:
        Configuration dictionary with secrets resolved

    Raises:
        FileNotFoundError: If config file doesn't exist and allowMissing is False
        json.JSONDecodeError: If config file is invalid JSON
    """
    loadEnvFile(envPath)

    configFile = Path(configPath)
    if not configFile.is_file():
        if allowMissing:
            logger.info(f"No configuration at {configPath}, using defaults")
            return {}
        raise FileNotFoundError(f"Configuration file not found: {configPath}")

    logger.info(f"Loading configuration from {configPath}")

    with open(configFile, encoding='utf-8') as f:
        config = json.load(f)

    return resolveSecrets(config)
