################################################################################
# File Name: config_validator.py
# Purpose/Description: Bootstrap configuration validation with defaults
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
Configuration validation module.

Validates the bootstrap configuration:
- Required field checking
- Default value application (dot notation)
- Type checks for the settings the bootstrap reads

Usage:
    from common.config_validator import ConfigValidator

    validator = ConfigValidator()
    config = validator.validate(rawConfig)
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, invalidFields: list[str] | None = None):
        super().__init__(message)
        self.invalidFields = invalidFields or []


REQUIRED_KEYS: list[str] = []

DEFAULTS: dict[str, Any] = {
    'application.name': 'serverboot',
    'application.hostFactory': 'lifecycle.host:IdleApplicationHost',
    'logging.level': 'INFO',
    'logging.fileName': 'server.log',
    'logging.maskPII': True,
    'shutdown.forceExitCode': 1,
}

FIELD_TYPES: dict[str, type | tuple[type, ...]] = {
    'application.name': str,
    'application.hostFactory': str,
    'logging.level': str,
    'logging.fileName': str,
    'logging.maskPII': bool,
    'shutdown.forceExitCode': int,
}


class ConfigValidator:
    """
    Validates configuration dictionaries.

    Attributes:
        requiredKeys: List of required configuration keys (dot notation)
        defaults: Dictionary of default values for optional fields
        fieldTypes: Expected type per dot-notation key
    """

    def __init__(
        self,
        requiredKeys: list[str] | None = None,
        defaults: dict[str, Any] | None = None,
        fieldTypes: dict[str, type | tuple[type, ...]] | None = None
    ):
        self.requiredKeys = requiredKeys if requiredKeys is not None else REQUIRED_KEYS
        self.defaults = defaults if defaults is not None else DEFAULTS
        self.fieldTypes = fieldTypes if fieldTypes is not None else FIELD_TYPES

    def validate(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Validate and enhance configuration.

        Performs:
        1. Required field validation
        2. Default value application
        3. Type validation

        Args:
            config: Raw configuration dictionary

        Returns:
            Validated configuration with defaults applied

        Raises:
            ConfigValidationError: If required fields are missing or mistyped
        """
        missingFields = [
            key for key in self.requiredKeys
            if self._getNestedValue(config, key) is None
        ]
        if missingFields:
            raise ConfigValidationError(
                f"Missing required configuration fields: {', '.join(missingFields)}",
                invalidFields=missingFields
            )

        config = self._applyDefaults(config)

        badTypes = [
            key for key, expected in self.fieldTypes.items()
            if not self._hasType(self._getNestedValue(config, key), expected)
        ]
        if badTypes:
            raise ConfigValidationError(
                f"Invalid configuration field types: {', '.join(badTypes)}",
                invalidFields=badTypes
            )

        logger.debug("Configuration validated successfully")
        return config

    @staticmethod
    def _hasType(value: Any, expected: type | tuple[type, ...]) -> bool:
        if value is None:
            return True
        # bool is an int subclass; keep them apart
        if expected is int and isinstance(value, bool):
            return False
        return isinstance(value, expected)

    def _applyDefaults(self, config: dict[str, Any]) -> dict[str, Any]:
        for key, defaultValue in self.defaults.items():
            if self._getNestedValue(config, key) is None:
                self._setNestedValue(config, key, defaultValue)
                logger.debug(f"Applied default for {key}: {defaultValue}")

        return config

    def _getNestedValue(self, config: dict[str, Any], key: str) -> Any:
        """
        Get a value from nested dictionary using dot notation.

        Args:
            config: Configuration dictionary
            key: Dot-notation key (e.g., 'logging.level')

        Returns:
            Value if found, None otherwise
        """
        value: Any = config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return None

        return value

    def _setNestedValue(self, config: dict[str, Any], key: str, value: Any) -> None:
        keys = key.split('.')
        current = config

        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value


def getConfigValue(config: dict[str, Any], key: str, default: Any = None) -> Any:
    """
    Read a dot-notation key from a validated configuration.

    Args:
        config: Configuration dictionary
        key: Dot-notation key
        default: Returned when the key is absent

    Returns:
        The configured value or default
    """
    value = ConfigValidator()._getNestedValue(config, key)
    return default if value is None else value


def validateConfig(config: dict[str, Any]) -> dict[str, Any]:
    """
    Convenience function to validate configuration.

    Args:
        config: Raw configuration dictionary

    Returns:
        Validated configuration

    Raises:
        ConfigValidationError: If validation fails
    """
    return ConfigValidator().validate(config)
