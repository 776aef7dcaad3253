################################################################################
# File Name: __init__.py
# Purpose/Description: Common utilities package initialization
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
Common utilities package.

Shared functionality used by the bootstrap:
- Configuration validation and loading
- Secrets (.env) resolution
- Logging configuration
- Error taxonomy

Usage:
    from common.config_validator import ConfigValidator
    from common.secrets_loader import loadConfigWithSecrets
    from common.logging_config import getLogger
    from common.error_handler import StartupError
"""

from .config_validator import ConfigValidationError, ConfigValidator, getConfigValue
from .error_handler import (
    ConfigurationError,
    LifecycleError,
    RestartError,
    StartupError,
    handleError,
)
from .logging_config import getLogger, setupLogging
from .secrets_loader import loadConfigWithSecrets

__all__ = [
    'ConfigValidationError',
    'ConfigValidator',
    'getConfigValue',
    'loadConfigWithSecrets',
    'getLogger',
    'setupLogging',
    'ConfigurationError',
    'LifecycleError',
    'RestartError',
    'StartupError',
    'handleError'
]
