################################################################################
# File Name: test_error_handler.py
# Purpose/Description: Tests for error taxonomy and reporting
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
Tests for the error_handler module.

Run with:
    pytest tests/test_error_handler.py -v
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
srcPath = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(srcPath))

from common.error_handler import (
    BaseError,
    ConfigurationError,
    ErrorCategory,
    LifecycleError,
    RestartError,
    StartupError,
    classifyError,
    formatError,
    handleError,
    renderException,
)


class TestErrorClasses:
    """Tests for the custom exception classes."""

    @pytest.mark.parametrize('errorClass, category', [
        (ConfigurationError, ErrorCategory.CONFIGURATION),
        (StartupError, ErrorCategory.STARTUP),
        (LifecycleError, ErrorCategory.LIFECYCLE),
        (RestartError, ErrorCategory.RESTART),
        (BaseError, ErrorCategory.SYSTEM),
    ])
    def test_errorClass_hasCategory(self, errorClass, category):
        assert errorClass('boom').category == category

    def test_toDict_includesDetails(self):
        """
        Given: A ConfigurationError with details
        When: toDict() is called
        Then: Type, category, message and details are present
        """
        error = ConfigurationError('bad path', details={'path': '/x'})

        assert error.toDict() == {
            'type': 'ConfigurationError',
            'category': 'config',
            'message': 'bad path',
            'details': {'path': '/x'},
        }


class TestClassifyError:
    """Tests for classifyError()."""

    def test_classifyError_fileNotFound_isConfiguration(self):
        assert classifyError(FileNotFoundError('bootstrap_config.json')) == ErrorCategory.CONFIGURATION

    def test_classifyError_missingKeyword_isConfiguration(self):
        assert classifyError(KeyError('missing application.name')) == ErrorCategory.CONFIGURATION

    def test_classifyError_unexpected_isSystem(self):
        assert classifyError(ZeroDivisionError('division by zero')) == ErrorCategory.SYSTEM


class TestRenderException:
    """Tests for renderException()."""

    def test_renderException_includesCauseChain(self):
        """
        Given: A StartupError raised from a ValueError
        When: renderException() is called
        Then: Both exceptions and the traceback header appear
        """
        try:
            try:
                raise ValueError('media root missing')
            except ValueError as inner:
                raise StartupError('init failed') from inner
        except StartupError as e:
            rendered = renderException(e)

        assert 'ValueError: media root missing' in rendered
        assert 'StartupError: init failed' in rendered
        assert 'Traceback (most recent call last)' in rendered
        assert not rendered.endswith('\n')

    def test_renderException_unraisedError_rendersTypeAndMessage(self):
        assert renderException(RuntimeError('never raised')) == 'RuntimeError: never raised'


class TestFormatAndHandle:
    """Tests for formatError() and handleError()."""

    def test_formatError_baseErrorWithDetails(self):
        error = RestartError('spawn failed', details={'executable': '/bin/x'})

        assert formatError(error) == "[RESTART] spawn failed | details={'executable': '/bin/x'}"

    def test_formatError_builtinError(self):
        assert formatError(ValueError('bad')) == '[SYSTEM] ValueError: bad'

    def test_handleError_reraiseTrue_raises(self):
        with pytest.raises(LifecycleError):
            handleError(LifecycleError('run twice'))

    def test_handleError_reraiseFalse_returnsDetails(self, caplog):
        details = handleError(
            ConfigurationError('no executable'),
            context={'phase': 'paths'},
            reraise=False
        )

        assert details['category'] == 'config'
        assert details['context'] == {'phase': 'paths'}
        assert 'Configuration error: no executable' in caplog.text
