################################################################################
# File Name: test_app_paths.py
# Purpose/Description: Tests for application path resolution
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
Tests for the app_paths module.

Run with:
    pytest tests/test_app_paths.py -v
"""

import dataclasses
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

srcPath = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(srcPath))

from common.error_handler import ConfigurationError
from lifecycle.app_paths import ApplicationPaths, getDefaultDataPath, resolvePaths


class TestResolvePaths:
    """Tests for resolvePaths()."""

    def test_resolvePaths_override_usedVerbatim(self, tmp_path):
        """
        Given: -programdata /tmp/data
        When: resolvePaths() is called
        Then: The data directory is exactly the override and the platform
              default is never computed
        """
        with patch('lifecycle.app_paths.getDefaultDataPath') as mockDefault:
            paths = resolvePaths(str(tmp_path / 'bin' / 'server.py'), '/tmp/data')

        mockDefault.assert_not_called()
        assert paths.dataDirectoryPath == '/tmp/data'
        assert paths.logDirectoryPath == os.path.join('/tmp/data', 'logs')
        assert paths.tempDirectoryPath == os.path.join('/tmp/data', 'cache', 'temp')

    def test_resolvePaths_relativeOverride_notNormalized(self, tmp_path):
        """
        Given: A relative override with a trailing separator
        When: resolvePaths() is called
        Then: The value is kept as given
        """
        paths = resolvePaths(str(tmp_path / 'server.py'), 'data/')

        assert paths.dataDirectoryPath == 'data/'

    def test_resolvePaths_noOverride_usesPlatformDefault(self, tmp_path):
        """
        Given: No override
        When: resolvePaths() is called
        Then: The platform default for the app name is used
        """
        with patch(
            'lifecycle.app_paths.getDefaultDataPath',
            return_value=str(tmp_path / 'default')
        ) as mockDefault:
            paths = resolvePaths(str(tmp_path / 'server.py'), None, appName='mediaserver')

        mockDefault.assert_called_once_with('mediaserver')
        assert paths.dataDirectoryPath == str(tmp_path / 'default')

    def test_resolvePaths_emptyOverride_treatedAsAbsent(self, tmp_path):
        """
        Given: -programdata with an empty value
        When: resolvePaths() is called
        Then: The platform default is used
        """
        with patch('lifecycle.app_paths.getDefaultDataPath', return_value='/default') as mockDefault:
            paths = resolvePaths(str(tmp_path / 'server.py'), '')

        mockDefault.assert_called_once()
        assert paths.dataDirectoryPath == '/default'

    def test_resolvePaths_installDirectory_isExecutableParent(self, tmp_path):
        """
        Given: An executable inside tmp/app
        When: resolvePaths() is called
        Then: The install directory is tmp/app
        """
        paths = resolvePaths(str(tmp_path / 'app' / 'server.py'), str(tmp_path / 'data'))

        assert paths.installDirectoryPath == str(tmp_path / 'app')

    @pytest.mark.parametrize('location', [None, ''])
    def test_resolvePaths_unknownExecutable_raisesConfigurationError(self, location):
        """
        Given: No executable location
        When: resolvePaths() is called
        Then: ConfigurationError is raised
        """
        with pytest.raises(ConfigurationError) as excInfo:
            resolvePaths(location, '/tmp/data')

        assert 'executable location' in str(excInfo.value)


class TestApplicationPaths:
    """Tests for the ApplicationPaths value."""

    def test_createDirectories_createsTree(self, tmp_path):
        """
        Given: Resolved paths under a fresh directory
        When: createDirectories() is called twice
        Then: Every directory exists and the second call does not fail
        """
        paths = resolvePaths(str(tmp_path / 'server.py'), str(tmp_path / 'data'))

        paths.createDirectories()
        paths.createDirectories()

        assert Path(paths.logDirectoryPath).is_dir()
        assert Path(paths.configDirectoryPath).is_dir()
        assert Path(paths.cacheDirectoryPath).is_dir()
        assert Path(paths.tempDirectoryPath).is_dir()

    def test_applicationPaths_isImmutable(self):
        """
        Given: An ApplicationPaths value
        When: A field is assigned
        Then: FrozenInstanceError is raised
        """
        paths = ApplicationPaths('/d', '/i', '/d/cache/temp', '/d/logs')

        with pytest.raises(dataclasses.FrozenInstanceError):
            paths.dataDirectoryPath = '/other'

    def test_toDict_containsAllPaths(self):
        """
        Given: An ApplicationPaths value
        When: toDict() is called
        Then: The four resolved paths are returned
        """
        paths = ApplicationPaths('/d', '/i', '/d/cache/temp', '/d/logs')

        assert paths.toDict() == {
            'dataDirectoryPath': '/d',
            'installDirectoryPath': '/i',
            'tempDirectoryPath': '/d/cache/temp',
            'logDirectoryPath': '/d/logs',
        }


class TestGetDefaultDataPath:
    """Tests for platform default data directories."""

    def test_getDefaultDataPath_macOS_usesApplicationSupport(self):
        result = getDefaultDataPath('serverboot', 'darwin', {}, '/Users/sam')

        assert result == os.path.join('/Users/sam', 'Library', 'Application Support', 'serverboot')

    def test_getDefaultDataPath_windowsWithAppData_usesAppData(self):
        result = getDefaultDataPath('serverboot', 'win32', {'APPDATA': '/roaming'}, '/home/sam')

        assert result == os.path.join('/roaming', 'serverboot')

    def test_getDefaultDataPath_windowsWithoutAppData_usesHome(self):
        result = getDefaultDataPath('serverboot', 'win32', {}, '/home/sam')

        assert result == os.path.join('/home/sam', 'AppData', 'Roaming', 'serverboot')

    def test_getDefaultDataPath_linuxWithXdg_usesXdg(self):
        result = getDefaultDataPath('serverboot', 'linux', {'XDG_DATA_HOME': '/xdg'}, '/home/sam')

        assert result == os.path.join('/xdg', 'serverboot')

    def test_getDefaultDataPath_linuxWithoutXdg_usesLocalShare(self):
        result = getDefaultDataPath('serverboot', 'linux', {}, '/home/sam')

        assert result == os.path.join('/home/sam', '.local', 'share', 'serverboot')
