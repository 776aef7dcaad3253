################################################################################
# File Name: test_collaborators.py
# Purpose/Description: Tests for the services injected into the host
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
Tests for the collaborators module.

Run with:
    pytest tests/test_collaborators.py -v
"""

import socket
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

srcPath = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(srcPath))

from environment.types import Architecture, EnvironmentDescriptor, OperatingSystemKind
from lifecycle.collaborators import (
    HostFileSystem,
    NetworkManager,
    NullImageEncoder,
    PowerManagement,
    createCollaborators,
)

LINUX = EnvironmentDescriptor(OperatingSystemKind.LINUX, Architecture.X64, 'Linux', 'x86_64')
MACOS = EnvironmentDescriptor(OperatingSystemKind.MACOS, Architecture.ARM, 'Darwin', 'arm64')


class TestHostFileSystem:
    """Tests for HostFileSystem."""

    def test_getTempFilePath_uniqueAndInTempDirectory(self, tmp_path):
        fileSystem = HostFileSystem(LINUX, str(tmp_path))

        first = fileSystem.getTempFilePath('jpg')
        second = fileSystem.getTempFilePath('.jpg')

        assert first != second
        assert Path(first).parent == tmp_path
        assert first.endswith('.jpg') and second.endswith('.jpg')
        assert not second.endswith('..jpg')

    def test_deleteFile_existingAndMissing(self, tmp_path):
        fileSystem = HostFileSystem(LINUX, str(tmp_path))
        target = tmp_path / 'stale.tmp'
        target.write_text('x')

        assert fileSystem.deleteFile(str(target)) is True
        assert fileSystem.deleteFile(str(target)) is False

    def test_ensureDirectory_createsNested(self, tmp_path):
        fileSystem = HostFileSystem(LINUX, str(tmp_path))

        fileSystem.ensureDirectory(str(tmp_path / 'a' / 'b'))

        assert (tmp_path / 'a' / 'b').is_dir()

    @pytest.mark.parametrize('environment, expected', [(LINUX, False), (MACOS, True)])
    def test_areEqual_followsPlatformCaseRules(self, tmp_path, environment, expected):
        fileSystem = HostFileSystem(environment, str(tmp_path))

        assert fileSystem.areEqual('/Media/Movies', '/media/movies') is expected
        assert fileSystem.areEqual('/media/./movies', '/media/movies') is True


class TestPowerManagement:
    """Tests for PowerManagement."""

    def test_standbyInhibition_isCounted(self):
        power = PowerManagement()

        power.preventSystemStandby()
        power.preventSystemStandby()
        power.allowSystemStandby()
        assert power.isStandbyInhibited

        power.allowSystemStandby()
        power.allowSystemStandby()
        assert not power.isStandbyInhibited


class TestNetworkManager:
    """Tests for NetworkManager."""

    def test_getLocalIpAddresses_skipsLoopbackAndDuplicates(self):
        infos = [
            (socket.AF_INET, socket.SOCK_STREAM, 6, '', ('127.0.1.1', 0)),
            (socket.AF_INET, socket.SOCK_STREAM, 6, '', ('192.168.1.20', 0)),
            (socket.AF_INET, socket.SOCK_DGRAM, 17, '', ('192.168.1.20', 0)),
            (socket.AF_INET6, socket.SOCK_STREAM, 6, '', ('::1', 0, 0, 0)),
            (socket.AF_INET6, socket.SOCK_STREAM, 6, '', ('fe80::1', 0, 0, 2)),
        ]

        with patch('lifecycle.collaborators.socket.getaddrinfo', return_value=infos):
            result = NetworkManager().getLocalIpAddresses()

        assert result == ['192.168.1.20', 'fe80::1']

    def test_getLocalIpAddresses_lookupFails_returnsEmpty(self):
        with patch('lifecycle.collaborators.socket.getaddrinfo', side_effect=socket.gaierror('no dns')):
            assert NetworkManager().getLocalIpAddresses() == []


class TestCreateCollaborators:
    """Tests for createCollaborators()."""

    def test_createCollaborators_buildsBundle(self, tmp_path):
        collaborators = createCollaborators(MACOS, str(tmp_path))

        assert collaborators.fileSystem.tempDirectory == str(tmp_path)
        assert not collaborators.fileSystem.isCaseSensitive
        assert isinstance(collaborators.imageEncoder, NullImageEncoder)

    def test_nullImageEncoder_refusesToEncode(self, tmp_path):
        with pytest.raises(NotImplementedError):
            NullImageEncoder().encodeImage('in.png', 'out.jpg')
