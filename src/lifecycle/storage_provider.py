################################################################################
# File Name: storage_provider.py
# Purpose/Description: One-time storage engine (sqlite3) provider registration
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
Storage engine provider selection.

The hosted server persists through sqlite3. Before any database is opened the
bootstrap registers the adapters and converters the server's schemas rely on.
sqlite3 keeps these in process-wide tables, so registration happens once per
process; later calls return the same provider description.

Usage:
    from lifecycle.storage_provider import selectStorageProvider

    provider = selectStorageProvider()
    logger.info(f"Storage engine: {provider.name} {provider.version}")
"""

import logging
import sqlite3
import threading
from dataclasses import dataclass
from datetime import date, datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageProvider:
    """Description of the registered storage engine."""
    name: str
    version: str
    threadSafety: int


_registrationLock = threading.Lock()
_registeredProvider: StorageProvider | None = None


def _adaptDatetime(value: datetime) -> str:
    return value.isoformat(sep=' ')


def _adaptDate(value: date) -> str:
    return value.isoformat()


def _convertTimestamp(value: bytes) -> datetime:
    return datetime.fromisoformat(value.decode('utf-8'))


def _convertDate(value: bytes) -> date:
    return date.fromisoformat(value.decode('utf-8'))


def selectStorageProvider() -> StorageProvider:
    """
    Register the sqlite3 provider for this process.

    Idempotent: the adapters are registered by the first call only.

    Returns:
        StorageProvider describing the linked SQLite library
    """
    global _registeredProvider

    with _registrationLock:
        if _registeredProvider is not None:
            return _registeredProvider

        sqlite3.register_adapter(datetime, _adaptDatetime)
        sqlite3.register_adapter(date, _adaptDate)
        sqlite3.register_converter('timestamp', _convertTimestamp)
        sqlite3.register_converter('date', _convertDate)

        _registeredProvider = StorageProvider(
            name='sqlite3',
            version=sqlite3.sqlite_version,
            threadSafety=sqlite3.threadsafety,
        )

    logger.info(
        f"Storage provider selected | engine=sqlite3 | "
        f"version={_registeredProvider.version} | threadsafety={_registeredProvider.threadSafety}"
    )
    return _registeredProvider


def isStorageProviderSelected() -> bool:
    """Return True once selectStorageProvider() has run."""
    return _registeredProvider is not None
