################################################################################
# File Name: shutdown_signal.py
# Purpose/Description: One-shot, thread-safe shutdown completion primitive
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
Single-slot shutdown signal.

Fires exactly once with an outcome; every later fire is a no-op. The
lifecycle controller blocks on wait() and shutdown()/restart() fire it from
any thread, including signal handlers.

Usage:
    signal = ShutdownSignal()
    threading.Thread(target=lambda: signal.fire(ShutdownOutcome.CLEAN)).start()
    outcome = signal.wait()
"""

import logging
import threading
from enum import Enum

logger = logging.getLogger(__name__)


class ShutdownOutcome(Enum):
    """Value carried by the shutdown signal."""
    CLEAN = 'clean'
    RESTART = 'restart'


class ShutdownSignal:
    """
    One-shot completion primitive.

    Attributes:
        isSet: Whether the signal has fired
        outcome: Outcome passed to the first fire(), or None
        fireCount: Number of unset -> set transitions (0 or 1)
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._outcome: ShutdownOutcome | None = None
        self.fireCount = 0

    def fire(self, outcome: ShutdownOutcome = ShutdownOutcome.CLEAN) -> bool:
        """
        Fire the signal if it has not fired yet.

        Args:
            outcome: Value handed to the waiter

        Returns:
            True if this call fired the signal, False if it was already set
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._outcome = outcome
            self.fireCount += 1
            self._event.set()

        logger.debug(f"Shutdown signal fired | outcome={outcome.value}")
        return True

    def wait(self, timeout: float | None = None) -> ShutdownOutcome | None:
        """
        Block until the signal fires.

        Args:
            timeout: Seconds to wait; None waits forever

        Returns:
            The outcome, or None if the timeout expired first
        """
        if not self._event.wait(timeout):
            return None
        return self._outcome

    @property
    def isSet(self) -> bool:
        return self._event.is_set()

    @property
    def outcome(self) -> ShutdownOutcome | None:
        return self._outcome
