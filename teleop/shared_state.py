"""
Shared command state between the input handler and the publisher loop.

The two sides run on independent schedules (input arrival vs. fixed
tick), so every access goes through a single lock. A write replaces
the whole snapshot at once.
"""

import threading
from contextlib import contextmanager
from typing import Iterator

from .types import CommandSnapshot, VelocityCommand


class SharedCommandState:
    """Lock-guarded holder for the latest CommandSnapshot"""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot = CommandSnapshot()

    def write(self, command: VelocityCommand, deadman: bool, stamp: float) -> CommandSnapshot:
        """
        Replace the current snapshot.

        Args:
            command: Latest translated velocity command
            deadman: Latest deadman button state
            stamp: Monotonic time the sample was taken

        Returns:
            The snapshot that was stored
        """
        snapshot = CommandSnapshot(command=command, deadman=deadman, stamp=stamp)
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def read(self) -> CommandSnapshot:
        """Return the current snapshot"""
        with self._lock:
            return self._snapshot

    @contextmanager
    def hold(self) -> Iterator[CommandSnapshot]:
        """
        Hold the lock for a whole read-decide-emit step.

        Writers block until the block exits, on every exit path.
        """
        with self._lock:
            yield self._snapshot
