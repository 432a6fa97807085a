"""
Mock Sink - For testing without a robot.

Records commands instead of sending them.
"""

import logging
from typing import List, Optional

from teleop.errors import SinkUnavailableError
from teleop.types import VelocityCommand
from teleop.sink.udp import UdpSink


logger = logging.getLogger(__name__)

__all__ = ["MockSink", "UdpSink"]


class MockSink:
    """
    Mock command sink for testing.

    Logs and records commands; can be switched unavailable to
    simulate an outage.
    """

    def __init__(self, available: bool = True) -> None:
        """
        Initialize mock sink.

        Args:
            available: If False, every send raises SinkUnavailableError
        """
        self.available = available
        self.commands: List[VelocityCommand] = []
        self.failed = 0

    def send_command(self, command: VelocityCommand) -> None:
        """Record command instead of sending"""
        if not self.available:
            self.failed += 1
            raise SinkUnavailableError("mock sink is offline")

        self.commands.append(command)
        logger.debug(
            f"[MOCK] Command #{len(self.commands)}: "
            f"linear={command.linear:+.3f} angular={command.angular:+.3f}"
        )

    def clear(self) -> None:
        """Forget recorded commands"""
        self.commands.clear()
        self.failed = 0

    @property
    def last_command(self) -> Optional[VelocityCommand]:
        """Get last command sent (for testing)"""
        return self.commands[-1] if self.commands else None

    @property
    def command_count(self) -> int:
        """Get total commands sent (for testing)"""
        return len(self.commands)

    @property
    def stop_count(self) -> int:
        """Get number of stop commands sent (for testing)"""
        return sum(1 for c in self.commands if c.is_stop)
