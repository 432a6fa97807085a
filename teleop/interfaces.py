"""
Core interfaces (protocols) for pluggable components.

These define the contracts that all implementations must follow.
Python Protocols are like interfaces in Java/C# - they define
what methods a class must have without forcing inheritance.
"""

from typing import Protocol, Optional
from .types import JoySample, VelocityCommand


class InputProvider(Protocol):
    """
    Interface for input sources (gamepad, scripted mock, etc.).

    All input providers must implement these methods to be usable
    by the TeleopRunner.
    """

    async def start(self) -> None:
        """
        Initialize and start the input provider.

        Called once when the system starts up.
        May open devices, create connections, etc.
        """
        ...

    async def stop(self) -> None:
        """
        Stop and cleanup the input provider.

        Called when shutting down.
        Must close devices, release resources, etc.
        """
        ...

    async def read_sample(self) -> Optional[JoySample]:
        """
        Read the current axes and buttons from the input device.

        This should be non-blocking and return immediately.
        Returns None if no input available or device not ready.

        Returns:
            JoySample with raw device values, or None
        """
        ...

    @property
    def num_axes(self) -> Optional[int]:
        """Number of axes the device reports, or None if unknown"""
        ...

    @property
    def num_buttons(self) -> Optional[int]:
        """Number of buttons the device reports, or None if unknown"""
        ...


class CommandSink(Protocol):
    """
    Interface for outbound velocity commands (UDP, mock, etc.).

    Fire-and-forget: no acknowledgment is expected. Implementations
    must not block, since commands are sent while the shared state
    lock is held.
    """

    def send_command(self, command: VelocityCommand) -> None:
        """
        Send a velocity command to the robot.

        Args:
            command: Command to send

        Raises:
            SinkUnavailableError: if the command could not be handed off
        """
        ...
