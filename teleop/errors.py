"""Exceptions raised by the teleop core."""


class TeleopError(Exception):
    """Base class for all teleop errors"""


class ConfigurationError(TeleopError):
    """Configuration cannot produce a defined input mapping (fatal at startup)"""


class MalformedSampleError(TeleopError):
    """An input sample is too short or holds unusable values"""

    def __init__(self, message: str, num_axes: int = 0, num_buttons: int = 0) -> None:
        super().__init__(message)
        self.num_axes = num_axes
        self.num_buttons = num_buttons


class SinkUnavailableError(TeleopError):
    """The command sink could not accept a command for this tick"""
