"""
Deadman Teleop Core - Joystick to velocity command with a deadman interlock.

This package contains the core logic for driving a robot from a joystick:
- Types: Data classes for samples, commands, configuration
- Interfaces: Protocols for pluggable components (input, sink)
- Translator: Scales joystick axes into velocity commands
- Publisher: Fixed-rate deadman loop that decides what to send
- Runner: Runs input and publisher schedules together
"""

from .types import (
    JoySample,
    VelocityCommand,
    CommandSnapshot,
    PublisherPhase,
    PublisherStats,
    TeleopConfig,
)
from .errors import (
    TeleopError,
    ConfigurationError,
    MalformedSampleError,
    SinkUnavailableError,
)
from .interfaces import (
    InputProvider,
    CommandSink,
)
from .shared_state import SharedCommandState
from .translator import InputTranslator
from .publisher import DeadmanPublisher
from .runner import TeleopRunner

__all__ = [
    "JoySample",
    "VelocityCommand",
    "CommandSnapshot",
    "PublisherPhase",
    "PublisherStats",
    "TeleopConfig",
    "TeleopError",
    "ConfigurationError",
    "MalformedSampleError",
    "SinkUnavailableError",
    "InputProvider",
    "CommandSink",
    "SharedCommandState",
    "InputTranslator",
    "DeadmanPublisher",
    "TeleopRunner",
]
