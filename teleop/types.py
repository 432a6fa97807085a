"""
Core data types for the deadman teleop system.

All the data structures that flow through the system, fully typed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
import math
import time

from .errors import ConfigurationError


class PublisherPhase(Enum):
    """Deadman publisher state machine states"""
    ACTIVE = "active"                # Deadman held, last command is emitted every tick
    JUST_RELEASED = "just_released"  # Deadman released, one stop command still owed
    IDLE = "idle"                    # Deadman released, stop already delivered


@dataclass(frozen=True)
class JoySample:
    """
    Raw reading from a joystick-like input device.

    This is the output of all InputProvider implementations.
    Axes and buttons are kept in device order; nothing is normalized.
    """
    axes: Tuple[float, ...]
    buttons: Tuple[bool, ...]
    timestamp: float = field(default_factory=time.monotonic)

    @classmethod
    def of(cls, axes, buttons, timestamp: Optional[float] = None) -> "JoySample":
        """Build a sample from any sequences (ints in buttons become bools)"""
        axes = tuple(float(a) for a in axes)
        buttons = tuple(bool(b) for b in buttons)
        if timestamp is None:
            return cls(axes=axes, buttons=buttons)
        return cls(axes=axes, buttons=buttons, timestamp=timestamp)


@dataclass(frozen=True)
class VelocityCommand:
    """
    Velocity command sent to the robot.

    This is the output of the InputTranslator and input to the CommandSink.
    """
    linear: float = 0.0          # Forward velocity (m/s)
    angular: float = 0.0         # Yaw rate (rad/s)

    @property
    def is_stop(self) -> bool:
        """Check if this is a stop command"""
        return self.linear == 0.0 and self.angular == 0.0

    @classmethod
    def stop(cls) -> "VelocityCommand":
        """Create a stop command"""
        return cls(linear=0.0, angular=0.0)


@dataclass(frozen=True)
class CommandSnapshot:
    """
    One complete write of the shared command state.

    Velocity and deadman always travel together so a reader can never
    pair the velocity of one sample with the deadman of another.
    """
    command: VelocityCommand = field(default_factory=VelocityCommand.stop)
    deadman: bool = False
    stamp: Optional[float] = None    # time.monotonic() of the sample, None before any input

    def age(self, now: Optional[float] = None) -> Optional[float]:
        """Seconds since the sample was taken, or None if nothing arrived yet"""
        if self.stamp is None:
            return None
        if now is None:
            now = time.monotonic()
        return now - self.stamp


@dataclass
class PublisherStats:
    """Counters kept by the DeadmanPublisher"""
    ticks: int = 0
    motion_sent: int = 0
    stops_sent: int = 0
    suppressed: int = 0
    dropped: int = 0
    stale: int = 0


@dataclass(frozen=True)
class TeleopConfig:
    """Configuration for the translator and publisher loop"""
    axis_linear: int = 1               # Axis driving linear velocity
    axis_angular: int = 0              # Axis driving angular velocity
    axis_deadman: int = 4              # Button that must be held to move
    scale_linear: float = 0.3          # Max linear speed (m/s at full deflection)
    scale_angular: float = 0.9         # Max angular speed (rad/s at full deflection)
    publish_period: float = 0.1        # Publisher tick interval (10Hz)
    input_period: float = 0.02         # Input polling interval (50Hz)
    input_timeout: Optional[float] = None  # Treat input older than this as released (None = off)

    def validate(self) -> None:
        """
        Check that the configuration can produce a defined mapping.

        Raises:
            ConfigurationError: on negative indices, non-finite scales
                or non-positive periods
        """
        for name in ("axis_linear", "axis_angular", "axis_deadman"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer index, got {value!r}")
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}")

        for name in ("scale_linear", "scale_angular"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")

        for name in ("publish_period", "input_period"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number of seconds, got {value}")

        if self.input_timeout is not None:
            if not math.isfinite(self.input_timeout) or self.input_timeout <= 0:
                raise ConfigurationError(
                    f"input_timeout must be positive or None, got {self.input_timeout}"
                )

    def check_device(self, num_axes: int, num_buttons: int) -> None:
        """
        Check the configured indices against a device's size.

        Args:
            num_axes: Number of axes the input device reports
            num_buttons: Number of buttons the input device reports

        Raises:
            ConfigurationError: if any index is out of range for the device
        """
        if self.axis_linear >= num_axes:
            raise ConfigurationError(
                f"axis_linear={self.axis_linear} but device has {num_axes} axes"
            )
        if self.axis_angular >= num_axes:
            raise ConfigurationError(
                f"axis_angular={self.axis_angular} but device has {num_axes} axes"
            )
        if self.axis_deadman >= num_buttons:
            raise ConfigurationError(
                f"axis_deadman={self.axis_deadman} but device has {num_buttons} buttons"
            )

    @property
    def min_axes(self) -> int:
        """Shortest axes sequence that satisfies the configured indices"""
        return max(self.axis_linear, self.axis_angular) + 1

    @property
    def min_buttons(self) -> int:
        """Shortest buttons sequence that satisfies the configured indices"""
        return self.axis_deadman + 1

    @property
    def publish_rate(self) -> float:
        """Publisher frequency in Hz"""
        return 1.0 / self.publish_period
