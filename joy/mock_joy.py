"""
Mock (test) joystick.

Replays scripted joystick samples for testing without physical hardware.
"""

import logging
import time
from typing import List, Optional

from teleop.types import JoySample


logger = logging.getLogger(__name__)

# Default layout matches TeleopConfig defaults:
# axis 0 = angular, axis 1 = linear, button 4 = deadman
_NUM_AXES = 2
_NUM_BUTTONS = 5
_DEADMAN_BUTTON = 4


def stick(linear: float, angular: float, deadman: bool) -> JoySample:
    """Build a sample in the default layout"""
    axes = [0.0] * _NUM_AXES
    axes[0] = angular
    axes[1] = linear
    buttons = [False] * _NUM_BUTTONS
    buttons[_DEADMAN_BUTTON] = deadman
    return JoySample.of(axes=axes, buttons=buttons)


class MockJoystick:
    """
    Mock input provider for testing.

    Returns scripted samples in sequence and repeats the last one
    once the script is exhausted.
    """

    def __init__(
        self,
        samples: Optional[List[JoySample]] = None,
        num_axes: Optional[int] = None,
        num_buttons: Optional[int] = None,
    ) -> None:
        """
        Initialize mock joystick.

        Args:
            samples: Samples to return in sequence. If None, returns
                    a neutral sample with the deadman released.
            num_axes: Axis count to report, None for unknown
            num_buttons: Button count to report, None for unknown
        """
        self._samples = samples or []
        self._index = 0
        self._running = False
        self._num_axes = num_axes
        self._num_buttons = num_buttons

    async def start(self) -> None:
        """Start the input provider"""
        logger.info(f"[MOCK JOY] Started ({len(self._samples)} samples)")
        self._running = True
        self._index = 0

    async def stop(self) -> None:
        """Stop the input provider"""
        logger.info("[MOCK JOY] Stopped")
        self._running = False

    async def read_sample(self) -> Optional[JoySample]:
        """Return next scripted sample, restamped with the current time"""
        if not self._running:
            return None

        if not self._samples:
            sample = stick(0.0, 0.0, False)
        elif self._index >= len(self._samples):
            sample = self._samples[-1]
        else:
            sample = self._samples[self._index]
            self._index += 1

        return JoySample(axes=sample.axes, buttons=sample.buttons, timestamp=time.monotonic())

    @property
    def num_axes(self) -> Optional[int]:
        return self._num_axes

    @property
    def num_buttons(self) -> Optional[int]:
        return self._num_buttons

    @property
    def exhausted(self) -> bool:
        """True once every scripted sample has been returned"""
        return self._index >= len(self._samples)

    def load_script(self, script_name: str) -> None:
        """
        Load a predefined test script.

        Args:
            script_name: Name of script to load from JoyScripts
        """
        script_map = {
            "drive_and_release": JoyScripts.drive_and_release,
            "emergency_release": JoyScripts.emergency_release,
            "hold_steady": JoyScripts.hold_steady,
            "malformed": JoyScripts.malformed,
        }

        if script_name not in script_map:
            raise ValueError(f"Unknown script '{script_name}' (choose from {', '.join(script_map)})")

        self._samples = script_map[script_name]()
        self._index = 0
        logger.info(f"Loaded script '{script_name}' with {len(self._samples)} samples")


class JoyScripts:
    """Pre-defined joystick scripts"""

    NAMES = ("drive_and_release", "emergency_release", "hold_steady", "malformed")

    @staticmethod
    def drive_and_release() -> List[JoySample]:
        """Accelerate forward, turn, then let go"""
        return [
            # Idle, deadman released
            stick(0.0, 0.0, False),
            # Engage deadman
            stick(0.0, 0.0, True),
            stick(0.5, 0.0, True),
            stick(1.0, 0.0, True),
            # Turn while moving
            stick(1.0, 0.5, True),
            stick(1.0, -0.5, True),
            # Release
            stick(0.0, 0.0, False),
        ]

    @staticmethod
    def emergency_release() -> List[JoySample]:
        """Release the deadman with the stick still deflected"""
        return [
            stick(1.0, 0.0, True),
            stick(1.0, 0.0, True),
            stick(1.0, 0.0, False),
            stick(1.0, 0.0, False),
        ]

    @staticmethod
    def hold_steady() -> List[JoySample]:
        """Hold half forward with the deadman pressed"""
        return [stick(0.5, 0.0, True)]

    @staticmethod
    def malformed() -> List[JoySample]:
        """Valid driving interleaved with samples too short to translate"""
        return [
            stick(0.5, 0.0, True),
            JoySample.of(axes=[0.5], buttons=[False] * _NUM_BUTTONS),
            JoySample.of(axes=[0.0, 0.5], buttons=[True]),
            stick(0.5, 0.0, True),
            stick(0.0, 0.0, False),
        ]
