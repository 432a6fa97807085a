"""
Translator - Turns raw joystick samples into velocity commands.

The mapping is a pure linear scale of two configured axes plus
the state of one configured deadman button. No deadzone, curve
or ramp is applied.
"""

import logging
import math
from typing import Optional, Tuple

from .errors import MalformedSampleError
from .shared_state import SharedCommandState
from .types import CommandSnapshot, JoySample, TeleopConfig, VelocityCommand


logger = logging.getLogger(__name__)


class InputTranslator:
    """
    Writes the translated command and deadman state into SharedCommandState.

    Runs on the input schedule; never emits a command itself.
    """

    def __init__(self, config: TeleopConfig, state: SharedCommandState) -> None:
        """
        Initialize translator.

        Args:
            config: Axis indices and scale factors (validated by the caller)
            state: Shared state to write into
        """
        self.config = config
        self.state = state
        self.accepted = 0
        self.malformed = 0

    def translate(self, sample: JoySample) -> Tuple[VelocityCommand, bool]:
        """
        Convert one sample to (command, deadman).

        Args:
            sample: Raw joystick sample

        Returns:
            Translated velocity command and deadman state

        Raises:
            MalformedSampleError: if the sample is too short for the
                configured indices or holds a non-finite axis reading
        """
        cfg = self.config
        num_axes = len(sample.axes)
        num_buttons = len(sample.buttons)

        if num_axes < cfg.min_axes or num_buttons < cfg.min_buttons:
            raise MalformedSampleError(
                f"sample has {num_axes} axes/{num_buttons} buttons, "
                f"need at least {cfg.min_axes}/{cfg.min_buttons}",
                num_axes=num_axes,
                num_buttons=num_buttons,
            )

        x = sample.axes[cfg.axis_linear]
        z = sample.axes[cfg.axis_angular]
        if not (math.isfinite(x) and math.isfinite(z)):
            raise MalformedSampleError(
                f"non-finite axis reading (linear={x}, angular={z})",
                num_axes=num_axes,
                num_buttons=num_buttons,
            )

        command = VelocityCommand(
            linear=cfg.scale_linear * x,
            angular=cfg.scale_angular * z,
        )
        deadman = bool(sample.buttons[cfg.axis_deadman])
        return command, deadman

    def handle_sample(self, sample: JoySample) -> Optional[CommandSnapshot]:
        """
        Translate a sample and store the result.

        Malformed samples are logged and skipped; the previous state
        stays in place.

        Returns:
            The stored snapshot, or None if the sample was rejected
        """
        try:
            command, deadman = self.translate(sample)
        except MalformedSampleError as e:
            self.malformed += 1
            logger.warning(f"Dropping malformed sample #{self.malformed}: {e}")
            return None

        self.accepted += 1
        return self.state.write(command, deadman, sample.timestamp)
