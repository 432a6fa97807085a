"""
Gamepad Input Provider

Reads raw axes and buttons from USB/wireless game controllers via pygame.
Axis and button selection is left to the TeleopConfig indices.
"""

import logging
from typing import Optional

import pygame

from teleop.types import JoySample


logger = logging.getLogger(__name__)


class GamepadJoystick:
    """
    Game controller input provider.

    Returns every axis and button of the selected controller on each read.
    """

    def __init__(self, device_index: int = 0) -> None:
        """
        Initialize gamepad input.

        Args:
            device_index: Which connected controller to use
        """
        self._device_index = device_index
        self._joystick: Optional[pygame.joystick.Joystick] = None
        self._running = False

    async def start(self) -> None:
        """Initialize pygame and connect to controller"""
        if self._running:
            return

        logger.info("Initializing gamepad input...")

        pygame.init()
        pygame.joystick.init()

        joystick_count = pygame.joystick.get_count()
        logger.info(f"Found {joystick_count} game controller(s)")

        if joystick_count <= self._device_index:
            pygame.joystick.quit()
            pygame.quit()
            raise RuntimeError(f"No game controller at index {self._device_index}")

        self._joystick = pygame.joystick.Joystick(self._device_index)
        self._joystick.init()
        logger.info(f"Selected: {self._joystick.get_name()}")
        logger.info(f"Axes: {self._joystick.get_numaxes()}")
        logger.info(f"Buttons: {self._joystick.get_numbuttons()}")

        self._running = True

    async def stop(self) -> None:
        """Disconnect from controller"""
        logger.info("Stopping gamepad input")
        self._running = False

        if self._joystick:
            self._joystick.quit()
            self._joystick = None

        pygame.joystick.quit()
        pygame.quit()

    async def read_sample(self) -> Optional[JoySample]:
        """Read current controller state"""
        if not self._running or not self._joystick:
            return None

        # Process pygame events (required to update joystick state)
        pygame.event.pump()

        axes = [self._joystick.get_axis(i) for i in range(self._joystick.get_numaxes())]
        buttons = [self._joystick.get_button(i) for i in range(self._joystick.get_numbuttons())]
        return JoySample.of(axes=axes, buttons=buttons)

    @property
    def num_axes(self) -> Optional[int]:
        if not self._joystick:
            return None
        return self._joystick.get_numaxes()

    @property
    def num_buttons(self) -> Optional[int]:
        if not self._joystick:
            return None
        return self._joystick.get_numbuttons()
