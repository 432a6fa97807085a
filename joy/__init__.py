"""Joystick input providers"""

from joy.mock_joy import MockJoystick, JoyScripts, stick

__all__ = ["MockJoystick", "JoyScripts", "stick"]
