#!/usr/bin/env python3
"""
Teleop Environment Configuration Helper

Provides easy access to .env configuration for the teleop tools.
Automatically loads .env file and provides defaults.
"""

import math
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from teleop.errors import ConfigurationError
from teleop.types import TeleopConfig


class TeleopEnvConfig:
    """Configuration manager for teleop tools"""

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration

        Args:
            env_file: Path to .env file (default: .env in current directory)
        """
        self._loaded = False

        if env_file is None:
            env_file = Path(".env")
        else:
            env_file = Path(env_file)

        if env_file.exists():
            load_dotenv(env_file)
            self._loaded = True

    @staticmethod
    def _get_int(name: str, default: int) -> int:
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None

    @staticmethod
    def _get_float(name: str, default: Optional[float]) -> Optional[float]:
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            return float(raw)
        except ValueError:
            raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None

    @property
    def axis_linear(self) -> int:
        """Axis index for linear velocity (default: 1)"""
        return self._get_int("TELEOP_AXIS_LINEAR", 1)

    @property
    def axis_angular(self) -> int:
        """Axis index for angular velocity (default: 0)"""
        return self._get_int("TELEOP_AXIS_ANGULAR", 0)

    @property
    def axis_deadman(self) -> int:
        """Button index for the deadman switch (default: 4)"""
        return self._get_int("TELEOP_AXIS_DEADMAN", 4)

    @property
    def scale_linear(self) -> float:
        """Linear speed at full deflection (default: 0.3)"""
        return self._get_float("TELEOP_SCALE_LINEAR", 0.3)

    @property
    def scale_angular(self) -> float:
        """Angular speed at full deflection (default: 0.9)"""
        return self._get_float("TELEOP_SCALE_ANGULAR", 0.9)

    @property
    def publish_rate(self) -> float:
        """Publisher rate in Hz (default: 10)"""
        return self._get_float("TELEOP_PUBLISH_RATE", 10.0)

    @property
    def input_timeout(self) -> Optional[float]:
        """Stale input timeout in seconds (default: disabled)"""
        return self._get_float("TELEOP_INPUT_TIMEOUT", None)

    @property
    def sink_host(self) -> str:
        """UDP sink host (default: 127.0.0.1)"""
        return os.getenv("TELEOP_SINK_HOST", "127.0.0.1")

    @property
    def sink_port(self) -> int:
        """UDP sink port (default: 9870)"""
        return self._get_int("TELEOP_SINK_PORT", 9870)

    def to_teleop_config(self) -> TeleopConfig:
        """
        Build a validated TeleopConfig

        Raises:
            ConfigurationError: if any value is missing, unparsable or invalid
        """
        rate = self.publish_rate
        if not math.isfinite(rate) or rate <= 0:
            raise ConfigurationError(f"TELEOP_PUBLISH_RATE must be positive, got {rate}")

        config = TeleopConfig(
            axis_linear=self.axis_linear,
            axis_angular=self.axis_angular,
            axis_deadman=self.axis_deadman,
            scale_linear=self.scale_linear,
            scale_angular=self.scale_angular,
            publish_period=1.0 / rate,
            input_timeout=self.input_timeout,
        )
        config.validate()
        return config

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate configuration

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        try:
            self.to_teleop_config()
        except ConfigurationError as e:
            errors.append(str(e))

        try:
            port = self.sink_port
            if not 0 < port < 65536:
                errors.append(f"TELEOP_SINK_PORT out of range: {port}")
        except ConfigurationError as e:
            errors.append(str(e))

        return len(errors) == 0, errors

    def print_status(self):
        """Print configuration status"""
        print("Teleop Configuration Status:")
        print(f"  .env loaded:    {'Yes' if self._loaded else 'No'}")
        for name in ("axis_linear", "axis_angular", "axis_deadman",
                     "scale_linear", "scale_angular", "publish_rate",
                     "input_timeout", "sink_host", "sink_port"):
            try:
                value = getattr(self, name)
            except ConfigurationError as e:
                value = f"(invalid: {e})"
            if value is None:
                value = "(disabled)"
            print(f"  {name + ':':<15} {value}")

        is_valid, errors = self.validate()
        if is_valid:
            print("\n  Status: Configuration is valid")
        else:
            print("\n  Status: Configuration has errors:")
            for error in errors:
                print(f"    - {error}")


# Global config instance
_config = None

def get_config(reload: bool = False) -> TeleopEnvConfig:
    """
    Get the global configuration instance

    Args:
        reload: Force reload of .env file

    Returns:
        TeleopEnvConfig instance
    """
    global _config
    if _config is None or reload:
        _config = TeleopEnvConfig()
    return _config


def main():
    """Command-line utility to check configuration"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Teleop Configuration Utility",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Check current configuration:
    python teleop_config.py

  Validate configuration:
    python teleop_config.py --validate

  Use custom .env file:
    python teleop_config.py --env-file /path/to/.env
        """
    )

    parser.add_argument("--env-file", help="Path to .env file")
    parser.add_argument("--validate", action="store_true",
                       help="Validate configuration and exit with error if invalid")

    args = parser.parse_args()

    config = TeleopEnvConfig(args.env_file)
    config.print_status()

    if args.validate:
        is_valid, errors = config.validate()
        if not is_valid:
            print("\nValidation failed!")
            sys.exit(1)
        else:
            print("\nValidation passed!")


if __name__ == "__main__":
    main()
