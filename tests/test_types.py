"""Tests for core types"""

import math

import pytest
from teleop.errors import ConfigurationError
from teleop.types import (
    CommandSnapshot,
    JoySample,
    PublisherPhase,
    PublisherStats,
    TeleopConfig,
    VelocityCommand,
)


def test_joy_sample_of_converts_values():
    """Test sample builder normalizes element types"""
    sample = JoySample.of(axes=[0, 1], buttons=[0, 1, 0])
    assert sample.axes == (0.0, 1.0)
    assert sample.buttons == (False, True, False)
    assert sample.timestamp > 0


def test_joy_sample_explicit_timestamp():
    """Test explicit timestamps are kept"""
    sample = JoySample.of(axes=[0.5], buttons=[True], timestamp=12.5)
    assert sample.timestamp == 12.5


def test_velocity_command_stop():
    """Test stop command creation"""
    stop = VelocityCommand.stop()
    assert stop.is_stop is True
    assert stop.linear == 0.0
    assert stop.angular == 0.0

    assert VelocityCommand(linear=0.1).is_stop is False
    assert VelocityCommand(angular=-0.1).is_stop is False


def test_velocity_command_is_immutable():
    """Test commands cannot be modified after creation"""
    command = VelocityCommand(linear=0.3, angular=0.45)
    with pytest.raises(AttributeError):
        command.linear = 1.0


def test_snapshot_defaults():
    """Test initial snapshot is a released deadman with a stop command"""
    snapshot = CommandSnapshot()
    assert snapshot.deadman is False
    assert snapshot.command.is_stop is True
    assert snapshot.stamp is None
    assert snapshot.age() is None


def test_snapshot_age():
    """Test snapshot age against an explicit clock"""
    snapshot = CommandSnapshot(stamp=10.0)
    assert snapshot.age(now=10.25) == pytest.approx(0.25)


def test_config_defaults():
    """Test default configuration values"""
    config = TeleopConfig()
    assert config.axis_linear == 1
    assert config.axis_angular == 0
    assert config.axis_deadman == 4
    assert config.scale_linear == 0.3
    assert config.scale_angular == 0.9
    assert config.publish_period == 0.1
    assert config.publish_rate == pytest.approx(10.0)
    assert config.input_timeout is None
    config.validate()


def test_config_min_lengths():
    """Test required sample lengths derived from indices"""
    config = TeleopConfig(axis_linear=3, axis_angular=1, axis_deadman=7)
    assert config.min_axes == 4
    assert config.min_buttons == 8


@pytest.mark.parametrize("kwargs", [
    {"axis_linear": -1},
    {"axis_angular": -2},
    {"axis_deadman": -1},
    {"axis_linear": 1.5},
    {"axis_deadman": True},
    {"scale_linear": math.inf},
    {"scale_angular": math.nan},
    {"publish_period": 0.0},
    {"publish_period": -0.1},
    {"input_period": 0.0},
    {"input_timeout": 0.0},
    {"input_timeout": math.inf},
])
def test_config_validation(kwargs):
    """Test configuration rejects undefined mappings"""
    with pytest.raises(ConfigurationError):
        TeleopConfig(**kwargs).validate()


def test_config_negative_scale_is_valid():
    """Test inverted axes are allowed"""
    TeleopConfig(scale_linear=-0.3, scale_angular=-0.9).validate()


def test_config_check_device():
    """Test indices are checked against device size"""
    config = TeleopConfig()
    config.check_device(num_axes=2, num_buttons=5)

    with pytest.raises(ConfigurationError):
        config.check_device(num_axes=1, num_buttons=5)

    with pytest.raises(ConfigurationError):
        config.check_device(num_axes=2, num_buttons=4)

    with pytest.raises(ConfigurationError):
        TeleopConfig(axis_angular=2).check_device(num_axes=2, num_buttons=5)


def test_publisher_phase_enum():
    """Test publisher phase enum"""
    assert PublisherPhase.ACTIVE.value == "active"
    assert PublisherPhase.JUST_RELEASED.value == "just_released"
    assert PublisherPhase.IDLE.value == "idle"


def test_publisher_stats_start_at_zero():
    stats = PublisherStats()
    assert stats.ticks == 0
    assert stats.motion_sent == 0
    assert stats.stops_sent == 0
    assert stats.suppressed == 0
    assert stats.dropped == 0
    assert stats.stale == 0
