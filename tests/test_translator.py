"""Tests for InputTranslator"""

import math

import pytest
from teleop.errors import MalformedSampleError
from teleop.shared_state import SharedCommandState
from teleop.translator import InputTranslator
from teleop.types import JoySample, TeleopConfig, VelocityCommand


@pytest.fixture
def config():
    """Scenario configuration"""
    return TeleopConfig(
        axis_linear=1,
        axis_angular=0,
        axis_deadman=4,
        scale_linear=0.3,
        scale_angular=0.9,
    )


@pytest.fixture
def state():
    return SharedCommandState()


@pytest.fixture
def translator(config, state):
    return InputTranslator(config, state)


def test_scenario_a_translation(translator, state):
    """Test the documented example sample"""
    sample = JoySample.of(axes=[0.5, 1.0], buttons=[0, 0, 0, 0, 1], timestamp=5.0)
    snapshot = translator.handle_sample(sample)

    assert snapshot is not None
    assert snapshot.command.linear == pytest.approx(0.3)
    assert snapshot.command.angular == pytest.approx(0.45)
    assert snapshot.deadman is True
    assert snapshot.stamp == 5.0
    assert state.read() == snapshot
    assert translator.accepted == 1


@pytest.mark.parametrize("sl, sa, x, y", [
    (0.3, 0.9, 1.0, 0.5),
    (1.0, 1.0, -1.0, -1.0),
    (2.5, -0.5, 0.2, 0.8),
    (0.0, 0.0, 1.0, 1.0),
    (-1.0, 3.0, -0.25, 0.0),
])
def test_scaling_is_linear(state, sl, sa, x, y):
    """Test command is exactly scale times axis reading"""
    config = TeleopConfig(axis_linear=1, axis_angular=0, scale_linear=sl, scale_angular=sa)
    translator = InputTranslator(config, state)

    command, deadman = translator.translate(
        JoySample.of(axes=[y, x], buttons=[0, 0, 0, 0, 0])
    )

    assert command.linear == pytest.approx(sl * x)
    assert command.angular == pytest.approx(sa * y)
    assert deadman is False


def test_custom_indices(state):
    """Test non-default axis and button layout"""
    config = TeleopConfig(axis_linear=3, axis_angular=2, axis_deadman=0,
                          scale_linear=1.0, scale_angular=2.0)
    translator = InputTranslator(config, state)

    command, deadman = translator.translate(
        JoySample.of(axes=[0.9, 0.9, 0.25, -0.5], buttons=[1])
    )

    assert command == VelocityCommand(linear=-0.5, angular=0.5)
    assert deadman is True


def test_scenario_c_short_axes(translator, state):
    """Test too-short axes are rejected without touching state"""
    translator.handle_sample(JoySample.of(axes=[0.5, 1.0], buttons=[0, 0, 0, 0, 1]))
    before = state.read()

    with pytest.raises(MalformedSampleError) as excinfo:
        translator.translate(JoySample.of(axes=[0.5], buttons=[0, 0, 0, 0, 1]))
    assert excinfo.value.num_axes == 1

    result = translator.handle_sample(JoySample.of(axes=[0.5], buttons=[0, 0, 0, 0, 1]))

    assert result is None
    assert state.read() is before
    assert translator.malformed == 1
    assert translator.accepted == 1


def test_short_buttons_rejected(translator, state):
    """Test too-short buttons are rejected without touching state"""
    before = state.read()
    assert translator.handle_sample(JoySample.of(axes=[0.5, 1.0], buttons=[1, 1, 1])) is None
    assert state.read() is before
    assert translator.malformed == 1


def test_non_finite_axis_rejected(translator, state):
    """Test NaN readings never reach the shared state"""
    before = state.read()
    assert translator.handle_sample(
        JoySample.of(axes=[math.nan, 1.0], buttons=[0, 0, 0, 0, 1])
    ) is None
    assert state.read() is before


def test_malformed_logged(translator, caplog):
    """Test malformed samples are reported"""
    with caplog.at_level("WARNING"):
        translator.handle_sample(JoySample.of(axes=[], buttons=[]))
    assert "malformed" in caplog.text


def test_extra_axes_ignored(translator):
    """Test longer samples are fine"""
    command, deadman = translator.translate(
        JoySample.of(axes=[0.0, 1.0, 0.7, 0.7, 0.7], buttons=[0] * 4 + [1] + [1] * 6)
    )
    assert command.linear == pytest.approx(0.3)
    assert command.angular == 0.0
    assert deadman is True
