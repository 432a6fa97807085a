"""Tests for TeleopRunner with mock components"""

import asyncio

import pytest
from joy import JoyScripts, MockJoystick, stick
from teleop.errors import ConfigurationError
from teleop.runner import TeleopRunner
from teleop.sink import MockSink
from teleop.types import TeleopConfig, VelocityCommand


FAST = TeleopConfig(publish_period=0.01, input_period=0.005)


def run_for(runner: TeleopRunner, seconds: float) -> None:
    async def scenario():
        task = asyncio.create_task(runner.run())
        await asyncio.sleep(seconds)
        runner.stop()
        await asyncio.wait_for(task, timeout=2.0)

    asyncio.run(scenario())


def test_hold_steady_drives():
    """Test held deadman produces motion commands"""
    sink = MockSink()
    joystick = MockJoystick(JoyScripts.hold_steady())
    runner = TeleopRunner(joystick, sink, FAST)

    run_for(runner, 0.2)

    motion = [c for c in sink.commands if not c.is_stop]
    assert len(motion) > 0
    assert all(c.linear == pytest.approx(0.15) for c in motion)
    # Last command is always the final stop on shutdown
    assert sink.last_command == VelocityCommand.stop()


def test_release_ends_with_single_stop():
    """Test a scripted drive ends in exactly one stop before shutdown"""
    sink = MockSink()
    joystick = MockJoystick(JoyScripts.emergency_release())
    runner = TeleopRunner(joystick, sink, FAST)

    run_for(runner, 0.3)

    stats = runner.publisher.stats
    assert stats.motion_sent >= 1
    assert stats.suppressed > 0
    # Release stop, then the final stop sent on shutdown
    assert sink.commands[-1].is_stop
    assert sink.commands[-2].is_stop
    assert sink.stop_count == stats.stops_sent + 1


def test_malformed_samples_do_not_stop_runner():
    """Test short samples are skipped while the loop keeps running"""
    sink = MockSink()
    joystick = MockJoystick(JoyScripts.malformed())
    runner = TeleopRunner(joystick, sink, FAST)

    run_for(runner, 0.2)

    assert runner.translator.malformed >= 2
    assert runner.translator.accepted >= 3
    assert runner.publisher.stats.ticks > 0


def test_invalid_config_refuses_to_start():
    """Test configuration errors surface before anything runs"""
    sink = MockSink()
    joystick = MockJoystick(JoyScripts.hold_steady())
    runner = TeleopRunner(joystick, sink, TeleopConfig(scale_linear=float("nan")))

    with pytest.raises(ConfigurationError):
        asyncio.run(runner.run())

    assert sink.command_count == 0


def test_device_too_small_refuses_to_start():
    """Test indices are checked against the reported device size"""
    sink = MockSink()
    joystick = MockJoystick([stick(0.5, 0.0, True)], num_axes=2, num_buttons=3)
    runner = TeleopRunner(joystick, sink, FAST)

    with pytest.raises(ConfigurationError):
        asyncio.run(runner.run())

    assert sink.commands == [VelocityCommand.stop()]


def test_sink_outage_keeps_ticking():
    """Test the loop survives a sink that is down the whole time"""
    sink = MockSink(available=False)
    joystick = MockJoystick(JoyScripts.hold_steady())
    runner = TeleopRunner(joystick, sink, FAST)

    run_for(runner, 0.1)

    assert runner.publisher.stats.ticks > 1
    assert runner.publisher.stats.dropped == runner.publisher.stats.ticks
    assert sink.command_count == 0


def test_stop_before_run_returns_promptly():
    sink = MockSink()
    runner = TeleopRunner(MockJoystick(), sink, FAST)
    runner.stop()

    asyncio.run(asyncio.wait_for(runner.run(), timeout=1.0))

    assert sink.last_command == VelocityCommand.stop()


def test_unexpected_sink_error_still_releases_input():
    """Test a sink raising arbitrary errors neither escapes run() nor leaks the device"""

    class BrokenSink:
        def send_command(self, command):
            raise RuntimeError("boom")

    joystick = MockJoystick(JoyScripts.hold_steady())
    runner = TeleopRunner(joystick, BrokenSink(), FAST)

    run_for(runner, 0.05)

    assert runner.publisher.stats.dropped == runner.publisher.stats.ticks
    assert asyncio.run(joystick.read_sample()) is None
