#!/usr/bin/env python3
"""
Deadman Teleop Launcher - Easy start for joystick teleoperation

Usage:
    python launch.py                          # Scripted mock joystick, log commands
    python launch.py --gamepad                # Real gamepad, log commands
    python launch.py --gamepad --udp          # Real gamepad, send to TELEOP_SINK_HOST:PORT
    python launch.py --udp 10.0.0.5:9870      # Mock joystick, send to given address
"""

import sys
import argparse
import asyncio
import logging
from typing import Optional, Tuple


logger = logging.getLogger("launch")


def setup_logging(level: str = "INFO") -> None:
    """Configure logging"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )


def parse_address(value: str) -> Tuple[str, int]:
    """Parse HOST:PORT for argparse"""
    host, sep, port = value.rpartition(":")
    if not sep or not host:
        raise argparse.ArgumentTypeError(f"expected HOST:PORT, got {value!r}")
    try:
        return host, int(port)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port in {value!r}") from None


def build_input(use_gamepad: bool, script: str):
    """Create the input provider"""
    if use_gamepad:
        from joy.gamepad_joy import GamepadJoystick
        print("Hold the deadman button and use the stick to drive")
        return GamepadJoystick()

    from joy import MockJoystick
    provider = MockJoystick()
    provider.load_script(script)
    print(f"Using MOCK joystick (script: {script})")
    return provider


def build_sink(udp_addr: Optional[Tuple[str, int]]):
    """Create the command sink"""
    if udp_addr is None:
        from teleop.sink import MockSink
        print("Using MOCK sink (commands are logged at DEBUG level)")
        return MockSink()

    from teleop.sink import UdpSink
    print(f"Sending commands to udp://{udp_addr[0]}:{udp_addr[1]}")
    return UdpSink(*udp_addr)


def launch_teleop(args: argparse.Namespace) -> int:
    """Run the teleop loop until Ctrl+C or --duration elapses"""
    from teleop import ConfigurationError, PublisherPhase, TeleopRunner
    from teleop_config import TeleopEnvConfig

    env = TeleopEnvConfig(args.env_file)
    try:
        config = env.to_teleop_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 1

    udp_addr = None
    if args.udp is not None:
        udp_addr = args.udp or (env.sink_host, env.sink_port)

    input_provider = build_input(args.gamepad, args.script)
    sink = build_sink(udp_addr)
    runner = TeleopRunner(input_provider=input_provider, sink=sink, config=config)

    def on_phase_change(old_phase: PublisherPhase, new_phase: PublisherPhase):
        logger.info(f"PHASE: {old_phase.value} -> {new_phase.value}")

    runner.publisher.add_phase_callback(on_phase_change)

    async def run():
        task = asyncio.create_task(runner.run())
        try:
            if args.duration is not None:
                done, _ = await asyncio.wait({task}, timeout=args.duration)
                if not done:
                    runner.stop()
            await task
        except asyncio.CancelledError:
            runner.stop()
            await task
            raise

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        print("\nShutting down...")
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        return 1
    finally:
        close = getattr(sink, "close", None)
        if close is not None:
            close()

    stats = runner.publisher.stats
    print(
        f"Ticks: {stats.ticks} | motion: {stats.motion_sent} | stop: {stats.stops_sent} | "
        f"dropped: {stats.dropped} | malformed samples: {runner.translator.malformed}"
    )
    return 0


def main():
    """Main entry point"""
    from joy import JoyScripts

    parser = argparse.ArgumentParser(
        description="Deadman Teleop - Joystick to velocity command",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python launch.py                           Replay a mock script, log commands
  python launch.py --gamepad --udp           Drive over UDP with a real gamepad
  python launch.py --script malformed --duration 3
        """
    )

    parser.add_argument(
        "--gamepad",
        action="store_true",
        help="Use gamepad input (requires pygame)"
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the scripted mock joystick (default)"
    )
    parser.add_argument(
        "--script",
        default="drive_and_release",
        choices=JoyScripts.NAMES,
        help="Mock joystick script"
    )
    parser.add_argument(
        "--udp",
        nargs="?",
        const="",
        type=lambda v: parse_address(v) if v else "",
        metavar="HOST:PORT",
        help="Send commands over UDP (default address from TELEOP_SINK_HOST/PORT)"
    )
    parser.add_argument(
        "--duration",
        type=float,
        help="Stop after this many seconds"
    )
    parser.add_argument("--env-file", help="Path to .env file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level"
    )

    args = parser.parse_args()

    if args.gamepad and args.mock:
        parser.error("--gamepad and --mock are mutually exclusive")

    setup_logging(args.log_level)
    sys.exit(launch_teleop(args))


if __name__ == "__main__":
    main()
