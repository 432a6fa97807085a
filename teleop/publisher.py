"""
DeadmanPublisher - Fixed-rate publisher with a deadman interlock.

The publisher is the safety loop. Every tick it:
- Emits the last translated command while the deadman is held
- Emits exactly one stop command after the deadman is released
- Stays silent afterwards until the deadman is held again

This is safety-critical code.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Optional

from .errors import SinkUnavailableError
from .interfaces import CommandSink
from .shared_state import SharedCommandState
from .types import (
    CommandSnapshot,
    PublisherPhase,
    PublisherStats,
    TeleopConfig,
    VelocityCommand,
)


logger = logging.getLogger(__name__)


class DeadmanPublisher:
    """
    Decides once per tick what to send to the CommandSink.

    The suppression rule is an explicit PublisherPhase instead of a
    pair of flags. The phase is only touched while the shared state
    lock is held, together with the snapshot it was decided from.
    """

    def __init__(
        self,
        state: SharedCommandState,
        sink: CommandSink,
        config: TeleopConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize publisher.

        Args:
            state: Shared state written by the InputTranslator
            sink: Destination for emitted commands
            config: Tick period and stale-input timeout
            clock: Monotonic time source (same base as JoySample.timestamp)
        """
        self.state = state
        self.sink = sink
        self.config = config
        self._clock = clock

        # No input yet counts as a fresh release: the first tick sends one stop
        self.phase = PublisherPhase.JUST_RELEASED
        self.stats = PublisherStats()
        self._running = False

        self._phase_callbacks: list[Callable[[PublisherPhase, PublisherPhase], Any]] = []
        self._error_callbacks: list[Callable[[Exception], Any]] = []

    def add_phase_callback(self, callback: Callable[[PublisherPhase, PublisherPhase], Any]) -> None:
        """
        Register callback for phase changes.

        Callback signature: callback(old_phase, new_phase)

        Called with the shared state lock held, so the callback must not
        write to the shared state.
        """
        self._phase_callbacks.append(callback)

    def add_error_callback(self, callback: Callable[[Exception], Any]) -> None:
        """
        Register callback for failed sends.

        Callback signature: callback(error)
        """
        self._error_callbacks.append(callback)

    def tick(self) -> Optional[VelocityCommand]:
        """
        Run one publishing step.

        Returns:
            The command handed to the sink, or None if nothing was sent
            (suppressed tick or failed send)
        """
        with self.state.hold() as snapshot:
            self.stats.ticks += 1
            deadman = snapshot.deadman

            if deadman and self._is_stale(snapshot):
                self.stats.stale += 1
                logger.debug(f"Input is {snapshot.age(self._clock()):.3f}s old, treating deadman as released")
                deadman = False

            if deadman:
                # A motion attempt always owes a stop on release, even if it fails
                self._transition_to(PublisherPhase.ACTIVE)
                return self._emit(snapshot.command)

            if self.phase != PublisherPhase.IDLE:
                self._transition_to(PublisherPhase.JUST_RELEASED)
                stop = self._emit(VelocityCommand.stop())
                if stop is not None:
                    self._transition_to(PublisherPhase.IDLE)
                return stop

            self.stats.suppressed += 1
            return None

    async def run(self) -> None:
        """
        Tick every publish_period until stop() is called.

        Missed deadlines are skipped rather than caught up.
        """
        period = self.config.publish_period
        logger.info(f"Publisher starting at {self.config.publish_rate:.1f} Hz")
        self._running = True

        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        try:
            while self._running:
                try:
                    self.tick()
                except Exception as e:
                    logger.error(f"Error in publisher tick: {e}", exc_info=True)

                next_tick += period
                delay = next_tick - loop.time()
                if delay < 0:
                    next_tick = loop.time()
                    delay = 0.0
                await asyncio.sleep(delay)
        finally:
            self._running = False
            logger.info(
                f"Publisher stopped after {self.stats.ticks} ticks "
                f"({self.stats.motion_sent} motion, {self.stats.stops_sent} stop, "
                f"{self.stats.dropped} dropped)"
            )

    def stop(self) -> None:
        """Stop the run() loop after the current tick"""
        self._running = False

    @property
    def is_running(self) -> bool:
        """Check if the run() loop is active"""
        return self._running

    def _is_stale(self, snapshot: CommandSnapshot) -> bool:
        """Check the snapshot against the input timeout"""
        timeout = self.config.input_timeout
        if timeout is None:
            return False
        age = snapshot.age(self._clock())
        return age is not None and age > timeout

    def _emit(self, command: VelocityCommand) -> Optional[VelocityCommand]:
        """Hand a command to the sink; failures are contained here"""
        try:
            self.sink.send_command(command)
        except SinkUnavailableError as e:
            self.stats.dropped += 1
            logger.warning(f"Sink unavailable, tick dropped: {e}")
            self._notify_error(e)
            return None
        except Exception as e:
            self.stats.dropped += 1
            logger.error(f"Unexpected sink error, tick dropped: {e}", exc_info=True)
            self._notify_error(e)
            return None

        if command.is_stop and self.phase != PublisherPhase.ACTIVE:
            self.stats.stops_sent += 1
            logger.info("Deadman released, stop command sent")
        else:
            self.stats.motion_sent += 1
            logger.debug(f"Command: linear={command.linear:+.3f} angular={command.angular:+.3f}")
        return command

    def _notify_error(self, error: Exception) -> None:
        for callback in self._error_callbacks:
            try:
                callback(error)
            except Exception as e:
                logger.error(f"Error in error callback: {e}", exc_info=True)

    def _transition_to(self, new_phase: PublisherPhase) -> None:
        """
        Transition to new phase.

        Args:
            new_phase: Phase to transition to
        """
        if new_phase == self.phase:
            return

        old_phase = self.phase
        logger.info(f"Phase transition: {old_phase.value} -> {new_phase.value}")
        self.phase = new_phase

        for callback in self._phase_callbacks:
            try:
                callback(old_phase, new_phase)
            except Exception as e:
                logger.error(f"Error in phase callback: {e}", exc_info=True)
