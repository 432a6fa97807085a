"""
TeleopRunner - Wires input, translator, publisher and sink together.

Two schedules run side by side on the event loop:
- the input pump, polling the InputProvider every input_period
- the publisher, ticking every publish_period
"""

import asyncio
import logging
from typing import Optional

from .errors import SinkUnavailableError
from .interfaces import CommandSink, InputProvider
from .publisher import DeadmanPublisher
from .shared_state import SharedCommandState
from .translator import InputTranslator
from .types import TeleopConfig, VelocityCommand


logger = logging.getLogger(__name__)


class TeleopRunner:
    """
    Owns the shared state and both schedules for one teleop session.
    """

    def __init__(
        self,
        input_provider: InputProvider,
        sink: CommandSink,
        config: TeleopConfig,
    ) -> None:
        """
        Initialize runner.

        Args:
            input_provider: Source of joystick samples
            sink: Destination for velocity commands
            config: Teleop configuration
        """
        self.input = input_provider
        self.sink = sink
        self.config = config

        self.state = SharedCommandState()
        self.translator = InputTranslator(config, self.state)
        self.publisher = DeadmanPublisher(self.state, sink, config)

        self._pump_running = False
        self._stop_requested = False
        self._stop_event: Optional[asyncio.Event] = None

    async def run(self) -> None:
        """
        Run until stop() is called.

        Raises:
            ConfigurationError: if the configuration does not fit the
                input device; the loops never start in that case
        """
        self.config.validate()

        logger.info("Teleop starting")
        await self.input.start()

        try:
            self._check_device()
            self._stop_event = asyncio.Event()
            if self._stop_requested:
                self._stop_event.set()
            self._pump_running = True

            pump_task = asyncio.create_task(self._pump_input())
            publisher_task = asyncio.create_task(self.publisher.run())
            try:
                await self._stop_event.wait()
            finally:
                self._pump_running = False
                self.publisher.stop()
                pump_task.cancel()
                publisher_task.cancel()
                await asyncio.gather(pump_task, publisher_task, return_exceptions=True)
        finally:
            logger.info("Teleop stopping")
            await self._cleanup()

    def stop(self) -> None:
        """Request shutdown of both schedules"""
        self._stop_requested = True
        self._pump_running = False
        self.publisher.stop()
        if self._stop_event is not None:
            self._stop_event.set()

    def _check_device(self) -> None:
        """Validate indices against the device when it reports its size"""
        num_axes = getattr(self.input, "num_axes", None)
        num_buttons = getattr(self.input, "num_buttons", None)
        if num_axes is None or num_buttons is None:
            logger.debug("Input device size unknown, checking samples individually")
            return
        self.config.check_device(num_axes, num_buttons)
        logger.info(f"Input device: {num_axes} axes, {num_buttons} buttons")

    async def _pump_input(self) -> None:
        """Forward samples from the input provider to the translator"""
        while self._pump_running:
            try:
                sample = await self.input.read_sample()
                if sample is not None:
                    self.translator.handle_sample(sample)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Error reading input: {e}", exc_info=True)
            await asyncio.sleep(self.config.input_period)

    async def _cleanup(self) -> None:
        """Send a final stop and release the input device"""
        try:
            with self.state.hold():
                self.sink.send_command(VelocityCommand.stop())
            logger.info("Final stop command sent")
        except SinkUnavailableError as e:
            logger.warning(f"Could not send final stop: {e}")
        except Exception as e:
            logger.error(f"Unexpected sink error on final stop: {e}", exc_info=True)
        finally:
            try:
                await self.input.stop()
            except Exception as e:
                logger.error(f"Error during cleanup: {e}", exc_info=True)
