"""
Loop4r Bridge Engine

Orchestrates the engine-state to LED mirror:
- Connection manager (link lifetime, liveness, reconnect)
- Session tracker (inbound messages, registry sizing)
- LED animator (blink state machine)

Everything runs on one asyncio loop: a single periodic tick plus the OSC
receiver's datagram callbacks, so no locking is needed. Dependencies are
injected via the constructor for testability; use create_bridge() for
production instances.
"""

from __future__ import annotations

import asyncio
import logging
import traceback

from ..constants import TICK_INTERVAL
from ..protocols import ControlSurfaceOutput, EngineInput, EngineOutput
from ..state import ConnectionState, LedRegistry
from .connection_manager import ConnectionManager
from .led_animator import LedAnimator
from .session_tracker import SessionTracker

logger = logging.getLogger(__name__)


class BridgeEngine:
    """
    Main engine for the Loop4r bridge.

    Owns the explicit state (connection state, LED registry) and hands it
    to the components that mutate it.
    """

    def __init__(
        self,
        surface: ControlSurfaceOutput,
        receiver: EngineInput,
        sender: EngineOutput,
        receive_port: int,
        reply_host: str = ConnectionManager.DEFAULT_HOST,
        tick_interval: float = TICK_INTERVAL,
    ):
        """
        Initialize BridgeEngine with injected dependencies.

        Args:
            surface: Control-surface output (ControlSurfaceWriter or mock)
            receiver: Inbound OSC endpoint (OscReceiver or mock)
            sender: Outbound OSC endpoint (OscSender or mock)
            receive_port: Local UDP port for engine replies
            reply_host: Host the engine replies to
            tick_interval: Scheduler period in seconds
        """
        # State
        self.state = ConnectionState()
        self.registry = LedRegistry()

        # I/O (injected)
        self._surface = surface
        self._receiver = receiver
        self._sender = sender

        # Components
        self.connection = ConnectionManager(
            self.state, receiver, sender, receive_port, reply_host
        )
        self.animator = LedAnimator(self.registry, surface)
        self.tracker = SessionTracker(
            self.state, self.registry, self.animator, surface, self.connection
        )

        self._tick_interval = tick_interval
        self._running = False
        self._tick_count = 0

    # ================================================================
    # Lifecycle
    # ================================================================

    def start(self) -> None:
        """Open the control surface and register message handlers"""
        if self._surface.connect():
            logger.info("Control surface enabled")
        else:
            logger.info("Control surface disabled (no device open)")

        self._register_handlers()
        logger.info("Loop4r bridge started")

    def stop(self) -> None:
        """Stop ticking and release both the link and the device"""
        self._running = False

        if self.connection.is_up:
            self.connection.register_auto_update(unregister=True)
        self.connection.teardown()
        self._surface.disconnect()

        logger.info("Loop4r bridge stopped")

    def _register_handlers(self) -> None:
        """Wire liveness and session handling to the receiver"""
        self._receiver.add_listener(self.connection.mark_alive)
        self.tracker.register_handlers(self._receiver)

    def select_output_port(self, port_name: str) -> bool:
        """
        Reconfigure the control-surface device.

        This is the only retry path after a failed open.
        """
        if self._surface.set_port(port_name):
            logger.info(f"Control surface switched to: {port_name}")
            return True
        logger.warning(f"Failed to open control surface: {port_name}")
        return False

    # ================================================================
    # Main Loop
    # ================================================================

    async def tick(self) -> None:
        """One scheduler tick: link bookkeeping, then LED animation"""
        await self.connection.tick()
        self.animator.tick()
        self._tick_count += 1

    async def run(self) -> None:
        """
        Tick every `tick_interval` seconds until stopped.

        Ticks are scheduled against a fixed anchor so the period does not
        drift with tick duration. If the loop falls behind by more than a
        period, the anchor is reset instead of firing catch-up ticks.
        """
        self._running = True
        loop = asyncio.get_running_loop()
        anchor = loop.time()
        ticks = 0

        while self._running:
            try:
                await self.tick()
            except Exception as e:
                logger.error(f"Tick error: {e}\n{traceback.format_exc()}")

            ticks += 1
            delay = anchor + ticks * self._tick_interval - loop.time()
            if delay < -self._tick_interval:
                logger.debug(f"Tick overran by {-delay * 1000:.1f}ms, resetting anchor")
                anchor = loop.time()
                ticks = 0
                delay = self._tick_interval
            await asyncio.sleep(max(0.0, delay))

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def running(self) -> bool:
        return self._running
