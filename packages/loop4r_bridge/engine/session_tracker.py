"""
Loop4r Session Tracker

Interprets engine messages and keeps the LED registry sized and in sync
with the engine's self-reported session.

Every handler returns a MessageResult so a rejected message carries the
exact reason (MalformedMessage for bad arguments or an out-of-range LED
index) instead of disappearing silently.
"""

from __future__ import annotations

import logging
from typing import Any

from ..constants import DISPLAY_ADDRESS, HEARTBEAT_ADDRESS, LED_ADDRESS, PINGACK_ADDRESS
from ..exceptions import MalformedMessage
from ..messages import (
    DisplayMessage,
    EngineInfoMessage,
    HeartbeatMessage,
    LedMessage,
    PingAckMessage,
)
from ..protocols import ControlSurfaceOutput, EngineInput
from ..result import MessageResult
from ..state import ConnectionState, LedRegistry, LedState
from .connection_manager import ConnectionManager
from .led_animator import LedAnimator

logger = logging.getLogger(__name__)


class SessionTracker:
    """Mirrors the engine session onto the LED registry"""

    def __init__(
        self,
        state: ConnectionState,
        registry: LedRegistry,
        animator: LedAnimator,
        surface: ControlSurfaceOutput,
        connection: ConnectionManager,
    ):
        self._state = state
        self._registry = registry
        self._animator = animator
        self._surface = surface
        self._connection = connection

        # Engine-alive indicator, toggled on every heartbeat
        self._alive_led_on = False

    def register_handlers(self, receiver: EngineInput) -> None:
        """Route the four engine messages to this tracker"""
        receiver.register_handler(PINGACK_ADDRESS, self.handle_ping_ack)
        receiver.register_handler(HEARTBEAT_ADDRESS, self.handle_heartbeat)
        receiver.register_handler(LED_ADDRESS, self.handle_led)
        receiver.register_handler(DISPLAY_ADDRESS, self.handle_display)

    # ================================================================
    # Handlers
    # ================================================================

    def handle_ping_ack(self, address: str, args: list[Any]) -> MessageResult:
        """Identity probe answered: record identity, rebuild the registry"""
        try:
            msg = PingAckMessage.from_args(args)
        except MalformedMessage as e:
            logger.warning(str(e))
            return MessageResult.error(e)

        self._record_identity(msg)
        if msg.led_count > 0:
            self._rebuild(msg.led_count)

        return MessageResult.ok(data={"led_count": self._registry.count})

    def handle_heartbeat(self, address: str, args: list[Any]) -> MessageResult:
        """
        Engine heartbeat.

        A changed engine id means the engine restarted without us seeing a
        pingack, so the registry is rebuilt. With the same engine id only
        growth adds slots; a smaller LED count only lowers the accepted index
        range and leaves the slots allocated.
        """
        try:
            msg = HeartbeatMessage.from_args(args)
        except MalformedMessage as e:
            logger.warning(str(e))
            return MessageResult.error(e)

        if msg.engine_id != self._state.engine_id:
            logger.info(f"Engine changed ({self._state.engine_id} -> {msg.engine_id}), reinitializing")
            self._record_identity(msg)
            if msg.led_count > 0:
                self._rebuild(msg.led_count)
        else:
            self._state.host_url = msg.host
            self._state.version = msg.version
            if msg.led_count > self._registry.count:
                self._grow(msg.led_count)
            elif msg.led_count < self._registry.count:
                self._registry.shrink(msg.led_count)
                logger.debug(
                    f"Engine reports {msg.led_count} LEDs, keeping {len(self._registry)} slots"
                )

        self._alive_led_on = not self._alive_led_on
        self._surface.write_heartbeat(self._alive_led_on)

        return MessageResult.ok(data={"led_count": self._registry.count})

    def handle_led(self, address: str, args: list[Any]) -> MessageResult:
        """Apply one LED update and write it straight away"""
        try:
            msg = LedMessage.from_args(args)
        except MalformedMessage as e:
            logger.warning(str(e))
            return MessageResult.error(e)

        if msg.index not in self._registry:
            logger.debug(f"Dropping update for LED {msg.index} ({self._registry.count} LEDs)")
            return MessageResult.error(
                MalformedMessage(address, f"LED index {msg.index} outside [0, {self._registry.count})")
            )

        self._animator.update(msg.index, msg.on != 0, msg.blink_timer, LedState(msg.state))
        return MessageResult.ok()

    def handle_display(self, address: str, args: list[Any]) -> MessageResult:
        """Show the selected loop, one-based, on the two-digit display"""
        try:
            msg = DisplayMessage.from_args(args)
        except MalformedMessage as e:
            logger.warning(str(e))
            return MessageResult.error(e)

        selected = msg.loop_index + 1
        self._surface.write_display(selected)
        return MessageResult.ok(data={"selected_loop": selected})

    # ================================================================
    # Registry maintenance
    # ================================================================

    def _record_identity(self, msg: EngineInfoMessage) -> None:
        self._state.host_url = msg.host
        self._state.version = msg.version
        self._state.engine_id = msg.engine_id

    def _rebuild(self, count: int) -> None:
        """Replace the registry and resync every slot"""
        leds = self._registry.reset(count)
        for _ in leds:
            self._connection.register_auto_update()
            self._connection.request_state()
        self._animator.sync_all()
        logger.info(
            f"Engine {self._state.engine_id} ({self._state.host_url}, "
            f"v{self._state.version}): {count} LEDs"
        )

    def _grow(self, count: int) -> None:
        """Append slots and resync only the new ones"""
        added = self._registry.grow(count)
        for _ in added:
            self._connection.register_auto_update()
            self._connection.request_state()
        for led in added:
            self._animator.apply(led)
        logger.info(f"Engine LED count grew to {count}")
