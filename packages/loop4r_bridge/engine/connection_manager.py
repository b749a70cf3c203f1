"""
Loop4r Connection Manager

Owns the control-protocol link: binds both endpoints, probes the engine
once per session, and tears the link down when the engine goes quiet.

Liveness is a countdown in ticks. Any inbound message resets it to 5.
At 0 a ping is sent; below -5 the link is declared dead and the next
tick starts a full reconnect-and-reprobe cycle.
"""

from __future__ import annotations

import logging

from ..constants import HEARTBEAT_DEAD_BELOW, HEARTBEAT_PING_AT, HEARTBEAT_RESET
from ..exceptions import BindError, InvalidPort
from ..protocols import EngineInput, EngineOutput
from ..state import ConnectionState

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Maintains at most one link to the engine"""

    DEFAULT_HOST = "127.0.0.1"

    def __init__(
        self,
        state: ConnectionState,
        receiver: EngineInput,
        sender: EngineOutput,
        receive_port: int,
        reply_host: str = DEFAULT_HOST,
    ):
        """
        Args:
            state: Shared connection state
            receiver: Inbound endpoint (OscReceiver or mock)
            sender: Outbound endpoint (OscSender or mock)
            receive_port: Local UDP port to bind for engine replies
            reply_host: Host the engine should reply to
        """
        self.state = state
        self._receiver = receiver
        self._sender = sender
        self._receive_port = receive_port
        self._reply_host = reply_host
        self._ever_connected = False

    # ================================================================
    # Endpoints
    # ================================================================

    async def connect(self) -> bool:
        """
        Bind the receive endpoint.

        Failures are logged and leave the endpoint unbound for the next tick.
        """
        try:
            await self._receiver.connect(self._receive_port)
        except InvalidPort:
            logger.warning("Error: you have entered an invalid UDP port number.")
            return False
        except BindError as e:
            logger.warning(f"Error: {e}")
            return False

        self.state.receive_port = self._receive_port
        return True

    def connect_sender(self) -> bool:
        """Create the send endpoint; failures are logged and retried next tick"""
        try:
            self._sender.connect()
        except InvalidPort:
            logger.warning("Error: you have entered an invalid UDP port number.")
            return False
        except BindError as e:
            logger.warning(f"Error: {e}")
            return False

        self.state.send_port = self._sender.port
        return True

    async def try_connect(self) -> bool:
        """
        Bring up whichever endpoints are still unbound.

        Sends the identity probe once per session, as soon as both
        endpoints are bound.

        Returns:
            True if the link is fully up
        """
        if self.state.send_port < 0:
            self.connect_sender()
        if self.state.receive_port < 0:
            await self.connect()

        if not self.state.is_up:
            return False

        if not self.state.pinged:
            self.probe()
        return True

    def teardown(self) -> None:
        """Close both endpoints and forget the probe"""
        self._receiver.disconnect()
        self._sender.disconnect()
        self.state.unbind()

    # ================================================================
    # Liveness
    # ================================================================

    def probe(self) -> bool:
        """Ask the engine for its identity (reply on /pingack)"""
        self.state.pinged = True
        logger.debug("Sending identity probe")
        return self._sender.send_ping(self._reply_host, self.state.receive_port)

    def mark_alive(self, address: str | None = None) -> None:
        """Reset the liveness countdown; called for every inbound message"""
        self.state.heartbeat_countdown = HEARTBEAT_RESET

    def check_liveness(self) -> bool:
        """
        Advance the liveness countdown by one tick.

        Returns:
            False if the link was declared dead on this tick
        """
        if self.state.heartbeat_countdown == HEARTBEAT_PING_AT:
            logger.debug("Heartbeat overdue, pinging engine")
            self._sender.send_heartbeat_ping(self._reply_host, self.state.receive_port)

        self.state.heartbeat_countdown -= 1

        if self.state.heartbeat_countdown < HEARTBEAT_DEAD_BELOW:
            logger.warning("Lost heartbeat from engine, reconnecting")
            self.teardown()
            return False
        return True

    async def tick(self) -> None:
        """Reconnect if down, otherwise run the liveness countdown"""
        if self.state.is_up:
            self.check_liveness()
            return

        if await self.try_connect():
            verb = "Reconnected" if self._ever_connected else "Connected"
            logger.info(
                f"{verb} to OSC ports {self.state.receive_port} (in) "
                f"and {self.state.send_port} (out)"
            )
            self._ever_connected = True
            self.state.heartbeat_countdown = HEARTBEAT_RESET

    # ================================================================
    # Session requests
    # ================================================================

    def register_auto_update(self, unregister: bool = False) -> bool:
        """Subscribe to (or unsubscribe from) pushed engine updates"""
        if not self.state.is_up:
            return False
        return self._sender.register_auto_update(
            self._reply_host, self.state.receive_port, unregister=unregister
        )

    def request_state(self) -> bool:
        """Ask the engine to resend its LED and display state"""
        if not self.state.is_up:
            return False
        return self._sender.request_state(self._reply_host, self.state.receive_port)

    @property
    def is_up(self) -> bool:
        return self.state.is_up
