"""
Loop4r OSC Sender

Sends control-protocol requests to the looper engine. Replies are
addressed back to our receive port on the path passed with each request.
"""

from __future__ import annotations

import logging
from typing import Any

from pythonosc import udp_client

from ..constants import ENGINE_PREFIX, HEARTBEAT_ADDRESS, PINGACK_ADDRESS
from ..exceptions import BindError, InvalidPort

logger = logging.getLogger(__name__)


def is_valid_port(port: int) -> bool:
    return 0 < port < 65536


class OscSender:
    """Fire-and-forget OSC client for the engine's control port"""

    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 9000

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        prefix: str = ENGINE_PREFIX,
    ):
        self._host = host
        self._port = port
        self._prefix = prefix
        self._client: udp_client.SimpleUDPClient | None = None

    def connect(self) -> None:
        """
        Initialize OSC client

        Raises:
            InvalidPort: port outside 1-65535
            BindError: socket could not be created
        """
        if not is_valid_port(self._port):
            raise InvalidPort(self._port)
        try:
            self._client = udp_client.SimpleUDPClient(self._host, self._port)
        except OSError as e:
            raise BindError(self._port, str(e)) from e
        logger.info(f"Successfully connected to OSC Send port {self._port}")

    def disconnect(self) -> None:
        """Close OSC client"""
        if self._client is not None:
            self._client = None
            logger.info("OSC client disconnected")

    def send(self, path: str, *args: Any) -> bool:
        """
        Send an OSC message to `<prefix><path>`

        Args:
            path: Address below the engine prefix, e.g. "/ping"
            args: OSC arguments

        Returns:
            True if sent successfully
        """
        if not self._client:
            logger.warning("OSC client not connected")
            return False

        try:
            self._client.send_message(self._prefix + path, list(args))
            return True
        except Exception as e:
            logger.error(f"OSC send error: {e}")
            return False

    def send_ping(self, reply_host: str, reply_port: int, reply_path: str = PINGACK_ADDRESS) -> bool:
        """
        Ask the engine to describe itself.

        The engine answers on `reply_path`: /pingack for the identity probe,
        /heartbeat for the periodic liveness ping.
        """
        return self.send("/ping", reply_host, reply_port, reply_path)

    def send_heartbeat_ping(self, reply_host: str, reply_port: int) -> bool:
        return self.send_ping(reply_host, reply_port, HEARTBEAT_ADDRESS)

    def register_auto_update(self, reply_host: str, reply_port: int, unregister: bool = False) -> bool:
        """Subscribe (or unsubscribe) to pushed LED and display updates"""
        path = "/unregister_auto_update" if unregister else "/register_auto_update"
        return self.send(path, reply_host, reply_port)

    def request_state(self, reply_host: str, reply_port: int) -> bool:
        """Ask the engine to resend its current LED and display state"""
        leds = self.send("/leds", reply_host, reply_port, "/led")
        display = self.send("/display", reply_host, reply_port, "/display")
        return leds and display

    @property
    def port(self) -> int:
        return self._port

    @property
    def is_connected(self) -> bool:
        return self._client is not None
