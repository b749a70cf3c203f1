"""
Loop4r OSC Receiver

UDP endpoint for messages pushed by the looper engine. Runs on the
asyncio event loop, so handlers execute on the same thread as the tick.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from pythonosc.dispatcher import Dispatcher
from pythonosc.osc_server import AsyncIOOSCUDPServer

from ..constants import HEARTBEAT_ADDRESS
from ..exceptions import BindError, InvalidPort, UnrecognizedMessage
from ..output.osc_sender import is_valid_port
from ..result import MessageResult

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def describe_args(args: list[Any]) -> str:
    """One `type value` entry per argument, for debug logs"""
    parts = []
    for arg in args:
        if isinstance(arg, bool):
            kind = "bool"
        elif isinstance(arg, int):
            kind = "int32"
        elif isinstance(arg, float):
            kind = "float32"
        elif isinstance(arg, str):
            kind = "string"
        elif isinstance(arg, bytes):
            kind = "blob"
            arg = arg.decode("utf-8", errors="replace")
        else:
            kind = "(unknown)"
        parts.append(f"{kind} {arg}")
    return ", ".join(parts)


class OscReceiver:
    """
    Receives engine messages and routes them by exact address.

    Listeners see every message before it is routed, whatever its
    address; handlers see only their own address.
    """

    DEFAULT_HOST = "127.0.0.1"

    def __init__(self, host: str = DEFAULT_HOST):
        self._host = host
        self._port: int | None = None
        self._transport: asyncio.BaseTransport | None = None
        self._handlers: dict[str, Callable[[str, list[Any]], MessageResult]] = {}
        self._listeners: list[Callable[[str], None]] = []
        self._dispatcher = Dispatcher()
        self._dispatcher.set_default_handler(self._on_packet_message)

    async def connect(self, port: int) -> None:
        """
        Bind the receive endpoint.

        Raises:
            InvalidPort: port outside 1-65535
            BindError: port in use or not permitted
        """
        if not is_valid_port(port):
            raise InvalidPort(port)
        if self._transport is not None:
            self.disconnect()

        server = AsyncIOOSCUDPServer(
            (self._host, port), self._dispatcher, asyncio.get_running_loop()
        )
        try:
            self._transport, _ = await server.create_serve_endpoint()
        except OSError as e:
            raise BindError(port, str(e)) from e
        self._port = port
        logger.info(f"OSC receiver listening on {self._host}:{port}")

    def disconnect(self) -> None:
        """Close the receive endpoint"""
        if self._transport is not None:
            self._transport.close()
            self._transport = None
            logger.info(f"OSC receiver on port {self._port} closed")
        self._port = None

    def register_handler(
        self, address: str, handler: Callable[[str, list[Any]], MessageResult]
    ) -> None:
        """
        Register a handler for an address

        Args:
            address: Exact OSC address, e.g. "/led"
            handler: Callback taking (address, args), returning MessageResult
        """
        self._handlers[address] = handler

    def add_listener(self, listener: Callable[[str], None]) -> None:
        """Call `listener(address)` for every inbound message"""
        self._listeners.append(listener)

    def _on_packet_message(self, address: str, *args: Any) -> None:
        """Dispatcher entry point. Returns None so python-osc sends no reply."""
        self.dispatch(address, *args)

    def dispatch(self, address: str, *args: Any) -> MessageResult:
        """
        Route one message to its handler.

        Returns:
            The handler's result; unknown addresses yield UnrecognizedMessage
        """
        arguments = list(args)
        if address != HEARTBEAT_ADDRESS:
            logger.debug(
                f"osc message, address = '{address}', {len(arguments)} argument(s)"
                + (f": {describe_args(arguments)}" if arguments else "")
            )

        for listener in self._listeners:
            listener(address)

        handler = self._handlers.get(address)
        if handler is None:
            logger.info(f"No handler for OSC address: {address}")
            return MessageResult.error(UnrecognizedMessage(address))

        try:
            return handler(address, arguments)
        except Exception as e:
            logger.exception(f"Handler error for '{address}'")
            return MessageResult(success=False, message=str(e))

    @property
    def port(self) -> int | None:
        return self._port

    @property
    def is_connected(self) -> bool:
        return self._transport is not None
