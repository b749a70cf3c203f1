"""
I/O Protocols for loop4r_bridge.

Structural interfaces for the control-surface port and both halves of the
control-protocol link, so the engine components can be driven by test
doubles without a MIDI device or a network.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..result import MessageResult

__all__ = [
    "ControlSurfaceOutput",
    "EngineInput",
    "EngineOutput",
]


@runtime_checkable
class ControlSurfaceOutput(Protocol):
    """
    Pedalboard LED/display output.

    Implementations:
        - ControlSurfaceWriter: Real output via mido
        - MockControlSurface: Test double for unit tests
    """

    def connect(self) -> bool:
        """Open the output device."""
        ...

    def disconnect(self) -> None:
        """Close the output device."""
        ...

    def set_port(self, port_name: str) -> bool:
        """Change output device and open it."""
        ...

    def write_cc(self, cc: int, value: int) -> bool:
        """Write one raw control-change frame."""
        ...

    def write_led(self, index: int, on: bool) -> bool:
        """Switch an LED slot on or off."""
        ...

    def write_display(self, value: int) -> bool:
        """Show a number on the two-digit display."""
        ...

    def write_heartbeat(self, on: bool) -> bool:
        """Drive the engine-alive indicator."""
        ...

    def clear_pedals(self) -> None:
        """Switch every pedal LED off."""
        ...

    @property
    def is_connected(self) -> bool:
        """Whether the output device is open."""
        ...

    @property
    def port_name(self) -> str | None:
        """Configured device name."""
        ...


@runtime_checkable
class EngineOutput(Protocol):
    """
    Outbound control-protocol endpoint.

    Implementations:
        - OscSender: Real OSC output via pythonosc
        - MockOscSender: Test double for unit tests
    """

    def connect(self) -> None:
        """Create the send endpoint. Raises InvalidPort/BindError."""
        ...

    def disconnect(self) -> None:
        """Drop the send endpoint."""
        ...

    def send_ping(self, reply_host: str, reply_port: int, reply_path: str = ...) -> bool:
        """Send the identity probe."""
        ...

    def send_heartbeat_ping(self, reply_host: str, reply_port: int) -> bool:
        """Send the liveness ping."""
        ...

    def register_auto_update(self, reply_host: str, reply_port: int, unregister: bool = False) -> bool:
        """Subscribe to (or unsubscribe from) pushed updates."""
        ...

    def request_state(self, reply_host: str, reply_port: int) -> bool:
        """Request the engine's current LED/display state."""
        ...

    @property
    def port(self) -> int:
        """Configured engine port."""
        ...

    @property
    def is_connected(self) -> bool:
        """Whether the send endpoint exists."""
        ...


@runtime_checkable
class EngineInput(Protocol):
    """
    Inbound control-protocol endpoint.

    Implementations:
        - OscReceiver: Real OSC server via pythonosc
        - MockOscReceiver: Test double for unit tests
    """

    async def connect(self, port: int) -> None:
        """Bind the receive endpoint. Raises InvalidPort/BindError."""
        ...

    def disconnect(self) -> None:
        """Close the receive endpoint."""
        ...

    def register_handler(self, address: str, handler: Callable[[str, list[Any]], MessageResult]) -> None:
        """Route an address to a handler."""
        ...

    def add_listener(self, listener: Callable[[str], None]) -> None:
        """Observe every inbound message."""
        ...

    def dispatch(self, address: str, *args: Any) -> MessageResult:
        """Route one message."""
        ...

    @property
    def is_connected(self) -> bool:
        """Whether the receive endpoint is bound."""
        ...
