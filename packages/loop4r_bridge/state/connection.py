"""
Loop4r Connection State

Process-wide link bookkeeping shared by the connection manager and the
session tracker.
"""

from __future__ import annotations

from dataclasses import dataclass

UNBOUND = -1


@dataclass
class ConnectionState:
    """
    Control-protocol link state.

    The link is up only while both ports are bound. Engine identity
    fields describe the last engine heard from and are only meaningful
    while the link is up.
    """

    receive_port: int = UNBOUND
    send_port: int = UNBOUND

    # Engine identity (None until the first pingack/heartbeat)
    engine_id: int | None = None
    host_url: str | None = None
    version: str | None = None

    # Liveness
    heartbeat_countdown: int = 0
    pinged: bool = False

    @property
    def is_up(self) -> bool:
        return self.receive_port > 0 and self.send_port > 0

    def unbind(self) -> None:
        """Mark both endpoints unbound and forget the probe"""
        self.receive_port = UNBOUND
        self.send_port = UNBOUND
        self.pinged = False
