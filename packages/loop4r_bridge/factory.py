"""
Loop4r Bridge Factory

Factory functions for creating production BridgeEngine instances.
Separates object creation from business logic (DI pattern).
"""

from __future__ import annotations

from .config import Settings
from .engine import BridgeEngine
from .ipc import OscReceiver
from .output import ControlSurfaceWriter, OscSender


def create_bridge(settings: Settings | None = None) -> BridgeEngine:
    """
    Create a production BridgeEngine with real I/O dependencies.

    Args:
        settings: Bridge settings (default: loaded from the environment)

    Returns:
        Configured BridgeEngine instance
    """
    settings = settings if settings is not None else Settings()

    surface = ControlSurfaceWriter(settings.device_out, settings.channel)
    receiver = OscReceiver(settings.osc_host)
    sender = OscSender(settings.osc_host, settings.osc_send_port)

    return BridgeEngine(
        surface=surface,
        receiver=receiver,
        sender=sender,
        receive_port=settings.osc_receive_port,
        reply_host=settings.osc_host,
        tick_interval=settings.tick_interval,
    )
