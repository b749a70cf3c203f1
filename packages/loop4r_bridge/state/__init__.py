"""Loop4r Bridge State"""

from .connection import UNBOUND, ConnectionState
from .leds import Led, LedRegistry, LedState

__all__ = [
    "ConnectionState",
    "Led",
    "LedRegistry",
    "LedState",
    "UNBOUND",
]
