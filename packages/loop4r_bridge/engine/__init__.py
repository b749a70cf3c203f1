"""Loop4r Bridge Engine"""

from .bridge import BridgeEngine
from .connection_manager import ConnectionManager
from .led_animator import LedAnimator
from .session_tracker import SessionTracker

__all__ = [
    "BridgeEngine",
    "ConnectionManager",
    "LedAnimator",
    "SessionTracker",
]
