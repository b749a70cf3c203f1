"""
Loop4r Bridge

Mirrors a looper engine's session state onto the LEDs and display of a
foot-pedal controller: OSC in, control-change frames out.
"""

__version__ = "0.3.0"

from .config import Settings
from .engine import BridgeEngine
from .factory import create_bridge
from .protocols import ControlSurfaceOutput, EngineInput, EngineOutput

__all__ = [
    "create_bridge",
    "BridgeEngine",
    "ControlSurfaceOutput",
    "EngineInput",
    "EngineOutput",
    "Settings",
]
