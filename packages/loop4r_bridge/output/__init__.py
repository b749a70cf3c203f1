"""Loop4r Output Adapters"""

from .control_surface import ControlSurfaceWriter, led_number, pedal_index
from .osc_sender import OscSender, is_valid_port

__all__ = [
    "ControlSurfaceWriter",
    "OscSender",
    "is_valid_port",
    "led_number",
    "pedal_index",
]
