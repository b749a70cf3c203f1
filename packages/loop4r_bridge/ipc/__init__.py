"""Loop4r Inbound Control Protocol"""

from .osc_receiver import OscReceiver

__all__ = ["OscReceiver"]
