"""
Loop4r Control-Surface Writer

Drives the pedalboard LEDs and two-digit display with raw control-change
frames over a MIDI output port.
"""

from __future__ import annotations

import logging

import mido
from mido import Message

from ..constants import (
    CC_DISPLAY_ONES,
    CC_DISPLAY_TENS,
    CC_LED_OFF,
    CC_LED_ON,
    CONTROL_CHANGE,
    DOWN,
    HEARTBEAT_LED,
    NUM_LED_PEDALS,
    UP,
)
from ..exceptions import HardwareOpenError, HardwareWriteError

logger = logging.getLogger(__name__)


def pedal_index(controller_value: int) -> int:
    """
    Map a pedal controller value to its LED slot.

    Pedals 1-9 are slots 0-8, pedal 0 is slot 9, and the UP/DOWN
    pedals keep their fixed slots. This is the physical wiring of the
    board and must not change.

    Inverse of led_number(). The bridge only writes to the board, so
    nothing here reads pedal presses; this documents the wiring table.
    """
    if 1 <= controller_value <= 9:
        return controller_value - 1
    if controller_value == 0:
        return 9
    if controller_value == 10:
        return UP
    if controller_value == 11:
        return DOWN
    return controller_value


def led_number(index: int) -> int:
    """Map an LED slot back to the controller value the board expects"""
    if 0 <= index <= 8:
        return index + 1
    if index == 9:
        return 0
    return index


class ControlSurfaceWriter:
    """Control-change writer for the pedalboard"""

    def __init__(self, port_name: str | None = None, channel: int = 1):
        """
        Initialize control-surface writer

        Args:
            port_name: Output port name, or a case-insensitive fragment of one.
            channel: MIDI channel (0-16). Advisory only; frames always use
                the fixed control-change status byte.
        """
        self._port_name = port_name
        self._channel = channel
        self._port: mido.ports.BaseOutput | None = None

    def connect(self) -> bool:
        """
        Open the configured output port and switch the pedal LEDs off.

        Returns:
            True if the port is open
        """
        if self._port is not None:
            return True
        if not self._port_name:
            logger.debug("No control-surface output device configured")
            return False

        try:
            name = self._resolve_port_name(self._port_name)
            self._port = mido.open_output(name)
        except HardwareOpenError as e:
            logger.warning(str(e))
            return False
        except Exception as e:
            logger.warning(str(HardwareOpenError(
                f"Couldn't open MIDI output port \"{self._port_name}\": {e}"
            )))
            return False

        logger.info(f"Control surface connected to: {name}")
        self.clear_pedals()
        return True

    def disconnect(self) -> None:
        """Close the output port"""
        if self._port:
            self._port.close()
            self._port = None
            logger.info("Control surface disconnected")

    @property
    def is_connected(self) -> bool:
        return self._port is not None

    @property
    def port_name(self) -> str | None:
        """Configured port name"""
        return self._port_name

    @property
    def channel(self) -> int:
        return self._channel

    def set_port(self, port_name: str) -> bool:
        """
        Change the output port.

        This is the only way a failed open is retried.

        Args:
            port_name: New port name or fragment

        Returns:
            True if the new port is open
        """
        if self._port:
            self.disconnect()

        self._port_name = port_name
        return self.connect()

    @staticmethod
    def _resolve_port_name(wanted: str) -> str:
        """Exact name first, then the first port containing `wanted` (any case)"""
        available = mido.get_output_names()
        if wanted in available:
            return wanted
        lowered = wanted.lower()
        for name in available:
            if lowered in name.lower():
                return name
        raise HardwareOpenError(f"Couldn't open MIDI output port \"{wanted}\"")

    # ================================================================
    # Frames
    # ================================================================

    def write_cc(self, cc: int, value: int) -> bool:
        """
        Write one control-change frame.

        A failed write is logged and reported, never retried.

        Args:
            cc: Controller number (0-127)
            value: Controller value (0-127)
        """
        if not self._port:
            logger.debug(f"Control surface not open, dropping CC {cc} {value}")
            return False
        try:
            self._port.send(Message.from_bytes([CONTROL_CHANGE, cc & 0x7F, value & 0x7F]))
            return True
        except Exception as e:
            logger.error(str(HardwareWriteError(cc, value, str(e))))
            return False

    def write_led(self, index: int, on: bool) -> bool:
        """Switch the LED in slot `index` on or off"""
        return self.write_cc(CC_LED_ON if on else CC_LED_OFF, led_number(index))

    def write_display(self, value: int) -> bool:
        """
        Show a number on the two-digit display.

        Args:
            value: Number to show (tens digit is 0 below 10)
        """
        tens = value // 10 if value // 10 > 0 else 0
        wrote_tens = self.write_cc(CC_DISPLAY_TENS, tens)
        wrote_ones = self.write_cc(CC_DISPLAY_ONES, value % 10)
        return wrote_tens and wrote_ones

    def write_heartbeat(self, on: bool) -> bool:
        """Drive the fixed engine-alive indicator"""
        return self.write_cc(CC_LED_ON if on else CC_LED_OFF, HEARTBEAT_LED)

    def clear_pedals(self) -> None:
        """Switch every pedal LED off"""
        for index in range(NUM_LED_PEDALS):
            self.write_led(index, False)

    # ================================================================
    # Utility
    # ================================================================

    @staticmethod
    def list_ports() -> list[str]:
        """List available MIDI output ports"""
        return list(mido.get_output_names())

    @staticmethod
    def list_input_ports() -> list[str]:
        """List available MIDI input ports"""
        return list(mido.get_input_names())
