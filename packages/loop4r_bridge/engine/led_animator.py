"""
Loop4r LED Animator

Blink state machine for the LED registry. Dark and Light LEDs are
written once when their state is set and never touched by the tick;
Blink and FastBlink LEDs toggle whenever their timer runs out.
"""

from __future__ import annotations

import logging

from ..protocols import ControlSurfaceOutput
from ..state import Led, LedRegistry, LedState

logger = logging.getLogger(__name__)


class LedAnimator:
    """Applies LED state to the control surface and runs the blink tick"""

    def __init__(self, registry: LedRegistry, surface: ControlSurfaceOutput):
        self._registry = registry
        self._surface = surface

    def apply(self, led: Led) -> bool:
        """Write the LED's current on/off value"""
        return self._surface.write_led(led.index, led.is_on)

    def sync_all(self) -> None:
        """Write every LED's current value once"""
        for led in self._registry:
            self.apply(led)

    def update(self, index: int, on: bool, blink_timer: int, state: LedState) -> Led:
        """
        Overwrite one LED from an engine update and write it immediately.

        The caller is responsible for checking `index` against the registry.
        """
        led = self._registry[index]
        led.is_on = on
        led.blink_timer = blink_timer
        led.state = state
        self.apply(led)
        return led

    def tick(self) -> int:
        """
        Advance every blinking LED by one tick.

        Returns:
            Number of LEDs toggled
        """
        toggled = 0
        for led in self._registry:
            if not led.is_blinking:
                continue
            if led.blink_timer <= 0:
                led.is_on = not led.is_on
                self.apply(led)
                led.blink_timer = led.reload
                toggled += 1
            else:
                led.blink_timer -= 1
        return toggled
