"""
Loop4r LED State

Per-pedal indicator state and the index-addressable registry the engine
resizes on every session resync.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum

from ..constants import TIMER_BLINK, TIMER_FASTBLINK, TIMER_OFF


class LedState(IntEnum):
    """LED display state, numbered as on the wire"""
    DARK = 0
    LIGHT = 1
    BLINK = 2
    FAST_BLINK = 3


@dataclass
class Led:
    """One pedal indicator slot"""
    index: int
    is_on: bool = False
    blink_timer: int = TIMER_OFF
    state: LedState = LedState.DARK

    @property
    def is_blinking(self) -> bool:
        return self.state in (LedState.BLINK, LedState.FAST_BLINK)

    @property
    def reload(self) -> int:
        """Timer value after a blink toggle"""
        return TIMER_BLINK if self.state == LedState.BLINK else TIMER_FASTBLINK


@dataclass
class LedRegistry:
    """
    Ordered LED slots, sized by the remote engine.

    `count` is the LED count the engine last reported; only indexes below
    it accept updates. Slots are only ever replaced wholesale (reset) or
    added (grow). Lowering the count (shrink) leaves the slots allocated.
    """

    leds: list[Led] = field(default_factory=list)
    count: int = 0

    def __len__(self) -> int:
        return len(self.leds)

    def __iter__(self) -> Iterator[Led]:
        return iter(self.leds)

    def __getitem__(self, index: int) -> Led:
        return self.leds[index]

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and 0 <= index < self.count

    def reset(self, count: int) -> list[Led]:
        """Replace every slot with `count` freshly cleared LEDs"""
        self.leds = [Led(index=i) for i in range(count)]
        self.count = count
        return list(self.leds)

    def grow(self, count: int) -> list[Led]:
        """
        Raise the count, creating fresh slots from the old count up.

        Slots below the old count are untouched. Slots left allocated by an
        earlier shrink are replaced.

        Returns:
            The newly created LEDs (empty if count is not larger)
        """
        if count <= self.count:
            return []
        added = [Led(index=i) for i in range(self.count, count)]
        self.leds[self.count:count] = added
        self.count = count
        return added

    def shrink(self, count: int) -> None:
        """Lower the count without removing any slot"""
        self.count = min(self.count, max(count, 0))
