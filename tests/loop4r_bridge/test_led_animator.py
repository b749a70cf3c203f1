"""
Tests for the LED blink state machine.

A toggle reloads the timer to 3 (Blink) or 1 (FastBlink) and the timer must
run down to 0 before the next toggle, so the toggle periods are 4 and 2 ticks
and a seed of 0 toggles on the first tick. See "Blink timing" in DESIGN.md.
"""

from __future__ import annotations

import pytest

from loop4r_bridge.engine import LedAnimator
from loop4r_bridge.state import LedRegistry, LedState

from .mocks import MockControlSurface


@pytest.fixture
def registry() -> LedRegistry:
    leds = LedRegistry()
    leds.reset(4)
    return leds


@pytest.fixture
def animator(registry: LedRegistry, mock_surface: MockControlSurface) -> LedAnimator:
    return LedAnimator(registry, mock_surface)


def toggle_ticks(animator: LedAnimator, surface: MockControlSurface, index: int, ticks: int) -> list[int]:
    """1-based tick numbers on which LED `index` was written"""
    hits = []
    for n in range(1, ticks + 1):
        before = len(surface.writes_for(index))
        animator.tick()
        if len(surface.writes_for(index)) > before:
            hits.append(n)
    return hits


class TestUpdate:
    def test_update_writes_immediately(
        self,
        animator: LedAnimator,
        registry: LedRegistry,
        mock_surface: MockControlSurface,
    ) -> None:
        led = animator.update(2, True, 0, LedState.LIGHT)

        assert led is registry[2]
        assert mock_surface.led_writes == [(2, True)]

    def test_sync_all_writes_each_led_once(
        self,
        animator: LedAnimator,
        mock_surface: MockControlSurface,
    ) -> None:
        animator.update(1, True, 0, LedState.LIGHT)
        mock_surface.reset()

        animator.sync_all()

        assert mock_surface.led_writes == [(0, False), (1, True), (2, False), (3, False)]


class TestBlink:
    """Tests for the per-tick blink rule."""

    def test_blink_toggles_every_fourth_tick(
        self,
        animator: LedAnimator,
        mock_surface: MockControlSurface,
    ) -> None:
        """Seed 0 toggles on tick 1, then the timer reloads to 3."""
        animator.update(0, True, 0, LedState.BLINK)
        mock_surface.reset()

        assert toggle_ticks(animator, mock_surface, 0, 12) == [1, 5, 9]
        assert mock_surface.writes_for(0) == [False, True, False]

    def test_fast_blink_toggles_every_second_tick(
        self,
        animator: LedAnimator,
        mock_surface: MockControlSurface,
    ) -> None:
        """Seed 0 toggles on tick 1, then the timer reloads to 1."""
        animator.update(1, False, 0, LedState.FAST_BLINK)
        mock_surface.reset()

        assert toggle_ticks(animator, mock_surface, 1, 6) == [1, 3, 5]
        assert mock_surface.writes_for(1) == [True, False, True]

    def test_seeded_timer_delays_first_toggle(
        self,
        animator: LedAnimator,
        registry: LedRegistry,
        mock_surface: MockControlSurface,
    ) -> None:
        """A timer of 2 counts down twice before the first toggle."""
        animator.update(3, False, 2, LedState.BLINK)
        mock_surface.reset()

        assert toggle_ticks(animator, mock_surface, 3, 7) == [3, 7]
        assert registry[3].blink_timer == 3

    def test_negative_timer_toggles_at_once(
        self,
        animator: LedAnimator,
        mock_surface: MockControlSurface,
    ) -> None:
        animator.update(0, False, -4, LedState.FAST_BLINK)
        mock_surface.reset()

        assert animator.tick() == 1

    @pytest.mark.parametrize("state", [LedState.DARK, LedState.LIGHT])
    def test_steady_states_never_toggle(
        self,
        animator: LedAnimator,
        registry: LedRegistry,
        mock_surface: MockControlSurface,
        state: LedState,
    ) -> None:
        """Dark and Light LEDs are never written by the tick."""
        animator.update(2, True, 0, state)
        mock_surface.reset()

        for _ in range(10):
            assert animator.tick() == 0

        assert mock_surface.led_writes == []
        assert registry[2].is_on is True
        assert registry[2].blink_timer == 0

    def test_leaving_blink_stops_toggling(
        self,
        animator: LedAnimator,
        mock_surface: MockControlSurface,
    ) -> None:
        animator.update(0, True, 0, LedState.BLINK)
        animator.tick()
        animator.update(0, True, 0, LedState.LIGHT)
        mock_surface.reset()

        for _ in range(8):
            animator.tick()

        assert mock_surface.writes_for(0) == []

    def test_each_led_keeps_its_own_timer(
        self,
        animator: LedAnimator,
        mock_surface: MockControlSurface,
    ) -> None:
        animator.update(0, False, 0, LedState.BLINK)
        animator.update(1, False, 0, LedState.FAST_BLINK)
        mock_surface.reset()

        toggles = [animator.tick() for _ in range(5)]

        assert toggles == [2, 0, 1, 0, 2]

    def test_empty_registry_ticks_quietly(self, mock_surface: MockControlSurface) -> None:
        animator = LedAnimator(LedRegistry(), mock_surface)

        assert animator.tick() == 0
        assert mock_surface.led_writes == []
