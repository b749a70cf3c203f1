"""
Tests for BridgeEngine lifecycle, the tick loop, and end-to-end scenarios
driven through the mock endpoints.
"""

from __future__ import annotations

import asyncio

import pytest

from loop4r_bridge.engine import BridgeEngine
from loop4r_bridge.exceptions import BindError
from loop4r_bridge.protocols import ControlSurfaceOutput, EngineInput, EngineOutput
from loop4r_bridge.state import LedState

from .mocks import MockControlSurface, MockOscReceiver, MockOscSender, bring_up


class TestProtocols:
    def test_mocks_satisfy_protocols(
        self,
        mock_surface: MockControlSurface,
        mock_sender: MockOscSender,
        mock_receiver: MockOscReceiver,
    ):
        assert isinstance(mock_surface, ControlSurfaceOutput)
        assert isinstance(mock_sender, EngineOutput)
        assert isinstance(mock_receiver, EngineInput)


class TestLifecycle:
    """Tests for start/stop and device selection."""

    def test_start_opens_surface_and_registers_handlers(
        self,
        mock_surface: MockControlSurface,
        mock_receiver: MockOscReceiver,
        mock_sender: MockOscSender,
    ):
        engine = BridgeEngine(mock_surface, mock_receiver, mock_sender, receive_port=9001)

        engine.start()

        assert mock_surface.is_connected
        assert set(mock_receiver._handlers) == {"/pingack", "/heartbeat", "/led", "/display"}
        assert len(mock_receiver._listeners) == 1

    def test_start_without_device_still_runs(
        self,
        mock_surface: MockControlSurface,
        mock_receiver: MockOscReceiver,
        mock_sender: MockOscSender,
        caplog: pytest.LogCaptureFixture,
    ):
        mock_surface.openable = False
        engine = BridgeEngine(mock_surface, mock_receiver, mock_sender, receive_port=9001)

        with caplog.at_level("INFO"):
            engine.start()

        assert mock_surface.is_connected is False
        assert "Control surface disabled" in caplog.text

    @pytest.mark.asyncio
    async def test_stop_unregisters_and_tears_down(
        self,
        bridge: BridgeEngine,
        mock_sender: MockOscSender,
        mock_receiver: MockOscReceiver,
        mock_surface: MockControlSurface,
    ):
        mock_surface.connect()
        await bring_up(bridge)

        bridge.stop()

        assert mock_sender.registrations == [("127.0.0.1", 9001, True)]
        assert bridge.connection.is_up is False
        assert mock_receiver.is_connected is False
        assert mock_surface.is_connected is False
        assert bridge.running is False

    def test_stop_while_down_sends_nothing(
        self,
        bridge: BridgeEngine,
        mock_sender: MockOscSender,
    ):
        bridge.stop()
        assert mock_sender.registrations == []

    def test_select_output_port(
        self,
        bridge: BridgeEngine,
        mock_surface: MockControlSurface,
    ):
        mock_surface.openable = False
        assert bridge.select_output_port("Behringer") is False

        mock_surface.openable = True
        assert bridge.select_output_port("FCB1010") is True
        assert mock_surface.port_name == "FCB1010"


class TestRun:
    """Tests for the periodic tick loop."""

    @pytest.mark.asyncio
    async def test_run_ticks_until_stopped(
        self,
        mock_surface: MockControlSurface,
        mock_receiver: MockOscReceiver,
        mock_sender: MockOscSender,
    ):
        engine = BridgeEngine(
            mock_surface, mock_receiver, mock_sender, receive_port=9001, tick_interval=0.01
        )
        engine.start()

        task = asyncio.create_task(engine.run())
        await asyncio.sleep(0.1)
        engine.stop()
        await asyncio.wait_for(task, timeout=1.0)

        assert engine.tick_count >= 3
        assert mock_sender.pings_to("/pingack")

    @pytest.mark.asyncio
    async def test_tick_error_does_not_stop_loop(
        self,
        bridge: BridgeEngine,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ):
        bridge._tick_interval = 0.01
        calls = 0

        def failing_tick() -> int:
            nonlocal calls
            calls += 1
            raise RuntimeError("surface exploded")

        monkeypatch.setattr(bridge.animator, "tick", failing_tick)

        task = asyncio.create_task(bridge.run())
        await asyncio.sleep(0.05)
        bridge.stop()
        await asyncio.wait_for(task, timeout=1.0)

        assert calls >= 2
        assert "Tick error: surface exploded" in caplog.text


class TestScenarios:
    """End-to-end behavior through the mock endpoints."""

    @pytest.mark.asyncio
    async def test_silent_engine(
        self,
        bridge: BridgeEngine,
        mock_sender: MockOscSender,
    ):
        """Connect on 9001/9000, then silence: one ping on tick 5, teardown on tick 10."""
        await bring_up(bridge)
        assert (bridge.state.receive_port, bridge.state.send_port) == (9001, 9000)

        heartbeat_ticks = []
        for n in range(11):
            before = len(mock_sender.pings_to("/heartbeat"))
            await bridge.tick()
            if len(mock_sender.pings_to("/heartbeat")) > before:
                heartbeat_ticks.append(n)
            if n < 10:
                assert bridge.connection.is_up

        assert heartbeat_ticks == [5]
        assert bridge.connection.is_up is False
        assert bridge.state.heartbeat_countdown == -6

    @pytest.mark.asyncio
    async def test_blinking_led(
        self,
        bridge: BridgeEngine,
        mock_receiver: MockOscReceiver,
        mock_surface: MockControlSurface,
        engine_info: list,
    ):
        """A blinking LED is written on at once, then toggled off by the tick."""
        # Seed 0 toggles on the first tick; see "Blink timing" in DESIGN.md
        await bring_up(bridge)
        mock_receiver.dispatch("/pingack", *engine_info)
        mock_surface.reset()

        mock_receiver.dispatch("/led", 3, 1, 0, int(LedState.BLINK))
        assert mock_surface.writes_for(3) == [True]

        for _ in range(3):
            await bridge.tick()

        assert mock_surface.writes_for(3) == [True, False]
        assert bridge.registry[3].is_on is False

    def test_display_round_trip(
        self,
        bridge: BridgeEngine,
        mock_receiver: MockOscReceiver,
        mock_surface: MockControlSurface,
    ):
        mock_receiver.dispatch("/display", 11)
        assert mock_surface.displays == [12]

    @pytest.mark.asyncio
    async def test_engine_restart_mid_session(
        self,
        bridge: BridgeEngine,
        mock_receiver: MockOscReceiver,
        mock_sender: MockOscSender,
        engine_info: list,
    ):
        """A heartbeat from a new engine instance resyncs without a new probe."""
        await bring_up(bridge)
        mock_receiver.dispatch("/pingack", *engine_info)
        mock_receiver.dispatch("/led", 0, 1, 0, int(LedState.LIGHT))
        mock_sender.reset()

        mock_receiver.dispatch("/heartbeat", "127.0.0.1", "1.7.0", 4, 99)

        assert bridge.state.engine_id == 99
        assert bridge.registry[0].state == LedState.DARK
        assert len(mock_sender.registrations) == 4
        assert mock_sender.pings == []

    @pytest.mark.asyncio
    async def test_animation_runs_while_link_down(
        self,
        bridge: BridgeEngine,
        mock_receiver: MockOscReceiver,
        mock_surface: MockControlSurface,
        mock_sender: MockOscSender,
        engine_info: list,
    ):
        """Blinking carries on while the link is being re-established."""
        mock_receiver.dispatch("/pingack", *engine_info)
        mock_receiver.dispatch("/led", 1, 0, 0, int(LedState.FAST_BLINK))
        mock_receiver.connect_error = BindError(9001, "Address already in use")
        mock_surface.reset()

        for _ in range(4):
            await bridge.tick()

        assert mock_surface.writes_for(1) == [True, False]
