"""
Pytest fixtures for loop4r_bridge tests.

Provides mock dependencies and a bridge wired to them.
"""

from __future__ import annotations

import pytest

from loop4r_bridge.engine import BridgeEngine

from .mocks import MockControlSurface, MockOscReceiver, MockOscSender


@pytest.fixture
def mock_surface() -> MockControlSurface:
    """Create a fresh MockControlSurface for testing."""
    return MockControlSurface()


@pytest.fixture
def mock_sender() -> MockOscSender:
    """Create a fresh MockOscSender for testing."""
    return MockOscSender()


@pytest.fixture
def mock_receiver() -> MockOscReceiver:
    """Create a fresh MockOscReceiver for testing."""
    return MockOscReceiver()


@pytest.fixture
def bridge(
    mock_surface: MockControlSurface,
    mock_receiver: MockOscReceiver,
    mock_sender: MockOscSender,
) -> BridgeEngine:
    """
    Create a BridgeEngine with all mock dependencies.

    Receive port 9001, send port 9000, handlers registered as start()
    would do.
    """
    engine = BridgeEngine(
        surface=mock_surface,
        receiver=mock_receiver,
        sender=mock_sender,
        receive_port=9001,
    )
    engine._register_handlers()
    return engine


@pytest.fixture
def engine_info() -> list:
    """pingack/heartbeat arguments: host, version, LED count, engine id."""
    return ["127.0.0.1", "1.7.0", 4, 42]
