"""
Pydantic models for inbound control-protocol messages.

OSC delivers positional arguments; each model maps them onto named fields
and validates them in strict mode, so a float where an int32 is expected
(or a missing argument) is rejected instead of coerced.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import MalformedMessage
from .state import LedState


class EngineMessage(BaseModel):
    """Base for positional OSC payloads."""

    model_config = ConfigDict(strict=True, frozen=True)

    ADDRESS: ClassVar[str] = ""

    @classmethod
    def from_args(cls, args: Sequence[Any]) -> EngineMessage:
        """
        Build the model from positional OSC arguments.

        Raises:
            MalformedMessage: wrong argument count or types
        """
        names = list(cls.model_fields)
        if len(args) != len(names):
            raise MalformedMessage(
                cls.ADDRESS, f"expected {len(names)} arguments, got {len(args)}"
            )
        try:
            return cls.model_validate(dict(zip(names, args)))
        except ValidationError as e:
            raise MalformedMessage(cls.ADDRESS, str(e)) from e


class EngineInfoMessage(EngineMessage):
    """
    Engine self-description, carried by /pingack and /heartbeat.

    Fields:
        host: Engine host label
        version: Engine version string
        led_count: Number of LED slots the engine drives
        engine_id: Opaque identity token of the engine instance
    """

    host: str
    version: str
    led_count: int
    engine_id: int


class PingAckMessage(EngineInfoMessage):
    """Reply to the identity probe."""

    ADDRESS: ClassVar[str] = "/pingack"


class HeartbeatMessage(EngineInfoMessage):
    """Periodic engine heartbeat."""

    ADDRESS: ClassVar[str] = "/heartbeat"


class LedMessage(EngineMessage):
    """
    LED update payload.

    Fields:
        index: LED slot (range-checked against the registry by the caller)
        on: Non-zero for lit
        blink_timer: Blink countdown seed
        state: LedState value (0-3)
    """

    ADDRESS: ClassVar[str] = "/led"

    index: int
    on: int
    blink_timer: int
    state: int = Field(ge=LedState.DARK, le=LedState.FAST_BLINK)


class DisplayMessage(EngineMessage):
    """
    Display update payload.

    Fields:
        loop_index: Zero-based selected loop
    """

    ADDRESS: ClassVar[str] = "/display"

    loop_index: int = Field(ge=-1)
