"""
Message result type for inbound message handling.

Every control-protocol handler returns one of these instead of silently
returning early, so callers (and tests) can see exactly why a message
was rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .exceptions import BridgeError


@dataclass
class MessageResult:
    """
    Result of handling one inbound message.

    Attributes:
        success: True if the message was applied, False otherwise
        message: Optional error or success message
        exception: The rejection reason when success is False
        data: Optional result data
    """

    success: bool
    message: str | None = None
    exception: BridgeError | None = None
    data: dict[str, Any] | None = None

    @classmethod
    def ok(cls, message: str | None = None, data: dict[str, Any] | None = None) -> MessageResult:
        """
        Create a successful result.

        Args:
            message: Optional success message
            data: Optional result data

        Returns:
            MessageResult with success=True
        """
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(cls, exception: BridgeError, data: dict[str, Any] | None = None) -> MessageResult:
        """
        Create an error result.

        Args:
            exception: Rejection reason
            data: Optional error data

        Returns:
            MessageResult with success=False
        """
        return cls(success=False, message=str(exception), exception=exception, data=data)
