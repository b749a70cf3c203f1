"""
Loop4r Bridge Protocols

Abstract interfaces for testability via dependency injection.
Uses typing.Protocol for structural subtyping (duck typing).
"""

from .output import ControlSurfaceOutput, EngineInput, EngineOutput

__all__ = [
    "ControlSurfaceOutput",
    "EngineInput",
    "EngineOutput",
]
