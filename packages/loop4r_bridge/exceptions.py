"""Custom exceptions for the Loop4r bridge"""


class BridgeError(Exception):
    """Base exception for all bridge errors"""
    pass


class InvalidPort(BridgeError):
    """Configured UDP port outside 1-65535"""

    def __init__(self, port: int):
        super().__init__(f"invalid UDP port number: {port}")
        self.port = port


class BindError(BridgeError):
    """Transport could not bind or connect a UDP endpoint"""

    def __init__(self, port: int, reason: str = ""):
        message = f"could not connect to UDP port {port}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.port = port


class HardwareOpenError(BridgeError):
    """Control-surface output device not found or unavailable"""
    pass


class HardwareWriteError(BridgeError):
    """Control-surface frame was not fully written"""

    def __init__(self, cc: int, value: int, reason: str = ""):
        message = f"Could not write CC {cc} {value}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.cc = cc
        self.value = value


class MalformedMessage(BridgeError):
    """Inbound message with wrong argument count, types, or an out-of-range index"""

    def __init__(self, address: str, reason: str):
        super().__init__(f"unrecognized format for {address} message: {reason}")
        self.address = address
        self.reason = reason


class UnrecognizedMessage(BridgeError):
    """Inbound message on an address nothing is registered for"""

    def __init__(self, address: str):
        super().__init__(f"no handler for address: {address}")
        self.address = address
