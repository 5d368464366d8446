from typing import Any, Dict, Optional


class EngineError(Exception):
    """Base class for every error raised by the client."""


class EngineTransportError(EngineError):
    """The HTTP call failed before a response was received (refused, timeout, bad HTTP)."""

    def __init__(self, message: str, method: str = "", url: str = ""):
        super().__init__(message)
        self.method = method
        self.url = url


class SearchError(EngineError):
    """
    The engine answered at the HTTP level but reported an error.

    Attributes:
        msg: error message reported by the engine
        status_code: status from the JSON body, or the HTTP status
        response: decoded JSON body when there was one
    """

    def __init__(
        self,
        msg: str,
        status_code: int,
        response: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(msg, status_code)
        self.msg = msg
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.msg}"


class ResponseDecodeError(EngineError, ValueError):
    """The body was not JSON, or did not match the expected result shape."""

    def __init__(self, message: str, content: bytes = b""):
        super().__init__(message)
        self.content = content
