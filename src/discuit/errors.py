"""
Errors raised by the Discuit client.

Server-reported failures are not raised; they come back as
``responses.APIError`` values.
"""

from typing import Any


class DiscuitError(Exception):
    """Base class for everything the client raises."""

    def to_dict(self) -> dict[str, Any]:
        return {"error": str(self)}


class TransportError(DiscuitError):
    """The request never reached the server or no response came back."""

    def __init__(self, method: str, url: str, reason: str):
        super().__init__(f"{method} {url} failed: {reason}")
        self.method = method
        self.url = url
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        return {"error": str(self), "method": self.method, "url": self.url}


class DecodeError(DiscuitError):
    """The server answered, but the body matched none of the expected shapes."""

    def __init__(self, target: str, body: Any, detail: str = ""):
        message = f"could not decode response as {target}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.target = target
        self.body = body
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        return {"error": str(self), "target": self.target, "body": self.body}
