"""Exception types raised by tokensmith."""

from __future__ import annotations


class TokensmithError(RuntimeError):
    """Base class for generation failures surfaced to the CLI and service."""


class TokenDocumentError(TokensmithError):
    """Raised when an input token document is malformed beyond recovery."""


class TokenResolutionError(TokensmithError):
    """Raised when an alias chain cannot be resolved to a concrete token."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot resolve '{path}': {reason}")
        self.path = path
        self.reason = reason


__all__ = ["TokenDocumentError", "TokenResolutionError", "TokensmithError"]
