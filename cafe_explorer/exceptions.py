from __future__ import annotations


class CafeExplorerError(Exception):
    """Base exception for the café explorer service."""


class PlacesAPIError(CafeExplorerError):
    """The places web service answered with an error or could not be reached."""

    def __init__(self, message: str, status: str | None = None) -> None:
        self.status = status
        super().__init__(message)
