"""
Custom exceptions for the museum tracker.

Provides specific error types for the failure modes of the request
pipeline so the HTTP layer can map each one to a response.
"""

from typing import Any


class MuseumTrackerError(Exception):
    pass


class APIError(MuseumTrackerError):
    pass


class UpstreamError(APIError):
    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ProfileNotFoundError(MuseumTrackerError):
    pass


class WikiError(MuseumTrackerError):
    pass


class CatalogError(MuseumTrackerError):
    pass
