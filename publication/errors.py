#!/usr/bin/env python3
"""
Error types raised by the publication services
Each carries the plain-text message and status code returned to the caller
"""

from typing import Optional


class PublicationError(Exception):
    """Base error with a user-safe message and HTTP status"""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MissingParameter(PublicationError):
    """A required request parameter was not supplied"""
    status_code = 400


class InvalidParameter(PublicationError):
    """A request parameter could not be parsed"""
    status_code = 400


class MissingCode(PublicationError):
    """Eventbrite redirected back without an authorization code"""
    status_code = 500


class TokenExchangeFailed(PublicationError):
    """The authorization code could not be exchanged for a token"""
    status_code = 401


class UpstreamError(PublicationError):
    """An Eventbrite data fetch failed"""
    status_code = 500
