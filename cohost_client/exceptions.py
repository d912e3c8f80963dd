"""
Custom exceptions for the cohost client library.
"""

import json


class CohostClientError(Exception):
    """Base exception for cohost client errors."""
    pass


class ConfigurationError(CohostClientError):
    """Raised when client configuration is invalid."""
    pass


class NotAuthenticatedError(CohostClientError):
    """Raised when an authenticated call is made before a successful login."""
    pass


class HTTPError(CohostClientError):
    """Raised when an HTTP request fails without a response."""
    pass


class RemoteAPIError(CohostClientError):
    """
    Raised when the API answers with a status code of 400 or above.

    The parsed JSON body (or the raw text when it is not JSON) is kept in
    ``payload``; ``str()`` of the error is its JSON serialisation.
    """

    def __init__(self, status_code, payload):
        self.status_code = status_code
        self.payload = payload
        super().__init__(json.dumps(payload))


class AuthenticationError(RemoteAPIError):
    """Raised when a step of the login flow fails."""
    pass
