from __future__ import annotations

import httpx


class PetfinderError(Exception):
    """Base client error."""


class ConfigurationError(PetfinderError, ValueError):
    """Invalid client configuration, e.g. an unknown response format."""


class AuthenticationExtractionFailure(PetfinderError):
    def __init__(self, response_format: str, body: str):
        super().__init__(f"no token found in auth.getToken {response_format} response")
        self.response_format = response_format
        self.body = body


# Transport failures are raised by httpx and never wrapped.
TransportError = httpx.HTTPError
