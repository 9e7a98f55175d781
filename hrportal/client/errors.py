"""Errors raised by the HR portal HTTP client."""

from __future__ import annotations

from typing import Optional

import httpx


class ApiError(Exception):
    """Non-2xx response from the API.

    Attributes:
        status_code: HTTP status of the failed response, or None when no
            response was received.
        message: Server-provided message when the body carried one.
        response: The failed response, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        response: Optional[httpx.Response] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code == 401

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        return cls(
            _extract_message(response),
            status_code=response.status_code,
            response=response,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code!r}, message={self.message!r})"


class RefreshExchangeError(ApiError):
    """The refresh exchange failed; every request queued behind it fails with this."""

    def for_waiter(self) -> "RefreshExchangeError":
        """Fresh instance for one queued request, chained to this failure."""
        error = type(self)(self.message, status_code=self.status_code, response=self.response)
        error.__cause__ = self
        return error


def _extract_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if isinstance(message, str) and message:
            return message
    return f"Request failed with status {response.status_code}"
