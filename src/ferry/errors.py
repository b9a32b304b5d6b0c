# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Error taxonomy.

Two failure shapes travel through the request pipeline:

- ``Cancel``: the caller aborted the request on purpose. Carries only a message.
- ``RequestError``: the transport failed or the response was rejected. Carries the
  config, the transport handle and, when one was received, the response.

They are deliberately unrelated classes; use ``is_cancel``/``is_request_error`` to
tell them apart.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .http.models import RequestConfig, Response


class Cancel(Exception):
    """Raised when a request is cancelled through its CancelToken."""

    def __init__(self, message: str | None = None):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Cancel: {self.message}" if self.message else "Cancel"

    def __repr__(self) -> str:
        return f"Cancel({self.message!r})"


class RequestError(Exception):
    """Transport or status-validation failure for a single request."""

    def __init__(
        self,
        message: str,
        config: RequestConfig | None = None,
        code: str | None = None,
        request: Any = None,
        response: Response | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.config = config
        self.code = code
        self.request = request
        self.response = response

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "name": type(self).__name__,
            "code": self.code,
            "config": self.config.to_dict() if self.config is not None else None,
            "status": self.response.status if self.response is not None else None,
        }


def is_cancel(value: object) -> bool:
    """Return True when ``value`` is a cancellation rather than a failure."""
    return isinstance(value, Cancel)


def is_request_error(value: object) -> bool:
    return isinstance(value, RequestError)


__all__ = ["Cancel", "RequestError", "is_cancel", "is_request_error"]
