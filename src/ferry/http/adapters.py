# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Adapter protocol and a programmable in-memory adapter."""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from typing import Any, Protocol

from ..errors import RequestError
from .models import RequestConfig, Response


class Adapter(Protocol):
    """
    Transport backend: turns a finalized config into a Response.

    Implementations resolve for every completed exchange, whatever the status code,
    and raise RequestError for network failures, timeouts and aborts.
    """

    def __call__(self, config: RequestConfig) -> Awaitable[Response]: ...


class StubAdapter:
    """Deterministic, programmable adapter for tests."""

    def __init__(self, responses: dict[str, Response | Mapping[str, Any] | Exception] | None = None):
        self._responses = dict(responses or {})
        self.requests: list[RequestConfig] = []

    def add(self, url: str, response: Response | Mapping[str, Any] | Exception) -> None:
        self._responses[url] = response

    async def __call__(self, config: RequestConfig) -> Response:
        self.requests.append(config)
        stubbed = self._responses.get(config.url or "")
        if stubbed is None:
            raise RequestError("No stubbed response configured", config)
        if isinstance(stubbed, Exception):
            raise stubbed
        if isinstance(stubbed, Mapping):
            return Response.from_mapping(stubbed, config=config)
        return stubbed

    async def aclose(self) -> None:
        return None


__all__ = ["Adapter", "StubAdapter"]
