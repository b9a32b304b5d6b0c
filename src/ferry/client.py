# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client facade: defaults, interceptor chains and verb shortcuts."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from .config import ClientSettings, load_client_settings
from .http.adapters import Adapter
from .http.defaults import build_defaults
from .http.dispatch import Dispatcher
from .http.interceptors import Handler, InterceptorManager
from .http.merge import merge_config
from .http.models import RequestConfig, Response, coerce_config
from .http.url import build_url

logger = logging.getLogger(__name__)

ConfigLike = RequestConfig | Mapping[str, Any] | None
ChainLink = tuple[Handler | None, Handler | None]


class Interceptors:
    def __init__(self) -> None:
        self.request = InterceptorManager()
        self.response = InterceptorManager()


async def _settle_handler(handler: Handler, value: Any) -> Any:
    result = handler(value)
    if inspect.isawaitable(result):
        result = await result
    return result


async def run_chain(chain: Sequence[ChainLink], value: Any) -> Any:
    """
    Fold ``value`` through ``(fulfilled, rejected)`` pairs.

    While no error is pending only ``fulfilled`` handlers run; once one raises, only
    ``rejected`` handlers run until one of them returns normally. Missing handlers
    pass the current state along unchanged.
    """
    error: Exception | None = None
    for fulfilled, rejected in chain:
        handler = fulfilled if error is None else rejected
        if handler is None:
            continue
        try:
            value = await _settle_handler(handler, value if error is None else error)
            error = None
        except Exception as exc:  # noqa: BLE001
            error = exc
    if error is not None:
        raise error
    return value


class Client:
    """
    HTTP client built around a pluggable adapter.

    Per-call options are merged onto ``defaults``; request interceptors run before
    dispatch (most recently registered first) and response interceptors after it
    (in registration order).
    """

    def __init__(self, defaults: ConfigLike = None, *, adapter: Adapter | None = None):
        self.defaults = coerce_config(defaults)
        self.adapter = adapter
        self.interceptors = Interceptors()

    async def request(self, config_or_url: ConfigLike | str = None, config: ConfigLike = None) -> Response:
        if isinstance(config_or_url, str):
            call_config = coerce_config(config)
            call_config.url = config_or_url
        else:
            call_config = coerce_config(config_or_url)

        merged = merge_config(self.defaults, call_config)
        if merged.method:
            merged.method = merged.method.lower()
        elif self.defaults.method:
            merged.method = self.defaults.method.lower()
        else:
            merged.method = "get"

        dispatcher = Dispatcher(self.adapter)
        chain: list[ChainLink] = [(dispatcher.dispatch, None)]
        for interceptor in self.interceptors.request:
            if interceptor.applies_to(merged):
                chain.insert(0, (interceptor.fulfilled, interceptor.rejected))
        for interceptor in self.interceptors.response:
            if interceptor.applies_to(merged):
                chain.append((interceptor.fulfilled, interceptor.rejected))

        logger.debug("Request chain for %s %s has %d links", merged.method.upper(), merged.url, len(chain))
        return await run_chain(chain, merged)

    __call__ = request

    def get_uri(self, config: ConfigLike = None) -> str:
        merged = merge_config(self.defaults, config)
        uri = build_url(merged.url, merged.params, merged.params_serializer)
        return uri[1:] if uri.startswith("?") else uri

    async def _request_without_data(self, method: str, url: str, config: ConfigLike) -> Response:
        call_config = coerce_config(config)
        call_config.method = method
        call_config.url = url
        return await self.request(call_config)

    async def _request_with_data(self, method: str, url: str, data: Any, config: ConfigLike) -> Response:
        call_config = coerce_config(config)
        call_config.method = method
        call_config.url = url
        call_config.data = data
        return await self.request(call_config)

    async def delete(self, url: str, config: ConfigLike = None) -> Response:
        return await self._request_without_data("delete", url, config)

    async def get(self, url: str, config: ConfigLike = None) -> Response:
        return await self._request_without_data("get", url, config)

    async def head(self, url: str, config: ConfigLike = None) -> Response:
        return await self._request_without_data("head", url, config)

    async def options(self, url: str, config: ConfigLike = None) -> Response:
        return await self._request_without_data("options", url, config)

    async def post(self, url: str, data: Any = None, config: ConfigLike = None) -> Response:
        return await self._request_with_data("post", url, data, config)

    async def put(self, url: str, data: Any = None, config: ConfigLike = None) -> Response:
        return await self._request_with_data("put", url, data, config)

    async def patch(self, url: str, data: Any = None, config: ConfigLike = None) -> Response:
        return await self._request_with_data("patch", url, data, config)

    def create(self, config: ConfigLike = None) -> Client:
        """New client layering ``config`` onto these defaults and sharing the adapter."""
        return Client(merge_config(self.defaults, config), adapter=self.adapter)

    async def aclose(self) -> None:
        close = getattr(self.adapter, "aclose", None)
        if callable(close):
            await close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


def create_client(
    config: ConfigLike = None,
    *,
    settings: ClientSettings | None = None,
    adapter: Adapter | None = None,
) -> Client:
    """Factory for a client with the standard defaults and the httpx adapter."""
    settings = settings or load_client_settings()
    if adapter is None:
        from .http.httpx_adapter import HttpxAdapter

        adapter = HttpxAdapter(settings)
    return Client(merge_config(build_defaults(settings), config), adapter=adapter)


def spread(callback: Callable[..., Any]) -> Callable[[Sequence[Any]], Any]:
    """Adapt ``callback(a, b, ...)`` to take one sequence, e.g. ``asyncio.gather`` results."""

    def wrap(values: Sequence[Any]) -> Any:
        return callback(*values)

    return wrap


__all__ = ["Client", "Interceptors", "create_client", "run_chain", "spread"]
