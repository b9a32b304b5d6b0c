# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dispatch of a single request through an adapter."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..errors import Cancel, RequestError
from .adapters import Adapter
from .headers import flatten_headers
from .models import RequestConfig, Response, coerce_config
from .transform import transform_data

logger = logging.getLogger(__name__)


def _raise_if_cancelled(config: RequestConfig) -> None:
    token = config.cancel_token
    if token is None:
        return
    reason = token.requested()
    if reason is not None:
        raise reason


def settle(response: Response) -> Response:
    """Return the response, or raise RequestError when its status fails validation."""
    config = response.config
    validate_status = config.validate_status if config is not None else None
    if not response.status or validate_status is None or validate_status(response.status):
        return response
    logger.debug("Status %s rejected by validate_status", response.status)
    raise RequestError(
        f"Request failed with status code {response.status}",
        config,
        None,
        response.request,
        response,
    )


class Dispatcher:
    """Runs one request: transforms, adapter call, cancellation checks, status validation."""

    def __init__(self, adapter: Adapter | None = None):
        self.adapter = adapter

    async def dispatch(self, config: RequestConfig) -> Response:
        if not isinstance(config, RequestConfig):
            config = coerce_config(config)
        _raise_if_cancelled(config)

        if config.headers is None:
            config.headers = {}

        config.data = transform_data(config.data, config.headers, config.transform_request)
        config.headers = flatten_headers(config.headers, config.method)

        adapter = config.adapter or self.adapter
        if adapter is None:
            raise RuntimeError("No adapter configured; pass one to the Client or set RequestConfig.adapter")

        logger.debug("Dispatching %s %s via %s", (config.method or "get").upper(), config.url, type(adapter).__name__)
        try:
            response = await adapter(config)
        except Cancel:
            logger.debug("Request cancelled during transport: %s", config.url)
            raise
        except RequestError as exc:
            _raise_if_cancelled(config)
            if exc.response is not None:
                exc.response = replace(
                    exc.response,
                    data=transform_data(exc.response.data, exc.response.headers, config.transform_response),
                )
            raise
        except Exception:
            _raise_if_cancelled(config)
            raise

        _raise_if_cancelled(config)
        response = replace(
            response,
            data=transform_data(response.data, response.headers, config.transform_response),
            config=response.config if response.config is not None else config,
        )
        return settle(response)


async def dispatch_request(config: RequestConfig, adapter: Adapter | None = None) -> Response:
    """Functional shortcut for ``Dispatcher(adapter).dispatch(config)``."""
    return await Dispatcher(adapter).dispatch(config)


__all__ = ["Dispatcher", "dispatch_request", "settle"]
