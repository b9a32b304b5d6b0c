# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Ferry package entrypoint.

Ferry is an asyncio HTTP client with pluggable transport adapters, layered
request defaults, request/response transforms, interceptor chains and
cooperative cancellation. Transports are injected explicitly; ``create_client``
wires in the httpx-backed adapter.
"""

from .cancel import CancelSource, CancelToken
from .client import Client, create_client, spread
from .config import ClientSettings, load_client_settings
from .errors import Cancel, RequestError, is_cancel, is_request_error
from .http import (
    HttpxAdapter,
    RequestConfig,
    Response,
    StubAdapter,
    merge_config,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "Cancel",
    "CancelSource",
    "CancelToken",
    "Client",
    "ClientSettings",
    "HttpxAdapter",
    "RequestConfig",
    "RequestError",
    "Response",
    "StubAdapter",
    "create_client",
    "is_cancel",
    "is_request_error",
    "load_client_settings",
    "merge_config",
    "setup_logging",
    "spread",
    "__version__",
]
