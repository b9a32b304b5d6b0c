# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP pipeline exports."""

from .adapters import Adapter, StubAdapter
from .defaults import build_defaults, default_validate_status
from .dispatch import Dispatcher, dispatch_request, settle
from .headers import flatten_headers, normalize_header_name, normalize_headers
from .httpx_adapter import HttpxAdapter
from .interceptors import Interceptor, InterceptorManager
from .merge import deep_merge, merge_config
from .models import Headers, RequestConfig, Response, coerce_config
from .transform import default_transform_request, default_transform_response, transform_data
from .url import build_full_path, build_url, combine_urls, is_absolute_url

__all__ = [
    "Adapter",
    "Dispatcher",
    "Headers",
    "HttpxAdapter",
    "Interceptor",
    "InterceptorManager",
    "RequestConfig",
    "Response",
    "StubAdapter",
    "build_defaults",
    "build_full_path",
    "build_url",
    "coerce_config",
    "combine_urls",
    "deep_merge",
    "default_transform_request",
    "default_transform_response",
    "default_validate_status",
    "dispatch_request",
    "flatten_headers",
    "is_absolute_url",
    "merge_config",
    "normalize_header_name",
    "normalize_headers",
    "settle",
    "transform_data",
]
