# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request/response body transforms.

A transform is ``fn(data, headers) -> data``. Transforms may edit ``headers`` in
place (the same dict is passed along the chain) but hand data on through their
return value, since a transform may change its representation entirely.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any

import httpx

from .headers import normalize_header_name
from .models import Transform

JSON_CONTENT_TYPE = "application/json;charset=utf-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=utf-8"


def transform_data(data: Any, headers: Any, fns: Transform | Iterable[Transform] | None) -> Any:
    """Thread ``data`` through ``fns`` in order; no transforms means no change."""
    if fns is None:
        return data
    if callable(fns):
        fns = [fns]
    for fn in fns:
        data = fn(data, headers)
    return data


def _set_content_type_if_unset(headers: MutableMapping[str, Any] | None, value: str) -> None:
    if headers is not None and headers.get("Content-Type") is None:
        headers["Content-Type"] = value


def _is_passthrough_body(data: Any) -> bool:
    if isinstance(data, (bytes, bytearray)):
        return True
    if callable(getattr(data, "read", None)):
        return True
    # Generators and (async) iterators are streamed by the adapter as-is.
    return hasattr(data, "__next__") or hasattr(data, "__aiter__")


def default_transform_request(data: Any, headers: MutableMapping[str, Any] | None) -> Any:
    normalize_header_name(headers, "Accept")
    normalize_header_name(headers, "Content-Type")

    if _is_passthrough_body(data):
        return data
    if isinstance(data, memoryview):
        return data.tobytes()
    if isinstance(data, httpx.QueryParams):
        _set_content_type_if_unset(headers, FORM_CONTENT_TYPE)
        return str(data)
    if isinstance(data, (Mapping, list, tuple)):
        _set_content_type_if_unset(headers, JSON_CONTENT_TYPE)
        return json.dumps(data)
    return data


def default_transform_response(data: Any, headers: Any = None) -> Any:  # noqa: ARG001
    if isinstance(data, str):
        try:
            return json.loads(data)
        except ValueError:
            pass
    return data


__all__ = [
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "default_transform_request",
    "default_transform_response",
    "transform_data",
]
