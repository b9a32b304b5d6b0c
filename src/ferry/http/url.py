# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL construction helpers: base URL joining and query-string serialization."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any
from urllib.parse import quote, urlparse

import httpx

_ABSOLUTE_URL_RE = re.compile(r"^([a-z][a-z\d+\-.]*:)?//", re.IGNORECASE)
# Characters left readable in query keys and values.
_QUERY_SAFE = "@:$,[]!'()*~"


def _encode(value: str) -> str:
    return quote(value, safe=_QUERY_SAFE).replace("%20", "+")


def _format_param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def serialize_params(params: Any) -> str:
    """
    Default query serializer.

    ``None`` values are skipped; list/tuple values repeat the key with a ``[]``
    suffix; dates use ISO format; nested mappings are JSON-encoded.
    """
    if isinstance(params, httpx.QueryParams):
        return str(params)
    items = params.items() if isinstance(params, Mapping) else params
    parts: list[str] = []
    for key, value in items:
        if value is None:
            continue
        name = str(key)
        if isinstance(value, (list, tuple)):
            name = f"{name}[]"
            values = value
        else:
            values = [value]
        for item in values:
            parts.append(f"{_encode(name)}={_encode(_format_param(item))}")
    return "&".join(parts)


def build_url(url: str | None, params: Any = None, params_serializer: Callable[[Any], str] | None = None) -> str:
    """Append serialized ``params`` to ``url``, dropping any fragment."""
    url = url or ""
    if not params:
        return url

    serialized = params_serializer(params) if params_serializer else serialize_params(params)
    if serialized:
        hash_index = url.find("#")
        if hash_index != -1:
            url = url[:hash_index]
        url += ("&" if "?" in url else "?") + serialized
    return url


def is_absolute_url(url: str) -> bool:
    """True for ``scheme://`` and protocol-relative ``//`` URLs."""
    return bool(_ABSOLUTE_URL_RE.match(url or ""))


def combine_urls(base_url: str, relative_url: str | None) -> str:
    if not relative_url:
        return base_url
    return base_url.rstrip("/") + "/" + relative_url.lstrip("/")


def build_full_path(base_url: str | None, requested_url: str | None) -> str:
    """Prefix ``requested_url`` with ``base_url`` unless it is already absolute."""
    requested = requested_url or ""
    if base_url and not is_absolute_url(requested):
        return combine_urls(base_url, requested)
    return requested


def same_origin(a: str, b: str) -> bool:
    """Return True when both URLs share the same scheme + netloc."""
    pa = urlparse(str(a or ""))
    pb = urlparse(str(b or ""))
    return (pa.scheme, pa.netloc) == (pb.scheme, pb.netloc)


__all__ = [
    "build_full_path",
    "build_url",
    "combine_urls",
    "is_absolute_url",
    "same_origin",
    "serialize_params",
]
