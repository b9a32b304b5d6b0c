# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Ferry keeps headers as plain
dicts so interceptors and transforms can edit them freely, which means removals and
renames have to be done case-insensitively here.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

# Per-method and shared header groups that may appear nested inside a config's headers.
HEADER_GROUPS = ("common", "delete", "get", "head", "options", "post", "put", "patch")


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Accepts plain dicts, httpx.Headers, anything exposing ``.items()`` and
    iterables of pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        try:
            return dict(items())
        except (TypeError, ValueError):
            pass

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def normalize_header_name(headers: MutableMapping[str, Any] | None, normalized_name: str) -> None:
    """Rename, in place, any key matching ``normalized_name`` case-insensitively to that exact casing."""
    if not headers:
        return
    upper = normalized_name.upper()
    for name in list(headers):
        if name != normalized_name and name.upper() == upper:
            headers[normalized_name] = headers.pop(name)


def remove_header(headers: MutableMapping[str, Any] | None, name: str) -> None:
    """Delete every key matching ``name`` case-insensitively."""
    if not headers:
        return
    lower = name.lower()
    for key in [key for key in headers if str(key).lower() == lower]:
        del headers[key]


def flatten_headers(headers: Mapping[str, Any] | None, method: str | None) -> dict[str, Any]:
    """
    Collapse ``common`` and method-scoped header groups into one flat mapping.

    Precedence: top-level headers, then the group for ``method``, then ``common``.
    The group sub-keys themselves are dropped from the result.
    """
    if not headers:
        return {}
    common = headers.get("common")
    scoped = headers.get((method or "").lower())
    flat: dict[str, Any] = {}
    for source in (common, scoped, headers):
        if isinstance(source, Mapping):
            flat.update(source)
    for group in HEADER_GROUPS:
        flat.pop(group, None)
    return flat


__all__ = [
    "HEADER_GROUPS",
    "flatten_headers",
    "normalize_header_name",
    "normalize_headers",
    "remove_header",
]
