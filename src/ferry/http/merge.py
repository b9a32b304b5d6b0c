# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Merging of client defaults with per-request options."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import DEEP_MERGE, OVERRIDE_ONLY, RequestConfig, coerce_config


def deep_merge(*sources: Any) -> dict[str, Any]:
    """
    Recursively combine mappings left to right; later leaves win.

    Nested mappings are always rebuilt, so the result never shares a mutable mapping
    with any of the sources. Non-mapping sources are ignored.
    """
    result: dict[str, Any] = {}
    for source in sources:
        if not isinstance(source, Mapping):
            continue
        for key, value in source.items():
            if isinstance(value, Mapping):
                current = result.get(key)
                result[key] = deep_merge(current, value) if isinstance(current, Mapping) else deep_merge(value)
            else:
                result[key] = value
    return result


def _merge_deep_option(base_value: Any, override_value: Any) -> Any:
    if isinstance(override_value, Mapping):
        return deep_merge(base_value, override_value)
    if override_value is not None:
        return override_value
    if isinstance(base_value, Mapping):
        return deep_merge(base_value)
    return base_value


def merge_config(
    base: RequestConfig | Mapping[str, Any] | None,
    override: RequestConfig | Mapping[str, Any] | None = None,
) -> RequestConfig:
    """
    Return a new config with ``override`` layered onto ``base``.

    - ``url``, ``method`` and ``data`` only ever come from ``override``.
    - ``headers``, ``auth``, ``proxy`` and ``params`` are deep-merged.
    - Everything else, extras included, takes ``override`` when set and falls back
      to ``base``.

    Neither input is modified.
    """
    base_config = base if isinstance(base, RequestConfig) else coerce_config(base)
    override_config = override if isinstance(override, RequestConfig) else coerce_config(override)

    options: dict[str, Any] = {}
    for name, policy in RequestConfig.merge_policies().items():
        base_value = getattr(base_config, name)
        override_value = getattr(override_config, name)
        if policy == OVERRIDE_ONLY:
            value = override_value
        elif policy == DEEP_MERGE:
            value = _merge_deep_option(base_value, override_value)
        else:
            value = override_value if override_value is not None else base_value
        if value is not None:
            options[name] = value

    extra: dict[str, Any] = {}
    for key in {**base_config.extra, **override_config.extra}:
        value = override_config.extra.get(key)
        if value is None:
            value = base_config.extra.get(key)
        if value is not None:
            extra[key] = value

    return RequestConfig(**options, extra=extra)


__all__ = ["deep_merge", "merge_config"]
