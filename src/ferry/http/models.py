# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request configuration and response data models."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..cancel import CancelToken

Headers = dict[str, str]
Transform = Callable[[Any, dict[str, Any]], Any]

# Merge policies, stored on each RequestConfig field under the "merge" metadata key.
OVERRIDE_ONLY = "override_only"
DEEP_MERGE = "deep_merge"
FALLBACK = "fallback"


def _option(policy: str = FALLBACK) -> Any:
    return field(default=None, metadata={"merge": policy})


@dataclass
class RequestConfig:
    """
    Options for one request, or the defaults of a client.

    Every recognized option defaults to ``None``, which means "not set" for the
    purposes of merging. Keys that are not recognized are kept in ``extra`` and
    travel through merges untouched, so adapters and interceptors can carry their
    own settings.
    """

    url: str | None = _option(OVERRIDE_ONLY)
    method: str | None = _option(OVERRIDE_ONLY)
    data: Any = _option(OVERRIDE_ONLY)

    headers: dict[str, Any] | None = _option(DEEP_MERGE)
    auth: Mapping[str, str] | None = _option(DEEP_MERGE)
    proxy: Mapping[str, Any] | None = _option(DEEP_MERGE)
    params: Any = _option(DEEP_MERGE)

    base_url: str | None = _option()
    transform_request: Transform | list[Transform] | None = _option()
    transform_response: Transform | list[Transform] | None = _option()
    params_serializer: Callable[[Any], str] | None = _option()
    timeout: float | None = _option()
    timeout_error_message: str | None = _option()
    with_credentials: bool | None = _option()
    adapter: Callable[[RequestConfig], Any] | None = _option()
    response_type: str | None = _option()
    response_encoding: str | None = _option()
    xsrf_cookie_name: str | None = _option()
    xsrf_header_name: str | None = _option()
    on_upload_progress: Callable[[int, int | None], object] | None = _option()
    on_download_progress: Callable[[int, int | None], object] | None = _option()
    max_content_length: int | None = _option()
    max_body_length: int | None = _option()
    validate_status: Callable[[int], bool] | None = _option()
    max_redirects: int | None = _option()
    cancel_token: CancelToken | None = _option()

    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def option_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if "merge" in f.metadata)

    @classmethod
    def merge_policies(cls) -> dict[str, str]:
        return {f.name: f.metadata["merge"] for f in fields(cls) if "merge" in f.metadata}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RequestConfig:
        """Build a config from a plain mapping; unrecognized keys land in ``extra``."""
        known = set(cls.option_names())
        options = {key: value for key, value in data.items() if key in known}
        extra = {key: value for key, value in data.items() if key not in known}
        return cls(**options, extra=extra)

    def get(self, name: str, default: Any = None) -> Any:
        """Look up a recognized option or an extra key by name."""
        if name in self.merge_policies():
            value = getattr(self, name)
        else:
            value = self.extra.get(name)
        return default if value is None else value

    def copy(self) -> RequestConfig:
        """Shallow copy with its own ``extra`` dict."""
        return replace(self, extra=dict(self.extra))

    def to_dict(self) -> dict[str, Any]:
        """Flat mapping of the options that are set, extras included."""
        out = {name: getattr(self, name) for name in self.option_names() if getattr(self, name) is not None}
        for key, value in self.extra.items():
            if value is not None:
                out.setdefault(key, value)
        return out


def coerce_config(value: RequestConfig | Mapping[str, Any] | None) -> RequestConfig:
    """Accept ``None``, a mapping or a RequestConfig and return a fresh RequestConfig."""
    if value is None:
        return RequestConfig()
    if isinstance(value, RequestConfig):
        return value.copy()
    if isinstance(value, Mapping):
        return RequestConfig.from_mapping(value)
    raise TypeError(f"Expected a RequestConfig or mapping, got {type(value).__name__}")


@dataclass(frozen=True)
class Response:
    """Completed exchange as produced by an adapter."""

    data: Any = None
    status: int = 0
    status_text: str = ""
    headers: Headers = field(default_factory=dict)
    config: RequestConfig | None = None
    request: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], config: RequestConfig | None = None) -> Response:
        """Helper to normalize dictionary-like responses (e.g., canned test fixtures)."""
        raw_headers: Any = data.get("headers") or {}
        headers: Headers = {}
        if isinstance(raw_headers, Mapping):
            for key, value in raw_headers.items():
                if key is None:
                    continue
                headers[str(key).lower()] = "" if value is None else str(value)

        return cls(
            data=data.get("data"),
            status=int(data.get("status") or 0),
            status_text=str(data.get("status_text") or ""),
            headers=headers,
            config=config if config is not None else data.get("config"),
            request=data.get("request"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "status_text": self.status_text,
            "headers": dict(self.headers),
            "data": self.data,
        }


__all__ = [
    "DEEP_MERGE",
    "FALLBACK",
    "Headers",
    "OVERRIDE_ONLY",
    "RequestConfig",
    "Response",
    "Transform",
    "coerce_config",
]
