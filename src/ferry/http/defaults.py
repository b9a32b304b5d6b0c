# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Default request options applied by ``create_client``."""

from __future__ import annotations

from ..config import ClientSettings, load_client_settings
from .models import RequestConfig
from .transform import default_transform_request, default_transform_response

DEFAULT_ACCEPT = "application/json, text/plain, */*"
DEFAULT_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def default_validate_status(status: int) -> bool:
    return 200 <= status < 300


def default_headers(settings: ClientSettings | None = None) -> dict[str, dict[str, str]]:
    settings = settings or load_client_settings()
    headers: dict[str, dict[str, str]] = {
        "common": {"Accept": DEFAULT_ACCEPT, "User-Agent": settings.user_agent},
    }
    for method in ("delete", "get", "head", "options"):
        headers[method] = {}
    for method in ("post", "put", "patch"):
        headers[method] = {"Content-Type": DEFAULT_FORM_CONTENT_TYPE}
    return headers


def build_defaults(settings: ClientSettings | None = None) -> RequestConfig:
    """Fresh default config; safe to mutate."""
    settings = settings or load_client_settings()
    return RequestConfig(
        headers=default_headers(settings),
        transform_request=[default_transform_request],
        transform_response=[default_transform_response],
        timeout=settings.timeout,
        xsrf_cookie_name="XSRF-TOKEN",
        xsrf_header_name="X-XSRF-TOKEN",
        max_content_length=settings.max_content_length,
        max_body_length=-1,
        max_redirects=settings.max_redirects if settings.follow_redirects else 0,
        validate_status=default_validate_status,
    )


__all__ = [
    "DEFAULT_ACCEPT",
    "build_defaults",
    "default_headers",
    "default_validate_status",
]
