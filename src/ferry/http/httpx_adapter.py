# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed adapter."""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx

from ..config import ClientSettings, load_client_settings
from ..errors import RequestError
from .headers import normalize_headers, remove_header
from .models import RequestConfig, Response
from .url import build_full_path, build_url, same_origin

logger = logging.getLogger(__name__)

RAW_RESPONSE_TYPES = {"arraybuffer", "bytes", "stream"}
UPLOAD_CHUNK_SIZE = 64 * 1024


def _error_code(exc: httpx.HTTPError) -> str | None:
    if isinstance(exc, httpx.TimeoutException):
        return "ECONNABORTED"
    if isinstance(exc, httpx.ConnectError):
        return "ECONNREFUSED"
    return None


class HttpxAdapter:
    """Async adapter over ``httpx.AsyncClient``."""

    def __init__(self, settings: ClientSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_client_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.follow_redirects,
            max_redirects=max(self.settings.max_redirects, 0),
            timeout=None,
        )

    async def __call__(self, config: RequestConfig) -> Response:
        headers = dict(config.headers or {})
        data = self._prepare_body(config, config.data)
        if data is None:
            remove_header(headers, "Content-Type")

        if config.auth:
            username = config.auth.get("username") or ""
            password = config.auth.get("password") or ""
            credentials = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
            headers["Authorization"] = f"Basic {credentials}"

        full_path = build_full_path(config.base_url, config.url)
        url = build_url(full_path, config.params, config.params_serializer)

        xsrf_value = self._xsrf_value(config, full_path)
        if xsrf_value and config.xsrf_header_name:
            headers[config.xsrf_header_name] = xsrf_value

        body_size = self._body_size(data)
        max_body_length = config.max_body_length if config.max_body_length is not None else -1
        if max_body_length > -1 and body_size is not None and body_size > max_body_length:
            raise RequestError(
                "Request body larger than maxBodyLength limit",
                config,
                "ERR_FR_MAX_BODY_LENGTH_EXCEEDED",
            )

        content = data
        if body_size is not None and callable(config.on_upload_progress):
            payload = data.encode("utf-8") if isinstance(data, str) else data
            # Explicit length keeps httpx from switching to chunked transfer encoding.
            remove_header(headers, "Content-Length")
            headers["Content-Length"] = str(body_size)
            content = self._upload_chunks(payload, config.on_upload_progress)

        request = self._client.build_request(
            (config.method or "get").upper(),
            url,
            headers={str(k): str(v) for k, v in headers.items() if v is not None},
            content=content,
            timeout=config.timeout or None,
        )

        token = config.cancel_token
        if token is None:
            return await self._send(config, request)

        send = asyncio.ensure_future(self._send(config, request))
        waiter = asyncio.ensure_future(token.wait())
        try:
            await asyncio.wait({send, waiter}, return_when=asyncio.FIRST_COMPLETED)
            if not send.done() and not waiter.cancelled() and waiter.exception() is not None:
                raise waiter.exception()
        finally:
            waiter.cancel()
            if not send.done():
                send.cancel()
                await asyncio.gather(send, return_exceptions=True)

        if send.cancelled():
            reason = token.requested()
            if reason is not None:
                logger.debug("Aborted %s %s on cancellation", request.method, url)
                raise reason
            raise RequestError("Request aborted", config, "ECONNABORTED", request)
        return send.result()

    async def _send(self, config: RequestConfig, request: httpx.Request) -> Response:
        follow_redirects = self.settings.follow_redirects and config.max_redirects != 0
        try:
            resp = await self._client.send(request, stream=True, follow_redirects=follow_redirects)
            try:
                content = await self._read_body(config, request, resp)
            finally:
                await resp.aclose()
        except httpx.TimeoutException as exc:
            message = config.timeout_error_message or f"timeout of {config.timeout}s exceeded"
            raise RequestError(message, config, _error_code(exc), request) from exc
        except httpx.HTTPError as exc:
            raise RequestError("Network Error", config, _error_code(exc), request) from exc

        if config.response_type in RAW_RESPONSE_TYPES:
            data: str | bytes = content
        else:
            encoding = config.response_encoding or resp.encoding or "utf-8"
            try:
                data = content.decode(encoding, errors="replace")
            except LookupError:
                data = content.decode("utf-8", errors="replace")

        return Response(
            data=data,
            status=resp.status_code,
            status_text=resp.reason_phrase,
            headers=normalize_headers(resp.headers),
            config=config,
            request=request,
        )

    @staticmethod
    async def _read_body(config: RequestConfig, request: httpx.Request, resp: httpx.Response) -> bytes:
        limit = config.max_content_length if config.max_content_length is not None else -1
        length_header = resp.headers.get("content-length", "")
        total = int(length_header) if length_header.isdigit() else None

        content = bytearray()
        async for chunk in resp.aiter_bytes():
            if not chunk:
                continue
            content.extend(chunk)
            if limit > -1 and len(content) > limit:
                raise RequestError(f"maxContentLength size of {limit} exceeded", config, None, request)
            if callable(config.on_download_progress):
                config.on_download_progress(len(content), total)
        return bytes(content)

    @staticmethod
    def _prepare_body(config: RequestConfig, data: Any) -> Any:
        """Reduce request data to something httpx can stream from an async client."""
        if data is None or isinstance(data, (str, bytes)):
            return data
        if isinstance(data, (bytearray, memoryview)):
            return bytes(data)
        if hasattr(data, "__aiter__"):
            return data
        if hasattr(data, "read"):
            data = data.read()
            return data.encode("utf-8") if isinstance(data, str) else bytes(data)
        if hasattr(data, "__next__"):
            return b"".join(chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk) for chunk in data)
        raise RequestError(
            f"Request data of type {type(data).__name__} must be transformed to str, bytes, a stream or an iterator",
            config,
            "ERR_BAD_REQUEST",
        )

    @staticmethod
    async def _upload_chunks(payload: bytes, on_progress: Callable[[int, int | None], object]) -> AsyncIterator[bytes]:
        total = len(payload)
        for start in range(0, total, UPLOAD_CHUNK_SIZE):
            chunk = payload[start : start + UPLOAD_CHUNK_SIZE]
            yield chunk
            on_progress(start + len(chunk), total)

    @staticmethod
    def _body_size(data: object) -> int | None:
        if isinstance(data, str):
            return len(data.encode("utf-8"))
        if isinstance(data, (bytes, bytearray)):
            return len(data)
        return None

    def _xsrf_value(self, config: RequestConfig, full_path: str) -> str | None:
        name = config.xsrf_cookie_name
        if not name:
            return None
        if not (config.with_credentials or (config.base_url and same_origin(full_path, config.base_url))):
            return None
        return self._client.cookies.get(name)

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["HttpxAdapter"]
