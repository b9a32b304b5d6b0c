# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import httpx

from ferry.http.transform import (
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    default_transform_request,
    default_transform_response,
    transform_data,
)


def test_empty_pipeline_returns_data_unchanged():
    payload = {"a": 1}
    assert transform_data(payload, {}, []) is payload
    assert transform_data(payload, {}, None) is payload


def test_pipeline_threads_data_and_shares_headers():
    headers: dict[str, str] = {}

    def first(data, hdrs):
        hdrs["X-First"] = "1"
        return data + 1

    def second(data, hdrs):
        assert hdrs["X-First"] == "1"
        return data * 10

    assert transform_data(1, headers, [first, second]) == 20
    assert headers == {"X-First": "1"}


def test_single_callable_is_accepted():
    assert transform_data("a", {}, lambda data, _headers: data.upper()) == "A"


def test_default_request_transform_serializes_mappings_as_json():
    headers: dict[str, str] = {}
    result = default_transform_request({"name": "ferry", "tags": [1, 2]}, headers)
    assert json.loads(result) == {"name": "ferry", "tags": [1, 2]}
    assert headers["Content-Type"] == JSON_CONTENT_TYPE


def test_default_request_transform_normalizes_header_casing_and_keeps_explicit_type():
    headers = {"content-type": "application/vnd.api+json", "accept": "text/plain"}
    default_transform_request({"a": 1}, headers)
    assert headers == {"Content-Type": "application/vnd.api+json", "Accept": "text/plain"}


def test_default_request_transform_passes_binary_through():
    body = b"\x00\x01"
    headers: dict[str, str] = {}
    assert default_transform_request(body, headers) is body
    assert default_transform_request(memoryview(b"abc"), headers) == b"abc"
    assert "Content-Type" not in headers


def test_default_request_transform_passes_streams_through():
    stream = iter([b"a", b"b"])
    assert default_transform_request(stream, {}) is stream


def test_default_request_transform_encodes_query_params():
    headers: dict[str, str] = {}
    result = default_transform_request(httpx.QueryParams({"a": "1", "b": "two words"}), headers)
    assert result == "a=1&b=two+words"
    assert headers["Content-Type"] == FORM_CONTENT_TYPE


def test_default_request_transform_leaves_strings_alone():
    headers: dict[str, str] = {}
    assert default_transform_request("raw", headers) == "raw"
    assert headers == {}


def test_default_response_transform_parses_json_and_keeps_invalid_text():
    assert default_transform_response('{"ok": true}', {}) == {"ok": True}
    assert default_transform_response("not json", {}) == "not json"
    assert default_transform_response(b"bytes", {}) == b"bytes"


def test_json_round_trip_through_default_transforms():
    original = {"user": {"id": 7, "roles": ["admin", "dev"]}, "active": True}
    headers: dict[str, str] = {}
    wire = default_transform_request(original, headers)
    assert isinstance(wire, str)
    assert headers["Content-Type"].startswith("application/json")
    assert default_transform_response(wire, headers) == original
