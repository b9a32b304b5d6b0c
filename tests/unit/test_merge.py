# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import copy

import pytest

from ferry.http.merge import deep_merge, merge_config
from ferry.http.models import RequestConfig, coerce_config


@pytest.mark.parametrize("name", ["url", "method", "data"])
def test_override_only_keys_ignore_base(name):
    base = RequestConfig.from_mapping({name: "from-base"})
    assert getattr(merge_config(base, RequestConfig()), name) is None
    assert getattr(merge_config(base, {name: "from-call"}), name) == "from-call"


def test_headers_deep_merge_does_not_mutate_sources():
    base = RequestConfig(headers={"A": 1, "B": 2})
    override = RequestConfig(headers={"B": 3, "C": 4})
    before_base = copy.deepcopy(base.headers)
    before_override = copy.deepcopy(override.headers)

    merged = merge_config(base, override)

    assert merged.headers == {"A": 1, "B": 3, "C": 4}
    assert base.headers == before_base
    assert override.headers == before_override


def test_nested_header_groups_are_merged_and_copied():
    base = RequestConfig(headers={"common": {"Accept": "*/*"}, "post": {"Content-Type": "form"}})
    merged = merge_config(base, {"headers": {"post": {"X-Trace": "1"}}})

    assert merged.headers == {
        "common": {"Accept": "*/*"},
        "post": {"Content-Type": "form", "X-Trace": "1"},
    }
    merged.headers["common"]["Accept"] = "changed"
    assert base.headers["common"]["Accept"] == "*/*"


def test_deep_merge_key_takes_non_mapping_override_outright():
    base = RequestConfig(params={"a": 1})
    assert merge_config(base, {"params": "raw=1"}).params == "raw=1"


def test_deep_merge_key_clones_base_mapping_when_override_missing():
    base = RequestConfig(auth={"username": "u", "password": "p"})
    merged = merge_config(base, None)
    assert merged.auth == base.auth
    assert merged.auth is not base.auth


def test_fallback_keys_prefer_override_including_falsy_values():
    base = RequestConfig(timeout=5, base_url="http://base")
    merged = merge_config(base, {"timeout": 0})
    assert merged.timeout == 0
    assert merged.base_url == "http://base"
    assert merge_config(base, {}).timeout == 5


def test_unrecognized_keys_survive_merge_from_either_side():
    base = RequestConfig.from_mapping({"trace_id": "base", "tenant": "acme"})
    override = RequestConfig.from_mapping({"trace_id": "call", "retry_hint": True})
    merged = merge_config(base, override)
    assert merged.extra == {"trace_id": "call", "tenant": "acme", "retry_hint": True}
    assert merged.get("tenant") == "acme"


def test_merge_returns_fresh_config():
    base = RequestConfig(timeout=1)
    merged = merge_config(base, None)
    assert merged is not base
    merged.timeout = 99
    assert base.timeout == 1


def test_deep_merge_ignores_non_mappings():
    assert deep_merge(None, {"a": {"b": 1}}, "x", {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}


def test_coerce_config_rejects_unknown_types():
    with pytest.raises(TypeError):
        coerce_config(42)


def test_to_dict_lists_present_options_and_extras():
    config = RequestConfig.from_mapping({"url": "/x", "timeout": 3, "custom": "y"})
    assert config.to_dict() == {"url": "/x", "timeout": 3, "custom": "y"}
