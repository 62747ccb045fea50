"""Tests for notepilot.providers.registry."""

import pytest

from notepilot.providers.registry import (
    PROVIDERS,
    build_registry,
    family_of,
    get_provider,
    infer_provider_id,
    list_providers,
    set_catalog,
)


class TestRegistry:
    def test_builtin_ids(self):
        assert [p.id for p in list_providers()] == [
            "openai-compatible",
            "anthropic",
            "gemini",
            "lingyiwanwu",
            "custom",
        ]

    def test_get_unknown_returns_none(self):
        assert get_provider("nope") is None

    def test_discovery_providers_start_empty(self):
        assert get_provider("lingyiwanwu").models == []
        assert get_provider("custom").models == []
        assert get_provider("custom").require_model_for_verify is True

    def test_family_of_unknown_is_openai(self):
        assert family_of("whatever") == "openai"
        assert family_of("gemini") == "gemini"

    def test_build_registry_is_a_deep_copy(self):
        copy = build_registry()
        set_catalog(copy["lingyiwanwu"], ["yi-large", "yi-lightning"])
        assert copy["lingyiwanwu"].model_ids == ["yi-large", "yi-lightning"]
        assert PROVIDERS["lingyiwanwu"].models == []


class TestInferProviderId:
    def test_google_host(self):
        endpoint = "https://generativelanguage.googleapis.com/v1beta"
        assert infer_provider_id(endpoint, "") == "gemini"

    def test_gemini_model_name_wins_over_anthropic_host(self):
        assert (
            infer_provider_id("https://api.anthropic.com/v1", "gemini-pro")
            == "gemini"
        )

    def test_anthropic_host(self):
        assert (
            infer_provider_id("https://api.anthropic.com/v1", "claude-2.1")
            == "anthropic"
        )

    @pytest.mark.parametrize(
        "endpoint,model",
        [
            ("https://api.lingyiwanwu.com/v1", "yi-lightning"),
            ("", ""),
            (None, None),
        ],
    )
    def test_default(self, endpoint, model):
        assert infer_provider_id(endpoint, model) == "openai-compatible"

    def test_substring_match_is_kept_as_is(self):
        # a proxy whose path happens to contain the marker
        assert (
            infer_provider_id("https://proxy.local/anthropic.com/v1", "gpt-4")
            == "anthropic"
        )
