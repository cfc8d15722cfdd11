import pytest

from app.core.errors import ConfigurationError
from app.services.endpoints import resolve_endpoint
from conftest import make_settings


def test_gateway_pair_builds_proxied_base_url():
    endpoint = resolve_endpoint(make_settings(), "k")

    assert endpoint.base_url == "https://gateway.ai.cloudflare.com/v1/acct/gw/google-ai-studio"
    assert endpoint.headers == {"x-goog-api-key": "k"}
    assert endpoint.params == {}


def test_explicit_override_wins_over_gateway_pair():
    settings = make_settings(API_BASE_URL="  https://proxy.example.com/google-ai-studio/  ")

    endpoint = resolve_endpoint(settings, "k")

    assert endpoint.base_url == "https://proxy.example.com/google-ai-studio"
    assert endpoint.headers == {"x-goog-api-key": "k"}


def test_blank_override_falls_back_to_gateway_pair():
    endpoint = resolve_endpoint(make_settings(API_BASE_URL="   "), "k")

    assert endpoint.base_url.endswith("/acct/gw/google-ai-studio")


@pytest.mark.parametrize(
    "overrides",
    [
        {"CF_ACCOUNT_ID": None, "CF_GATEWAY_ID": None},
        {"CF_ACCOUNT_ID": "acct", "CF_GATEWAY_ID": None},
        {"CF_ACCOUNT_ID": None, "CF_GATEWAY_ID": "gw"},
    ],
)
def test_gateway_routing_requires_both_identifiers(overrides):
    with pytest.raises(ConfigurationError, match="CF_ACCOUNT_ID/CF_GATEWAY_ID"):
        resolve_endpoint(make_settings(**overrides), "k")


def test_direct_provider_uses_default_endpoint_and_query_key():
    settings = make_settings(UPSTREAM_ROUTING="direct", CF_ACCOUNT_ID=None, CF_GATEWAY_ID=None)

    endpoint = resolve_endpoint(settings, "k")

    assert endpoint.base_url == "https://generativelanguage.googleapis.com"
    assert endpoint.params == {"key": "k"}
    assert endpoint.headers == {}


def test_generate_content_url():
    endpoint = resolve_endpoint(make_settings(), "k")

    assert endpoint.generate_content_url("gemini-2.0-flash") == (
        "https://gateway.ai.cloudflare.com/v1/acct/gw/google-ai-studio"
        "/v1/models/gemini-2.0-flash:generateContent"
    )
