from dataclasses import dataclass, field

from app.core.config import Settings
from app.core.errors import ConfigurationError


@dataclass(frozen=True)
class UpstreamEndpoint:
    base_url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)

    def generate_content_url(self, model: str) -> str:
        return f"{self.base_url}/v1/models/{model}:generateContent"


def _clean_base_url(value: str | None) -> str:
    return (value or "").strip().rstrip("/")


class GatewayRouting:
    """Cloudflare AI Gateway in front of Google AI Studio.

    The key travels in the ``x-goog-api-key`` header; the URL stays key-free.
    """

    def resolve(self, settings: Settings, api_key: str) -> UpstreamEndpoint:
        base_url = _clean_base_url(settings.API_BASE_URL)
        if not base_url:
            if not settings.CF_ACCOUNT_ID or not settings.CF_GATEWAY_ID:
                raise ConfigurationError(
                    "Missing CF_ACCOUNT_ID/CF_GATEWAY_ID. Or set API_BASE_URL to the full "
                    "google-ai-studio provider baseUrl."
                )
            base_url = (
                f"https://{settings.GATEWAY_HOST}/v1/"
                f"{settings.CF_ACCOUNT_ID}/{settings.CF_GATEWAY_ID}/{settings.GATEWAY_PROVIDER}"
            )
        return UpstreamEndpoint(base_url=base_url, headers={"x-goog-api-key": api_key})


class DirectProvider:
    """Google AI Studio called directly, key passed as the ``key`` query parameter."""

    def resolve(self, settings: Settings, api_key: str) -> UpstreamEndpoint:
        base_url = _clean_base_url(settings.API_BASE_URL) or _clean_base_url(
            settings.GEMINI_DIRECT_BASE_URL
        )
        if not base_url:
            raise ConfigurationError("Missing API_BASE_URL for direct provider routing.")
        return UpstreamEndpoint(base_url=base_url, params={"key": api_key})


ROUTING_STRATEGIES = {
    "gateway": GatewayRouting(),
    "direct": DirectProvider(),
}


def resolve_endpoint(settings: Settings, api_key: str) -> UpstreamEndpoint:
    strategy = ROUTING_STRATEGIES.get(settings.UPSTREAM_ROUTING)
    if strategy is None:
        raise ConfigurationError(f"Unknown UPSTREAM_ROUTING: {settings.UPSTREAM_ROUTING}")
    return strategy.resolve(settings, api_key)
