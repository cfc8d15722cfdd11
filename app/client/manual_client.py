"""Caller-side helper for the /api/reconstruct endpoint.

Sends one page image to the forwarder, removes markdown code fences from the
returned HTML and injects the interactive upload script so the page can be
opened standalone in a browser.
"""
import logging
from functools import lru_cache

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.config import RESOURCES_DIR

logger = logging.getLogger(__name__)

FENCE_MARKERS = ("```html", "```")
BODY_CLOSE = "</body>"


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    RECONSTRUCT_SERVICE_URL: str = "http://localhost:8000"
    RECONSTRUCT_TIMEOUT: float = 180.0


class ReconstructionClientError(Exception):
    pass


@lru_cache
def load_client_script() -> str:
    return (RESOURCES_DIR / "upload_script.html").read_text(encoding="utf-8")


def strip_code_fences(text: str) -> str:
    for marker in FENCE_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


def inject_client_script(html: str, script: str | None = None) -> str:
    script = load_client_script() if script is None else script
    if BODY_CLOSE in html:
        return html.replace(BODY_CLOSE, f"{script}{BODY_CLOSE}", 1)
    return html + script


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = {}
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"request failed: {response.status_code}"


async def reconstruct_manual_page(
    image_base64: str,
    mime_type: str,
    page_range: str,
    *,
    base_url: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    settings = ClientSettings()
    url = f"{(base_url or settings.RECONSTRUCT_SERVICE_URL).rstrip('/')}/api/reconstruct"
    body = {"imageBase64": image_base64, "mimeType": mime_type, "pageRange": page_range}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.RECONSTRUCT_TIMEOUT) as own_client:
                response = await own_client.post(url, json=body)
        else:
            response = await client.post(url, json=body)

        if not response.is_success:
            raise ReconstructionClientError(_error_message(response))

        text = response.json().get("text") or ""
        return inject_client_script(strip_code_fences(text))
    except Exception as e:
        logger.error(f"API Error: {e}")
        raise
