import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.core.config import DEFAULT_GEMINI_MODEL, Settings
from app.core.errors import ConfigurationError, InvalidRequestError, UpstreamError
from app.schemas.reconstruct import ReconstructRequest
from app.services.endpoints import resolve_endpoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconstructionResult:
    text: str
    base_url: str
    model: str

    @property
    def debug(self) -> dict[str, str]:
        return {"baseUrlUsed": self.base_url, "model": self.model}


def normalize_image_data(image_base64: str) -> str:
    """Drop a ``data:<mime>;base64,`` prefix, keeping what follows the first comma."""
    if "," in image_base64:
        return image_base64.split(",", 1)[1]
    return image_base64


def extract_text(data: Any) -> str:
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        content = {}
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    texts = [part.get("text") for part in parts if isinstance(part, dict)]
    texts = [text if isinstance(text, str) else "" for text in texts]
    joined = "\n".join(text for text in texts if text)
    if joined:
        return joined
    return (texts[0] if texts else None) or ""


def extract_error_message(body: str, status_code: int) -> str:
    message = f"Gemini API Error: {status_code}"
    try:
        parsed = json.loads(body)
    except ValueError:
        return message
    # Gemini errors look like {"error": {"message": "..."}}
    if isinstance(parsed, dict) and isinstance(parsed.get("error"), dict):
        return parsed["error"].get("message") or message
    return message


class GeminiService:
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self.transport = transport

    def build_payload(
        self, settings: Settings, image_data: str, mime_type: str, page_range: str
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": settings.load_system_instruction()},
                        {"inlineData": {"mimeType": mime_type, "data": image_data}},
                        {"text": settings.PAGE_INSTRUCTION_TEMPLATE.format(page_range=page_range)},
                    ],
                }
            ],
        }
        if settings.GENERATION_TEMPERATURE is not None:
            payload["generationConfig"] = {"temperature": settings.GENERATION_TEMPERATURE}
        return payload

    async def reconstruct(
        self, request: ReconstructRequest, settings: Settings
    ) -> ReconstructionResult:
        if not settings.GEMINI_API_KEY:
            raise ConfigurationError("Missing GEMINI_API_KEY")
        if not request.imageBase64 or not request.mimeType or not request.pageRange:
            raise InvalidRequestError("Missing imageBase64 / mimeType / pageRange")

        image_data = normalize_image_data(request.imageBase64)
        endpoint = resolve_endpoint(settings, settings.GEMINI_API_KEY)
        model = (settings.GEMINI_MODEL or "").strip() or DEFAULT_GEMINI_MODEL
        api_url = endpoint.generate_content_url(model)
        debug = {"apiUrl": api_url, "baseUrlUsed": endpoint.base_url, "model": model}

        payload = self.build_payload(settings, image_data, request.mimeType, request.pageRange)
        logger.info(f"Forwarding page {request.pageRange} to {endpoint.base_url} (model={model})")

        async with httpx.AsyncClient(
            transport=self.transport, timeout=settings.UPSTREAM_TIMEOUT
        ) as client:
            try:
                response = await client.post(
                    api_url,
                    json=payload,
                    headers={"Content-Type": "application/json", **endpoint.headers},
                    params=endpoint.params,
                )
            except httpx.TimeoutException as e:
                logger.warning(f"Gemini API timed out after {settings.UPSTREAM_TIMEOUT}s")
                raise UpstreamError(
                    f"Gemini API timeout after {settings.UPSTREAM_TIMEOUT}s",
                    status_code=504,
                    details=str(e),
                    debug=debug,
                ) from e

        if not response.is_success:
            error_text = response.text
            message = extract_error_message(error_text, response.status_code)
            logger.warning(f"Gemini API returned {response.status_code}: {message}")
            raise UpstreamError(
                message, status_code=response.status_code, details=error_text, debug=debug
            )

        text = extract_text(response.json())
        return ReconstructionResult(text=text, base_url=endpoint.base_url, model=model)


gemini_service = GeminiService()


def get_gemini_service() -> GeminiService:
    return gemini_service
