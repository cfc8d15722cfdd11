from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "Manual Reconstruction Service"
    LOG_LEVEL: str = "INFO"

    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = DEFAULT_GEMINI_MODEL

    # "gateway" routes through Cloudflare AI Gateway, "direct" calls Google AI Studio
    UPSTREAM_ROUTING: Literal["gateway", "direct"] = "gateway"
    API_BASE_URL: str | None = None  # full provider base url, e.g. .../google-ai-studio
    CF_ACCOUNT_ID: str | None = None
    CF_GATEWAY_ID: str | None = None
    GATEWAY_HOST: str = "gateway.ai.cloudflare.com"
    GATEWAY_PROVIDER: str = "google-ai-studio"
    GEMINI_DIRECT_BASE_URL: str = "https://generativelanguage.googleapis.com"

    GENERATION_TEMPERATURE: float | None = 0.1
    UPSTREAM_TIMEOUT: float = 120.0

    SYSTEM_INSTRUCTION_PATH: Path = RESOURCES_DIR / "system_instruction.md"
    PAGE_INSTRUCTION_TEMPLATE: str = (
        "Reconstruct Page {page_range}. Strictly follow the CSS for COMPACT WIREFRAME images "
        "and single-page fit. Ensure the content is dense enough to fit on one A4 page."
    )

    INCLUDE_DEBUG: bool = True

    def load_system_instruction(self) -> str:
        return self.SYSTEM_INSTRUCTION_PATH.read_text(encoding="utf-8")


settings = Settings()


def get_settings() -> Settings:
    return settings
