from pydantic import BaseModel


class ReconstructRequest(BaseModel):
    # Optional at the schema level so a missing field is answered with our own
    # 400 body instead of FastAPI's 422 validation error.
    imageBase64: str | None = None
    mimeType: str | None = None
    pageRange: str | None = None


class DebugInfo(BaseModel):
    baseUrlUsed: str
    model: str
    apiUrl: str | None = None


class ReconstructResponse(BaseModel):
    text: str
    debug: DebugInfo | None = None


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    debug: DebugInfo | None = None


class PingResponse(BaseModel):
    success: bool
    data: str
