import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.router import api_router
from app.core.config import settings
from app.core.errors import InvalidRequestError, UnexpectedError

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)
app.include_router(api_router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    details = "; ".join(str(error.get("msg", "")) for error in errors)
    # A body that does not parse is answered like any unexpected failure
    if any(error.get("type") == "json_invalid" for error in errors):
        error = UnexpectedError(f"Invalid JSON body: {details}")
    else:
        error = InvalidRequestError("Invalid imageBase64 / mimeType / pageRange", details=details)
    logger.warning(f"Rejected request to {request.url.path}: {error.message}")
    return JSONResponse(status_code=error.status_code, content=error.to_response())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
