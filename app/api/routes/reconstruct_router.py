import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.errors import ReconstructionError, UnexpectedError
from app.schemas.reconstruct import ErrorResponse, PingResponse, ReconstructRequest, ReconstructResponse
from app.services.gemini_service import GeminiService, get_gemini_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/reconstruct",
    response_model=ReconstructResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def reconstruct_page(
    request: ReconstructRequest,
    settings: Settings = Depends(get_settings),
    service: GeminiService = Depends(get_gemini_service),
):
    try:
        result = await service.reconstruct(request, settings)
    except ReconstructionError as e:
        return _error_response(e, settings)
    except Exception as e:
        logger.exception("Unexpected error while reconstructing page")
        return _error_response(UnexpectedError(str(e) or e.__class__.__name__), settings)

    return ReconstructResponse(
        text=result.text,
        debug=result.debug if settings.INCLUDE_DEBUG else None,
    )


@router.get("/ping", response_model=PingResponse)
async def ping():
    return PingResponse(success=True, data="PONG!")


def _error_response(error: ReconstructionError, settings: Settings) -> JSONResponse:
    body = ErrorResponse(**error.to_response(include_debug=settings.INCLUDE_DEBUG))
    return JSONResponse(status_code=error.status_code, content=body.model_dump(exclude_none=True))
