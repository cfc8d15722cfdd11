from fastapi import APIRouter
from app.api.routes import reconstruct_router

api_router = APIRouter()
api_router.include_router(reconstruct_router.router, tags=["Manual Reconstruction"])
