"""
API v1 Router - Main Entry Point
Aggregates the authentication and leave request endpoints.
"""
from fastapi import APIRouter

from leaveflow.api.v1 import auth, leaves

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(auth.router)
router.include_router(leaves.router)


@router.get("/health", tags=["Health"])
def health() -> dict:
    return {"status": "ok"}
