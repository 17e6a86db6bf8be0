from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Проверка доступности",
    description="200, если MongoDB отвечает на ping, иначе 503.",
)
async def health(request: Request) -> JSONResponse:
    if await request.app.state.database.ping():
        return JSONResponse(status_code=200, content={"status": "ok"})
    return JSONResponse(status_code=503, content={"error": "Database unavailable"})
