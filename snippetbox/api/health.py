"""Liveness endpoint for orchestration probes.

Excluded from admission control, so polling it never spends the shared
request budget; it reports how much of that budget is left.
"""

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

from snippetbox.core import check_db_connection

router = APIRouter(tags=["health"])


class AdmissionStatus(BaseModel):
    capacity: int
    rate: float
    tokens: float


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str
    admission: AdmissionStatus


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Database unreachable"}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    db_ok = await check_db_connection()
    if not db_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="ok" if db_ok else "degraded",
        version=request.app.state.settings.app_version,
        database="connected" if db_ok else "unreachable",
        admission=AdmissionStatus(**request.app.state.admission_controller.get_stats()),
    )
