"""Public health endpoint for load balancers and uptime checks."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from todo_api.api.deps import public_route
from todo_api.core.config import APP_VERSION, Settings, get_settings
from todo_api.core.database import check_db_connected, get_db
from todo_api.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse, dependencies=[Depends(public_route)])
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Always 200; the body says whether the database answered."""
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        version=APP_VERSION,
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
    )
