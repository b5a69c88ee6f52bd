import structlog
from fastapi import APIRouter, Request
from sqlalchemy import text

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict:  # type: ignore[type-arg]
    """Liveness + database health check."""
    db_status = "connected"
    try:
        database = request.app.state.database
        async with database.session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("health_database_unreachable", error=str(exc))
        db_status = "error"

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "database": db_status,
    }
