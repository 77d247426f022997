"""Estimator API — streams an AI project equipment estimate over SSE."""

import structlog
from anthropic import AsyncAnthropic
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db, get_db_session
from src.llm.client import get_llm_client
from src.llm.estimator import (
    ESTIMATE_FAILED,
    SessionFactory,
    build_system_prompt,
    cached_inventory_context,
    stream_estimate,
)
from src.repositories.catalog import CatalogRepository
from src.schemas.estimate import EstimateRequest

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["estimator"])


def get_session_factory() -> SessionFactory:
    """Sessions opened inside the stream, after the request session is gone."""
    return get_db_session


@router.post("/estimate")
async def create_estimate(
    data: EstimateRequest,
    db: AsyncSession = Depends(get_db),
    client: AsyncAnthropic = Depends(get_llm_client),
    session_factory: SessionFactory = Depends(get_session_factory),
) -> StreamingResponse:
    try:
        inventory_context = await cached_inventory_context(CatalogRepository(db))
    except Exception as e:
        logger.error("estimate_context_failed", error=str(e))
        raise HTTPException(status_code=500, detail=ESTIMATE_FAILED)

    logger.info(
        "estimate_requested",
        project_type=data.project_type,
        location=data.location,
    )
    return StreamingResponse(
        stream_estimate(
            data,
            build_system_prompt(inventory_context),
            client=client,
            session_factory=session_factory,
        ),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
