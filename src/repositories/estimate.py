"""Estimate repository — stores estimator transcripts."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.estimate import ProjectEstimate
from src.schemas.estimate import EstimateRequest

logger = structlog.get_logger()


class EstimateRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, request: EstimateRequest, estimate_result: str) -> ProjectEstimate:
        estimate = ProjectEstimate(
            project_name=request.project_name,
            project_type=request.project_type,
            location=request.location,
            terrain=request.terrain,
            project_size=request.project_size,
            duration=request.duration,
            additional_details=request.additional_details or None,
            estimate_result=estimate_result,
        )
        self.db.add(estimate)
        await self.db.flush()

        logger.info(
            "project_estimate_saved",
            estimate_id=estimate.id,
            project_type=request.project_type,
            length=len(estimate_result),
        )
        return estimate
