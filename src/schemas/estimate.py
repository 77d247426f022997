"""Project estimator request schema."""

from typing import Optional

from pydantic import Field

from src.schemas.base import ApiModel


class EstimateRequest(ApiModel):
    project_name: str = Field(min_length=1, max_length=200)
    project_type: str = Field(min_length=1, max_length=100)
    location: str = Field(min_length=1, max_length=200)
    terrain: str = Field(min_length=1, max_length=100)
    project_size: str = Field(min_length=1, max_length=100)
    duration: str = Field(min_length=1, max_length=100)
    additional_details: Optional[str] = Field(None, max_length=2000)
