"""Project estimate transcripts produced by the estimator."""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, CreatedAtMixin, IntegerIdMixin


class ProjectEstimate(Base, IntegerIdMixin, CreatedAtMixin):
    __tablename__ = "project_estimates"

    project_name: Mapped[str] = mapped_column(String(200), nullable=False)
    project_type: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    terrain: Mapped[str] = mapped_column(String(100), nullable=False)
    project_size: Mapped[str] = mapped_column(String(100), nullable=False)
    duration: Mapped[str] = mapped_column(String(100), nullable=False)
    additional_details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    estimate_result: Mapped[str] = mapped_column(Text, nullable=False)
