"""SQLAlchemy ORM models."""

from src.models.base import Base
from src.models.catalog import Equipment, Part, PowerUnit
from src.models.lead import QuoteRequest, ContactInquiry
from src.models.estimate import ProjectEstimate
from src.models.customer import CustomerOrder, CustomerPayment

__all__ = [
    "Base",
    "Equipment",
    "Part",
    "PowerUnit",
    "QuoteRequest",
    "ContactInquiry",
    "ProjectEstimate",
    "CustomerOrder",
    "CustomerPayment",
]
