"""
Pydantic schemas for API validation and serialization.
"""
from jobly.schemas.base import (
    BaseSchema,
    DeletedResponse,
    ErrorResponse,
)
from jobly.schemas.job import (
    CompanyBrief,
    JobCreate,
    JobUpdate,
    JobResponse,
    JobDetail,
    JobEnvelope,
    JobDetailEnvelope,
    JobListEnvelope,
    JobFilters,
)
from jobly.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
    CompanyDetail,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListEnvelope,
    CompanyFilters,
)

__all__ = [
    # Base
    "BaseSchema",
    "DeletedResponse",
    "ErrorResponse",
    # Job
    "CompanyBrief",
    "JobCreate",
    "JobUpdate",
    "JobResponse",
    "JobDetail",
    "JobEnvelope",
    "JobDetailEnvelope",
    "JobListEnvelope",
    "JobFilters",
    # Company
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    "CompanyDetail",
    "CompanyEnvelope",
    "CompanyDetailEnvelope",
    "CompanyListEnvelope",
    "CompanyFilters",
]
