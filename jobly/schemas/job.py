"""
Job schemas.
"""
from decimal import Decimal
from typing import List, Optional
from pydantic import ConfigDict, Field

from jobly.schemas.base import BaseSchema


class CompanyBrief(BaseSchema):
    """Company info nested in a job detail."""

    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class JobCreate(BaseSchema):
    """Job creation schema."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Decimal = Field(Decimal("0"), ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(BaseSchema):
    """
    Job update schema.

    ``id`` and ``companyHandle`` pass through as extras and are refused
    by the repository. ``title`` may be omitted but not nulled.
    """

    model_config = ConfigDict(extra="allow")

    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)


class JobResponse(BaseSchema):
    """Job as listed."""

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str


class JobDetail(BaseSchema):
    """Job with its company."""

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company: CompanyBrief


class JobEnvelope(BaseSchema):
    job: JobResponse


class JobDetailEnvelope(BaseSchema):
    job: JobDetail


class JobListEnvelope(BaseSchema):
    jobs: List[JobResponse]


class JobFilters(BaseSchema):
    """Job filtering parameters, as given on the query string."""

    title_like: Optional[str] = None
    min_salary: Optional[str] = None
    has_equity: Optional[bool] = None
