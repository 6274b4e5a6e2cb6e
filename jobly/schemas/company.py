"""
Company schemas.
"""
from typing import List, Optional
from pydantic import ConfigDict, Field

from jobly.schemas.base import BaseSchema
from jobly.schemas.job import JobResponse

URL_PATTERN = r"^https?://\S+$"


class CompanyBase(BaseSchema):
    """Base company schema."""

    name: str = Field(min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = Field(None, pattern=URL_PATTERN)


class CompanyCreate(CompanyBase):
    """Company creation schema."""

    model_config = ConfigDict(extra="forbid")

    handle: str = Field(min_length=1, max_length=25, pattern=r"^[a-z0-9_-]+$")


class CompanyUpdate(BaseSchema):
    """
    Company update schema.

    Extra keys are kept so the repository can refuse them by name
    (``handle can not be updated``). ``name`` and ``description`` may be
    omitted but not set to null; the optional columns accept null.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(None, min_length=1)
    description: str = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = Field(None, pattern=URL_PATTERN)


class CompanyResponse(BaseSchema):
    """Company response schema."""

    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetail(CompanyResponse):
    """Company with its jobs."""

    jobs: List[JobResponse] = []


class CompanyEnvelope(BaseSchema):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseSchema):
    company: CompanyDetail


class CompanyListEnvelope(BaseSchema):
    companies: List[CompanyResponse]


class CompanyFilters(BaseSchema):
    """Company filtering parameters, as given on the query string."""

    name_like: Optional[str] = None
    min_employees: Optional[str] = None
    max_employees: Optional[str] = None
