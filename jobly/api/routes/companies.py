"""
Company routes.

Thin controllers - CompanyRepository validates filters, runs the SQL
and shapes the records.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncConnection

from jobly.core.database import get_db
from jobly.repositories.company_repository import CompanyRepository
from jobly.schemas.base import DeletedResponse, ErrorResponse
from jobly.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyFilters,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListEnvelope,
)

router = APIRouter(
    prefix="/companies",
    tags=["companies"],
    responses={400: {"model": ErrorResponse}},
)

company_repo = CompanyRepository()


@router.post("", response_model=CompanyEnvelope, status_code=201)
async def create_company(
    data: CompanyCreate,
    db: AsyncConnection = Depends(get_db),
):
    """Create a new company."""
    company = await company_repo.create(db, data.model_dump(by_alias=True))
    return {"company": company}


@router.get("", response_model=CompanyListEnvelope)
async def list_companies(
    name_like: Optional[str] = Query(None, alias="nameLike"),
    min_employees: Optional[str] = Query(None, alias="minEmployees"),
    max_employees: Optional[str] = Query(None, alias="maxEmployees"),
    db: AsyncConnection = Depends(get_db),
):
    """
    List companies ordered by name.

    ``nameLike`` matches case-insensitively anywhere in the name; the
    employee bounds are inclusive. Other query keys are ignored.
    """
    filters = CompanyFilters(
        name_like=name_like,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    companies = await company_repo.find(
        db, filters.model_dump(by_alias=True, exclude_none=True)
    )
    return {"companies": companies}


@router.get(
    "/{handle}",
    response_model=CompanyDetailEnvelope,
    responses={404: {"model": ErrorResponse}},
)
async def get_company(
    handle: str,
    db: AsyncConnection = Depends(get_db),
):
    """Get a single company with its jobs."""
    return {"company": await company_repo.get(db, handle)}


@router.patch(
    "/{handle}",
    response_model=CompanyEnvelope,
    responses={404: {"model": ErrorResponse}},
)
async def update_company(
    handle: str,
    data: CompanyUpdate,
    db: AsyncConnection = Depends(get_db),
):
    """Partially update a company; ``null`` clears a field."""
    company = await company_repo.update(
        db, handle, data.model_dump(mode="json", by_alias=True, exclude_unset=True)
    )
    return {"company": company}


@router.delete(
    "/{handle}",
    response_model=DeletedResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_company(
    handle: str,
    db: AsyncConnection = Depends(get_db),
):
    """Delete a company and, through the foreign key, its jobs."""
    await company_repo.remove(db, handle)
    return DeletedResponse(deleted=handle)
