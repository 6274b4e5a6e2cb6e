"""
Job routes.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncConnection

from jobly.core.database import get_db
from jobly.repositories.job_repository import JobRepository
from jobly.schemas.base import DeletedResponse, ErrorResponse
from jobly.schemas.job import (
    JobCreate,
    JobUpdate,
    JobFilters,
    JobEnvelope,
    JobDetailEnvelope,
    JobListEnvelope,
)

router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
    responses={400: {"model": ErrorResponse}},
)

job_repo = JobRepository()


@router.post("", response_model=JobEnvelope, status_code=201)
async def create_job(
    data: JobCreate,
    db: AsyncConnection = Depends(get_db),
):
    """Create a job for an existing company."""
    job = await job_repo.create(db, data.model_dump(by_alias=True))
    return {"job": job}


@router.get("", response_model=JobListEnvelope)
async def list_jobs(
    title_like: Optional[str] = Query(None, alias="titleLike"),
    min_salary: Optional[str] = Query(None, alias="minSalary"),
    has_equity: Optional[str] = Query(None, alias="hasEquity", description="true to require equity"),
    db: AsyncConnection = Depends(get_db),
):
    """
    List jobs ordered by title.

    ``hasEquity=true`` keeps only jobs with non-zero equity; any other
    value leaves equity unfiltered.
    """
    filters = JobFilters(
        title_like=title_like,
        min_salary=min_salary,
        has_equity=None if has_equity is None else has_equity == "true",
    )
    jobs = await job_repo.find(
        db, filters.model_dump(by_alias=True, exclude_none=True)
    )
    return {"jobs": jobs}


@router.get(
    "/{job_id}",
    response_model=JobDetailEnvelope,
    responses={404: {"model": ErrorResponse}},
)
async def get_job(
    job_id: int,
    db: AsyncConnection = Depends(get_db),
):
    """Get job details by ID."""
    return {"job": await job_repo.get(db, job_id)}


@router.patch(
    "/{job_id}",
    response_model=JobEnvelope,
    responses={404: {"model": ErrorResponse}},
)
async def update_job(
    job_id: int,
    data: JobUpdate,
    db: AsyncConnection = Depends(get_db),
):
    """Partially update a job. The id and company are fixed."""
    job = await job_repo.update(
        db, job_id, data.model_dump(mode="json", by_alias=True, exclude_unset=True)
    )
    return {"job": job}


@router.delete(
    "/{job_id}",
    response_model=DeletedResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_job(
    job_id: int,
    db: AsyncConnection = Depends(get_db),
):
    """Delete a job."""
    await job_repo.remove(db, job_id)
    return DeletedResponse(deleted=job_id)
