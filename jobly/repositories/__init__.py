"""
Repository layer - data access abstraction.

Repositories own all SQL: they validate search filters, assemble
parameterized statements and shape rows into API records, keeping
query logic out of the route layer.
"""
from jobly.repositories.base import BaseRepository
from jobly.repositories.company_repository import CompanyRepository
from jobly.repositories.job_repository import JobRepository
from jobly.repositories.sql import (
    SearchCriterion,
    SearchOperator,
    SqlFragment,
    build_set_clause,
    build_where_clause,
)

__all__ = [
    "BaseRepository",
    "CompanyRepository",
    "JobRepository",
    "SearchCriterion",
    "SearchOperator",
    "SqlFragment",
    "build_set_clause",
    "build_where_clause",
]
