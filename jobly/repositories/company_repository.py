"""
Company repository - data access for Company entity.
"""
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncConnection

from jobly.core.exceptions import CompanyNotFoundException, DuplicateCompanyException
from jobly.core.logging import get_logger
from jobly.repositories.base import BaseRepository
from jobly.repositories.filters import company_criteria
from jobly.repositories.job_repository import JobRepository

logger = get_logger(__name__)


class CompanyRepository(BaseRepository):
    entity = "company"
    table = "companies"
    key_column = "handle"
    fields = ("handle", "name", "description", "numEmployees", "logoUrl")
    columns = {
        "numEmployees": "num_employees",
        "logoUrl": "logo_url",
    }
    immutable_fields = ("handle",)
    order_by = "name"
    not_found = CompanyNotFoundException

    def __init__(self):
        self.job_repo = JobRepository()

    async def handle_exists(
        self,
        db: AsyncConnection,
        handle: str,
    ) -> bool:
        """Check if a company handle is already taken."""
        rows = await self.fetch(
            db,
            "SELECT handle FROM companies WHERE handle = $1",
            [handle],
        )
        return bool(rows)

    async def create(
        self,
        db: AsyncConnection,
        data: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Create a company from ``{handle, name, description, numEmployees, logoUrl}``.

        The duplicate check is a separate statement from the insert; two
        racing creates can both pass it, and the primary key rejects the
        second insert.

        Raises:
            DuplicateCompanyException: If the handle is taken.
        """
        handle = data["handle"]
        if await self.handle_exists(db, handle):
            raise DuplicateCompanyException(handle)

        rows = await self.fetch(
            db,
            "INSERT INTO companies (handle, name, description, num_employees, logo_url) "
            "VALUES ($1, $2, $3, $4, $5) "
            f"RETURNING {self.select_list()}",
            [
                handle,
                data.get("name"),
                data.get("description"),
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
        logger.info("company_created", handle=handle)
        return self.to_record(rows[0])

    async def find(
        self,
        db: AsyncConnection,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Search companies, ordered by name.

        Filters: ``nameLike``, ``minEmployees``, ``maxEmployees``. With
        none of them present every company is returned.
        """
        criteria = company_criteria(filters)
        if criteria is None:
            return await self.find_all(db)
        return await self.find_matching(db, criteria)

    async def get(
        self,
        db: AsyncConnection,
        handle: str,
    ) -> Dict[str, Any]:
        """
        Get a company with its jobs folded into ``jobs``.

        Outer join, so a company without jobs comes back with ``jobs: []``.
        """
        rows = await self.fetch(
            db,
            f"SELECT {self.select_list('c')}, {self.job_repo.select_list('j')} "
            "FROM companies AS c "
            "LEFT JOIN jobs AS j ON j.company_handle = c.handle "
            "WHERE c.handle = $1 "
            "ORDER BY j.id",
            [handle],
        )
        if not rows:
            raise CompanyNotFoundException(handle)

        company = self.to_record(rows[0])
        company["jobs"] = [
            self.job_repo.to_record(row) for row in rows if row["id"] is not None
        ]
        return company
