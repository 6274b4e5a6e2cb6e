"""
Job repository - data access for Job entity.
"""
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncConnection

from jobly.core.exceptions import CompanyNotExistsException, JobNotFoundException
from jobly.core.logging import get_logger
from jobly.repositories.base import BaseRepository
from jobly.repositories.filters import job_criteria

logger = get_logger(__name__)

_COMPANY_FIELDS = ("handle", "name", "description", "numEmployees", "logoUrl")


def to_decimal(value: Any) -> Optional[Decimal]:
    """Exact NUMERIC binding for equity given as int, float, str or Decimal."""
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def equity_str(value: Any) -> Optional[str]:
    """Canonical string form of a stored equity (``"0"``, ``"0.1"``)."""
    if value is None:
        return None
    return format(to_decimal(value), "f")


class JobRepository(BaseRepository):
    entity = "job"
    table = "jobs"
    key_column = "id"
    fields = ("id", "title", "salary", "equity", "companyHandle")
    columns = {
        "companyHandle": "company_handle",
    }
    immutable_fields = ("id", "companyHandle")
    order_by = "title"
    not_found = JobNotFoundException

    def to_record(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        record = super().to_record(row)
        record["equity"] = equity_str(record["equity"])
        return record

    def bind_values(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        values = dict(data)
        if "equity" in values:
            values["equity"] = to_decimal(values["equity"])
        return values

    async def create(
        self,
        db: AsyncConnection,
        data: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Create a job from ``{title, salary, equity, companyHandle}``.

        Equity defaults to 0 when missing or null.

        Raises:
            CompanyNotExistsException: If ``companyHandle`` names no company.
        """
        company_handle = data["companyHandle"]
        exists = await self.fetch(
            db,
            "SELECT handle FROM companies WHERE handle = $1",
            [company_handle],
        )
        if not exists:
            raise CompanyNotExistsException(company_handle)

        equity = data.get("equity")
        rows = await self.fetch(
            db,
            "INSERT INTO jobs (title, salary, equity, company_handle) "
            "VALUES ($1, $2, $3, $4) "
            f"RETURNING {self.select_list()}",
            [
                data.get("title"),
                data.get("salary"),
                to_decimal(0 if equity is None else equity),
                company_handle,
            ],
        )
        job = self.to_record(rows[0])
        logger.info("job_created", job_id=job["id"], company_handle=company_handle)
        return job

    async def find(
        self,
        db: AsyncConnection,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Search jobs, ordered by title.

        Filters: ``titleLike``, ``minSalary``, ``hasEquity``. With none
        of them present every job is returned.
        """
        criteria = job_criteria(filters)
        if criteria is None:
            return await self.find_all(db)
        return await self.find_matching(db, criteria)

    async def get(
        self,
        db: AsyncConnection,
        job_id: int,
    ) -> Dict[str, Any]:
        """Get a job with its company nested under ``company``."""
        rows = await self.fetch(
            db,
            "SELECT j.id, j.title, j.salary, j.equity, "
            "c.handle, c.name, c.description, "
            'c.num_employees AS "numEmployees", c.logo_url AS "logoUrl" '
            "FROM jobs AS j "
            "JOIN companies AS c ON j.company_handle = c.handle "
            "WHERE j.id = $1",
            [job_id],
        )
        if not rows:
            raise JobNotFoundException(job_id)

        row = rows[0]
        return {
            "id": row["id"],
            "title": row["title"],
            "salary": row["salary"],
            "equity": equity_str(row["equity"]),
            "company": {field: row[field] for field in _COMPANY_FIELDS},
        }
