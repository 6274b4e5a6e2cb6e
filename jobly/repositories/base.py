"""
Base repository with generic list/filter/update/delete operations.

Entity repositories describe their table through class attributes and
inherit the statements that only differ by table and column names.
"""
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from sqlalchemy.ext.asyncio import AsyncConnection

from jobly.core.exceptions import BadRequestException, NotFoundException
from jobly.core.logging import get_logger
from jobly.repositories.sql import SearchCriterion, build_set_clause, build_where_clause

logger = get_logger(__name__)


class BaseRepository:
    """
    Base repository for one table.

    Usage:
        class CompanyRepository(BaseRepository):
            table = "companies"
            key_column = "handle"
            fields = ("handle", "name", "description", "numEmployees", "logoUrl")
            columns = {"numEmployees": "num_employees", "logoUrl": "logo_url"}
    """

    entity: ClassVar[str]
    table: ClassVar[str]
    key_column: ClassVar[str]
    # Public record fields, in output order
    fields: ClassVar[Tuple[str, ...]]
    # Record fields stored under a different column name
    columns: ClassVar[Dict[str, str]] = {}
    # Record fields that a partial update may not touch
    immutable_fields: ClassVar[Tuple[str, ...]] = ()
    order_by: ClassVar[str]
    not_found: ClassVar[Type[NotFoundException]] = NotFoundException

    def column_for(self, field: str) -> str:
        return self.columns.get(field, field)

    def select_list(self, alias: Optional[str] = None) -> str:
        """Column list that renames storage columns to record fields."""
        prefix = f"{alias}." if alias else ""
        parts = []
        for field in self.fields:
            column = self.column_for(field)
            if column == field:
                parts.append(f"{prefix}{column}")
            else:
                parts.append(f'{prefix}{column} AS "{field}"')
        return ", ".join(parts)

    def to_record(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        """Shape a result row into the public record."""
        return {field: row[field] for field in self.fields}

    def bind_values(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Convert incoming field values to what the driver should bind."""
        return dict(data)

    async def fetch(
        self,
        db: AsyncConnection,
        sql: str,
        params: Sequence[Any] = (),
    ) -> List[Dict[str, Any]]:
        """Run one statement and return its rows as dicts."""
        logger.debug("sql_execute", sql=" ".join(sql.split()), params=list(params))
        result = await db.exec_driver_sql(sql, tuple(params))
        return [dict(row) for row in result.mappings().all()]

    async def find_all(
        self,
        db: AsyncConnection,
    ) -> List[Dict[str, Any]]:
        """Every record, in the entity's natural order."""
        rows = await self.fetch(
            db,
            f"SELECT {self.select_list()} FROM {self.table} ORDER BY {self.order_by}",
        )
        return [self.to_record(row) for row in rows]

    async def find_matching(
        self,
        db: AsyncConnection,
        criteria: Optional[List[SearchCriterion]],
    ) -> List[Dict[str, Any]]:
        """Records matching all criteria, in the entity's natural order."""
        where, values = build_where_clause(criteria)
        rows = await self.fetch(
            db,
            f"SELECT {self.select_list()} FROM {self.table} "
            f"WHERE {where or '1 = 1'} ORDER BY {self.order_by}",
            values,
        )
        return [self.to_record(row) for row in rows]

    def check_updatable(self, data: Any) -> None:
        """
        Reject fields a partial update must not name.

        Column names in the SET clause come from these keys, so anything
        outside ``fields`` is refused here.
        """
        if not isinstance(data, Mapping):
            return
        for field in data:
            if field in self.immutable_fields:
                raise BadRequestException(f"{field} can not be updated")
            if field not in self.fields:
                raise BadRequestException(f"Unknown field: {field}")

    async def update(
        self,
        db: AsyncConnection,
        key: Any,
        data: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Partial update: only the fields present in ``data`` change.

        Raises:
            BadRequestException: Empty data, or a forbidden/unknown field.
            NotFoundException: No row has this key.
        """
        self.check_updatable(data)
        if isinstance(data, Mapping):
            data = self.bind_values(data)
        set_cols, values = build_set_clause(data, self.columns)
        key_idx = len(values) + 1

        rows = await self.fetch(
            db,
            f"UPDATE {self.table} SET {set_cols} "
            f"WHERE {self.key_column} = ${key_idx} "
            f"RETURNING {self.select_list()}",
            [*values, key],
        )
        if not rows:
            raise self.not_found(key)

        logger.info(f"{self.entity}_updated", key=key, fields=list(data))
        return self.to_record(rows[0])

    async def remove(
        self,
        db: AsyncConnection,
        key: Any,
    ) -> None:
        """Hard delete a record by key."""
        rows = await self.fetch(
            db,
            f"DELETE FROM {self.table} WHERE {self.key_column} = $1 "
            f"RETURNING {self.key_column}",
            [key],
        )
        if not rows:
            raise self.not_found(key)

        logger.info(f"{self.entity}_removed", key=key)
