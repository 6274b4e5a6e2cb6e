"""
SQL fragment builders for hand-written repository queries.

Values are always bound through ``$n`` placeholders. Column and field
names are interpolated into the SQL text, so they must come from a
repository's fixed column map, never from request input.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence, Union

from jobly.core.exceptions import BadRequestException

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SearchOperator(str, Enum):
    """Comparison operators a search criterion may use."""

    EQ = "="
    GTE = ">="
    LTE = "<="
    NE = "!="
    LIKE = "LIKE"
    ILIKE = "ILIKE"

    @property
    def is_pattern(self) -> bool:
        return self in (SearchOperator.LIKE, SearchOperator.ILIKE)


@dataclass(frozen=True)
class SearchCriterion:
    """
    One ``field operator value`` condition.

    ``operator`` may be given as a string; it is trimmed, upper-cased and
    must name a ``SearchOperator``.
    """

    field: str
    operator: Union[SearchOperator, str]
    value: Any = None

    def __post_init__(self):
        if not isinstance(self.field, str) or not _IDENTIFIER.match(self.field):
            raise ValueError(f"Invalid search field: {self.field!r}")
        if not isinstance(self.operator, SearchOperator):
            if not isinstance(self.operator, str):
                raise ValueError(f"Invalid search operator: {self.operator!r}")
            # ValueError for unknown tokens
            operator = SearchOperator(self.operator.strip().upper())
            object.__setattr__(self, "operator", operator)


class SqlFragment(NamedTuple):
    """A piece of SQL text and the values for its placeholders, in order."""

    clause: str
    values: List[Any]


def build_set_clause(
    data_to_update: Optional[Mapping[str, Any]],
    field_to_column: Optional[Mapping[str, str]] = None,
) -> SqlFragment:
    """
    Build the SET part of a partial UPDATE.

    Args:
        data_to_update: Field name -> new value, e.g.
            ``{"firstName": "Aliya", "age": 32}``. ``None`` values clear
            the column.
        field_to_column: Field names that differ from their column, e.g.
            ``{"firstName": "first_name"}``. Unlisted fields are used as
            column names verbatim.

    Returns:
        ``SqlFragment('"first_name"=$1, "age"=$2', ["Aliya", 32])``.
        Placeholders start at $1, so callers number any further
        parameters from ``len(values) + 1``.

    Raises:
        BadRequestException: If there is nothing to update.
    """
    if not isinstance(data_to_update, Mapping) or len(data_to_update) == 0:
        raise BadRequestException("No data")

    if not isinstance(field_to_column, Mapping):
        field_to_column = {}

    cols = [
        f'"{field_to_column.get(name) or name}"=${idx}'
        for idx, name in enumerate(data_to_update, start=1)
    ]

    return SqlFragment(", ".join(cols), list(data_to_update.values()))


def build_where_clause(
    criteria: Optional[Sequence[SearchCriterion]],
) -> SqlFragment:
    """
    Build the body of a WHERE clause from search criteria, ANDed in order.

    An empty or missing list means no filtering and yields an empty
    clause; callers must put a true condition (``1 = 1``) in its place.
    LIKE/ILIKE values are wrapped as ``%value%`` substring patterns.
    """
    if not criteria:
        return SqlFragment("", [])

    conditions = []
    values = []

    for idx, criterion in enumerate(criteria, start=1):
        operator = SearchOperator(criterion.operator)
        conditions.append(f'"{criterion.field}" {operator.value} ${idx}')
        if operator.is_pattern:
            values.append(f"%{criterion.value}%")
        else:
            values.append(criterion.value)

    return SqlFragment(" AND ".join(conditions), values)
