"""
Search filter normalization.

Turns raw filter input (usually query-string values) into validated
``SearchCriterion`` lists. Each function returns ``None`` when none of
its recognized keys is present, telling the repository to skip the
WHERE clause and list everything.
"""
import re
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from jobly.core.exceptions import BadRequestException
from jobly.repositories.sql import SearchCriterion, SearchOperator

COMPANY_FILTER_KEYS = ("nameLike", "minEmployees", "maxEmployees")
JOB_FILTER_KEYS = ("titleLike", "minSalary", "hasEquity")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Bounds are compared against INTEGER columns
MAX_INT = 2 ** 31 - 1


def _is_present(filters: Mapping[str, Any], key: str) -> bool:
    return filters.get(key) is not None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_non_negative_int(key: str, value: Any) -> int:
    """
    Parse a bound like ``minEmployees``.

    Accepts ints and strings with a leading integer (``"12"``, ``" 7 "``,
    ``"3rd"``). Booleans are not integers here, and neither is anything
    past ``MAX_INT``.

    Raises:
        BadRequestException: Not an integer, or below zero.
    """
    if isinstance(value, bool):
        raise BadRequestException(f"{key} must be an integer")

    if isinstance(value, int):
        number = value
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            raise BadRequestException(f"{key} must be an integer")
        number = int(match.group(1))

    if number > MAX_INT:
        raise BadRequestException(f"{key} must be an integer")

    if number < 0:
        raise BadRequestException(f"{key} must be no less than 0")

    return number


def company_criteria(
    filters: Optional[Mapping[str, Any]],
) -> Optional[List[SearchCriterion]]:
    """
    Criteria for a company search.

    Recognized keys:
        nameLike: case-insensitive substring of the name
        minEmployees / maxEmployees: inclusive employee-count bounds
    """
    if filters is None or not any(_is_present(filters, k) for k in COMPANY_FILTER_KEYS):
        return None

    criteria = []

    name_like = filters.get("nameLike")
    if isinstance(name_like, str) and name_like != "":
        criteria.append(SearchCriterion("name", SearchOperator.ILIKE, name_like))

    min_employees = None
    if not _is_blank(filters.get("minEmployees")):
        min_employees = parse_non_negative_int("minEmployees", filters["minEmployees"])
        criteria.append(
            SearchCriterion("num_employees", SearchOperator.GTE, min_employees)
        )

    if not _is_blank(filters.get("maxEmployees")):
        max_employees = parse_non_negative_int("maxEmployees", filters["maxEmployees"])
        if min_employees is not None and max_employees < min_employees:
            raise BadRequestException("maxEmployees must be no less than minEmployees")
        criteria.append(
            SearchCriterion("num_employees", SearchOperator.LTE, max_employees)
        )

    return criteria


def job_criteria(
    filters: Optional[Mapping[str, Any]],
) -> Optional[List[SearchCriterion]]:
    """
    Criteria for a job search.

    Recognized keys:
        titleLike: case-insensitive substring of the title
        minSalary: inclusive lower salary bound
        hasEquity: only ``True`` filters (to jobs with non-zero equity)
    """
    if filters is None or not any(_is_present(filters, k) for k in JOB_FILTER_KEYS):
        return None

    criteria = []

    title_like = filters.get("titleLike")
    if isinstance(title_like, str) and title_like != "":
        criteria.append(SearchCriterion("title", SearchOperator.ILIKE, title_like))

    if not _is_blank(filters.get("minSalary")):
        min_salary = parse_non_negative_int("minSalary", filters["minSalary"])
        criteria.append(SearchCriterion("salary", SearchOperator.GTE, min_salary))

    if filters.get("hasEquity") is True:
        criteria.append(SearchCriterion("equity", SearchOperator.NE, Decimal("0")))

    return criteria
