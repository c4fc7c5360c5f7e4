"""
Filtering, search, sorting and pagination over the employee collection
"""
from typing import Any, List, Optional, Sequence

from employee_directory.config.settings import settings
from employee_directory.models.employee import Employee, QueryResult

SEARCH_FIELDS = ("name", "department", "email")


def resolve_sort_field(sort_by: Optional[str]) -> Optional[str]:
    """Map a camelCase or snake_case sort key onto an Employee attribute"""
    if not sort_by:
        return None
    for attribute, info in Employee.model_fields.items():
        if sort_by in (attribute, info.alias):
            return attribute
    return None


def _sort_key(attribute: Optional[str]):
    def key(employee: Employee):
        value: Any = getattr(employee, attribute, None) if attribute else None
        # records without a value compare equal to each other and sort first
        if value is None:
            return (0, 0)
        return (1, value)
    return key


def query_employees(
    employees: Sequence[Employee],
    search: Optional[str] = None,
    department: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_direction: str = "asc",
    page: int = 1,
    per_page: int = None,
) -> QueryResult:
    """Return one page of active employees matching the filters"""
    if per_page is None or per_page <= 0:
        per_page = settings.DEFAULT_PAGE_SIZE
    if page is None or page < 1:
        page = 1

    matches: List[Employee] = [e for e in employees if not e.is_deleted()]

    if search:
        needle = search.lower()
        matches = [
            e for e in matches
            if any(needle in (getattr(e, f) or "").lower() for f in SEARCH_FIELDS)
        ]

    if department:
        wanted = department.lower()
        matches = [e for e in matches if (e.department or "").lower() == wanted]

    if sort_by:
        matches = sorted(
            matches,
            key=_sort_key(resolve_sort_field(sort_by)),
            reverse=(sort_direction or "").lower() == "desc",
        )

    offset = (page - 1) * per_page
    return QueryResult(
        items=matches[offset:offset + per_page],
        total=len(matches),
        page=page,
        per_page=per_page,
    )
