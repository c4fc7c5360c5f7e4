"""
Helper utility functions
"""
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from urllib.parse import urlencode
import pytz

from employee_directory.config.settings import settings
from employee_directory.models.employee import Employee, EmployeeResponse, QueryResult


def now_iso() -> str:
    """Current UTC timestamp as an ISO-8601 string"""
    return datetime.now(pytz.utc).isoformat(timespec="microseconds")


def parse_timestamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt


def next_timestamp(previous: Optional[str]) -> str:
    """Current timestamp, nudged forward so it is strictly after `previous`"""
    current = datetime.now(pytz.utc)
    if previous:
        try:
            floor = parse_timestamp(previous)
        except ValueError:
            return current.isoformat(timespec="microseconds")
        if current <= floor:
            current = floor + timedelta(microseconds=1)
    return current.isoformat(timespec="microseconds")


def photo_url(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return f"{settings.PUBLIC_UPLOAD_URL.rstrip('/')}/{path}"


def serialize_employee(employee: Employee) -> Dict:
    """Convert an Employee to its public JSON shape"""
    response = EmployeeResponse(
        **employee.model_dump(exclude={"deleted_at"}),
        profile_photo_url=photo_url(employee.profile_photo),
    )
    return response.model_dump(by_alias=True)


def serialize_employees(employees: List[Employee]) -> List[Dict]:
    return [serialize_employee(employee) for employee in employees]


def _page_url(base_url: str, params: Dict, page: int) -> str:
    query = dict(params)
    query["page"] = page
    return f"{base_url}?{urlencode(query)}"


def paginated_envelope(result: QueryResult, base_url: str, params: Optional[Dict] = None) -> Dict:
    """Build the {data, meta, links} listing body"""
    params = {k: v for k, v in (params or {}).items() if v is not None and k != "page"}
    count = len(result.items)
    last_link_page = max(result.last_page, 1)

    return {
        "data": serialize_employees(result.items),
        "meta": {
            "current_page": result.page,
            "total": result.total,
            "per_page": result.per_page,
            "last_page": result.last_page,
            "from": result.offset + 1 if count else None,
            "to": result.offset + count if count else None,
        },
        "links": {
            "first": _page_url(base_url, params, 1),
            "last": _page_url(base_url, params, last_link_page),
            "prev": _page_url(base_url, params, result.page - 1) if result.page > 1 else None,
            "next": _page_url(base_url, params, result.page + 1) if result.page < result.last_page else None,
        },
    }
