"""
Employee routes
"""
import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from employee_directory.config.options import get_dropdown_options
from employee_directory.config.settings import settings
from employee_directory.database.employee_store import get_default_store
from employee_directory.models.employee import UploadedPhoto
from employee_directory.services.employee_service import EmployeeService
from employee_directory.utils.errors import ValidationFailed
from employee_directory.utils.helpers import paginated_envelope, serialize_employee

router = APIRouter(prefix="/employees", tags=["Employees"])


def get_employee_service() -> EmployeeService:
    return EmployeeService(get_default_store())


async def read_upload(upload: UploadFile) -> Optional[UploadedPhoto]:
    if not upload.filename:
        return None
    content = await upload.read()
    return UploadedPhoto(filename=upload.filename, content_type=upload.content_type, content=content)


async def read_employee_payload(request: Request) -> Dict[str, Any]:
    """Accept either a JSON object or a multipart/urlencoded form"""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        payload: Dict[str, Any] = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                # an empty file input means "no new photo", not "remove it"
                photo = await read_upload(value)
                if photo is not None:
                    payload[key] = photo
            else:
                payload[key] = value
        return payload

    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = json.loads(body)
    except ValueError:
        raise ValidationFailed({"body": ["The request body must be valid JSON"]})
    if not isinstance(payload, dict):
        raise ValidationFailed({"body": ["The request body must be a JSON object"]})
    return payload


@router.get("")
async def list_employees(
    request: Request,
    per_page: int = Query(settings.DEFAULT_PAGE_SIZE),
    page: int = Query(1),
    search: Optional[str] = None,
    department: Optional[str] = None,
    sort_by: Optional[str] = settings.DEFAULT_SORT_BY,
    sort_direction: str = "asc",
    service: EmployeeService = Depends(get_employee_service),
):
    """Paginated employee listing with search, department filter and sorting"""
    # store access is blocking file I/O, keep it off the event loop
    result = await run_in_threadpool(
        service.list_employees,
        search=search,
        department=department,
        sort_by=sort_by,
        sort_direction=sort_direction,
        page=page,
        per_page=per_page,
    )
    params = {
        "per_page": result.per_page,
        "search": search,
        "department": department,
        "sort_by": sort_by,
        "sort_direction": sort_direction,
    }
    base_url = str(request.url.replace(query=""))
    return {"data": paginated_envelope(result, base_url, params)}


@router.get("/options")
async def get_options():
    """Dropdown values for the employee form"""
    return {"data": get_dropdown_options()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_employee(
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
):
    """Create a new employee"""
    payload = await read_employee_payload(request)
    employee = await run_in_threadpool(service.create_employee, payload)
    return {
        "data": serialize_employee(employee),
        "message": "Employee created successfully",
    }


@router.get("/{employee_id}")
async def get_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
):
    """Get employee by id"""
    employee = await run_in_threadpool(service.get_employee, employee_id)
    return {"data": serialize_employee(employee)}


@router.put("/{employee_id}")
@router.patch("/{employee_id}")
async def update_employee(
    employee_id: str,
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
):
    """Update the supplied fields of an employee"""
    payload = await read_employee_payload(request)
    employee = await run_in_threadpool(service.update_employee, employee_id, payload)
    return {
        "data": serialize_employee(employee),
        "message": "Employee updated successfully",
    }


@router.delete("/{employee_id}")
async def delete_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
):
    """Soft delete employee"""
    await run_in_threadpool(service.delete_employee, employee_id)
    return {"message": "Employee deleted successfully"}


@router.post("/{employee_id}/photo")
async def upload_photo(
    employee_id: str,
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
):
    """Upload a profile photo (multipart field profile_photo)"""
    payload = await read_employee_payload(request)
    photo = payload.get("profile_photo", payload.get("profilePhoto"))
    employee = await run_in_threadpool(service.upload_photo, employee_id, photo)
    return {
        "data": serialize_employee(employee),
        "message": "Profile photo uploaded successfully",
    }


@router.delete("/{employee_id}/photo")
async def delete_photo(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
):
    """Remove the profile photo reference"""
    employee = await run_in_threadpool(service.delete_photo, employee_id)
    return {
        "data": serialize_employee(employee),
        "message": "Profile photo deleted successfully",
    }
