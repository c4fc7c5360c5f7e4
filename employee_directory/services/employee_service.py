"""
Employee service - validate-then-write orchestration used by the routes
"""
import logging
from typing import Any, Dict, Mapping, Optional

from employee_directory.database.employee_store import EmployeeStore
from employee_directory.models.employee import Employee, QueryResult, UploadedPhoto
from employee_directory.services.query_engine import query_employees
from employee_directory.services.validator import EmployeeValidator, check_photo_upload
from employee_directory.utils.errors import EmployeeNotFound, UpdateFailed

logger = logging.getLogger(__name__)


class EmployeeService:
    def __init__(self, store: EmployeeStore, validator: Optional[EmployeeValidator] = None):
        self.store = store
        self.validator = validator or EmployeeValidator()

    def _resolve_photo(self, record: Dict[str, Any]) -> Optional[str]:
        """Swap a pending upload for its stored relative path; returns the new path, if any"""
        photo = record.get("profilePhoto")
        if isinstance(photo, UploadedPhoto):
            record["profilePhoto"] = self.store.store_uploaded_photo(photo.content, photo.extension)
            return record["profilePhoto"]
        return None

    def list_employees(
        self,
        search: Optional[str] = None,
        department: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_direction: str = "asc",
        page: int = 1,
        per_page: Optional[int] = None,
    ) -> QueryResult:
        return query_employees(
            self.store.list_all(),
            search=search,
            department=department,
            sort_by=sort_by,
            sort_direction=sort_direction,
            page=page,
            per_page=per_page,
        )

    def get_employee(self, employee_id: str) -> Employee:
        """Active employee by id; soft-deleted records count as missing"""
        employee = self.store.find_active(employee_id)
        if employee is None:
            raise EmployeeNotFound(employee_id)
        return employee

    def create_employee(self, payload: Mapping[str, Any]) -> Employee:
        record = self.validator.validate_create(payload)
        stored_photo = self._resolve_photo(record)
        try:
            return self.store.create(record)
        except (OSError, ValueError):
            if stored_photo:
                self.store.discard_photo(stored_photo)
            raise

    def update_employee(self, employee_id: str, payload: Mapping[str, Any]) -> Employee:
        existing = self.get_employee(employee_id)
        changes = self.validator.validate_update(payload, existing)
        stored_photo = self._resolve_photo(changes)
        try:
            updated = self.store.update(employee_id, changes)
        except (OSError, ValueError) as e:
            logger.error("❌ Failed to update employee %s: %s", employee_id, e)
            if stored_photo:
                self.store.discard_photo(stored_photo)
            raise UpdateFailed(str(e)) from e
        if updated is None:
            # deleted while this request was in flight
            if stored_photo:
                self.store.discard_photo(stored_photo)
            raise EmployeeNotFound(employee_id)
        return updated

    def delete_employee(self, employee_id: str) -> None:
        self.get_employee(employee_id)
        if not self.store.soft_delete(employee_id):
            raise EmployeeNotFound(employee_id)

    def upload_photo(self, employee_id: str, photo: Any) -> Employee:
        check_photo_upload(photo, self.validator)
        self.get_employee(employee_id)
        return self.update_employee(employee_id, {"profile_photo": photo})

    def delete_photo(self, employee_id: str) -> Employee:
        return self.update_employee(employee_id, {"profile_photo": None})
