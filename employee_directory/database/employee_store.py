"""
Employee store - CRUD and soft delete over the whole-collection document
"""
import logging
import os
import threading
import uuid
from typing import Any, Dict, List, Optional

from employee_directory.config.settings import settings
from employee_directory.database.json_storage import DocumentStorage, JsonFileStorage
from employee_directory.models.employee import Employee
from employee_directory.services.normalizer import merge_employee_data
from employee_directory.utils.helpers import next_timestamp, now_iso

logger = logging.getLogger(__name__)


class EmployeeStore:
    """
    Every mutation reads the full collection, changes it in memory and
    writes the full collection back, inside one lock so concurrent
    requests in this process cannot drop each other's writes.
    """

    def __init__(self, storage: DocumentStorage, upload_dir: str = None):
        self.storage = storage
        self.upload_dir = upload_dir or settings.UPLOAD_DIR
        self._lock = threading.RLock()

    def _load(self) -> List[Employee]:
        return [Employee.model_validate(doc) for doc in self.storage.load()]

    def _save(self, employees: List[Employee]) -> None:
        self.storage.save_all([employee.to_document() for employee in employees])

    def list_all(self) -> List[Employee]:
        """All records in insertion order, soft-deleted included"""
        with self._lock:
            return self._load()

    def find_by_id(self, employee_id: str) -> Optional[Employee]:
        """Direct lookup; soft-deleted records are returned too"""
        with self._lock:
            for employee in self._load():
                if employee.id == employee_id:
                    return employee
        return None

    def find_active(self, employee_id: str) -> Optional[Employee]:
        employee = self.find_by_id(employee_id)
        if employee is None or employee.is_deleted():
            return None
        return employee

    def create(self, data: Dict[str, Any]) -> Employee:
        with self._lock:
            employees = self._load()
            timestamp = now_iso()
            document = dict(data)
            document.update(
                id=str(uuid.uuid4()),
                createdAt=timestamp,
                updatedAt=timestamp,
                deletedAt=None,
            )
            employee = Employee.model_validate(document)
            employees.append(employee)
            self._save(employees)
        logger.info("✅ Created employee %s (%s)", employee.id, employee.name)
        return employee

    def update(self, employee_id: str, changes: Dict[str, Any]) -> Optional[Employee]:
        """Merge canonical changes over the stored record; None if the id is unknown or soft-deleted"""
        with self._lock:
            employees = self._load()
            for index, current in enumerate(employees):
                if current.id == employee_id:
                    break
            else:
                return None
            if current.is_deleted():
                return None

            protected = {"id", "createdAt", "deletedAt"}
            merged = merge_employee_data(
                current.to_document(),
                {k: v for k, v in changes.items() if k not in protected},
            )
            merged["updatedAt"] = next_timestamp(current.updated_at)
            updated = Employee.model_validate(merged)
            employees[index] = updated
            self._save(employees)
        logger.info("✏️ Updated employee %s", employee_id)
        return updated

    def soft_delete(self, employee_id: str) -> bool:
        """Stamp deletedAt; False if the id is unknown or already deleted"""
        with self._lock:
            employees = self._load()
            for employee in employees:
                if employee.id == employee_id and not employee.is_deleted():
                    timestamp = next_timestamp(employee.updated_at)
                    employee.deleted_at = timestamp
                    employee.updated_at = timestamp
                    self._save(employees)
                    break
            else:
                return False
        logger.info("🗑️ Soft-deleted employee %s", employee_id)
        return True

    def store_uploaded_photo(self, content: bytes, extension: str, directory: str = None) -> str:
        """Write upload bytes under a random name; returns "<directory>/<name>.<ext>" """
        directory = directory or settings.PHOTO_DIRECTORY
        extension = extension.lstrip(".").lower()
        filename = uuid.uuid4().hex + (f".{extension}" if extension else "")
        relative_path = f"{directory}/{filename}"

        target_dir = os.path.join(self.upload_dir, directory)
        os.makedirs(target_dir, exist_ok=True)
        with open(os.path.join(target_dir, filename), "wb") as buffer:
            buffer.write(content)
        logger.info("📷 Stored photo %s (%d bytes)", relative_path, len(content))
        return relative_path

    def discard_photo(self, relative_path: str) -> None:
        """Remove a stored upload that never made it into a record"""
        path = os.path.join(self.upload_dir, relative_path)
        if os.path.exists(path):
            os.remove(path)
            logger.info("🧹 Discarded photo %s", relative_path)


_stores: Dict[tuple, EmployeeStore] = {}


def get_default_store() -> EmployeeStore:
    """One shared store (and lock) per data file"""
    key = (settings.DATA_FILE, settings.UPLOAD_DIR)
    if key not in _stores:
        _stores[key] = EmployeeStore(JsonFileStorage(settings.DATA_FILE), settings.UPLOAD_DIR)
    return _stores[key]
