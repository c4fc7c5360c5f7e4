import pytest
from fastapi.testclient import TestClient

from employee_directory.database.employee_store import EmployeeStore
from employee_directory.database.json_storage import JsonFileStorage
from employee_directory.main import app, rate_limiter
from employee_directory.routes.employee import get_employee_service
from employee_directory.services.employee_service import EmployeeService


def employee_payload(**overrides):
    data = {
        "first_name": "John",
        "last_name": "Doe",
        "gender": "male",
        "marital_status": "single",
        "phone": "1234567890",
        "email": "john.doe@example.com",
        "address": "123 Main St",
        "date_of_birth": "1990-01-01",
        "nationality": "american",
        "hire_date": "2023-01-01",
        "department": "engineering",
        "emergencyContactName": "Jane Doe",
        "emergencyContactPhone": "0987654321",
        "position": "Software Engineer",
        "salary": 75000.00,
    }
    data.update(overrides)
    return data


def record(**overrides):
    """Canonical (already validated) record as the store receives it"""
    data = {
        "name": "John Doe",
        "gender": "male",
        "maritalStatus": "single",
        "phoneNo": "1234567890",
        "email": "john.doe@example.com",
        "address": "123 Main St",
        "dateOfBirth": "1990-01-01",
        "nationality": "american",
        "hireDate": "2023-01-01",
        "department": "engineering",
        "emergencyContactName": "Jane Doe",
        "emergencyContactPhone": "0987654321",
        "jobTitle": "Software Engineer",
        "salary": 75000.0,
        "profilePhoto": None,
    }
    data.update(overrides)
    return data


@pytest.fixture
def data_file(tmp_path):
    return str(tmp_path / "storage" / "employees.json")


@pytest.fixture
def upload_dir(tmp_path):
    return str(tmp_path / "uploads")


@pytest.fixture
def store(data_file, upload_dir):
    return EmployeeStore(JsonFileStorage(data_file), upload_dir)


@pytest.fixture
def service(store):
    return EmployeeService(store)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_employee_service] = lambda: service
    rate_limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    rate_limiter.reset()


@pytest.fixture
def create_employee(client):
    def _create(**overrides):
        response = client.post("/api/employees", json=employee_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _create


@pytest.fixture
def error_client(service):
    """Client that hands back 500 responses instead of re-raising server errors"""
    app.dependency_overrides[get_employee_service] = lambda: service
    rate_limiter.reset()
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    rate_limiter.reset()
