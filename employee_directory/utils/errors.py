"""
Error taxonomy and problem-detail response bodies
"""
from typing import Dict, List


class EmployeeDirectoryError(Exception):
    """Base class for errors surfaced to API clients"""
    status_code = 500
    type_uri = "https://tools.ietf.org/html/rfc7231#section-6.6.1"
    title = "Server Error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_problem(self) -> dict:
        return {
            "type": self.type_uri,
            "title": self.title,
            "status": self.status_code,
            "detail": self.detail,
        }


class ValidationFailed(EmployeeDirectoryError):
    """One or more field rules were violated; nothing has been written"""
    status_code = 422
    type_uri = "https://tools.ietf.org/html/rfc7231#section-6.5.1"
    title = "Validation Failed"

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__("The request data failed validation")
        self.errors = errors

    def to_problem(self) -> dict:
        problem = super().to_problem()
        problem["errors"] = self.errors
        return problem


class EmployeeNotFound(EmployeeDirectoryError):
    status_code = 404
    type_uri = "https://tools.ietf.org/html/rfc7231#section-6.5.4"
    title = "Employee Not Found"

    def __init__(self, employee_id: str):
        super().__init__("The requested employee could not be found")
        self.employee_id = employee_id


class UpdateFailed(EmployeeDirectoryError):
    title = "Update Failed"

    def __init__(self, message: str):
        super().__init__(f"Failed to update employee: {message}")


class RateLimitExceeded(EmployeeDirectoryError):
    status_code = 429
    type_uri = "https://tools.ietf.org/html/rfc6585#section-4"
    title = "Too Many Requests"

    def __init__(self, retry_after: int):
        super().__init__(f"Rate limit exceeded. Retry in {retry_after} seconds.")
        self.retry_after = retry_after


class InternalError(EmployeeDirectoryError):
    title = "Internal Server Error"

    def __init__(self):
        super().__init__("An unexpected error occurred")
