from datetime import date

import pytest

from conftest import employee_payload
from employee_directory.models.employee import Employee, UploadedPhoto
from employee_directory.services.validator import EmployeeValidator, check_photo_upload
from employee_directory.utils.errors import ValidationFailed


@pytest.fixture
def validator():
    return EmployeeValidator(today=lambda: date(2025, 6, 15))


@pytest.fixture
def existing():
    return Employee(
        id="emp-1",
        name="Bob Johnson",
        email="bob@example.com",
        phone_no="1234567890",
        date_of_birth="1988-12-10",
        hire_date="2021-06-01",
        department="sales",
        job_title="Sales Representative",
        salary=50000.0,
        address="789 Pine St",
        profile_photo="avatars/existing.png",
        created_at="2024-01-01T00:00:00+00:00",
        updated_at="2024-01-01T00:00:00+00:00",
    )


def errors_for(validator, data, existing=None):
    with pytest.raises(ValidationFailed) as exc_info:
        if existing is None:
            validator.validate_create(data)
        else:
            validator.validate_update(data, existing)
    return exc_info.value.errors


def test_valid_create_returns_canonical_record(validator):
    record = validator.validate_create(employee_payload())
    assert record["name"] == "John Doe"
    assert record["phoneNo"] == "1234567890"
    assert record["jobTitle"] == "Software Engineer"
    assert record["salary"] == 75000.0


def test_empty_create_reports_every_required_field(validator):
    errors = errors_for(validator, {})
    assert errors["first_name"] == ["First name is required"]
    assert errors["last_name"] == ["Last name is required"]
    assert errors["email"] == ["Email address is required"]
    assert errors["phone"] == ["Phone number is required"]
    assert errors["department"] == ["Department is required"]
    assert errors["position"] == ["Position is required"]
    assert errors["salary"] == ["Salary is required"]
    assert errors["hire_date"] == ["Hire date is required"]
    assert errors["date_of_birth"] == ["Date of birth is required"]
    assert errors["address"] == ["Address is required"]


def test_all_failures_are_reported_not_just_the_first(validator):
    errors = errors_for(validator, employee_payload(email="invalid-email", phone="invalid-phone", salary=-5))
    assert errors["email"] == ["Please provide a valid email address"]
    assert errors["phone"] == ["The phone must be a valid phone number with 10-15 digits."]
    assert errors["salary"] == ["Salary must be greater than or equal to 0"]


@pytest.mark.parametrize("phone", ["(555) 123-4567", "+44 20 7946 0958", "123456789012345"])
def test_phone_accepts_formatted_numbers(validator, phone):
    validator.validate_create(employee_payload(phone=phone))


@pytest.mark.parametrize("phone", ["123-456", "1234567890123456"])
def test_phone_digit_count_enforced(validator, phone):
    assert "phone" in errors_for(validator, employee_payload(phone=phone))


def test_length_limits(validator):
    errors = errors_for(validator, employee_payload(first_name="x" * 101, position="p" * 256, address="a" * 501))
    assert errors["first_name"] == ["First name must not exceed 100 characters"]
    assert errors["position"] == ["Position must not exceed 255 characters"]
    assert errors["address"] == ["Address must not exceed 500 characters"]


def test_department_must_be_enumerated(validator):
    errors = errors_for(validator, employee_payload(department="legal"))
    assert errors["department"][0].startswith("Department must be one of")


def test_salary_must_be_numeric(validator):
    assert errors_for(validator, employee_payload(salary="lots"))["salary"] == ["Salary must be a valid number"]
    assert validator.validate_create(employee_payload(salary="1200.50"))["salary"] == 1200.5


def test_hire_date_before_birth_fails(validator):
    errors = errors_for(validator, employee_payload(date_of_birth="2023-01-01", hire_date="1990-01-01"))
    assert errors["hire_date"] == ["Hire date must be after or equal to date of birth"]


def test_hire_date_equal_to_birth_passes(validator):
    validator.validate_create(employee_payload(date_of_birth="1990-01-01", hire_date="1990-01-01"))


def test_date_of_birth_must_be_before_today(validator):
    errors = errors_for(validator, employee_payload(date_of_birth="2025-06-15", hire_date="2025-06-15"))
    assert errors["date_of_birth"] == ["Date of birth must be before today"]


def test_invalid_dates(validator):
    errors = errors_for(validator, employee_payload(date_of_birth="not-a-date", hire_date="2023-13-45"))
    assert errors["date_of_birth"] == ["Please provide a valid date of birth"]
    assert errors["hire_date"] == ["Please provide a valid hire date"]


def test_camel_case_keys_name_the_errors(validator):
    payload = employee_payload()
    del payload["hire_date"]
    payload["hireDate"] = "1980-01-01"
    errors = errors_for(validator, payload)
    assert errors == {"hireDate": ["Hire date must be after or equal to date of birth"]}


def test_name_accepted_instead_of_first_and_last(validator):
    payload = employee_payload(name="Grace Hopper")
    del payload["first_name"]
    del payload["last_name"]
    assert validator.validate_create(payload)["name"] == "Grace Hopper"


def test_optional_enumerations(validator):
    errors = errors_for(validator, employee_payload(gender="unknown", marital_status="engaged", nationality="martian"))
    assert set(errors) == {"gender", "marital_status", "nationality"}
    validator.validate_create(employee_payload(nationality="American"))


def test_emergency_contact_phone_format(validator):
    errors = errors_for(validator, employee_payload(emergencyContactPhone="12"))
    assert errors["emergencyContactPhone"] == [
        "The emergency contact phone must be a valid phone number with 10-15 digits."
    ]
    validator.validate_create(employee_payload(emergencyContactPhone=""))


def test_oversized_photo_rejected(validator):
    photo = UploadedPhoto(filename="large.jpg", content_type="image/jpeg", content=b"0" * (3000 * 1024))
    errors = errors_for(validator, employee_payload(profile_photo=photo))
    assert errors["profile_photo"] == ["Profile photo must not exceed 2MB"]


def test_photo_type_rejected(validator):
    photo = UploadedPhoto(filename="resume.pdf", content_type="application/pdf", content=b"%PDF")
    errors = errors_for(validator, employee_payload(profilePhoto=photo))
    assert errors["profilePhoto"] == [
        "Profile photo must be an image file",
        "Profile photo must be a file of type: jpeg, png, jpg, gif",
    ]


def test_update_only_checks_supplied_fields(validator, existing):
    changes = validator.validate_update({"salary": 55000, "department": "finance"}, existing)
    assert changes == {"salary": 55000.0, "department": "finance"}


def test_update_rejects_blank_supplied_field(validator, existing):
    assert errors_for(validator, {"email": ""}, existing) == {"email": ["Email address is required"]}


def test_update_hire_date_checked_against_stored_birth_date(validator, existing):
    errors = errors_for(validator, {"hire_date": "1980-01-01"}, existing)
    assert errors == {"hire_date": ["Hire date must be after or equal to date of birth"]}


def test_update_birth_date_checked_against_stored_hire_date(validator, existing):
    errors = errors_for(validator, {"dateOfBirth": "2022-01-01"}, existing)
    assert errors == {"dateOfBirth": ["Date of birth must be before or equal to hire date"]}


def test_update_allows_echoing_stored_photo_path(validator, existing):
    changes = validator.validate_update({"profilePhoto": "avatars/existing.png"}, existing)
    assert changes == {"profilePhoto": "avatars/existing.png"}


def test_standalone_photo_upload_is_required():
    with pytest.raises(ValidationFailed) as exc_info:
        check_photo_upload(None)
    assert exc_info.value.errors == {"profile_photo": ["Profile photo is required"]}


def test_dates_are_normalized_to_iso_dates(validator, existing):
    record = validator.validate_create(employee_payload(date_of_birth="1990-01-01T00:00:00"))
    assert record["dateOfBirth"] == "1990-01-01"
    changes = validator.validate_update({"hireDate": "2022-03-04T00:00:00"}, existing)
    assert changes == {"hireDate": "2022-03-04"}


def test_date_order_reported_alongside_other_failures(validator):
    errors = errors_for(validator, employee_payload(email="nope", date_of_birth="2023-01-01", hire_date="1990-01-01"))
    assert errors == {
        "email": ["Please provide a valid email address"],
        "hire_date": ["Hire date must be after or equal to date of birth"],
    }


def test_non_string_text_field(validator):
    errors = errors_for(validator, employee_payload(first_name=42))
    assert errors["first_name"] == ["The first name must be a string."]


def test_update_with_both_dates_ignores_stored_values(validator, existing):
    changes = validator.validate_update({"date_of_birth": "2022-01-01", "hire_date": "2024-01-01"}, existing)
    assert changes == {"dateOfBirth": "2022-01-01", "hireDate": "2024-01-01"}
