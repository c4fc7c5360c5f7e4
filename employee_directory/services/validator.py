"""
Employee payload validation

The request models in employee_directory.models.employee hold the field
rules. This module picks the model for a payload, supplies the validation
context (today's date, stored dates on update), and turns pydantic's error
list into the {field: [messages]} shape clients get back, keyed by the field
name the client used.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from pydantic import AliasChoices, TypeAdapter, ValidationError

from employee_directory.config import options
from employee_directory.config.settings import settings
from employee_directory.models.employee import (
    Employee,
    EmployeeCreateRequest,
    EmployeeRequestRules,
    EmployeeUpdateRequest,
    NamedEmployeeCreateRequest,
    UploadedPhoto,
    phone_error,
)
from employee_directory.services.normalizer import (
    FIELD_ALIASES,
    normalize_employee_data,
    normalize_partial,
    pick,
    present_key,
)
from employee_directory.utils.errors import ValidationFailed

logger = logging.getLogger(__name__)

_date_adapter = TypeAdapter(date)

PHOTO_MIME_TYPES = {
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
}

MESSAGES = {
    "first_name.required": "First name is required",
    "first_name.max": "First name must not exceed 100 characters",
    "last_name.required": "Last name is required",
    "last_name.max": "Last name must not exceed 100 characters",
    "name.required": "Name is required",
    "name.max": "Name must not exceed 200 characters",
    "email.required": "Email address is required",
    "email.invalid": "Please provide a valid email address",
    "phone.required": "Phone number is required",
    "phone.invalid": phone_error("phone"),
    "department.required": "Department is required",
    "department.invalid": "Department must be one of: " + ", ".join(options.DEPARTMENTS),
    "position.required": "Position is required",
    "position.max": "Position must not exceed 255 characters",
    "salary.required": "Salary is required",
    "salary.invalid": "Salary must be a valid number",
    "salary.min": "Salary must be greater than or equal to 0",
    "hire_date.required": "Hire date is required",
    "hire_date.invalid": "Please provide a valid hire date",
    "date_of_birth.required": "Date of birth is required",
    "date_of_birth.invalid": "Please provide a valid date of birth",
    "address.required": "Address is required",
    "address.max": "Address must not exceed 500 characters",
    "profile_photo.image": "Profile photo must be an image file",
    "profile_photo.max": "Profile photo must not exceed 2MB",
    "profile_photo.mimes": "Profile photo must be a file of type: jpeg, png, jpg, gif",
    "gender.invalid": "Gender must be one of: " + ", ".join(options.GENDERS),
    "marital_status.invalid": "Marital status must be one of: " + ", ".join(options.MARITAL_STATUSES),
    "nationality.invalid": "Please select a valid nationality",
    "emergency_contact_name.max": "Emergency contact name must not exceed 255 characters",
    "emergency_contact_phone.invalid": phone_error("emergency contact phone"),
}


def parse_date(value: Any) -> Optional[date]:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return _date_adapter.validate_python(value.strip())
    except ValidationError:
        return None


def field_names(model: Type[EmployeeRequestRules]) -> Dict[str, str]:
    """Every accepted input key -> model field name"""
    names = {}
    for name, field in model.model_fields.items():
        names[name] = name
        if isinstance(field.validation_alias, AliasChoices):
            for choice in field.validation_alias.choices:
                names[str(choice)] = name
    return names


def error_message(field: str, key: str, error: Mapping[str, Any]) -> str:
    kind = error["type"]
    if kind in ("missing", "blank"):
        return MESSAGES[f"{field}.required"]
    if kind == "employee_rule":
        return error["msg"]
    if kind == "string_too_long":
        return MESSAGES[f"{field}.max"]
    if kind == "greater_than_equal":
        return MESSAGES[f"{field}.min"]
    return MESSAGES.get(f"{field}.invalid", f"The {key.replace('_', ' ')} must be a string.")


def collect_errors(model: Type[EmployeeRequestRules], exc: ValidationError) -> Dict[str, List[str]]:
    """pydantic errors -> {key the client sent: [messages]}"""
    names = field_names(model)
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        key = str(error["loc"][0]) if error["loc"] else "body"
        field = names.get(key)
        message = error_message(field, key, error) if field else error["msg"]
        errors.setdefault(key, []).append(message)
    return errors


def create_model_for(data: Mapping[str, Any]) -> Type[EmployeeCreateRequest]:
    """`name` alone may stand in for first_name + last_name"""
    if "name" in data and not any(k in data for k in ("first_name", "last_name")):
        return NamedEmployeeCreateRequest
    return EmployeeCreateRequest


def stored_dates(data: Mapping[str, Any], existing: Optional[Employee]) -> Dict[str, date]:
    """Dates on the stored record that this update leaves untouched"""
    if existing is None:
        return {}
    dates = {}
    for field, canonical, current in (
        ("date_of_birth", "dateOfBirth", existing.date_of_birth),
        ("hire_date", "hireDate", existing.hire_date),
    ):
        parsed = parse_date(current)
        if parsed is not None and present_key(data, FIELD_ALIASES[canonical]) is None:
            dates[field] = parsed
    return dates


class EmployeeValidator:
    """Validates create/update payloads against the employee field rules"""

    def __init__(
        self,
        max_photo_size_kb: int = settings.MAX_PHOTO_SIZE_KB,
        photo_types: Sequence[str] = settings.ALLOWED_PHOTO_TYPES,
        today=date.today,
    ):
        self.max_photo_size_kb = max_photo_size_kb
        self.photo_types = [t.lower() for t in photo_types]
        self.today = today

    def validate_create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Return the full canonical record, or raise ValidationFailed"""
        request, errors = self.check(data)
        if errors:
            logger.info("❌ Create rejected, invalid fields: %s", ", ".join(errors))
            raise ValidationFailed(errors)
        return normalize_employee_data(request.to_fields())

    def validate_update(self, data: Mapping[str, Any], existing: Employee) -> Dict[str, Any]:
        """Return canonical changes for the supplied fields, or raise ValidationFailed"""
        request, errors = self.check(data, existing)
        if errors:
            logger.info("❌ Update of %s rejected, invalid fields: %s", existing.id, ", ".join(errors))
            raise ValidationFailed(errors)
        return normalize_partial(request.to_fields(only_sent=True), current_name=existing.name)

    def check(
        self, data: Mapping[str, Any], existing: Optional[Employee] = None
    ) -> Tuple[Optional[EmployeeRequestRules], Dict[str, List[str]]]:
        """Run every rule; `existing` switches to update mode"""
        model = EmployeeUpdateRequest if existing is not None else create_model_for(data)
        context = {"today": self.today(), "stored_dates": stored_dates(data, existing)}

        request = None
        errors: Dict[str, List[str]] = {}
        try:
            request = model.model_validate(data, context=context)
        except ValidationError as e:
            errors = collect_errors(model, e)

        key, photo = pick(data, FIELD_ALIASES["profilePhoto"])
        if photo is not None:
            for message in self.check_photo(photo, existing):
                errors.setdefault(key, []).append(message)
        return request, errors

    def check_photo(self, value: Any, existing: Optional[Employee] = None) -> List[str]:
        if isinstance(value, str):
            # a client echoing back the stored path is not a new upload
            if existing is not None and value == existing.profile_photo:
                return []
            return [MESSAGES["profile_photo.image"]]
        if not isinstance(value, UploadedPhoto):
            return [MESSAGES["profile_photo.image"]]

        messages = []
        content_type = (value.content_type or "").lower()
        if not content_type.startswith("image/"):
            messages.append(MESSAGES["profile_photo.image"])
        if value.size > self.max_photo_size_kb * 1024:
            messages.append(MESSAGES["profile_photo.max"])
        allowed_mimes = {PHOTO_MIME_TYPES[t] for t in self.photo_types if t in PHOTO_MIME_TYPES}
        if value.extension not in self.photo_types or content_type not in allowed_mimes:
            messages.append(MESSAGES["profile_photo.mimes"])
        return messages


def check_photo_upload(value: Any, validator: Optional[EmployeeValidator] = None) -> None:
    """Validate a standalone photo upload (required), raising ValidationFailed"""
    validator = validator or EmployeeValidator()
    if value is None:
        raise ValidationFailed({"profile_photo": ["Profile photo is required"]})
    messages = validator.check_photo(value)
    if messages:
        raise ValidationFailed({"profile_photo": messages})
