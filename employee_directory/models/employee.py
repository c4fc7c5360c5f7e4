"""
Employee model and schemas
"""
import re
import uuid
from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from employee_directory.config import options


class Employee(BaseModel):
    """Canonical employee record, stored and serialized with camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    gender: str = "other"
    marital_status: str = "single"
    phone_no: str = ""
    email: str = ""
    address: str = ""
    date_of_birth: str = ""
    nationality: str = "american"
    hire_date: str = ""
    department: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    job_title: str = ""
    salary: float = 0.0
    profile_photo: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""
    deleted_at: Optional[str] = None

    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def to_document(self) -> dict:
        """Shape written to the JSON document"""
        return self.model_dump(by_alias=True)


class UploadedPhoto(BaseModel):
    """Pending upload handle, resolved to a stored path before persistence"""
    filename: str
    content_type: Optional[str] = None
    content: bytes = b""

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[1].lower()


# Request bodies. Every rule runs and every failure is reported; the
# validator service turns pydantic's error list into {field: [messages]}.

PHONE_PATTERN = re.compile(r"^\d{10,15}$")
NATIONALITIES = {n.lower() for n in options.NATIONALITIES}

Department = Literal[tuple(options.DEPARTMENTS)]
Gender = Literal[tuple(options.GENDERS)]
MaritalStatus = Literal[tuple(options.MARITAL_STATUSES)]

# blank strings and nulls count as missing for these
REQUIRED_FIELDS = (
    "first_name", "last_name", "name", "email", "phone", "department",
    "position", "salary", "date_of_birth", "hire_date", "address",
)


def phone_error(label: str) -> str:
    return f"The {label} must be a valid phone number with 10-15 digits."


def rule_error(message: str) -> PydanticCustomError:
    """Failure whose message is already in its final, client-facing wording"""
    return PydanticCustomError("employee_rule", message)


class EmployeeRequestRules(BaseModel):
    """Rules shared by the create and update bodies; subclasses declare the fields"""

    @field_validator(*REQUIRED_FIELDS, mode="before", check_fields=False)
    @classmethod
    def reject_blank(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("blank", "Field required")
        return v

    @field_validator("phone", "emergency_contact_phone", check_fields=False)
    @classmethod
    def validate_phone(cls, v, info: ValidationInfo):
        if v is None or not v.strip():
            return v
        if not PHONE_PATTERN.match(re.sub(r"\D", "", v)):
            raise rule_error(phone_error(info.field_name.replace("_", " ")))
        return v

    @field_validator("nationality", check_fields=False)
    @classmethod
    def validate_nationality(cls, v):
        if v is not None and v.lower() not in NATIONALITIES:
            raise rule_error("Please select a valid nationality")
        return v

    @field_validator("date_of_birth", check_fields=False)
    @classmethod
    def validate_date_of_birth(cls, v, info: ValidationInfo):
        context = info.context or {}
        today = context.get("today") or date.today()
        if v >= today:
            raise rule_error("Date of birth must be before today")
        # on update, a hire date this request leaves alone still has to follow
        stored_hire_date = context.get("stored_dates", {}).get("hire_date")
        if stored_hire_date is not None and stored_hire_date < v:
            raise rule_error("Date of birth must be before or equal to hire date")
        return v

    @field_validator("hire_date", check_fields=False)
    @classmethod
    def validate_hire_date(cls, v, info: ValidationInfo):
        if "date_of_birth" not in info.data:
            # date of birth failed its own rules
            return v
        birth_date = info.data["date_of_birth"]
        if birth_date is None:
            birth_date = (info.context or {}).get("stored_dates", {}).get("date_of_birth")
        if birth_date is not None and v < birth_date:
            raise rule_error("Hire date must be after or equal to date of birth")
        return v

    @field_serializer("date_of_birth", "hire_date", check_fields=False)
    def serialize_date(self, v: Optional[date]) -> Optional[str]:
        return v.isoformat() if v is not None else None

    def to_fields(self, only_sent: bool = False) -> Dict[str, Any]:
        """Validated values by field name; a pending upload is passed through as is"""
        fields = self.model_dump(exclude={"profile_photo"}, exclude_unset=only_sent)
        if not only_sent or "profile_photo" in self.model_fields_set:
            fields["profile_photo"] = self.profile_photo
        return fields


class EmployeeCreateRequest(EmployeeRequestRules):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: EmailStr
    phone: str = Field(..., validation_alias=AliasChoices("phone", "phoneNo"))
    department: Department
    position: str = Field(..., max_length=255, validation_alias=AliasChoices("position", "jobTitle"))
    salary: float = Field(..., ge=0, allow_inf_nan=False)
    date_of_birth: date = Field(..., validation_alias=AliasChoices("date_of_birth", "dateOfBirth"))
    hire_date: date = Field(..., validation_alias=AliasChoices("hire_date", "hireDate"))
    address: str = Field(..., max_length=500)
    profile_photo: Any = Field(None, validation_alias=AliasChoices("profile_photo", "profilePhoto"))
    gender: Optional[Gender] = None
    marital_status: Optional[MaritalStatus] = Field(
        None, validation_alias=AliasChoices("marital_status", "maritalStatus")
    )
    nationality: Optional[str] = None
    emergency_contact_name: Optional[str] = Field(
        None, max_length=255, validation_alias=AliasChoices("emergency_contact_name", "emergencyContactName")
    )
    emergency_contact_phone: Optional[str] = Field(
        None, validation_alias=AliasChoices("emergency_contact_phone", "emergencyContactPhone")
    )


class NamedEmployeeCreateRequest(EmployeeCreateRequest):
    """Create body carrying a single `name` instead of first_name + last_name"""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    name: str = Field(..., max_length=200)


class EmployeeUpdateRequest(EmployeeRequestRules):
    """Partial update: only the fields present are checked"""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    name: Optional[str] = Field(None, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, validation_alias=AliasChoices("phone", "phoneNo"))
    department: Optional[Department] = None
    position: Optional[str] = Field(None, max_length=255, validation_alias=AliasChoices("position", "jobTitle"))
    salary: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    date_of_birth: Optional[date] = Field(None, validation_alias=AliasChoices("date_of_birth", "dateOfBirth"))
    hire_date: Optional[date] = Field(None, validation_alias=AliasChoices("hire_date", "hireDate"))
    address: Optional[str] = Field(None, max_length=500)
    profile_photo: Any = Field(None, validation_alias=AliasChoices("profile_photo", "profilePhoto"))
    gender: Optional[Gender] = None
    marital_status: Optional[MaritalStatus] = Field(
        None, validation_alias=AliasChoices("marital_status", "maritalStatus")
    )
    nationality: Optional[str] = None
    emergency_contact_name: Optional[str] = Field(
        None, max_length=255, validation_alias=AliasChoices("emergency_contact_name", "emergencyContactName")
    )
    emergency_contact_phone: Optional[str] = Field(
        None, validation_alias=AliasChoices("emergency_contact_phone", "emergencyContactPhone")
    )


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    gender: str
    marital_status: str
    phone_no: str
    email: str
    address: str
    date_of_birth: str
    nationality: str
    hire_date: str
    department: str
    emergency_contact_name: str
    emergency_contact_phone: str
    job_title: str
    salary: float
    profile_photo: Optional[str] = None
    profile_photo_url: Optional[str] = None
    created_at: str
    updated_at: str


class QueryResult(BaseModel):
    """One page of a filtered, sorted employee listing"""
    items: List[Employee]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return -(-self.total // self.per_page)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page
