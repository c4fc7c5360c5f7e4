"""
Field normalization

Clients send employee payloads in two historical shapes (snake_case form
fields and camelCase record fields). Everything downstream of this module
only sees the canonical camelCase record keys.
"""
from typing import Any, Dict, Mapping, Optional, Tuple

# canonical key -> accepted input keys, highest precedence first
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gender": ("gender",),
    "maritalStatus": ("marital_status", "maritalStatus"),
    "phoneNo": ("phone", "phoneNo"),
    "email": ("email",),
    "address": ("address",),
    "dateOfBirth": ("date_of_birth", "dateOfBirth"),
    "nationality": ("nationality",),
    "hireDate": ("hire_date", "hireDate"),
    "department": ("department",),
    "emergencyContactName": ("emergency_contact_name", "emergencyContactName"),
    "emergencyContactPhone": ("emergency_contact_phone", "emergencyContactPhone"),
    "jobTitle": ("position", "jobTitle"),
    "profilePhoto": ("profile_photo", "profilePhoto"),
}

DEFAULTS: Dict[str, Any] = {
    "name": "",
    "gender": "other",
    "maritalStatus": "single",
    "phoneNo": "",
    "email": "",
    "address": "",
    "dateOfBirth": "",
    "nationality": "american",
    "hireDate": "",
    "department": "",
    "emergencyContactName": "",
    "emergencyContactPhone": "",
    "jobTitle": "",
    "salary": 0.0,
    "profilePhoto": None,
}


def pick(data: Mapping[str, Any], keys: Tuple[str, ...]) -> Tuple[Optional[str], Any]:
    """Return (key, value) for the first alias present with a non-null value"""
    for key in keys:
        if data.get(key) is not None:
            return key, data[key]
    return None, None


def present_key(data: Mapping[str, Any], keys: Tuple[str, ...]) -> Optional[str]:
    """First alias present in the payload at all, null values included"""
    for key in keys:
        if key in data:
            return key
    return None


def coerce_salary(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    return float(value)


def split_name(name: str) -> Tuple[str, str]:
    first, _, last = (name or "").strip().partition(" ")
    return first, last.strip()


def derive_name(data: Mapping[str, Any], current_name: Optional[str] = None) -> Optional[str]:
    """
    first_name + last_name wins over name. With a current name (updates),
    a lone first_name or last_name replaces just that half.
    """
    first = data.get("first_name")
    last = data.get("last_name")
    if first is not None and last is not None:
        return f"{first} {last}".strip()
    if current_name is not None and (first is not None or last is not None):
        current_first, current_last = split_name(current_name)
        return f"{first if first is not None else current_first} {last if last is not None else current_last}".strip()
    if data.get("name") is not None:
        return data["name"]
    return None


def normalize_employee_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Full canonical record for a create, defaults filled in"""
    record = dict(DEFAULTS)
    name = derive_name(data)
    if name is not None:
        record["name"] = name
    for canonical, aliases in FIELD_ALIASES.items():
        _, value = pick(data, aliases)
        if value is not None:
            record[canonical] = value
    record["salary"] = coerce_salary(data.get("salary"))
    return record


def normalize_partial(data: Mapping[str, Any], current_name: Optional[str] = None) -> Dict[str, Any]:
    """Canonical fields for only the logical fields present in an update payload"""
    changes: Dict[str, Any] = {}
    name = derive_name(data, current_name)
    if name is not None:
        changes["name"] = name
    for canonical, aliases in FIELD_ALIASES.items():
        key = present_key(data, aliases)
        if key is None:
            continue
        _, value = pick(data, aliases)
        if value is None and canonical != "profilePhoto":
            continue
        changes[canonical] = value
    if "salary" in data and data["salary"] is not None:
        changes["salary"] = coerce_salary(data["salary"])
    return changes


def merge_employee_data(existing: Mapping[str, Any], changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay normalized changes on an existing record document"""
    merged = dict(existing)
    merged.update(changes)
    return merged
