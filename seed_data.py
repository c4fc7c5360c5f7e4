import os
import sys

# Ensure usage of the current directory for imports
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from employee_directory.config.settings import settings
from employee_directory.database.employee_store import get_default_store
from employee_directory.services.validator import EmployeeValidator

SAMPLE_EMPLOYEES = [
    {
        "first_name": "John", "last_name": "Doe", "gender": "male", "marital_status": "married",
        "phone": "555-123-4567", "email": "john.doe@example.com", "address": "123 Main St, Springfield",
        "date_of_birth": "1988-04-12", "nationality": "american", "hire_date": "2015-06-01",
        "department": "engineering", "emergencyContactName": "Jane Doe",
        "emergencyContactPhone": "555-987-6543", "position": "Senior Software Engineer", "salary": 125000,
    },
    {
        "first_name": "Priya", "last_name": "Sharma", "gender": "female", "marital_status": "single",
        "phone": "+91 98765 43210", "email": "priya.sharma@example.com", "address": "42 Lake View Rd",
        "date_of_birth": "1993-09-23", "nationality": "indian", "hire_date": "2019-02-15",
        "department": "marketing", "position": "Marketing Manager", "salary": 82000,
    },
    {
        "first_name": "Carlos", "last_name": "Mendes", "gender": "male", "marital_status": "divorced",
        "phone": "(11) 91234-5678", "email": "carlos.mendes@example.com", "address": "Rua Augusta 900",
        "date_of_birth": "1981-01-30", "nationality": "brazilian", "hire_date": "2010-11-08",
        "department": "finance", "position": "Financial Analyst", "salary": 70000,
    },
    {
        "first_name": "Amara", "last_name": "Okafor", "gender": "female", "marital_status": "married",
        "phone": "0803 555 0199", "email": "amara.okafor@example.com", "address": "7 Marina Close",
        "date_of_birth": "1990-07-04", "nationality": "nigerian", "hire_date": "2021-03-22",
        "department": "hr", "position": "HR Business Partner", "salary": 68000,
    },
    {
        "first_name": "Lukas", "last_name": "Becker", "gender": "male", "marital_status": "single",
        "phone": "030 1234 5678", "email": "lukas.becker@example.com", "address": "Torstrasse 15",
        "date_of_birth": "1996-12-02", "nationality": "german", "hire_date": "2022-09-01",
        "department": "sales", "position": "Account Executive", "salary": 75000,
    },
]


def seed_data():
    print("🌱 Starting employee seeding...")
    store = get_default_store()
    validator = EmployeeValidator()
    existing_emails = {employee.email for employee in store.list_all()}

    for sample in SAMPLE_EMPLOYEES:
        if sample["email"] in existing_emails:
            print(f"⚠️ Employee already exists: {sample['email']}")
            continue
        employee = store.create(validator.validate_create(sample))
        print(f"✅ Created Employee: {employee.name} ({employee.id})")

    print(f"🎉 Seeding complete: {settings.DATA_FILE}")


if __name__ == "__main__":
    seed_data()
