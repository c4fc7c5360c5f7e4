"""
Application settings and configuration
"""
import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    # Application
    APP_NAME = "Employee Directory"
    VERSION = "1.0.0"
    DEBUG = os.getenv("DEBUG", "True") == "True"

    # CORS
    ALLOWED_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Storage
    DATA_FILE = os.getenv("EMPLOYEES_FILE", os.path.join(os.getcwd(), "storage", "employees.json"))

    # File Uploads
    UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(os.getcwd(), "uploads"))
    PUBLIC_UPLOAD_URL = os.getenv("PUBLIC_UPLOAD_URL", "/uploads")
    PHOTO_DIRECTORY = "avatars"
    MAX_PHOTO_SIZE_KB = 2048
    ALLOWED_PHOTO_TYPES = ["jpeg", "png", "jpg", "gif"]

    # Pagination
    DEFAULT_PAGE_SIZE = 10
    DEFAULT_SORT_BY = "name"

    # Rate limiting (requests per window, per client)
    RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "60"))
    RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

settings = Settings()
