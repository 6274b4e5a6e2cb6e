"""Core module exports."""
from jobly.core.config import settings, get_settings
from jobly.core.database import Base, get_db, init_db, close_db, engine
from jobly.core.exceptions import (
    APIException,
    BadRequestException,
    NotFoundException,
    CompanyNotFoundException,
    JobNotFoundException,
    DuplicateCompanyException,
    CompanyNotExistsException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "engine",
    # Exceptions
    "APIException",
    "BadRequestException",
    "NotFoundException",
    "CompanyNotFoundException",
    "JobNotFoundException",
    "DuplicateCompanyException",
    "CompanyNotExistsException",
]
