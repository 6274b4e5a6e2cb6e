"""
Custom exceptions for the application.
All API exceptions should inherit from APIException for consistent error handling.
"""
from typing import Optional, Any


class APIException(Exception):
    """
    Base exception for all API errors.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(self.message)


class BadRequestException(APIException):
    """400 Bad Request"""

    def __init__(
        self,
        message: str = "Bad request",
        code: str = "BAD_REQUEST",
        details: Optional[Any] = None,
    ):
        super().__init__(400, code, message, details)


class NotFoundException(APIException):
    """404 Not Found"""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, code, message)


# Resource specific exceptions
class CompanyNotFoundException(NotFoundException):
    """Company not found"""

    def __init__(self, handle: str):
        self.handle = handle
        super().__init__(message=f"No company: {handle}", code="COMPANY_NOT_FOUND")


class JobNotFoundException(NotFoundException):
    """Job not found"""

    def __init__(self, job_id: Any):
        self.job_id = job_id
        super().__init__(message=f"No job: {job_id}", code="JOB_NOT_FOUND")


class DuplicateCompanyException(BadRequestException):
    """Company handle already taken"""

    def __init__(self, handle: str):
        self.handle = handle
        super().__init__(
            message=f"Duplicate company: {handle}",
            code="DUPLICATE_COMPANY",
        )


class CompanyNotExistsException(BadRequestException):
    """A job references a company that is not in the database"""

    def __init__(self, handle: str):
        self.handle = handle
        super().__init__(
            message=f"Company not exists: {handle}",
            code="COMPANY_NOT_EXISTS",
        )
