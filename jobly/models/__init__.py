"""
Database models for Jobly.

Models declare the table layout; queries against them are written as
parameterized SQL in the repository layer.
"""
from jobly.models.company import Company
from jobly.models.job import Job

__all__ = [
    "Company",
    "Job",
]
