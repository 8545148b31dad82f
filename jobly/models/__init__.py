"""
Table models for Jobly.

These define the schema only; queries are written as SQL in the repositories.
"""
from jobly.models.company import Company
from jobly.models.job import Job

__all__ = [
    "Company",
    "Job",
]
