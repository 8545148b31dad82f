"""
Repository layer - data access abstraction.

Repositories hold all SQL, keeping query construction out of the route
layer. Each one is constructed with the ``Database`` it should use.
"""
from jobly.repositories.company_repository import CompanyRepository, company_filter_clause
from jobly.repositories.job_repository import JobRepository, job_filter_clause

__all__ = [
    "CompanyRepository",
    "JobRepository",
    "company_filter_clause",
    "job_filter_clause",
]
