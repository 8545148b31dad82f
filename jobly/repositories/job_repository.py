"""
Job repository - data access for Job entity.
"""
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Tuple, Union

from jobly.core.database import Database
from jobly.core.exceptions import (
    DuplicateJobException,
    JobNotFoundException,
    UnknownCompanyException,
)
from jobly.core.logging import get_logger
from jobly.helpers.sql import (
    Column,
    ColumnSet,
    WhereClause,
    from_decimal,
    next_placeholder,
    to_decimal,
)
from jobly.repositories.company_repository import COMPANY_FIELDS, require_fields
from jobly.schemas.job import JobFilters

logger = get_logger(__name__)

JOB_FIELDS = 'id, title, salary, equity, company_handle AS "companyHandle"'

JOB_UPDATABLE = ColumnSet([
    Column("title", "title"),
    Column("salary", "salary"),
    Column("equity", "equity", to_decimal),
])


def job_filter_clause(
    filters: Union[JobFilters, Mapping[str, Any], None],
) -> Tuple[str, List[Any]]:
    """
    Build the WHERE clause for listing jobs.

    hasEquity only filters when it is exactly True; False behaves like absent.
    """
    filters = JobFilters.coerce(filters)
    if filters is None:
        return "", []

    where = WhereClause()
    if filters.title is not None:
        where.add("j.title ILIKE {}", f"%{filters.title}%")
    if filters.min_salary is not None:
        where.add("j.salary >= {}", filters.min_salary)
    if filters.has_equity is True:
        where.add("j.equity > {}", Decimal(0))

    return where.as_tuple()


def _shape(row: Dict[str, Any]) -> Dict[str, Any]:
    if "equity" in row:
        row["equity"] = from_decimal(row["equity"])
    return row


class JobRepository:
    """Create, list, fetch, partially update and delete jobs."""

    def __init__(self, db: Database):
        self.db = db

    async def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a job.

        data should be { title, salary, equity, companyHandle }

        Returns { id, title, salary, equity, companyHandle }

        Raises UnknownCompanyException if the company does not exist,
        DuplicateJobException if it already has a job with this title.
        """
        require_fields(data, "title", "companyHandle")
        title = data["title"]
        company_handle = data["companyHandle"]

        async with self.db.transaction():
            company = await self.db.query(
                """SELECT handle
                   FROM companies
                   WHERE handle = $1""",
                [company_handle],
            )
            if not company:
                raise UnknownCompanyException(company_handle)

            duplicate = await self.db.query(
                """SELECT id
                   FROM jobs
                   WHERE company_handle = $1 AND title = $2""",
                [company_handle, title],
            )
            if duplicate:
                raise DuplicateJobException(title)

            rows = await self.db.query(
                f"""INSERT INTO jobs
                    (title, salary, equity, company_handle)
                    VALUES ($1, $2, $3, $4)
                    RETURNING {JOB_FIELDS}""",
                [
                    title,
                    data.get("salary"),
                    to_decimal(data.get("equity")),
                    company_handle,
                ],
            )

        job = _shape(rows[0])
        logger.info("job_created", job_id=job["id"], company_handle=company_handle)
        return job

    async def find_all(
        self,
        filters: Union[JobFilters, Mapping[str, Any], None] = None,
    ) -> List[Dict[str, Any]]:
        """
        List jobs ordered by title, each with its company's name.

        filters may narrow the list by any of:
          title: case-insensitive substring of the title
          minSalary: salary at least this much
          hasEquity: if true, only jobs with non-zero equity

        Returns [{ id, title, salary, equity, companyHandle, companyName }, ...]
        """
        where_sql, values = job_filter_clause(filters)
        query = (
            """SELECT j.id,
                      j.title,
                      j.salary,
                      j.equity,
                      j.company_handle AS "companyHandle",
                      c.name AS "companyName"
               FROM jobs AS j
               LEFT JOIN companies AS c ON c.handle = j.company_handle"""
            f"{where_sql} ORDER BY j.title, j.id"
        )
        rows = await self.db.query(query, values)
        return [_shape(row) for row in rows]

    async def get(self, job_id: int) -> Dict[str, Any]:
        """
        Fetch one job with its company.

        Returns { id, title, salary, equity, company }
          where company is { handle, name, description, numEmployees, logoUrl }

        Raises JobNotFoundException if not found.
        """
        async with self.db.transaction():
            rows = await self.db.query(
                f"""SELECT {JOB_FIELDS}
                    FROM jobs
                    WHERE id = $1""",
                [job_id],
            )
            if not rows:
                raise JobNotFoundException(job_id)

            job = _shape(rows[0])
            companies = await self.db.query(
                f"""SELECT {COMPANY_FIELDS}
                    FROM companies
                    WHERE handle = $1""",
                [job.pop("companyHandle")],
            )

        job["company"] = companies[0] if companies else None
        return job

    async def update(self, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update a job: only the fields present in data change.

        data can include { title, salary, equity }

        Returns { id, title, salary, equity, companyHandle }

        Raises BadRequestException for empty data or unknown fields,
        JobNotFoundException if not found.
        """
        set_cols, values = JOB_UPDATABLE.set_clause(data)
        id_idx = next_placeholder(values)

        rows = await self.db.query(
            f"""UPDATE jobs
                SET {set_cols}
                WHERE id = {id_idx}
                RETURNING {JOB_FIELDS}""",
            [*values, job_id],
        )
        if not rows:
            raise JobNotFoundException(job_id)

        logger.info("job_updated", job_id=job_id, fields=list(data))
        return _shape(rows[0])

    async def remove(self, job_id: int) -> None:
        """
        Delete a job.

        Raises JobNotFoundException if not found.
        """
        rows = await self.db.query(
            """DELETE
               FROM jobs
               WHERE id = $1
               RETURNING id""",
            [job_id],
        )
        if not rows:
            raise JobNotFoundException(job_id)

        logger.info("job_removed", job_id=job_id)
