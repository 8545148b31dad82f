"""
Company repository - data access for Company entity.

Records go in and come out keyed by their public (camelCase) names;
the SQL aliases below do the column -> field translation on the way out.
"""
from typing import Any, Dict, List, Mapping, Tuple, Union

from jobly.core.database import Database
from jobly.core.exceptions import (
    BadRequestException,
    CompanyNotFoundException,
    DuplicateCompanyException,
    DuplicateCompanyNameException,
    MissingFieldsException,
)
from jobly.core.logging import get_logger
from jobly.helpers.sql import Column, ColumnSet, WhereClause, from_decimal, next_placeholder
from jobly.schemas.company import CompanyFilters

logger = get_logger(__name__)

COMPANY_FIELDS = (
    'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'
)

COMPANY_UPDATABLE = ColumnSet([
    Column("name", "name"),
    Column("description", "description"),
    Column("numEmployees", "num_employees"),
    Column("logoUrl", "logo_url"),
])


def company_filter_clause(
    filters: Union[CompanyFilters, Mapping[str, Any], None],
) -> Tuple[str, List[Any]]:
    """
    Build the WHERE clause for listing companies.

    Returns ``("", [])`` when there is nothing to filter on, otherwise e.g.
    ``(" WHERE name ILIKE $1 AND num_employees >= $2", ["%net%", 10])``.

    Raises:
        BadRequestException: if minEmployees > maxEmployees. Checked before
            anything else.
    """
    filters = CompanyFilters.coerce(filters)
    if filters is None:
        return "", []

    min_employees = filters.min_employees
    max_employees = filters.max_employees
    if (
        min_employees is not None
        and max_employees is not None
        and min_employees > max_employees
    ):
        raise BadRequestException("Min employees cannot be greater than max employees.")

    where = WhereClause()
    if filters.name is not None:
        where.add("name ILIKE {}", f"%{filters.name}%")
    if min_employees is not None:
        where.add("num_employees >= {}", min_employees)
    if max_employees is not None:
        where.add("num_employees <= {}", max_employees)

    return where.as_tuple()


def require_fields(data: Mapping[str, Any], *fields: str) -> None:
    """Raise MissingFieldsException naming every field that is absent or None."""
    missing = [field for field in fields if data.get(field) is None]
    if missing:
        raise MissingFieldsException(missing)


class CompanyRepository:
    """Create, list, fetch, partially update and delete companies."""

    def __init__(self, db: Database):
        self.db = db

    async def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a company.

        data should be { handle, name, description, numEmployees, logoUrl }

        Returns { handle, name, description, numEmployees, logoUrl }

        Raises DuplicateCompanyException if the handle is already taken,
        DuplicateCompanyNameException if another company has this name.
        """
        require_fields(data, "handle", "name", "description")
        handle = data["handle"]
        name = data["name"]

        async with self.db.transaction():
            taken = await self.db.query(
                """SELECT handle, name
                   FROM companies
                   WHERE handle = $1 OR name = $2""",
                [handle, name],
            )
            if any(row["handle"] == handle for row in taken):
                raise DuplicateCompanyException(handle)
            if taken:
                raise DuplicateCompanyNameException(name)

            rows = await self.db.query(
                f"""INSERT INTO companies
                    (handle, name, description, num_employees, logo_url)
                    VALUES ($1, $2, $3, $4, $5)
                    RETURNING {COMPANY_FIELDS}""",
                [
                    handle,
                    name,
                    data["description"],
                    data.get("numEmployees"),
                    data.get("logoUrl"),
                ],
            )

        logger.info("company_created", handle=handle)
        return rows[0]

    async def find_all(
        self,
        filters: Union[CompanyFilters, Mapping[str, Any], None] = None,
    ) -> List[Dict[str, Any]]:
        """
        List companies ordered by name.

        filters may narrow the list by any of:
          name: case-insensitive substring of the company name
          minEmployees / maxEmployees: inclusive bounds on headcount

        Returns [{ handle, name, description, numEmployees, logoUrl }, ...]
        """
        where_sql, values = company_filter_clause(filters)
        query = f"SELECT {COMPANY_FIELDS} FROM companies{where_sql} ORDER BY name"
        return await self.db.query(query, values)

    async def get(self, handle: str) -> Dict[str, Any]:
        """
        Fetch one company with its jobs.

        Returns { handle, name, description, numEmployees, logoUrl, jobs }
          where jobs is [{ id, title, salary, equity }, ...] ordered by id

        Raises CompanyNotFoundException if not found.
        """
        rows = await self.db.query(
            f"""SELECT {COMPANY_FIELDS}
                FROM companies
                WHERE handle = $1""",
            [handle],
        )
        if not rows:
            raise CompanyNotFoundException(handle)

        company = rows[0]
        jobs = await self.db.query(
            """SELECT id, title, salary, equity
               FROM jobs
               WHERE company_handle = $1
               ORDER BY id""",
            [handle],
        )
        company["jobs"] = [{**job, "equity": from_decimal(job["equity"])} for job in jobs]
        return company

    async def update(self, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update a company: only the fields present in data change.

        data can include { name, description, numEmployees, logoUrl }

        Returns { handle, name, description, numEmployees, logoUrl }

        Raises BadRequestException for empty data or unknown fields,
        DuplicateCompanyNameException if another company has the new name,
        CompanyNotFoundException if not found.
        """
        set_cols, values = COMPANY_UPDATABLE.set_clause(data)
        handle_idx = next_placeholder(values)

        async with self.db.transaction():
            if data.get("name") is not None:
                taken = await self.db.query(
                    """SELECT handle
                       FROM companies
                       WHERE name = $1 AND handle <> $2""",
                    [data["name"], handle],
                )
                if taken:
                    raise DuplicateCompanyNameException(data["name"])

            rows = await self.db.query(
                f"""UPDATE companies
                    SET {set_cols}
                    WHERE handle = {handle_idx}
                    RETURNING {COMPANY_FIELDS}""",
                [*values, handle],
            )
        if not rows:
            raise CompanyNotFoundException(handle)

        logger.info("company_updated", handle=handle, fields=list(data))
        return rows[0]

    async def remove(self, handle: str) -> None:
        """
        Delete a company (its jobs go with it).

        Raises CompanyNotFoundException if not found.
        """
        rows = await self.db.query(
            """DELETE
               FROM companies
               WHERE handle = $1
               RETURNING handle""",
            [handle],
        )
        if not rows:
            raise CompanyNotFoundException(handle)

        logger.info("company_removed", handle=handle)
