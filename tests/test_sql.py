"""
Tests for helpers/sql.py and the per-entity filter builders.
"""
import re
from decimal import Decimal

import pytest

from jobly.core.exceptions import BadRequestException
from jobly.helpers.sql import (
    Column,
    ColumnSet,
    WhereClause,
    from_decimal,
    next_placeholder,
    sql_for_partial_update,
    to_decimal,
)
from jobly.repositories.company_repository import COMPANY_UPDATABLE, company_filter_clause
from jobly.repositories.job_repository import JOB_UPDATABLE, job_filter_clause
from jobly.schemas.company import CompanyFilters
from jobly.schemas.job import JobFilters


class TestSqlForPartialUpdate:
    """Test the SET clause builder."""

    def test_maps_and_passes_through_names(self):
        set_cols, values = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"},
        )

        assert set_cols == '"first_name"=$1, "age"=$2'
        assert values == ["Aliya", 32]

    def test_three_fields(self):
        set_cols, values = sql_for_partial_update(
            {"firstName": "Test", "age": 34, "isTall": True},
            {"firstName": "first_name", "isTall": "is_tall"},
        )

        assert set_cols == '"first_name"=$1, "age"=$2, "is_tall"=$3'
        assert values == ["Test", 34, True]

    def test_keeps_insertion_order(self):
        set_cols, values = sql_for_partial_update({"b": 2, "a": 1}, {})

        assert set_cols == '"b"=$1, "a"=$2'
        assert values == [2, 1]

    def test_placeholders_line_up_with_values(self):
        data = {f"col{i}": i * 10 for i in range(12)}
        set_cols, values = sql_for_partial_update(data, {})

        placeholders = re.findall(r'"(col\d+)"=\$(\d+)', set_cols)
        assert len(placeholders) == len(values)
        for col, idx in placeholders:
            assert values[int(idx) - 1] == data[col]

    def test_empty_data_fails(self):
        with pytest.raises(BadRequestException) as exc_info:
            sql_for_partial_update({}, {"firstName": "first_name"})

        assert exc_info.value.message == "No data"
        assert exc_info.value.status_code == 400


class TestColumnSet:
    """Test the update allow-list."""

    @pytest.fixture
    def columns(self):
        return ColumnSet([
            Column("firstName", "first_name"),
            Column("age", "age", int),
        ])

    def test_column_map_skips_identity_columns(self, columns):
        assert columns.column_map() == {"firstName": "first_name"}

    def test_prepare_applies_codecs(self, columns):
        assert columns.prepare({"age": "32"}) == {"age": 32}

    def test_prepare_rejects_unknown_fields(self, columns):
        with pytest.raises(BadRequestException) as exc_info:
            columns.prepare({"age": 3, "is_admin": True})

        assert "is_admin" in exc_info.value.message
        assert exc_info.value.details == {"allowed": ["firstName", "age"]}

    def test_set_clause(self, columns):
        set_cols, values = columns.set_clause({"age": "40", "firstName": "Ann"})

        assert set_cols == '"age"=$1, "first_name"=$2'
        assert values == [40, "Ann"]

    def test_set_clause_empty_fails(self, columns):
        with pytest.raises(BadRequestException):
            columns.set_clause({})

    def test_company_columns(self):
        set_cols, values = COMPANY_UPDATABLE.set_clause(
            {"numEmployees": 10, "logoUrl": "http://new.img", "name": "New"}
        )

        assert set_cols == '"num_employees"=$1, "logo_url"=$2, "name"=$3'
        assert values == [10, "http://new.img", "New"]

    def test_company_handle_not_updatable(self):
        with pytest.raises(BadRequestException):
            COMPANY_UPDATABLE.set_clause({"handle": "new-handle"})

    def test_job_columns_convert_equity(self):
        set_cols, values = JOB_UPDATABLE.set_clause({"equity": "0.25", "salary": 5})

        assert set_cols == '"equity"=$1, "salary"=$2'
        assert values == [Decimal("0.25"), 5]

    @pytest.mark.parametrize("field", ["id", "companyHandle", "company_handle"])
    def test_job_identity_fields_not_updatable(self, field):
        with pytest.raises(BadRequestException):
            JOB_UPDATABLE.set_clause({field: "x"})


class TestWhereClause:
    """Test the predicate accumulator."""

    def test_empty(self):
        where = WhereClause()

        assert not where
        assert where.as_tuple() == ("", [])

    def test_numbers_placeholders_in_order(self):
        where = WhereClause()
        where.add("name ILIKE {}", "%net%")
        where.add("num_employees >= {}", 10)

        assert where
        assert where.render() == " WHERE name ILIKE $1 AND num_employees >= $2"
        assert where.values == ["%net%", 10]

    def test_next_placeholder(self):
        assert next_placeholder([]) == "$1"
        assert next_placeholder(["a", "b"]) == "$3"


class TestCompanyFilterClause:
    """Test the company listing filter builder."""

    def test_none(self):
        assert company_filter_clause(None) == ("", [])

    def test_empty_filters(self):
        assert company_filter_clause(CompanyFilters()) == ("", [])
        assert company_filter_clause({}) == ("", [])

    def test_name_only(self):
        assert company_filter_clause({"name": "net"}) == (" WHERE name ILIKE $1", ["%net%"])

    def test_all_filters_in_fixed_order(self):
        filters = CompanyFilters(max_employees=300, name="net", min_employees=10)

        assert company_filter_clause(filters) == (
            " WHERE name ILIKE $1 AND num_employees >= $2 AND num_employees <= $3",
            ["%net%", 10, 300],
        )

    def test_max_only_is_first_placeholder(self):
        assert company_filter_clause({"maxEmployees": 2}) == (
            " WHERE num_employees <= $1",
            [2],
        )

    def test_equal_bounds_allowed(self):
        _, values = company_filter_clause({"minEmployees": 3, "maxEmployees": 3})

        assert values == [3, 3]

    def test_min_greater_than_max_fails(self):
        with pytest.raises(BadRequestException) as exc_info:
            company_filter_clause({"minEmployees": 5, "maxEmployees": 3})

        assert exc_info.value.message == "Min employees cannot be greater than max employees."

    def test_min_greater_than_max_fails_with_name(self):
        with pytest.raises(BadRequestException):
            company_filter_clause({"name": "c", "minEmployees": 5, "maxEmployees": 3})

    def test_unknown_filter_fails(self):
        with pytest.raises(BadRequestException):
            company_filter_clause({"nme": "net"})


class TestJobFilterClause:
    """Test the job listing filter builder."""

    def test_none(self):
        assert job_filter_clause(None) == ("", [])

    def test_has_equity_false_is_no_filter(self):
        assert job_filter_clause({"hasEquity": False}) == job_filter_clause(None)

    def test_has_equity_true(self):
        assert job_filter_clause({"hasEquity": True}) == (" WHERE j.equity > $1", [Decimal(0)])

    def test_all_filters_in_fixed_order(self):
        filters = JobFilters(has_equity=True, min_salary=1000, title="eng")

        assert job_filter_clause(filters) == (
            " WHERE j.title ILIKE $1 AND j.salary >= $2 AND j.equity > $3",
            ["%eng%", 1000, Decimal(0)],
        )

    def test_query_string_values_are_coerced(self):
        where_sql, values = job_filter_clause({"minSalary": "250", "hasEquity": "true"})

        assert where_sql == " WHERE j.salary >= $1 AND j.equity > $2"
        assert values == [250, Decimal(0)]

    def test_invalid_salary_fails(self):
        with pytest.raises(BadRequestException):
            job_filter_clause({"minSalary": "lots"})


class TestDecimalCodecs:
    """Test equity conversion to and from NUMERIC."""

    def test_to_decimal(self):
        assert to_decimal("0.5") == Decimal("0.5")
        assert to_decimal(None) is None
        assert to_decimal(Decimal("1")) == Decimal("1")

    def test_from_decimal(self):
        assert from_decimal(Decimal("0.082")) == "0.082"
        assert from_decimal(Decimal("0")) == "0"
        assert from_decimal(None) is None
