"""
SQL fragment builders shared by the repositories.

Everything here produces ``(sql_fragment, values)`` pairs whose positional
``$N`` placeholders are 1-indexed and line up with ``values``. Nothing here
talks to the database.
"""
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from jobly.core.exceptions import BadRequestException


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a partial UPDATE.

    Args:
        data_to_update: field name -> new value, e.g.
            ``{"firstName": "Aliya", "age": 32}``. Only the fields present
            are updated, in the mapping's own order.
        js_to_sql: field name -> column name for fields whose column is
            named differently, e.g. ``{"firstName": "first_name"}``.
            Fields not listed are used as the column name unchanged.

    Returns:
        ``('"first_name"=$1, "age"=$2', ["Aliya", 32])``

    Raises:
        BadRequestException: if ``data_to_update`` is empty.
    """
    keys = list(data_to_update)
    if not keys:
        raise BadRequestException("No data")

    cols = [
        f'"{js_to_sql.get(key, key)}"=${idx}'
        for idx, key in enumerate(keys, start=1)
    ]
    return ", ".join(cols), [data_to_update[key] for key in keys]


def _identity(value: Any) -> Any:
    return value


class Column(NamedTuple):
    """An updatable field: its public name, its column, and how values are stored."""

    logical: str
    physical: str
    to_db: Callable[[Any], Any] = _identity


class ColumnSet:
    """
    Ordered allow-list of the fields an entity accepts in a partial update.

    ``prepare`` refuses anything not declared here, so column names reaching
    ``sql_for_partial_update`` can only ever be ones listed below.
    """

    def __init__(self, columns: Iterable[Column]):
        self.columns: Tuple[Column, ...] = tuple(columns)
        self._by_logical: Dict[str, Column] = {col.logical: col for col in self.columns}

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(col.logical for col in self.columns)

    def column_map(self) -> Dict[str, str]:
        """Logical -> physical names for fields whose column differs."""
        return {
            col.logical: col.physical
            for col in self.columns
            if col.logical != col.physical
        }

    def prepare(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate field names and convert values to their stored form.

        Key order of ``data`` is kept.

        Raises:
            BadRequestException: if any key is not a declared field.
        """
        unknown = [key for key in data if key not in self._by_logical]
        if unknown:
            raise BadRequestException(
                f"Cannot update field(s): {', '.join(sorted(unknown))}",
                details={"allowed": list(self.names)},
            )
        return {key: self._by_logical[key].to_db(value) for key, value in data.items()}

    def set_clause(self, data: Mapping[str, Any]) -> Tuple[str, List[Any]]:
        """``prepare`` then ``sql_for_partial_update`` in one step."""
        return sql_for_partial_update(self.prepare(data), self.column_map())


class WhereClause:
    """
    Accumulates AND-ed predicates and their values in placeholder order.

    Usage:
        where = WhereClause()
        where.add("name ILIKE {}", "%net%")   # -> name ILIKE $1
        where.add("num_employees >= {}", 10)  # -> num_employees >= $2
        where.render()  # " WHERE name ILIKE $1 AND num_employees >= $2"
    """

    def __init__(self):
        self.predicates: List[str] = []
        self.values: List[Any] = []

    def add(self, template: str, value: Any) -> None:
        self.values.append(value)
        placeholder = f"${len(self.values)}"
        self.predicates.append(template.format(placeholder))

    def render(self) -> str:
        if not self.predicates:
            return ""
        return " WHERE " + " AND ".join(self.predicates)

    def __bool__(self) -> bool:
        return bool(self.predicates)

    def as_tuple(self) -> Tuple[str, List[Any]]:
        return self.render(), list(self.values)


def next_placeholder(values: List[Any]) -> str:
    """Placeholder for a parameter appended after ``values``."""
    return f"${len(values) + 1}"


def to_decimal(value: Any) -> Optional[Decimal]:
    """NUMERIC parameters must be Decimal for asyncpg; "0.5" -> Decimal("0.5")."""
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def from_decimal(value: Any) -> Optional[str]:
    """NUMERIC columns come back as Decimal; callers see the decimal text."""
    if value is None:
        return None
    return str(value)
