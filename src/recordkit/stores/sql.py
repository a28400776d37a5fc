"""
SQLAlchemy-backed record store.

Translates ExistenceCriteria into a single parameterized statement:

    SELECT <id> AS <id> FROM <table>
    WHERE <logic_delete> = :flag            -- when requested
      AND <column> COLLATE <binary> = :value

The target column is looked up on the mapped table (never interpolated into
SQL text) and its value is always a bound parameter.

Case sensitivity: MySQL's default *_ci collations compare "Alice" and "alice"
as equal, and PostgreSQL/SQLite can be configured the same way, so the
comparison is forced byte-wise per dialect:

| Dialect           | Comparison                          |
| ----------------- | ----------------------------------- |
| sqlite            | `column COLLATE binary = :value`    |
| postgresql        | `column COLLATE "C" = :value`       |
| mysql / mariadb   | `CAST(column AS BINARY) = :value`   |
| anything else     | `column = :value`                   |
"""
import logging
import time
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import BINARY, cast, inspect as sa_inspect, select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from recordkit.database.base import Base
from recordkit.exceptions.base import InvalidFieldError

from .base import ExistenceCriteria

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)

_COLLATIONS = {
    "sqlite": "binary",
    "postgresql": "C",
}

_CAST_TO_BINARY = {"mysql", "mariadb"}


def case_sensitive_equals(column: ColumnElement, value: str, dialect_name: str) -> ColumnElement[bool]:
    """
    Build `column = value` with a byte-wise comparison for the given dialect.
    """
    if dialect_name in _CAST_TO_BINARY:
        return cast(column, BINARY) == value
    collation = _COLLATIONS.get(dialect_name)
    if collation is None:
        return column == value
    return column.collate(collation) == value


class SqlAlchemyRecordStore(Generic[ModelType]):
    """
    Record store over one mapped model, using an async session.

    The session is not committed or closed here; the caller owns the transaction.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    def _attribute(self, name: str):
        """Mapped attribute by name (e.g. "id" -> Account.id)."""
        if name not in {attr.key for attr in sa_inspect(self.model).attrs}:
            raise InvalidFieldError(f"{self.model.__name__} has no field '{name}'", fields=[name])
        return getattr(self.model, name)

    def _column(self, sql_field_name: str):
        """Table column by database name; `table.column` must name this model's table."""
        table = self.model.__table__
        table_name, _, column_name = sql_field_name.rpartition(".")
        if table_name and table_name != table.name:
            raise InvalidFieldError(
                f"Column '{sql_field_name}' does not belong to table '{table.name}'", fields=[sql_field_name]
            )
        column = table.c.get(column_name)
        if column is None:
            raise InvalidFieldError(f"{table.name} has no column '{column_name}'", fields=[sql_field_name])
        return column

    def _dialect_name(self) -> str:
        # resolve through the model so sessions bound per mapper (`binds={Base: engine}`) work
        return self.db.get_bind(mapper=self.model).dialect.name

    def build_statement(self, criteria: ExistenceCriteria, dialect_name: str):
        query = select(self._attribute(criteria.select_field).label(criteria.select_field))

        for name, value in criteria.equals:
            query = query.where(self._attribute(name) == value)

        column = self._column(criteria.case_sensitive_column)
        return query.where(case_sensitive_equals(column, criteria.case_sensitive_value, dialect_name))

    async def query(self, criteria: ExistenceCriteria) -> list[Row[Any]]:
        dialect_name = self._dialect_name()
        stmt = self.build_statement(criteria, dialect_name)

        start = time.perf_counter()
        try:
            result = await self.db.execute(stmt)
            rows = list(result.all())
        except Exception:
            # logged for context, re-raised untouched: callers decide about retries
            logger.exception(
                "store.sqlalchemy.query_failed",
                extra={"model": self.model.__name__, "column": criteria.case_sensitive_column},
            )
            raise

        logger.debug(
            "store.sqlalchemy.query",
            extra={
                "model": self.model.__name__,
                "dialect": dialect_name,
                "column": criteria.case_sensitive_column,
                "matched": len(rows),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return rows
