import re

import pytest
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from recordkit.database.base import Base
from recordkit.exceptions.base import InvalidFieldError
from recordkit.stores.base import ExistenceCriteria
from recordkit.stores.sql import SqlAlchemyRecordStore
from recordkit.tests.test_fixtures.models import Account


def _criteria(value: str = "Alice", column: str = "name", soft_delete: bool = False) -> ExistenceCriteria:
    return ExistenceCriteria(
        select_field="id",
        case_sensitive_column=column,
        case_sensitive_value=value,
        equals=(("deleted", "0"),) if soft_delete else (),
    )


def _compile(criteria: ExistenceCriteria, dialect) -> str:
    # statement building does not touch the session
    store = SqlAlchemyRecordStore(Account, db=None)
    stmt = store.build_statement(criteria, dialect.name)
    return str(stmt.compile(dialect=dialect))


# newer SQLAlchemy releases parenthesize the collated operand: (col COLLATE x) = ?
BINARY_NAME_EQUALS = re.compile(r"\(?accounts\.name COLLATE binary\)? = \?")


class TestStatementBuilding:

    def test_selects_only_the_id(self):
        sql = _compile(_criteria(), sqlite.dialect())
        assert "SELECT accounts.id AS id" in sql
        assert "FROM accounts" in sql

    def test_value_is_a_bound_parameter(self):
        sql = _compile(_criteria("x' OR '1'='1"), sqlite.dialect())
        assert "1'='1" not in sql
        assert BINARY_NAME_EQUALS.search(sql)

    def test_soft_delete_filter_is_added(self):
        sql = _compile(_criteria(soft_delete=True), sqlite.dialect())
        assert "accounts.deleted = ?" in sql

    def test_no_soft_delete_filter_by_default(self):
        assert "deleted" not in _compile(_criteria(), sqlite.dialect())

    def test_sqlite_uses_binary_collation(self):
        assert BINARY_NAME_EQUALS.search(_compile(_criteria(), sqlite.dialect()))

    def test_postgresql_uses_c_collation(self):
        sql = _compile(_criteria(), postgresql.dialect())
        assert 'accounts.name COLLATE "C"' in sql

    def test_mysql_casts_to_binary(self):
        sql = _compile(_criteria(), mysql.dialect())
        assert "CAST(accounts.name AS BINARY)" in sql

    def test_column_name_differs_from_attribute_name(self):
        sql = _compile(_criteria(column="login"), sqlite.dialect())
        assert "accounts.login COLLATE binary" in sql

    def test_table_qualified_column(self):
        sql = _compile(_criteria(column="accounts.name"), sqlite.dialect())
        assert "accounts.name COLLATE binary" in sql

    @pytest.mark.parametrize("column", ["login_name", "email", "users.name"])
    def test_unknown_or_foreign_column_raises(self, column):
        with pytest.raises(InvalidFieldError):
            _compile(_criteria(column=column), sqlite.dialect())

    def test_unknown_select_field_raises(self):
        criteria = ExistenceCriteria(select_field="uuid", case_sensitive_column="name", case_sensitive_value="x")
        with pytest.raises(InvalidFieldError):
            _compile(criteria, sqlite.dialect())


@pytest.mark.asyncio
class TestQueryExecution:

    async def test_returns_rows_with_selected_field(self, account_store, seeded_accounts):
        rows = await account_store.query(_criteria("Alice"))
        assert [row.id for row in rows] == ["7"]

    async def test_case_insensitive_column_is_compared_byte_wise(self, account_store, seeded_accounts):
        # `code` is declared COLLATE nocase; the store must still tell ABC from abc
        assert await account_store.query(_criteria("abc", column="code")) == []
        assert len(await account_store.query(_criteria("ABC", column="code"))) == 1

    async def test_soft_deleted_rows_are_filtered(self, account_store, seeded_accounts):
        assert await account_store.query(_criteria("Bob", soft_delete=True)) == []
        assert len(await account_store.query(_criteria("Bob"))) == 1

    async def test_store_failure_propagates_unchanged(self, db_session, seeded_accounts):
        class BrokenSession:
            def get_bind(self, **kw):
                return db_session.get_bind(**kw)

            async def execute(self, stmt):
                raise ConnectionError("connection reset")

        store = SqlAlchemyRecordStore(Account, BrokenSession())
        with pytest.raises(ConnectionError, match="connection reset"):
            await store.query(_criteria())

    async def test_session_bound_per_mapper(self, async_engine):
        """
        Behavior:
                - Open a session bound through `binds={Base: engine}` instead of a single bind.
                - Persist one account and query it through the store.

        Importance:
                - Applications that route models to different databases configure sessions
                  this way; `session.get_bind()` without a mapper cannot pick an engine there.
                - The store must resolve the bind (and so the dialect) through its model.

        Fixtures:
                - async_engine: in-memory database with the test schema created.
        """
        async with AsyncSession(binds={Base: async_engine}) as session:
            session.add(Account(id="7", name="Alice", deleted="0"))
            await session.flush()

            store = SqlAlchemyRecordStore(Account, session)
            rows = await store.query(_criteria("Alice"))

            assert [row.id for row in rows] == ["7"]
            await session.rollback()
