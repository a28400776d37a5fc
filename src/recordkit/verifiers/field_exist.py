"""
Field-value existence verification.

Answers "is this value already taken?" for uniqueness checks on fields like
username, code or slug, before inserting or updating a record:

    verifier = FieldExistVerifier()
    store = SqlAlchemyRecordStore(Account, db)

    # create: any live account with this username?
    await verifier.content_exists(store, Account.id, "username", "alice",
                                  logic_delete_field=Account.deleted)

    # update: same, but the account being edited does not count against itself
    await verifier.content_exists(store, Account.id, "username", "alice",
                                  logic_delete_field=Account.deleted,
                                  exclude_id=str(account.id))

Caveat: this is a check-then-act helper. Two concurrent callers can both see
"not exists" and both insert. Where a hard guarantee is needed, back the
field with a unique constraint in the store and treat this check as a
friendlier early error.
"""
import logging
from typing import Any

from recordkit.exceptions.base import InvalidArgumentError, SecurityViolationError
from recordkit.stores.base import ExistenceCriteria, FieldRef, RecordStore, read_field, resolve_field_name
from recordkit.validators.sql_validators import find_identifier_violation

logger = logging.getLogger(__name__)

DEFAULT_NOT_DELETE_FLAG = "0"

# ASCII control characters and space; other Unicode whitespace (e.g. U+00A0) is part of the value
TRIM_CHARS = "".join(map(chr, range(33)))


def ids_match(record_id: Any, exclude_id: Any) -> bool:
    """
    Compare a store id with the caller's excluded id.

    Both sides are compared as strings so an int or UUID primary key matches its
    string form ("7" excludes 7). A None on either side never matches.
    """
    if record_id is None or exclude_id is None:
        return False
    return record_id == exclude_id or str(record_id) == str(exclude_id)


class FieldExistVerifier:
    """
    Stateless existence checker; safe to share between threads and tasks.

    Args:
        not_delete_flag: value of the logic-delete field meaning "not deleted".
            Usually taken from Settings.LOGIC_DELETE_NOT_DELETE_FLAG.
    """

    def __init__(self, not_delete_flag: str = DEFAULT_NOT_DELETE_FLAG):
        self.not_delete_flag = not_delete_flag

    def build_criteria(
        self,
        id_field: FieldRef,
        sql_field_name: str,
        field_value: str | None,
        *,
        logic_delete_field: FieldRef | None = None,
    ) -> ExistenceCriteria:
        """
        Validate inputs and build the query intent for content_exists().

        Raises:
            SecurityViolationError: `sql_field_name` is not a plain column identifier.
            InvalidArgumentError: `field_value` is None or not a string.
        """
        violation = find_identifier_violation(sql_field_name)
        if violation:
            # WARNING: not a client typo, something tried to pass a crafted identifier
            logger.warning(
                "verifier.content_exists.injection_rejected",
                extra={"reason": violation, "identifier_length": len(sql_field_name) if isinstance(sql_field_name, str) else 0},
            )
            raise SecurityViolationError(
                "Injection content detected in column name", fields=["sql_field_name"]
            )

        if field_value is None:
            logger.info(
                "verifier.content_exists.missing_value",
                extra={"column": sql_field_name},
            )
            raise InvalidArgumentError("field_value must not be None", fields=["field_value"])

        if not isinstance(field_value, str):
            logger.info(
                "verifier.content_exists.invalid_value_type",
                extra={"column": sql_field_name, "value_type": type(field_value).__name__},
            )
            raise InvalidArgumentError("field_value must be a string", fields=["field_value"])

        equals: tuple[tuple[str, Any], ...] = ()
        if logic_delete_field is not None:
            equals = ((resolve_field_name(logic_delete_field), self.not_delete_flag),)

        return ExistenceCriteria(
            select_field=resolve_field_name(id_field),
            case_sensitive_column=sql_field_name,
            case_sensitive_value=field_value.strip(TRIM_CHARS),
            equals=equals,
        )

    async def content_exists(
        self,
        store: RecordStore,
        id_field: FieldRef,
        sql_field_name: str,
        field_value: str | None,
        *,
        logic_delete_field: FieldRef | None = None,
        exclude_id: Any = None,
    ) -> bool:
        """
        Check whether a record with `sql_field_name == field_value` exists.

        Args:
            store: record store to query (one query per call)
            id_field: primary key field, selected and compared with `exclude_id`
            sql_field_name: database column name (not the Python attribute name)
            field_value: value to look for; surrounding ASCII whitespace and control
                characters are stripped (U+00A0 and other Unicode spaces are kept) and
                the comparison is case-sensitive
            logic_delete_field: soft-delete field; when given only records whose
                value equals `not_delete_flag` are considered
            exclude_id: id of the record being updated; when the first match is
                this record the value is not considered taken

        Returns:
            True if a matching record other than `exclude_id` exists.

        Raises:
            SecurityViolationError, InvalidArgumentError: before any query is issued.
            Anything the store raises is propagated unchanged.
        """
        criteria = self.build_criteria(
            id_field, sql_field_name, field_value, logic_delete_field=logic_delete_field
        )

        records = await store.query(criteria)

        if not records:
            logger.debug(
                "verifier.content_exists.no_match",
                extra={"column": sql_field_name, "soft_delete": logic_delete_field is not None},
            )
            return False

        # only the first match is compared with exclude_id; store ordering decides which one
        first_id = read_field(records[0], criteria.select_field)
        exists = not ids_match(first_id, exclude_id)

        logger.debug(
            "verifier.content_exists.match",
            extra={
                "column": sql_field_name,
                "matched": len(records),
                "excluded_self": not exists,
            },
        )
        return exists
