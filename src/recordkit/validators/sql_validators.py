"""
SQL identifier validation (injection guard).

Column names handed to the verifier come from application code and end up as
identifiers in a query, where they cannot be bound as parameters. Anything
that does not look like a plain column name is rejected.
"""
import re

# Max identifier length accepted by the strictest common backend (MySQL: 64).
MAX_IDENTIFIER_LENGTH = 64

# column or table.column, ASCII letters/digits/underscore, not starting with a digit
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")

# Sequences that terminate a statement or open a comment
_FORBIDDEN_SEQUENCES = (";", "--", "/*", "*/", "#", "'", '"', "`", "\\")

# Keywords that could change the statement if the identifier were interpolated
SQL_KEYWORDS = frozenset({
    "all", "alter", "and", "any", "as", "benchmark", "between", "binary", "by",
    "case", "char", "chr", "count", "create", "declare", "delete", "distinct",
    "drop", "exec", "execute", "exists", "from", "grant", "group", "having",
    "in", "insert", "intersect", "into", "is", "join", "like", "limit", "master",
    "merge", "not", "null", "or", "order", "pg_sleep", "revoke", "select", "sleep",
    "table", "truncate", "union", "update", "waitfor", "where", "xor",
})


def _match_any(value: str, sequences: tuple[str, ...]) -> bool:
    return any(seq in value for seq in sequences)


def find_identifier_violation(name: str | None) -> str | None:
    """
    Return a short reason why `name` is not a safe SQL identifier, or None if it is.

    The reason is meant for logs; never echo the raw identifier back to clients.
    """
    if not isinstance(name, str) or not name:
        return "empty"

    if _match_any(name, _FORBIDDEN_SEQUENCES):
        return "forbidden_sequence"

    if not _IDENTIFIER_RE.match(name):
        return "malformed"

    for part in name.split("."):
        if len(part) > MAX_IDENTIFIER_LENGTH:
            return "too_long"
        if part.lower() in SQL_KEYWORDS:
            return "keyword"

    return None


def is_safe_sql_identifier(name: str | None) -> bool:
    """
    True if `name` is a plain column (or table.column) identifier.
    """
    return find_identifier_violation(name) is None
