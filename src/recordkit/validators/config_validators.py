def to_uppercase(value: str | None) -> str | None:
    """
    Strip and upper-case a string setting; None passes through.
    """
    if value is None:
        return None
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Strip and lower-case a string setting; None passes through.
    """
    if value is None:
        return None
    return value.strip().lower()


def to_stripped(value: str | None) -> str | None:
    """
    Strip surrounding whitespace from a flag-like setting (e.g. " 0 " -> "0").
    Non-string values are left for pydantic to validate.
    """
    if not isinstance(value, str):
        return value
    return value.strip()
