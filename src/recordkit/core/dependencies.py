from functools import lru_cache

from recordkit.config.settings import get_settings
from recordkit.verifiers.field_exist import FieldExistVerifier


@lru_cache()
def get_field_exist_verifier() -> FieldExistVerifier:
    # Shared verifier configured with the soft-delete flag from settings
    return FieldExistVerifier(not_delete_flag=get_settings().LOGIC_DELETE_NOT_DELETE_FLAG)
