from .field_exist import FieldExistVerifier, DEFAULT_NOT_DELETE_FLAG, ids_match

__all__ = ["FieldExistVerifier", "DEFAULT_NOT_DELETE_FLAG", "ids_match"]
