# blogapi/core/exceptions.py
from typing import List, Optional


class AppException(Exception):
    """Base exception para todo el proyecto."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ConfigError(AppException):
    """Error de configuración o variables de entorno."""


class ValidationError(AppException):
    """A post field violates its constraints (title, content, meta, slug)."""


class ConflictError(AppException):
    """Slug already taken by another active post."""


class NotFoundError(AppException):
    """Lookup by slug or id found nothing."""


class StorageError(AppException):
    """The store is unreachable or the operation failed for infra reasons."""
