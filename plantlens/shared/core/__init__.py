# 📄 File: plantlens/shared/core/__init__.py
# 🧭 Purpose (Layman Explanation):
# The app's error types.
# 🧪 Purpose (Technical Summary):
# Core exception hierarchy exports.

from .exceptions import (
    APIAuthenticationError,
    APITimeoutError,
    ConfigurationError,
    ExternalAPIError,
    ExternalServiceError,
    FileStorageError,
    InvalidFileTypeError,
    NotFoundError,
    PlantLensException,
    PlantIdentificationError,
    PlantNotFoundError,
    StorageObjectNotFoundError,
    ValidationError,
)

__all__ = [
    "APIAuthenticationError",
    "APITimeoutError",
    "ConfigurationError",
    "ExternalAPIError",
    "ExternalServiceError",
    "FileStorageError",
    "InvalidFileTypeError",
    "NotFoundError",
    "PlantLensException",
    "PlantIdentificationError",
    "PlantNotFoundError",
    "StorageObjectNotFoundError",
    "ValidationError",
]
