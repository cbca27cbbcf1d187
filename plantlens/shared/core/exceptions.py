# 📄 File: plantlens/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines the special error types the plant identification app uses to explain
# what went wrong (missing plant, failed identification, bad request) in a clear way.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and serialization for API responses and error handling.
# 🔗 Dependencies:
# FastAPI HTTPException, typing, HTTP status constants
# 🔄 Connected Modules / Calls From:
# API endpoints, error handling middleware, identification gateway, storage backends

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class PlantLensException(Exception):
    """
    Base exception class for the PlantLens application.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(PlantLensException):
    """
    Exception raised for request validation failures.
    Used when input data doesn't meet validation requirements.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if constraint:
            details["constraint"] = constraint

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(PlantLensException):
    """
    Exception raised when requested resource is not found.
    Used for missing entities, files, endpoints, etc.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class ConfigurationError(PlantLensException):
    """
    Exception raised when the application is started with unusable settings.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        setting: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if setting:
            details["setting"] = setting

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="CONFIGURATION_ERROR"
        )


# =============================================================================
# EXTERNAL SERVICE EXCEPTIONS
# =============================================================================

class ExternalServiceError(PlantLensException):
    """
    Exception raised when external service calls fail.
    Used for the AI identification service and other integrations.
    """

    def __init__(
        self,
        message: str = "External service error",
        service: Optional[str] = None,
        service_response: Optional[str] = None,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if service:
            details["service"] = service
        if service_response:
            details["service_response"] = service_response

        super().__init__(
            message=message,
            status_code=status_code,
            details=details,
            error_code="EXTERNAL_SERVICE_ERROR"
        )


class ExternalAPIError(PlantLensException):
    """
    Exception raised for external API failures.
    Used when third-party HTTP services (OpenAI, Nominatim) fail.
    """

    def __init__(
        self,
        message: str = "External API error",
        api_name: Optional[str] = None,
        api_status_code: Optional[int] = None,
        api_response: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if api_name:
            details["api_name"] = api_name
        if api_status_code:
            details["api_status_code"] = api_status_code
        if api_response:
            details["api_response"] = api_response

        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
            error_code="EXTERNAL_API_ERROR"
        )


class APITimeoutError(ExternalAPIError):
    """Exception raised when an external API call times out."""

    def __init__(self, api_name: str, timeout_seconds: int = 10):
        super().__init__(
            message=f"{api_name} API request timed out after {timeout_seconds} seconds",
            api_name=api_name,
            details={
                "api_name": api_name,
                "timeout_seconds": timeout_seconds,
            }
        )


class APIAuthenticationError(ExternalAPIError):
    """Exception raised when an external API request is not properly authenticated."""

    def __init__(self, api_name: str):
        super().__init__(
            message=f"Authentication failed for {api_name} API",
            api_name=api_name,
            api_status_code=401,
        )


# =============================================================================
# FILE STORAGE EXCEPTIONS
# =============================================================================

class FileStorageError(PlantLensException):
    """
    Exception raised for file storage operation failures.
    Used for read/write/delete errors against the disk or the object store.
    """

    def __init__(
        self,
        message: str = "File storage error",
        operation: Optional[str] = None,
        filename: Optional[str] = None,
        storage_path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if filename:
            details["filename"] = filename
        if storage_path:
            details["storage_path"] = storage_path

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="FILE_STORAGE_ERROR"
        )


class StorageObjectNotFoundError(FileStorageError):
    """
    Raised by blob clients when a key does not exist.
    Lets callers tell an absent object apart from an unreachable store.
    """

    def __init__(self, storage_path: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"File not found: {storage_path}",
            operation="download",
            storage_path=storage_path
        )


class InvalidFileTypeError(PlantLensException):
    """
    Exception raised when an upload is not a usable image payload.
    """

    def __init__(
        self,
        message: str = "Invalid file type",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="INVALID_FILE_TYPE"
        )


# =============================================================================
# PLANT SPECIFIC EXCEPTIONS
# =============================================================================

class PlantNotFoundError(NotFoundError):
    """
    Exception raised when plant is not found.
    Specialized NotFoundError for plant resources.
    """

    def __init__(
        self,
        plant_id: int,
        message: Optional[str] = None
    ):
        if not message:
            message = "Plant not found"

        super().__init__(
            message=message,
            resource_type="plant",
            resource_id=str(plant_id),
            details={"plant_id": plant_id}
        )


class PlantIdentificationError(ExternalServiceError):
    """
    Exception raised when plant identification fails.
    Used for AI service failures and unusable responses.
    """

    def __init__(
        self,
        message: str = "Failed to identify plant. Please try again.",
        provider: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if provider:
            details["provider"] = provider

        super().__init__(
            message=message,
            service="plant_identification",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details
        )


# =============================================================================
# EXCEPTION UTILITIES
# =============================================================================

def is_client_error(exception: Exception) -> bool:
    """Check if exception represents a client error (4xx)."""
    if isinstance(exception, (PlantLensException, HTTPException)):
        return 400 <= exception.status_code < 500

    return False
