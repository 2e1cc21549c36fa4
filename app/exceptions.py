"""Service-level errors raised by the scheduling core and mapped to HTTP at the boundary"""

from typing import Dict, List, Optional


class ServiceError(Exception):
    """Base exception for scheduling errors."""

    status_code = 400
    code = "service_error"
    retryable = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class ValidationError(ServiceError):
    """Raised when input is malformed or out of range."""

    code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.field = field
        self.errors = errors or ([{"field": field, "message": message}] if field else [])

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFound(ServiceError):
    """Raised when a referenced slot, table, reservation or review is absent."""

    status_code = 404
    code = "not_found"

    def __init__(self, resource: str, resource_id=None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class SlotUnavailable(ServiceError):
    """Raised when the requested time slot is missing or closed for booking."""

    code = "slot_unavailable"

    def __init__(self, message: str = "Time slot not available"):
        super().__init__(message)


class TableUnsuitable(ServiceError):
    """Raised when the table is missing, inactive or too small for the party."""

    code = "table_unsuitable"

    def __init__(self, message: str = "Table not suitable for party size"):
        super().__init__(message)


class SchedulingConflict(ServiceError):
    """Raised when the requested interval overlaps an active booking or slot."""

    code = "scheduling_conflict"

    def __init__(self, message: str = "Table already reserved for this time"):
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Raised on role or ownership violations."""

    status_code = 403
    code = "forbidden"

    def __init__(self, message: str = "Not authorized to perform this action"):
        super().__init__(message)


class DuplicateResource(ServiceError):
    """Raised when a uniqueness constraint rejects a write."""

    code = "duplicate_resource"


class StorageError(ServiceError):
    """Raised when the underlying data store fails. Safe for a caller to retry."""

    status_code = 503
    code = "storage_error"
    retryable = True

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message)
