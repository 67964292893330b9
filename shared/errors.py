"""
Shared error handling for live_attr.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class LiveAttrException(Exception):
    """Base exception for live_attr."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidFieldError(LiveAttrException):
    """Field is not registered as a live attribute."""

    def __init__(self, field: str, details: Optional[Dict[str, Any]] = None):
        self.field = field
        super().__init__("INVALID_FIELD", f"{field} is not a live attributes", details)


class TypeMismatchError(LiveAttrException):
    """Increment amount or stored value incompatible with the field type."""

    NOT_AN_INTEGER = "ERR value is not an integer or out of range"
    NOT_A_FLOAT = "ERR value is not a valid float"
    NOT_A_NUMBER = "ERR hash value is not a number"

    def __init__(self, message: str = NOT_A_NUMBER, details: Optional[Dict[str, Any]] = None):
        super().__init__("TYPE_MISMATCH", message, details)


class SchemaDriftError(LiveAttrException):
    """Cached snapshot no longer matches the document schema."""

    def __init__(self, message: str = "Cached snapshot does not match schema", details: Optional[Dict[str, Any]] = None):
        super().__init__("SCHEMA_DRIFT", message, details)


class NotFoundError(LiveAttrException):
    """Identity absent in the persistent store."""

    def __init__(self, model: str, identity: Any, details: Optional[Dict[str, Any]] = None):
        self.model = model
        self.identity = identity
        super().__init__("NOT_FOUND", f"{model} with identity {identity!r} not found", details)


class RegistrationError(LiveAttrException):
    """Live attribute declaration refers to an undeclared field."""

    def __init__(self, message: str = "Invalid live attribute registration", details: Optional[Dict[str, Any]] = None):
        super().__init__("REGISTRATION_ERROR", message, details)
