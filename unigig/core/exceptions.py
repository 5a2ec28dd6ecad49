"""
Domain error taxonomy.

Services raise these; the HTTP layer maps them to responses through a single
exception handler using ``status_code``.
"""
from typing import Optional


class UniGigError(Exception):
    status_code = 400
    default_message = "Request could not be completed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(UniGigError):
    status_code = 401
    default_message = "Authentication failed"


class InvalidCredentials(AuthError):
    default_message = "Invalid credentials"


class DuplicateEmail(AuthError):
    status_code = 400
    default_message = "User already exists"


class ProfileNotFound(UniGigError):
    status_code = 404
    default_message = "User profile not found"


class ProfileConflict(UniGigError):
    status_code = 409
    default_message = "Multiple profiles found for this user. Please contact support."


class OwnershipViolation(UniGigError):
    status_code = 403
    default_message = "You do not own this resource"


class RoleRequired(OwnershipViolation):
    """The caller's role cannot own the resource the operation touches."""

    def __init__(self, role):
        role_name = getattr(role, "value", role)
        super().__init__(f"{role_name.capitalize()} access required")
        self.role = role


class AlreadyApplied(UniGigError):
    status_code = 409
    default_message = "You have already applied to this job"


class ValidationError(UniGigError):
    status_code = 400
    default_message = "Invalid input"


class InvalidStatusTransition(ValidationError):
    def __init__(self, current, target):
        current = getattr(current, "value", current)
        target = getattr(target, "value", target)
        super().__init__(f"Cannot change application status from {current} to {target}")
        self.current = current
        self.target = target


class NotFound(UniGigError):
    status_code = 404
    default_message = "Resource not found"


class StorageError(UniGigError):
    """The storage layer failed; distinct from a lookup that found zero rows."""
    status_code = 503
    default_message = "Storage is unavailable"


class StorageConflict(StorageError):
    status_code = 409
    default_message = "Record conflicts with existing data"
