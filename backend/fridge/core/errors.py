# fridge/core/errors.py
"""
Domain error kinds raised by the core services.

Every error carries a stable machine-readable ``code``, a human-readable
``message`` and the HTTP status the API surface should answer with. The
exception handler in ``fridge.main`` turns any of them into the JSON envelope
``{"success": false, "message": ..., "error": {"code": ..., "message": ...}}``.
"""
from fastapi import status


class DomainError(Exception):
    """Base class for all errors the core reports to the API surface."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_code: str = "ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationError(DomainError):
    """Required field missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "VALIDATION_ERROR"


class Unauthorized(DomainError):
    """Missing, invalid or expired credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "AUTH_REQUIRED"


class Forbidden(DomainError):
    """Authenticated actor lacks the required ownership or role."""

    status_code = status.HTTP_403_FORBIDDEN
    default_code = "FORBIDDEN"


class NotFound(DomainError):
    """Referenced entity id does not resolve."""

    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"

    @classmethod
    def for_resource(cls, resource: str, identifier) -> "NotFound":
        return cls(
            f"{resource} '{identifier}' not found",
            code=f"{resource.upper()}_NOT_FOUND",
        )


class DuplicateEntry(DomainError):
    """A uniqueness constraint was violated."""

    status_code = status.HTTP_409_CONFLICT
    default_code = "DUPLICATE_ENTRY"


class InvalidTransition(DomainError):
    """Moderation transition not allowed from the recipe's current status."""

    status_code = status.HTTP_409_CONFLICT
    default_code = "INVALID_TRANSITION"


class AlreadyApproved(InvalidTransition):
    default_code = "ALREADY_APPROVED"

    def __init__(self, message: str = "Recipe is already approved"):
        super().__init__(message)


class DependencyFailure(DomainError):
    """An external collaborator (store, AI generator, image search) failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_code = "DEPENDENCY_FAILURE"
