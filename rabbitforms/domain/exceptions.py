"""Domain exceptions for the Rabbit Forms data store.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers; the environment
check collects the configuration ones into a report.
"""

from typing import Any


class RabbitFormsException(Exception):
    """Base exception for all Rabbit Forms errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(RabbitFormsException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(RabbitFormsException):
    """Raised when the caller's identity cannot be established."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(RabbitFormsException):
    """Raised when the actor lacks access to the target resource."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'form', 'business').
            action: Optional action that was attempted (e.g. 'update', 'read').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(RabbitFormsException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'business', 'form').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateSlugException(RabbitFormsException):
    """Raised when creating or renaming a business to a slug that already exists."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            f"Business with slug '{slug}' already exists",
            "DUPLICATE_SLUG",
            {"slug": slug},
        )


class DuplicateSlugInBusinessException(RabbitFormsException):
    """Raised when a form slug is already used by another form of the same business."""

    def __init__(self, business_id: str, slug: str) -> None:
        super().__init__(
            f"Form with slug '{slug}' already exists in this business",
            "DUPLICATE_SLUG_IN_BUSINESS",
            {"business_id": business_id, "slug": slug},
        )


class DuplicateEmailException(RabbitFormsException):
    """Raised when creating or updating a user to an email already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            "Email is already registered",
            "DUPLICATE_EMAIL",
            {"email": email},
        )


class InvalidRoleBusinessPairingException(RabbitFormsException):
    """Raised when a user's role and business affiliation do not fit together.

    A business_admin needs exactly one existing, active business; a
    super_admin may only carry a business when deployment policy allows it.
    """

    def __init__(self, role: str, business_id: str | None, reason: str) -> None:
        super().__init__(
            f"Invalid business for role '{role}': {reason}",
            "INVALID_ROLE_BUSINESS_PAIRING",
            {"role": role, "business_id": business_id, "reason": reason},
        )


class EmptySchemaException(RabbitFormsException):
    """Raised when publishing (or keeping published) a form whose schema has no fields."""

    def __init__(self, form_id: str) -> None:
        super().__init__(
            "Form schema has no fields; add at least one field before publishing",
            "EMPTY_SCHEMA",
            {"form_id": form_id},
        )


class InvalidTransitionException(RabbitFormsException):
    """Raised when a submission status change is not an allowed transition."""

    def __init__(self, submission_id: str, current: str, requested: str) -> None:
        super().__init__(
            f"Cannot transition submission from '{current}' to '{requested}'",
            "INVALID_TRANSITION",
            {
                "submission_id": submission_id,
                "current_status": current,
                "requested_status": requested,
            },
        )


class TenantMismatchException(RabbitFormsException):
    """Raised when a submission's business differs from its form's business."""

    def __init__(self, form_id: str, form_business_id: str, business_id: str) -> None:
        super().__init__(
            "Submission business does not match the form's business",
            "TENANT_MISMATCH",
            {
                "form_id": form_id,
                "form_business_id": form_business_id,
                "business_id": business_id,
            },
        )


class ConfigurationMissingException(RabbitFormsException):
    """Raised (or collected) when a required configuration file or value is absent."""

    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(
            message or f"{name}: missing or uses placeholder",
            "CONFIGURATION_MISSING",
            {"name": name},
        )


class ConfigurationInvalidException(RabbitFormsException):
    """Raised (or collected) when a configuration value is present but malformed."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(
            f"{name}: {reason}",
            "CONFIGURATION_INVALID",
            {"name": name, "reason": reason},
        )
