"""Pydantic request/response schemas for the API."""

from rabbitforms.schemas.business import (
    BusinessCreateRequest,
    BusinessResponse,
    BusinessUpdate,
)
from rabbitforms.schemas.form import (
    FormCreateRequest,
    FormResponse,
    FormUpdate,
    PublicFormResponse,
)
from rabbitforms.schemas.health import HealthResponse
from rabbitforms.schemas.submission import (
    PublicSubmissionRequest,
    PublicSubmissionResponse,
    SubmissionResponse,
    SubmissionStatusUpdate,
)
from rabbitforms.schemas.user import (
    UserCreateRequest,
    UserProfileUpdate,
    UserResponse,
    UserRoleUpdate,
)

__all__ = [
    "BusinessCreateRequest",
    "BusinessResponse",
    "BusinessUpdate",
    "FormCreateRequest",
    "FormResponse",
    "FormUpdate",
    "HealthResponse",
    "PublicFormResponse",
    "PublicSubmissionRequest",
    "PublicSubmissionResponse",
    "SubmissionResponse",
    "SubmissionStatusUpdate",
    "UserCreateRequest",
    "UserProfileUpdate",
    "UserResponse",
    "UserRoleUpdate",
]
