"""Application services: business, user, form, submission, authorization, duplicate key."""

from rabbitforms.application.services.authorization_service import (
    AccessDecision,
    AuthorizationService,
    authorize_business_access,
    require_business_access,
)
from rabbitforms.application.services.business_service import BusinessService
from rabbitforms.application.services.duplicate_key_service import (
    DuplicateKeyService,
    HashAlgorithm,
    SHA256Algorithm,
)
from rabbitforms.application.services.form_service import FormService
from rabbitforms.application.services.submission_service import SubmissionService
from rabbitforms.application.services.user_service import UserService

__all__ = [
    "AccessDecision",
    "AuthorizationService",
    "BusinessService",
    "DuplicateKeyService",
    "FormService",
    "HashAlgorithm",
    "SHA256Algorithm",
    "SubmissionService",
    "UserService",
    "authorize_business_access",
    "require_business_access",
]
