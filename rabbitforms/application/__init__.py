"""Application layer: DTOs, repository interfaces and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the repository interfaces.
"""

from rabbitforms.application.interfaces import (
    IBusinessRepository,
    IFormRepository,
    ISubmissionRepository,
    IUserRepository,
)
from rabbitforms.application.services import (
    AuthorizationService,
    BusinessService,
    DuplicateKeyService,
    FormService,
    SubmissionService,
    UserService,
)

__all__ = [
    "AuthorizationService",
    "BusinessService",
    "DuplicateKeyService",
    "FormService",
    "IBusinessRepository",
    "IFormRepository",
    "ISubmissionRepository",
    "IUserRepository",
    "SubmissionService",
    "UserService",
]
