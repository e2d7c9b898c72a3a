"""Application interfaces (ports): repository protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from rabbitforms.infrastructure or rabbitforms.api.
"""

from rabbitforms.application.interfaces.repositories import (
    IBusinessRepository,
    IFormRepository,
    ISubmissionRepository,
    IUserRepository,
)

__all__ = [
    "IBusinessRepository",
    "IFormRepository",
    "ISubmissionRepository",
    "IUserRepository",
]
