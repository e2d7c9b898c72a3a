"""Application DTOs (no ORM dependency)."""

from rabbitforms.application.dtos.business import BusinessResult
from rabbitforms.application.dtos.form import FormCreate, FormResult
from rabbitforms.application.dtos.submission import SubmissionResult, SubmissionToPersist
from rabbitforms.application.dtos.user import UserResult

__all__ = [
    "BusinessResult",
    "FormCreate",
    "FormResult",
    "SubmissionResult",
    "SubmissionToPersist",
    "UserResult",
]
