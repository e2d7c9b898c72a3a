"""Domain enumerations for the Rabbit Forms data store.

Enums represent fixed sets of domain values stored as plain strings.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for CHECK constraints)."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """Platform role. Exactly one per user."""

    SUPER_ADMIN = "super_admin"
    BUSINESS_ADMIN = "business_admin"


class SubmissionStatus(_ValuesMixin, str, Enum):
    """Submission lifecycle status.

    draft -> completed (finalization) -> archived (terminal).
    """

    DRAFT = "draft"
    COMPLETED = "completed"
    ARCHIVED = "archived"
