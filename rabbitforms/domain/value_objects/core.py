"""Domain value objects for the Rabbit Forms data store.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

# Shared slug pattern: lowercase alphanumeric with optional hyphens (e.g. acme-corp).
_SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")
# Shape check only (one @, a dot in the domain).
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

ENCRYPTION_KEY_HEX_LENGTH = 64


def _validate_slug(
    value: str,
    min_len: int,
    max_len: int,
    field_name: str,
    length_msg: str,
    format_hint: str = "lowercase alphanumeric with optional hyphens",
) -> None:
    """Validate non-empty, length, and slug format. Raises ValueError on failure."""
    if not value:
        raise ValueError(f"{field_name} must be a non-empty string")
    if len(value) < min_len or len(value) > max_len:
        raise ValueError(length_msg)
    if not _SLUG_RE.match(value):
        raise ValueError(
            f"{field_name} must be {format_hint} (e.g., 'acme', 'acme-corp')"
        )


@dataclass(frozen=True)
class BusinessSlug:
    """Value object for a business slug.

    Business slugs appear in public URLs, so they are 2-63 characters,
    lowercase alphanumeric with optional hyphens (e.g. 'acme', 'acme-corp').
    """

    value: str

    def __post_init__(self) -> None:
        _validate_slug(
            self.value,
            min_len=2,
            max_len=63,
            field_name="Business slug",
            length_msg="Business slug must be 2-63 characters",
        )


@dataclass(frozen=True)
class FormSlug:
    """Value object for a form slug (unique per business, max 100 characters)."""

    value: str

    def __post_init__(self) -> None:
        _validate_slug(
            self.value,
            min_len=1,
            max_len=100,
            field_name="Form slug",
            length_msg="Form slug must be 1-100 characters",
        )


@dataclass(frozen=True)
class EmailAddress:
    """Value object for a user email. Normalized to lowercase, surrounding whitespace stripped."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.value.strip().lower())
        if not self.value:
            raise ValueError("Email must be a non-empty string")
        if len(self.value) > 320:
            raise ValueError("Email must not exceed 320 characters")
        if not _EMAIL_RE.match(self.value):
            raise ValueError(f"Invalid email address: {self.value!r}")


@dataclass(frozen=True)
class EncryptionKey:
    """Value object for the symmetric encryption key.

    Must be at least 64 hexadecimal characters (32 bytes). Stored lowercase.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate length and hex characters.

        Raises:
            ValueError: If too short or not hexadecimal.
        """
        object.__setattr__(self, "value", self.value.strip().lower())
        if len(self.value) < ENCRYPTION_KEY_HEX_LENGTH:
            raise ValueError(
                f"Encryption key is too short (should be {ENCRYPTION_KEY_HEX_LENGTH} hex chars)"
            )
        if not _HEX_RE.match(self.value):
            raise ValueError("Encryption key must contain only hexadecimal characters")

    def to_bytes(self) -> bytes:
        """Return the raw key bytes."""
        return bytes.fromhex(self.value)
