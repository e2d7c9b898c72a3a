"""Shared utilities: datetime and generators."""

from rabbitforms.shared.utils.datetime import ensure_utc, utc_now
from rabbitforms.shared.utils.generators import (
    ENCRYPTION_KEY_BYTES,
    generate_cuid,
    generate_hex_key,
)

__all__ = [
    "ENCRYPTION_KEY_BYTES",
    "generate_cuid",
    "generate_hex_key",
    "utc_now",
    "ensure_utc",
]
