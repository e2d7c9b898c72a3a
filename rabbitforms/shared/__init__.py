"""Shared utilities: cross-cutting helpers used by every layer. No business logic."""

from rabbitforms.shared.utils import (
    ensure_utc,
    generate_cuid,
    generate_hex_key,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "generate_hex_key",
    "utc_now",
    "ensure_utc",
]
