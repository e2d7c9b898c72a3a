"""ID and value generators (CUID2 ids, random hex keys)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

# 32 bytes -> 64 hex characters (AES-256 key size).
ENCRYPTION_KEY_BYTES = 32


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_hex_key(num_bytes: int = ENCRYPTION_KEY_BYTES) -> str:
    """Return num_bytes of CSPRNG output as lowercase hex (2 * num_bytes characters).

    Raises:
        ValueError: If num_bytes is not positive.
    """
    if num_bytes <= 0:
        raise ValueError("num_bytes must be positive")
    return secrets.token_hex(num_bytes)
