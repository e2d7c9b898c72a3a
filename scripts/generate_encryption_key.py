"""Generate a random ENCRYPTION_KEY (32 bytes as 64 hex characters).

Usage:
    uv run python -m scripts.generate_encryption_key
Copy the printed line into .env.local. Never commit the key.
"""

import sys

from rabbitforms.shared.utils.generators import generate_hex_key


def main() -> int:
    """Print a fresh key and the line to paste into .env.local."""
    key = generate_hex_key()
    print("Your encryption key:")
    print("-" * 70)
    print(key)
    print("-" * 70)
    print("\nAdd it to your .env.local file:")
    print(f"\nENCRYPTION_KEY={key}\n")
    print("Keep this key secure and never commit it to git.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
