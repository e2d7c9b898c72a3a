"""Bootstrap a super admin user record (the API requires an existing actor).

Usage:
    uv run python -m scripts.create_super_admin <email> [user_id] [full_name]
user_id should be the identity provider's id for the account; a CUID is
generated when omitted.
"""

import asyncio
import sys

from rabbitforms.application.services.user_service import UserService
from rabbitforms.core.config import get_settings
from rabbitforms.core.logging import setup_logging
from rabbitforms.domain.enums import UserRole
from rabbitforms.domain.exceptions import RabbitFormsException
from rabbitforms.infrastructure.persistence import database
from rabbitforms.infrastructure.persistence.repositories import (
    BusinessRepository,
    UserRepository,
)


async def create_super_admin(
    email: str, user_id: str | None = None, full_name: str | None = None
) -> str:
    """Create the user in its own transaction and return its id."""
    database._ensure_engine()
    assert database.AsyncSessionLocal is not None
    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            svc = UserService(
                UserRepository(session),
                BusinessRepository(session),
                allow_super_admin_business=get_settings().allow_super_admin_business,
            )
            user = await svc.create_user(
                email=email,
                role=UserRole.SUPER_ADMIN,
                full_name=full_name,
                user_id=user_id,
            )
    await database.dispose_engine()
    return user.id


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(
            "Usage: uv run python -m scripts.create_super_admin <email> [user_id] [full_name]",
            file=sys.stderr,
        )
        return 1
    email = args[0]
    user_id = args[1] if len(args) > 1 else None
    full_name = args[2] if len(args) > 2 else None
    setup_logging()
    try:
        created_id = asyncio.run(create_super_admin(email, user_id, full_name))
    except RabbitFormsException as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1
    print(f"Created super admin: {created_id} ({email})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
