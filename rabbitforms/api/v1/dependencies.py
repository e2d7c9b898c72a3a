"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, application services and the
acting user. Services are built from infrastructure repositories here;
routes depend only on these dependencies, not on infra directly.

Read routes use get_db; write routes use get_db_transactional. Within one
request the actor and the services share the same session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitforms.application.dtos.user import UserResult
from rabbitforms.application.services.authorization_service import AuthorizationService
from rabbitforms.application.services.business_service import BusinessService
from rabbitforms.application.services.form_service import FormService
from rabbitforms.application.services.submission_service import SubmissionService
from rabbitforms.application.services.user_service import UserService
from rabbitforms.core.config import get_settings
from rabbitforms.domain.exceptions import AuthenticationException
from rabbitforms.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
)
from rabbitforms.infrastructure.persistence.repositories import (
    BusinessRepository,
    FormRepository,
    SubmissionRepository,
    UserRepository,
)


def get_authorization_service() -> AuthorizationService:
    """Authorization decisions (stateless)."""
    return AuthorizationService()


async def _load_actor(request: Request, db: AsyncSession) -> UserResult:
    """Resolve the acting user from the header set by the upstream auth gateway.

    Business admins of an inactive business are refused (403).
    """
    name = get_settings().actor_header_name
    user_id = request.headers.get(name)
    if not user_id:
        raise AuthenticationException(f"Missing required header: {name}")
    user = await UserRepository(db).get_by_id(user_id)
    if not user:
        raise AuthenticationException("Unknown user")
    if not user.is_active:
        raise AuthenticationException("User account is inactive")
    if user.business_id is not None:
        business = await BusinessRepository(db).get_by_id(user.business_id)
        get_authorization_service().require_active_membership(user, business)
    return user


async def get_current_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResult:
    """Acting user for read routes."""
    return await _load_actor(request, db)


async def get_current_user_for_write(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserResult:
    """Acting user for write routes (same transaction as the write)."""
    return await _load_actor(request, db)


def _user_service(db: AsyncSession) -> UserService:
    return UserService(
        UserRepository(db),
        BusinessRepository(db),
        allow_super_admin_business=get_settings().allow_super_admin_business,
    )


async def get_business_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BusinessService:
    """Business service for read operations."""
    return BusinessService(BusinessRepository(db), FormRepository(db))


async def get_business_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> BusinessService:
    """Business service for writes (transactional)."""
    return BusinessService(BusinessRepository(db), FormRepository(db))


async def get_user_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserService:
    """User service for read operations."""
    return _user_service(db)


async def get_user_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserService:
    """User service for writes (transactional)."""
    return _user_service(db)


async def get_form_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> FormService:
    """Form service for read operations."""
    return FormService(FormRepository(db), BusinessRepository(db))


async def get_form_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> FormService:
    """Form service for writes (transactional)."""
    return FormService(FormRepository(db), BusinessRepository(db))


async def get_submission_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SubmissionService:
    """Submission service for read operations."""
    return SubmissionService(SubmissionRepository(db), FormRepository(db))


async def get_submission_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> SubmissionService:
    """Submission service for writes (transactional; locks the form row)."""
    return SubmissionService(SubmissionRepository(db), FormRepository(db))


async def get_public_services(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> tuple[FormService, SubmissionService]:
    """Form and submission services for the public capture write path (same transaction)."""
    return (
        FormService(FormRepository(db), BusinessRepository(db)),
        SubmissionService(SubmissionRepository(db), FormRepository(db)),
    )
