"""Authorization: explicit access decisions for (actor role, actor business, target business).

No ambient session state: every check receives the actor and the business
that owns the target resource.
"""

from __future__ import annotations

from dataclasses import dataclass

from rabbitforms.application.dtos.business import BusinessResult
from rabbitforms.application.dtos.user import UserResult
from rabbitforms.domain.enums import UserRole
from rabbitforms.domain.exceptions import AuthorizationException


@dataclass(frozen=True)
class AccessDecision:
    """Result of an authorization decision. reason is for logs, not for clients."""

    allowed: bool
    reason: str


def authorize_business_access(
    actor_role: UserRole,
    actor_business_id: str | None,
    target_business_id: str | None,
) -> AccessDecision:
    """Decide whether an actor may act on a resource owned by target_business_id.

    Super admins may access every business. Business admins may access only
    the business they belong to. A target with no business (platform-level
    resource) is super-admin only.
    """
    if actor_role == UserRole.SUPER_ADMIN:
        return AccessDecision(True, "super_admin")
    if actor_role == UserRole.BUSINESS_ADMIN:
        if target_business_id is None:
            return AccessDecision(False, "platform resource requires super_admin")
        if actor_business_id is not None and actor_business_id == target_business_id:
            return AccessDecision(True, "own business")
        return AccessDecision(False, "resource belongs to another business")
    return AccessDecision(False, f"unknown role {actor_role!r}")


def require_business_access(
    actor_role: UserRole,
    actor_business_id: str | None,
    target_business_id: str | None,
    *,
    resource: str,
    action: str,
) -> None:
    """Raise AuthorizationException unless authorize_business_access allows."""
    decision = authorize_business_access(actor_role, actor_business_id, target_business_id)
    if not decision.allowed:
        raise AuthorizationException(resource=resource, action=action)


class AuthorizationService:
    """Actor-aware wrapper over the decision function (inactive actors are always denied)."""

    def check(self, actor: UserResult, target_business_id: str | None) -> bool:
        """Return True if actor may act on resources of target_business_id."""
        if not actor.is_active:
            return False
        return authorize_business_access(
            actor.role, actor.business_id, target_business_id
        ).allowed

    def require(
        self,
        actor: UserResult,
        target_business_id: str | None,
        resource: str,
        action: str,
    ) -> None:
        """Raise AuthorizationException if actor may not act on target_business_id."""
        if not self.check(actor, target_business_id):
            raise AuthorizationException(resource=resource, action=action)

    def require_super_admin(self, actor: UserResult, resource: str, action: str) -> None:
        """Raise AuthorizationException unless actor is an active super admin."""
        if not (actor.is_active and actor.is_super_admin):
            raise AuthorizationException(resource=resource, action=action)

    def require_active_membership(
        self, actor: UserResult, actor_business: BusinessResult | None
    ) -> None:
        """Raise AuthorizationException if a business admin's own business is gone or inactive.

        Super admins are not tied to a business and always pass.
        """
        if actor.role != UserRole.BUSINESS_ADMIN:
            return
        if actor_business is None or not actor_business.is_active:
            raise AuthorizationException(resource="business", action="access")
