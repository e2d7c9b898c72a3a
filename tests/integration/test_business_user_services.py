"""Integration tests for business and user services with real repositories."""

import pytest

from rabbitforms.application.services.business_service import BusinessService
from rabbitforms.application.services.form_service import FormService
from rabbitforms.application.services.user_service import UserService
from rabbitforms.domain.enums import UserRole
from rabbitforms.domain.exceptions import (
    AuthorizationException,
    DuplicateEmailException,
    DuplicateSlugException,
    InvalidRoleBusinessPairingException,
    ValidationException,
)
from rabbitforms.infrastructure.persistence.repositories import (
    BusinessRepository,
    FormRepository,
    UserRepository,
)

pytestmark = pytest.mark.requires_db


@pytest.fixture
def business_service(db_session) -> BusinessService:
    return BusinessService(BusinessRepository(db_session), FormRepository(db_session))


@pytest.fixture
def user_service(db_session) -> UserService:
    return UserService(UserRepository(db_session), BusinessRepository(db_session))


@pytest.fixture
def form_service(db_session) -> FormService:
    return FormService(FormRepository(db_session), BusinessRepository(db_session))


class TestBusinessService:
    async def test_create_and_duplicate_slug(self, business_service) -> None:
        created = await business_service.create_business(
            "Acme", "acme", theme={"primary": "#ff0000"}
        )
        assert created.theme == {"primary": "#ff0000"}
        with pytest.raises(DuplicateSlugException):
            await business_service.create_business("Other", "acme")

    async def test_rename_slug_to_taken_slug(self, business_service) -> None:
        await business_service.create_business("Acme", "acme")
        globex = await business_service.create_business("Globex", "globex")
        with pytest.raises(DuplicateSlugException):
            await business_service.update_business(globex.id, {"slug": "acme"})

    async def test_slug_frozen_once_a_form_was_published(
        self, business_service, form_service
    ) -> None:
        business = await business_service.create_business("Acme", "acme")
        renamed = await business_service.update_business(business.id, {"slug": "acme-co"})
        assert renamed.slug == "acme-co"

        form = await form_service.create_form(
            business.id, "Contact", "contact", schema={"fields": [{"id": "email"}]}
        )
        await form_service.publish_form(form.id)
        await form_service.unpublish_form(form.id)

        with pytest.raises(ValidationException, match="published"):
            await business_service.update_business(business.id, {"slug": "acme-inc"})
        updated = await business_service.update_business(business.id, {"name": "Acme Inc"})
        assert updated.name == "Acme Inc"
        assert updated.slug == "acme-co"

    async def test_deactivate_and_activate(self, business_service) -> None:
        business = await business_service.create_business("Acme", "acme")
        assert (await business_service.deactivate_business(business.id)).is_active is False
        assert (await business_service.activate_business(business.id)).is_active is True

    async def test_list_active_only(self, business_service) -> None:
        acme = await business_service.create_business("Acme", "acme")
        globex = await business_service.create_business("Globex", "globex")
        await business_service.deactivate_business(globex.id)
        active = await business_service.list_businesses(active_only=True)
        assert [b.id for b in active] == [acme.id]
        assert len(await business_service.list_businesses()) == 2


class TestUserService:
    async def test_business_admin_pairing(self, business_service, user_service) -> None:
        with pytest.raises(InvalidRoleBusinessPairingException):
            await user_service.create_user("a@example.com", UserRole.BUSINESS_ADMIN)

        business = await business_service.create_business("Acme", "acme")
        user = await user_service.create_user(
            "a@example.com", UserRole.BUSINESS_ADMIN, business.id
        )
        assert user.business_id == business.id

        await business_service.deactivate_business(business.id)
        with pytest.raises(InvalidRoleBusinessPairingException, match="not active"):
            await user_service.create_user(
                "b@example.com", UserRole.BUSINESS_ADMIN, business.id
            )

    async def test_duplicate_email_case_insensitive(self, user_service) -> None:
        await user_service.create_user("a@example.com", UserRole.SUPER_ADMIN)
        with pytest.raises(DuplicateEmailException):
            await user_service.create_user("A@example.com", UserRole.SUPER_ADMIN)

    async def test_update_profile(self, user_service) -> None:
        user = await user_service.create_user("a@example.com", UserRole.SUPER_ADMIN)
        await user_service.create_user("b@example.com", UserRole.SUPER_ADMIN)
        updated = await user_service.update_profile(user.id, full_name="  Ann  ")
        assert updated.full_name == "Ann"
        with pytest.raises(DuplicateEmailException):
            await user_service.update_profile(user.id, email="b@example.com")

    async def test_change_role(self, business_service, user_service) -> None:
        business = await business_service.create_business("Acme", "acme")
        admin = await user_service.create_user("root@example.com", UserRole.SUPER_ADMIN)
        target = await user_service.create_user("t@example.com", UserRole.SUPER_ADMIN)

        demoted = await user_service.change_role(
            admin, target.id, UserRole.BUSINESS_ADMIN, business.id
        )
        assert demoted.role == UserRole.BUSINESS_ADMIN
        assert demoted.business_id == business.id

        with pytest.raises(InvalidRoleBusinessPairingException):
            await user_service.change_role(admin, target.id, UserRole.BUSINESS_ADMIN, None)
        with pytest.raises(AuthorizationException):
            await user_service.change_role(demoted, admin.id, UserRole.BUSINESS_ADMIN, business.id)
        with pytest.raises(AuthorizationException):
            await user_service.change_role(admin, admin.id, UserRole.BUSINESS_ADMIN, business.id)

    async def test_list_users_by_business(self, business_service, user_service) -> None:
        business = await business_service.create_business("Acme", "acme")
        member = await user_service.create_user(
            "m@example.com", UserRole.BUSINESS_ADMIN, business.id
        )
        await user_service.create_user("root@example.com", UserRole.SUPER_ADMIN)
        assert [u.id for u in await user_service.list_users(business.id)] == [member.id]
        assert len(await user_service.list_users()) == 2

    async def test_deactivate_user(self, user_service) -> None:
        user = await user_service.create_user("a@example.com", UserRole.SUPER_ADMIN)
        assert (await user_service.deactivate_user(user.id)).is_active is False
        assert (await user_service.activate_user(user.id)).is_active is True
