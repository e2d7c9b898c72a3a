"""Unit tests for application services with mocked repositories."""

from dataclasses import replace
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from rabbitforms.application.dtos.business import BusinessResult
from rabbitforms.application.dtos.form import FormResult
from rabbitforms.application.dtos.submission import SubmissionResult
from rabbitforms.application.dtos.user import UserResult
from rabbitforms.application.services.business_service import BusinessService
from rabbitforms.application.services.duplicate_key_service import DuplicateKeyService
from rabbitforms.application.services.form_service import FormService
from rabbitforms.application.services.submission_service import SubmissionService
from rabbitforms.application.services.user_service import UserService
from rabbitforms.domain.enums import SubmissionStatus, UserRole
from rabbitforms.domain.exceptions import (
    AuthorizationException,
    DuplicateEmailException,
    DuplicateSlugException,
    EmptySchemaException,
    InvalidRoleBusinessPairingException,
    InvalidTransitionException,
    ResourceNotFoundException,
    TenantMismatchException,
    ValidationException,
)

NOW = datetime(2026, 1, 1, tzinfo=UTC)

BUSINESS = BusinessResult(
    id="b1",
    name="Acme",
    slug="acme",
    logo_url=None,
    custom_domain=None,
    theme={},
    is_active=True,
    created_at=NOW,
    updated_at=NOW,
)

FORM = FormResult(
    id="f1",
    business_id="b1",
    title="Contact",
    description=None,
    slug="contact",
    schema={"fields": [{"id": "email"}]},
    settings={"duplicate_check_fields": ["email"]},
    conditional_logic={},
    is_active=True,
    is_published=False,
    created_by=None,
    created_at=NOW,
    updated_at=NOW,
    published_at=None,
)

SUPER_ADMIN = UserResult(
    id="admin",
    email="root@example.com",
    full_name=None,
    role=UserRole.SUPER_ADMIN,
    business_id=None,
    is_active=True,
    created_at=NOW,
    updated_at=NOW,
)


def _submission(status: SubmissionStatus) -> SubmissionResult:
    return SubmissionResult(
        id="s1",
        form_id="f1",
        business_id="b1",
        data={},
        metadata={},
        signature_url=None,
        is_duplicate=False,
        duplicate_check_key=None,
        status=status,
        submitted_at=NOW,
        created_at=NOW,
    )


class TestBusinessService:
    async def test_create_rejects_taken_slug_before_insert(self) -> None:
        business_repo = MagicMock()
        business_repo.get_by_slug = AsyncMock(return_value=BUSINESS)
        business_repo.create_business = AsyncMock()
        service = BusinessService(business_repo, MagicMock())

        with pytest.raises(DuplicateSlugException):
            await service.create_business("Acme Two", "acme")
        business_repo.create_business.assert_not_called()

    async def test_create_validates_slug_and_theme(self) -> None:
        service = BusinessService(MagicMock(), MagicMock())
        with pytest.raises(ValidationException) as exc_info:
            await service.create_business("Acme", "Not A Slug")
        assert exc_info.value.details == {"field": "slug"}
        with pytest.raises(ValidationException):
            await service.create_business("Acme", "acme", theme={"color": {1, 2}})

    async def test_slug_change_refused_after_publish(self) -> None:
        business_repo = MagicMock()
        business_repo.get_by_id = AsyncMock(return_value=BUSINESS)
        business_repo.update_business = AsyncMock()
        form_repo = MagicMock()
        form_repo.has_published_forms = AsyncMock(return_value=True)
        service = BusinessService(business_repo, form_repo)

        with pytest.raises(ValidationException, match="published"):
            await service.update_business("b1", {"slug": "acme-co"})
        business_repo.update_business.assert_not_called()

    async def test_update_rejects_unknown_fields(self) -> None:
        business_repo = MagicMock()
        business_repo.get_by_id = AsyncMock(return_value=BUSINESS)
        service = BusinessService(business_repo, MagicMock())
        with pytest.raises(ValidationException, match="is_active"):
            await service.update_business("b1", {"is_active": False})

    async def test_deactivate_missing_business(self) -> None:
        business_repo = MagicMock()
        business_repo.set_active = AsyncMock(return_value=None)
        service = BusinessService(business_repo, MagicMock())
        with pytest.raises(ResourceNotFoundException):
            await service.deactivate_business("missing")


class TestUserService:
    async def test_create_business_admin_needs_existing_business(self) -> None:
        business_repo = MagicMock()
        business_repo.get_by_id = AsyncMock(return_value=None)
        user_repo = MagicMock()
        user_repo.create_user = AsyncMock()
        service = UserService(user_repo, business_repo)

        with pytest.raises(InvalidRoleBusinessPairingException):
            await service.create_user("a@example.com", UserRole.BUSINESS_ADMIN, "missing")
        user_repo.create_user.assert_not_called()

    async def test_create_rejects_duplicate_email(self) -> None:
        user_repo = MagicMock()
        user_repo.get_by_email = AsyncMock(return_value=SUPER_ADMIN)
        service = UserService(user_repo, MagicMock())
        with pytest.raises(DuplicateEmailException):
            await service.create_user("ROOT@example.com", UserRole.SUPER_ADMIN)
        user_repo.get_by_email.assert_awaited_once_with("root@example.com")

    async def test_create_normalizes_email(self) -> None:
        user_repo = MagicMock()
        user_repo.get_by_email = AsyncMock(return_value=None)
        user_repo.create_user = AsyncMock(return_value=SUPER_ADMIN)
        service = UserService(user_repo, MagicMock())
        await service.create_user(" Root@Example.com ", UserRole.SUPER_ADMIN)
        assert user_repo.create_user.await_args.kwargs["email"] == "root@example.com"

    async def test_super_admin_business_policy(self) -> None:
        business_repo = MagicMock()
        business_repo.get_by_id = AsyncMock(return_value=BUSINESS)
        service = UserService(
            MagicMock(), business_repo, allow_super_admin_business=False
        )
        with pytest.raises(InvalidRoleBusinessPairingException):
            await service.create_user("a@example.com", UserRole.SUPER_ADMIN, "b1")

    async def test_change_role_of_self_denied(self) -> None:
        user_repo = MagicMock()
        user_repo.set_role = AsyncMock()
        service = UserService(user_repo, MagicMock())
        with pytest.raises(AuthorizationException):
            await service.change_role(SUPER_ADMIN, SUPER_ADMIN.id, UserRole.BUSINESS_ADMIN, "b1")
        user_repo.set_role.assert_not_called()

    async def test_change_role_by_business_admin_denied(self) -> None:
        actor = replace(SUPER_ADMIN, id="biz", role=UserRole.BUSINESS_ADMIN, business_id="b1")
        service = UserService(MagicMock(), MagicMock())
        with pytest.raises(AuthorizationException):
            await service.change_role(actor, "other", UserRole.SUPER_ADMIN)

    async def test_update_profile_requires_a_field(self) -> None:
        service = UserService(MagicMock(), MagicMock())
        with pytest.raises(ValidationException):
            await service.update_profile("u1")


class TestFormService:
    async def test_create_requires_business(self) -> None:
        business_repo = MagicMock()
        business_repo.get_by_id = AsyncMock(return_value=None)
        service = FormService(MagicMock(), business_repo)
        with pytest.raises(ResourceNotFoundException):
            await service.create_form("missing", "Contact", "contact")

    async def test_publish_empty_schema_rejected(self) -> None:
        form_repo = MagicMock()
        form_repo.get_by_id_for_update = AsyncMock(return_value=replace(FORM, schema={}))
        form_repo.update_form = AsyncMock()
        service = FormService(form_repo, MagicMock())
        with pytest.raises(EmptySchemaException):
            await service.publish_form("f1")
        form_repo.update_form.assert_not_called()

    async def test_publish_already_published_is_noop(self) -> None:
        published = replace(FORM, is_published=True, published_at=NOW)
        form_repo = MagicMock()
        form_repo.get_by_id_for_update = AsyncMock(return_value=published)
        form_repo.update_form = AsyncMock()
        service = FormService(form_repo, MagicMock())
        assert await service.publish_form("f1") is published
        form_repo.update_form.assert_not_called()

    async def test_public_form_hidden_when_unpublished(self) -> None:
        business_repo = MagicMock()
        business_repo.get_by_slug = AsyncMock(return_value=BUSINESS)
        form_repo = MagicMock()
        form_repo.get_by_slug = AsyncMock(return_value=FORM)
        service = FormService(form_repo, business_repo)
        with pytest.raises(ResourceNotFoundException):
            await service.get_public_form("acme", "contact")

    async def test_public_form_hidden_when_business_inactive(self) -> None:
        business_repo = MagicMock()
        business_repo.get_by_slug = AsyncMock(return_value=replace(BUSINESS, is_active=False))
        service = FormService(MagicMock(), business_repo)
        with pytest.raises(ResourceNotFoundException):
            await service.get_public_form("acme", "contact")

    async def test_update_rejects_unknown_fields(self) -> None:
        form_repo = MagicMock()
        form_repo.get_by_id = AsyncMock(return_value=FORM)
        service = FormService(form_repo, MagicMock())
        with pytest.raises(ValidationException, match="business_id"):
            await service.update_form("f1", {"business_id": "b2"})


class TestSubmissionService:
    async def test_create_stamps_form_business_and_computes_key(self) -> None:
        form_repo = MagicMock()
        form_repo.get_by_id_for_update = AsyncMock(return_value=FORM)
        submission_repo = MagicMock()
        submission_repo.duplicate_key_exists = AsyncMock(return_value=True)
        submission_repo.create_submission = AsyncMock(return_value=_submission(SubmissionStatus.COMPLETED))
        service = SubmissionService(submission_repo, form_repo)

        await service.create_submission("f1", {"email": "a@example.com"})

        persisted = submission_repo.create_submission.await_args.args[0]
        assert persisted.business_id == "b1"
        assert persisted.is_duplicate is True
        assert persisted.duplicate_check_key == DuplicateKeyService().compute_key(
            "f1", {"email": "a@example.com"}, ["email"]
        )
        assert persisted.metadata == {}

    async def test_create_without_key_skips_duplicate_lookup(self) -> None:
        form_repo = MagicMock()
        form_repo.get_by_id_for_update = AsyncMock(return_value=replace(FORM, settings={}))
        submission_repo = MagicMock()
        submission_repo.duplicate_key_exists = AsyncMock()
        submission_repo.create_submission = AsyncMock(return_value=_submission(SubmissionStatus.COMPLETED))
        service = SubmissionService(submission_repo, form_repo)

        await service.create_submission("f1", {"email": "a@example.com"})

        submission_repo.duplicate_key_exists.assert_not_called()
        persisted = submission_repo.create_submission.await_args.args[0]
        assert persisted.is_duplicate is False
        assert persisted.duplicate_check_key is None

    async def test_create_rejects_other_business(self) -> None:
        form_repo = MagicMock()
        form_repo.get_by_id_for_update = AsyncMock(return_value=FORM)
        service = SubmissionService(MagicMock(), form_repo)
        with pytest.raises(TenantMismatchException):
            await service.create_submission("f1", {}, business_id="b2")

    async def test_create_missing_form(self) -> None:
        form_repo = MagicMock()
        form_repo.get_by_id_for_update = AsyncMock(return_value=None)
        service = SubmissionService(MagicMock(), form_repo)
        with pytest.raises(ResourceNotFoundException):
            await service.create_submission("missing", {})

    async def test_completing_draft_restamps_submitted_at(self) -> None:
        submission_repo = MagicMock()
        submission_repo.get_by_id = AsyncMock(return_value=_submission(SubmissionStatus.DRAFT))
        submission_repo.update_status = AsyncMock(return_value=_submission(SubmissionStatus.COMPLETED))
        service = SubmissionService(submission_repo, MagicMock())

        await service.transition_submission_status("s1", SubmissionStatus.COMPLETED)

        kwargs = submission_repo.update_status.await_args.kwargs
        assert kwargs["submitted_at"] is not None
        assert kwargs["submitted_at"] > NOW

    async def test_archiving_keeps_submitted_at(self) -> None:
        submission_repo = MagicMock()
        submission_repo.get_by_id = AsyncMock(return_value=_submission(SubmissionStatus.COMPLETED))
        submission_repo.update_status = AsyncMock(return_value=_submission(SubmissionStatus.ARCHIVED))
        service = SubmissionService(submission_repo, MagicMock())

        await service.transition_submission_status("s1", SubmissionStatus.ARCHIVED)

        assert submission_repo.update_status.await_args.kwargs["submitted_at"] is None

    async def test_invalid_transition_does_not_write(self) -> None:
        submission_repo = MagicMock()
        submission_repo.get_by_id = AsyncMock(return_value=_submission(SubmissionStatus.ARCHIVED))
        submission_repo.update_status = AsyncMock()
        service = SubmissionService(submission_repo, MagicMock())

        with pytest.raises(InvalidTransitionException):
            await service.transition_submission_status("s1", SubmissionStatus.COMPLETED)
        submission_repo.update_status.assert_not_called()
