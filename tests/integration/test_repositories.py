"""Integration tests for repositories against a real (SQLite) database."""

import pytest
from sqlalchemy.exc import IntegrityError

from rabbitforms.application.dtos.form import FormCreate
from rabbitforms.domain.enums import UserRole
from rabbitforms.domain.exceptions import (
    DuplicateEmailException,
    DuplicateSlugException,
    DuplicateSlugInBusinessException,
)
from rabbitforms.infrastructure.persistence.repositories import (
    BusinessRepository,
    FormRepository,
    UserRepository,
)
from rabbitforms.shared.utils.datetime import utc_now

pytestmark = pytest.mark.requires_db


async def _business(db_session, slug: str = "acme"):
    return await BusinessRepository(db_session).create_business(
        name="Acme", slug=slug, logo_url=None, custom_domain=None, theme={}
    )


def _form_create(business_id: str, slug: str = "contact", schema=None) -> FormCreate:
    return FormCreate(
        business_id=business_id,
        title="Contact",
        slug=slug,
        description=None,
        schema=schema if schema is not None else {"fields": [{"id": "email"}]},
        settings={},
        conditional_logic={},
    )


async def test_business_create_and_lookup(db_session) -> None:
    created = await _business(db_session)
    repo = BusinessRepository(db_session)
    assert created.id
    assert created.is_active is True
    assert created.created_at.tzinfo is not None
    assert (await repo.get_by_slug("acme")).id == created.id
    assert await repo.get_by_id("missing") is None


async def test_business_slug_unique_index_translated(db_session) -> None:
    await _business(db_session)
    with pytest.raises(DuplicateSlugException):
        await _business(db_session)


async def test_user_email_unique_index_translated(db_session) -> None:
    repo = UserRepository(db_session)
    await repo.create_user("a@example.com", UserRole.SUPER_ADMIN, None, None)
    with pytest.raises(DuplicateEmailException):
        await repo.create_user("A@Example.com", UserRole.SUPER_ADMIN, None, None)


async def test_user_supplied_id_is_kept(db_session) -> None:
    repo = UserRepository(db_session)
    user = await repo.create_user(
        "a@example.com", UserRole.SUPER_ADMIN, None, "Ann", user_id="auth-123"
    )
    assert user.id == "auth-123"
    assert (await repo.get_by_email("A@EXAMPLE.COM")).id == "auth-123"


async def test_user_update_profile_rejects_role(db_session) -> None:
    repo = UserRepository(db_session)
    user = await repo.create_user("a@example.com", UserRole.SUPER_ADMIN, None, None)
    with pytest.raises(ValueError, match="only email and full_name"):
        await repo.update_profile(user.id, {"role": "business_admin"})


async def test_form_slug_unique_per_business(db_session) -> None:
    first = await _business(db_session, "acme")
    second = await _business(db_session, "globex")
    repo = FormRepository(db_session)
    await repo.create_form(_form_create(first.id))
    other = await repo.create_form(_form_create(second.id))
    assert other.slug == "contact"
    with pytest.raises(DuplicateSlugInBusinessException):
        await repo.create_form(_form_create(first.id))


async def test_form_update_slug_conflict_translated(db_session) -> None:
    business = await _business(db_session)
    repo = FormRepository(db_session)
    await repo.create_form(_form_create(business.id, "contact"))
    other = await repo.create_form(_form_create(business.id, "feedback"))
    with pytest.raises(DuplicateSlugInBusinessException):
        await repo.update_form(other.id, {"slug": "contact"})


async def test_business_update_slug_conflict_translated(db_session) -> None:
    await _business(db_session, "acme")
    globex = await _business(db_session, "globex")
    with pytest.raises(DuplicateSlugException):
        await BusinessRepository(db_session).update_business(globex.id, {"slug": "acme"})


async def test_user_update_email_conflict_translated(db_session) -> None:
    repo = UserRepository(db_session)
    await repo.create_user("a@example.com", UserRole.SUPER_ADMIN, None, None)
    other = await repo.create_user("b@example.com", UserRole.SUPER_ADMIN, None, None)
    with pytest.raises(DuplicateEmailException):
        await repo.update_profile(other.id, {"email": "a@example.com"})


async def test_other_integrity_errors_are_not_reported_as_duplicates(db_session) -> None:
    with pytest.raises(IntegrityError):
        await FormRepository(db_session).create_form(_form_create(None))


async def test_json_documents_round_trip_with_key_order(db_session) -> None:
    business = await _business(db_session)
    schema = {
        "zeta": 1,
        "fields": [{"id": "email", "type": "email", "required": True}],
        "alpha": {"nested": [None, 1.5, "x"]},
    }
    repo = FormRepository(db_session)
    created = await repo.create_form(_form_create(business.id, schema=schema))
    db_session.expire_all()
    loaded = await repo.get_by_id(created.id)
    assert loaded.schema == schema
    assert list(loaded.schema) == ["zeta", "fields", "alpha"]


async def test_has_published_forms_tracks_published_at(db_session) -> None:
    business = await _business(db_session)
    repo = FormRepository(db_session)
    form = await repo.create_form(_form_create(business.id))
    assert await repo.has_published_forms(business.id) is False
    await repo.update_form(form.id, {"is_published": True, "published_at": utc_now()})
    assert await repo.has_published_forms(business.id) is True
    await repo.update_form(form.id, {"is_published": False})
    assert await repo.has_published_forms(business.id) is True


async def test_list_by_business_published_only(db_session) -> None:
    business = await _business(db_session)
    repo = FormRepository(db_session)
    draft = await repo.create_form(_form_create(business.id, "draft"))
    live = await repo.create_form(_form_create(business.id, "live"))
    await repo.update_form(live.id, {"is_published": True, "published_at": utc_now()})
    all_ids = {f.id for f in await repo.list_by_business(business.id)}
    assert all_ids == {draft.id, live.id}
    published = await repo.list_by_business(business.id, published_only=True)
    assert [f.id for f in published] == [live.id]
