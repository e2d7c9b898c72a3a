"""API tests for the form builder, public capture and submission lifecycle."""

import pytest
from httpx import AsyncClient

from rabbitforms.domain.enums import UserRole

FORMS = "/api/v1/forms"
PUBLIC = "/api/v1/public"
SUBMISSIONS = "/api/v1/submissions"

SCHEMA = {"fields": [{"id": "email", "type": "email", "label": "Email"}]}


@pytest.fixture
async def acme(seed_business):
    return await seed_business("acme")


@pytest.fixture
async def owner_headers(seed_user, acme) -> dict[str, str]:
    owner = await seed_user("owner@example.com", UserRole.BUSINESS_ADMIN, acme.id)
    return {"X-User-ID": owner.id}


async def _create_form(client: AsyncClient, headers, business_id: str, **overrides):
    payload = {
        "business_id": business_id,
        "title": "Contact us",
        "slug": "contact",
        "schema": SCHEMA,
        "settings": {"duplicate_check_fields": ["email"]},
    }
    payload.update(overrides)
    response = await client.post(FORMS, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def _published_form(client: AsyncClient, headers, business_id: str):
    form = await _create_form(client, headers, business_id)
    response = await client.post(f"{FORMS}/{form['id']}/publish", headers=headers)
    assert response.status_code == 200
    return response.json()


class TestFormBuilder:
    async def test_create_draft(self, client: AsyncClient, owner_headers, acme) -> None:
        form = await _create_form(client, owner_headers, acme.id)
        assert form["is_published"] is False
        assert form["published_at"] is None
        assert form["schema"] == SCHEMA
        assert form["created_by"] == owner_headers["X-User-ID"]

    async def test_other_business_is_403(
        self, client: AsyncClient, owner_headers, seed_business
    ) -> None:
        globex = await seed_business("globex")
        response = await client.post(
            FORMS,
            json={"business_id": globex.id, "title": "T", "slug": "t"},
            headers=owner_headers,
        )
        assert response.status_code == 403

    async def test_admin_of_inactive_business_is_403(
        self, client: AsyncClient, owner_headers, super_admin_headers, acme
    ) -> None:
        await client.post(
            f"/api/v1/businesses/{acme.id}/deactivate", headers=super_admin_headers
        )
        response = await client.post(
            FORMS,
            json={"business_id": acme.id, "title": "T", "slug": "t"},
            headers=owner_headers,
        )
        assert response.status_code == 403
        assert response.json()["error"] == "PERMISSION_DENIED"

    async def test_duplicate_slug_in_business_is_409(
        self, client: AsyncClient, owner_headers, acme
    ) -> None:
        await _create_form(client, owner_headers, acme.id)
        response = await client.post(
            FORMS,
            json={"business_id": acme.id, "title": "Again", "slug": "contact"},
            headers=owner_headers,
        )
        assert response.status_code == 409
        assert response.json()["error"] == "DUPLICATE_SLUG_IN_BUSINESS"

    async def test_publish_empty_schema_is_422(
        self, client: AsyncClient, owner_headers, acme
    ) -> None:
        form = await _create_form(client, owner_headers, acme.id, schema={"fields": []})
        response = await client.post(f"{FORMS}/{form['id']}/publish", headers=owner_headers)
        assert response.status_code == 422
        assert response.json()["error"] == "EMPTY_SCHEMA"

    async def test_publish_is_idempotent(self, client: AsyncClient, owner_headers, acme) -> None:
        form = await _published_form(client, owner_headers, acme.id)
        again = await client.post(f"{FORMS}/{form['id']}/publish", headers=owner_headers)
        assert again.json()["published_at"] == form["published_at"]
        await client.post(f"{FORMS}/{form['id']}/unpublish", headers=owner_headers)
        republished = await client.post(f"{FORMS}/{form['id']}/publish", headers=owner_headers)
        assert republished.json()["is_published"] is True
        assert republished.json()["published_at"] == form["published_at"]

    async def test_list_defaults_to_own_business(
        self, client: AsyncClient, owner_headers, acme
    ) -> None:
        form = await _create_form(client, owner_headers, acme.id)
        listed = await client.get(FORMS, headers=owner_headers)
        assert [f["id"] for f in listed.json()] == [form["id"]]
        published = await client.get(FORMS, params={"published_only": True}, headers=owner_headers)
        assert published.json() == []

    async def test_super_admin_list_needs_business(
        self, client: AsyncClient, super_admin_headers
    ) -> None:
        response = await client.get(FORMS, headers=super_admin_headers)
        assert response.status_code == 400

    async def test_live_edit(self, client: AsyncClient, owner_headers, acme) -> None:
        form = await _published_form(client, owner_headers, acme.id)
        response = await client.patch(
            f"{FORMS}/{form['id']}", json={"title": "Write to us"}, headers=owner_headers
        )
        assert response.status_code == 200
        public = await client.get(f"{PUBLIC}/acme/forms/contact")
        assert public.json()["title"] == "Write to us"


class TestPublicCapture:
    async def test_unpublished_form_is_404(self, client: AsyncClient, owner_headers, acme) -> None:
        await _create_form(client, owner_headers, acme.id)
        assert (await client.get(f"{PUBLIC}/acme/forms/contact")).status_code == 404
        response = await client.post(
            f"{PUBLIC}/acme/forms/contact/submissions", json={"data": {"email": "a@example.com"}}
        )
        assert response.status_code == 404

    async def test_public_form_hides_admin_fields(
        self, client: AsyncClient, owner_headers, acme
    ) -> None:
        await _published_form(client, owner_headers, acme.id)
        response = await client.get(f"{PUBLIC}/acme/forms/contact")
        assert response.status_code == 200
        body = response.json()
        assert body["schema"] == SCHEMA
        assert "business_id" not in body
        assert "created_by" not in body

    async def test_submit_and_flag_duplicates(
        self, client: AsyncClient, owner_headers, acme
    ) -> None:
        form = await _published_form(client, owner_headers, acme.id)
        url = f"{PUBLIC}/acme/forms/contact/submissions"
        first = await client.post(
            url,
            json={"data": {"email": "a@example.com"}},
            headers={"User-Agent": "pytest-agent"},
        )
        assert first.status_code == 201
        assert first.json()["status"] == "completed"
        second = await client.post(url, json={"data": {"email": "a@example.com"}})
        assert second.status_code == 201

        stored = await client.get(f"{SUBMISSIONS}/{first.json()['id']}", headers=owner_headers)
        body = stored.json()
        assert body["business_id"] == acme.id
        assert body["form_id"] == form["id"]
        assert body["is_duplicate"] is False
        assert body["metadata"]["user_agent"] == "pytest-agent"
        dup = await client.get(f"{SUBMISSIONS}/{second.json()['id']}", headers=owner_headers)
        assert dup.json()["is_duplicate"] is True

    async def test_archived_submission_rejected(
        self, client: AsyncClient, owner_headers, acme
    ) -> None:
        await _published_form(client, owner_headers, acme.id)
        response = await client.post(
            f"{PUBLIC}/acme/forms/contact/submissions",
            json={"data": {}, "status": "archived"},
        )
        assert response.status_code == 400


class TestSubmissionLifecycle:
    async def test_transitions(self, client: AsyncClient, owner_headers, acme) -> None:
        await _published_form(client, owner_headers, acme.id)
        created = await client.post(
            f"{PUBLIC}/acme/forms/contact/submissions",
            json={"data": {"email": "a@example.com"}, "status": "draft"},
        )
        submission_id = created.json()["id"]
        url = f"{SUBMISSIONS}/{submission_id}/status"

        skip = await client.patch(url, json={"status": "archived"}, headers=owner_headers)
        assert skip.status_code == 409
        assert skip.json()["error"] == "INVALID_TRANSITION"

        done = await client.patch(url, json={"status": "completed"}, headers=owner_headers)
        assert done.status_code == 200
        assert done.json()["status"] == "completed"
        archived = await client.patch(url, json={"status": "archived"}, headers=owner_headers)
        assert archived.json()["status"] == "archived"
        back = await client.patch(url, json={"status": "completed"}, headers=owner_headers)
        assert back.status_code == 409

    async def test_list_scoped_to_business(
        self, client: AsyncClient, owner_headers, acme, seed_business, seed_user
    ) -> None:
        await _published_form(client, owner_headers, acme.id)
        await client.post(
            f"{PUBLIC}/acme/forms/contact/submissions", json={"data": {"email": "a@example.com"}}
        )
        listed = await client.get(SUBMISSIONS, headers=owner_headers)
        assert len(listed.json()) == 1

        globex = await seed_business("globex")
        outsider = await seed_user("x@example.com", UserRole.BUSINESS_ADMIN, globex.id)
        outsider_headers = {"X-User-ID": outsider.id}
        assert (await client.get(SUBMISSIONS, headers=outsider_headers)).json() == []
        denied = await client.get(
            SUBMISSIONS, params={"business_id": acme.id}, headers=outsider_headers
        )
        assert denied.status_code == 403
