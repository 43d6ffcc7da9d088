"""Tests for skills, experience, feedback and settings endpoints."""

import time

import pytest
from aiohttp.test_utils import TestClient

from portfolio.config import Config
from portfolio.db.database import Database
from portfolio.server import create_app
from portfolio.services.settings import get_setting

CONTACT = {
    "name": "Ada",
    "email": "ada@example.com",
    "subject": "Hello",
    "message": "I would like to talk about a project.",
}

TESTIMONIAL = {
    "name": "Grace",
    "role": "CTO",
    "linkedin": "https://www.linkedin.com/in/grace",
    "message": "Delivered on time and beyond expectations.",
    "rating": 4.5,
}


@pytest.fixture
def client(test_config: Config, database: Database, aiohttp_client) -> TestClient:
    """Create test client with configured app."""
    app = create_app(test_config, database=database)
    return aiohttp_client(app)


class TestSkillsApi:
    """Tests for /api/categories and /api/skills."""

    @pytest.mark.asyncio
    async def test__categories__include_localized_skills(self, client, admin_headers) -> None:
        test_client = await client
        response = await test_client.post(
            "/api/categories",
            json={"name": "Languages", "name_fr": "Langages"},
            headers=admin_headers,
        )
        category = await response.json()
        await test_client.post(
            "/api/skills",
            json={"name": "Python", "category_id": category["id"]},
            headers=admin_headers,
        )

        data = await (await test_client.get("/api/categories?locale=fr")).json()

        assert data[0]["name"] == "Langages"
        assert [skill["name"] for skill in data[0]["skills"]] == ["Python"]

    @pytest.mark.asyncio
    async def test__skill_with_unknown_category__returns_404(self, client, admin_headers) -> None:
        test_client = await client
        response = await test_client.post(
            "/api/skills", json={"name": "Go", "category_id": "missing"}, headers=admin_headers
        )

        assert response.status == 404
        assert await response.json() == {"error": "Category not found"}

    @pytest.mark.asyncio
    async def test__reorder_skills__changes_listing_order(self, client, admin_headers) -> None:
        test_client = await client
        ids = []
        for name in ("Python", "Rust", "Go"):
            response = await test_client.post(
                "/api/skills", json={"name": name}, headers=admin_headers
            )
            ids.append((await response.json())["id"])

        response = await test_client.post(
            "/api/skills/reorder", json={"ids": list(reversed(ids))}, headers=admin_headers
        )

        assert response.status == 200
        skills = await (await test_client.get("/api/skills")).json()
        assert [skill["name"] for skill in skills] == ["Go", "Rust", "Python"]

    @pytest.mark.asyncio
    async def test__reorder_with_unknown_id__returns_404(self, client, admin_headers) -> None:
        test_client = await client
        response = await test_client.post(
            "/api/categories/reorder", json={"ids": ["ghost"]}, headers=admin_headers
        )

        assert response.status == 404

    @pytest.mark.asyncio
    async def test__reorder_with_empty_ids__fails_validation(self, client, admin_headers) -> None:
        test_client = await client
        response = await test_client.post(
            "/api/categories/reorder", json={"ids": []}, headers=admin_headers
        )

        assert response.status == 400
        assert (await response.json())["error"] == "Validation failed"


class TestExperienceApi:
    """Tests for /api/experience."""

    @pytest.mark.asyncio
    async def test__create_with_media__localizes_on_read(self, client, admin_headers) -> None:
        test_client = await client
        response = await test_client.post(
            "/api/experience",
            json={
                "company": "Acme",
                "role": "Engineer",
                "role_fr": "Ingénieur",
                "start_date": "2022-01-01",
                "media": [{"url": "/img/a.png", "caption": "Team", "caption_fr": "Équipe"}],
            },
            headers=admin_headers,
        )
        assert response.status == 201

        data = await (await test_client.get("/api/experience?locale=fr")).json()

        assert data[0]["role"] == "Ingénieur"
        assert data[0]["start_date"] == "2022-01-01"
        assert data[0]["media"][0]["caption"] == "Équipe"

    @pytest.mark.asyncio
    async def test__same_order__sorts_newest_first(self, client, admin_headers) -> None:
        test_client = await client
        for company, start in (("Old", "2018-01-01"), ("New", "2023-01-01")):
            await test_client.post(
                "/api/experience",
                json={"company": company, "role": "Dev", "start_date": start},
                headers=admin_headers,
            )

        data = await (await test_client.get("/api/experience")).json()

        assert [entry["company"] for entry in data] == ["New", "Old"]


class TestContactsApi:
    """Tests for /api/contacts."""

    @pytest.mark.asyncio
    async def test__valid_submission__is_stored_unread(self, client, admin_headers) -> None:
        test_client = await client
        response = await test_client.post(
            "/api/contacts", json={**CONTACT, "_hp_field": "", "_timestamp": 0}
        )

        assert response.status == 201
        data = await response.json()
        assert data["status"] == "unread"
        assert "_hp_field" not in data

        listed = await (await test_client.get("/api/contacts", headers=admin_headers)).json()
        assert [message["subject"] for message in listed] == ["Hello"]

    @pytest.mark.asyncio
    async def test__honeypot__rejects_submission(self, client, admin_headers) -> None:
        test_client = await client
        response = await test_client.post(
            "/api/contacts", json={**CONTACT, "_hp_field": "buy now"}
        )

        assert response.status == 400
        assert await response.json() == {"error": "Invalid submission detected"}
        listed = await (await test_client.get("/api/contacts", headers=admin_headers)).json()
        assert listed == []

    @pytest.mark.asyncio
    async def test__short_message__returns_validation_details(self, client) -> None:
        test_client = await client
        response = await test_client.post("/api/contacts", json={**CONTACT, "message": "Hi"})

        assert response.status == 400
        data = await response.json()
        assert data["error"] == "Validation failed"
        assert [detail["loc"] for detail in data["details"]] == [["message"]]

    @pytest.mark.asyncio
    async def test__listing__requires_admin(self, client) -> None:
        test_client = await client
        response = await test_client.get("/api/contacts")

        assert response.status == 401

    @pytest.mark.asyncio
    async def test__update_status__marks_read(self, client, admin_headers) -> None:
        test_client = await client
        created = await (await test_client.post("/api/contacts", json=CONTACT)).json()

        response = await test_client.put(
            f"/api/contacts/{created['id']}", json={"status": "read"}, headers=admin_headers
        )

        assert (await response.json())["status"] == "read"

    @pytest.mark.asyncio
    async def test__unknown_status__fails_validation(self, client, admin_headers) -> None:
        test_client = await client
        created = await (await test_client.post("/api/contacts", json=CONTACT)).json()

        response = await test_client.put(
            f"/api/contacts/{created['id']}", json={"status": "spam"}, headers=admin_headers
        )

        assert response.status == 400


class TestTestimonialsApi:
    """Tests for /api/testimonials."""

    @pytest.mark.asyncio
    async def test__submission__is_pending_until_approved(self, client, admin_headers) -> None:
        test_client = await client
        response = await test_client.post("/api/testimonials", json=TESTIMONIAL)
        assert response.status == 201
        created = await response.json()
        assert created["status"] == "pending"

        assert await (await test_client.get("/api/testimonials")).json() == []

        await test_client.put(
            f"/api/testimonials/{created['id']}",
            json={"status": "approved"},
            headers=admin_headers,
        )
        public = await (await test_client.get("/api/testimonials")).json()
        assert [item["name"] for item in public] == ["Grace"]

    @pytest.mark.asyncio
    async def test__all_flag__requires_admin(self, client, admin_headers) -> None:
        test_client = await client
        await test_client.post("/api/testimonials", json=TESTIMONIAL)

        assert (await test_client.get("/api/testimonials?all=true")).status == 401
        response = await test_client.get("/api/testimonials?all=true", headers=admin_headers)
        assert len(await response.json()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "changes",
        [
            {"linkedin": "https://example.com/in/grace"},
            {"rating": 4.2},
            {"rating": 6},
        ],
    )
    async def test__invalid_fields__fail_validation(self, client, changes) -> None:
        test_client = await client
        response = await test_client.post("/api/testimonials", json={**TESTIMONIAL, **changes})

        assert response.status == 400
        assert (await response.json())["error"] == "Validation failed"

    @pytest.mark.asyncio
    async def test__fast_submission__is_rejected(self, client) -> None:
        test_client = await client

        response = await test_client.post(
            "/api/testimonials",
            json={**TESTIMONIAL, "_timestamp": int(time.time() * 1000)},
        )

        assert response.status == 400
        assert (await response.json())["error"] == "Submission too fast. Please try again."


class TestSettingsApi:
    """Tests for /api/settings."""

    @pytest.mark.asyncio
    async def test__token__is_masked_on_read(self, client, admin_headers) -> None:
        test_client = await client
        await test_client.put(
            "/api/settings",
            json={"github_username": "ada", "github_token": "ghp_abcdefghijkl"},
            headers=admin_headers,
        )

        data = await (await test_client.get("/api/settings", headers=admin_headers)).json()

        assert data == {"github_token": "ghp_••••••••ijkl", "github_username": "ada"}

    @pytest.mark.asyncio
    async def test__masked_value_echoed_back__keeps_secret(
        self, client, admin_headers, database
    ) -> None:
        test_client = await client
        await test_client.put(
            "/api/settings", json={"github_token": "ghp_abcdefghijkl"}, headers=admin_headers
        )

        await test_client.put(
            "/api/settings", json={"github_token": "ghp_••••••••ijkl"}, headers=admin_headers
        )

        with database.session() as session:
            assert get_setting(session, "github_token") == "ghp_abcdefghijkl"

    @pytest.mark.asyncio
    async def test__non_string_values__fail_validation(self, client, admin_headers) -> None:
        test_client = await client
        response = await test_client.put(
            "/api/settings", json={"github_username": 42}, headers=admin_headers
        )

        assert response.status == 400

    @pytest.mark.asyncio
    async def test__read__requires_admin(self, client) -> None:
        test_client = await client
        assert (await test_client.get("/api/settings")).status == 401
