"""
Tests for admin listings, categories and theme endpoints
"""

import pytest
from httpx import AsyncClient

from videoshare.models import DEFAULT_CATEGORIES


class TestAdminAPI:
    """Test admin-only endpoints are gated by session and admin flag"""

    @pytest.mark.parametrize("path", ["/api/admin/videos", "/api/admin/users"])
    async def test_anonymous_gets_401(self, client: AsyncClient, path):
        response = await client.get(path)

        assert response.status_code == 401

    @pytest.mark.parametrize("path", ["/api/admin/videos", "/api/admin/users"])
    async def test_regular_user_gets_403(self, user_client: AsyncClient, path):
        response = await user_client.get(path)

        assert response.status_code == 403
        assert response.json()["message"] == "Forbidden - Admin access required"

    async def test_list_users_without_passwords(self, admin_client: AsyncClient, test_user):
        response = await admin_client.get("/api/admin/users")

        assert response.status_code == 200
        users = response.json()
        assert {user["username"] for user in users} == {"admin", "testuser"}
        assert all("password" not in user for user in users)

    async def test_list_all_videos(self, admin_client: AsyncClient, stored_video, embedded_video):
        response = await admin_client.get("/api/admin/videos")

        assert response.status_code == 200
        assert [v["id"] for v in response.json()] == [embedded_video.id, stored_video.id]


class TestCategoriesAPI:

    async def test_default_categories(self, client: AsyncClient):
        response = await client.get("/api/categories")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == DEFAULT_CATEGORIES

    async def test_admin_creates_category(self, admin_client: AsyncClient):
        response = await admin_client.post("/api/categories", json={"name": "  Cooking "})

        assert response.status_code == 201
        assert response.json()["name"] == "Cooking"

    async def test_duplicate_category(self, admin_client: AsyncClient):
        response = await admin_client.post("/api/categories", json={"name": "Travel"})

        assert response.status_code == 409

    async def test_regular_user_cannot_create(self, user_client: AsyncClient, store):
        response = await user_client.post("/api/categories", json={"name": "Cooking"})

        assert response.status_code == 403
        assert store.get_category_by_name("Cooking") is None


class TestThemeAPI:

    async def test_default_theme(self, client: AsyncClient):
        response = await client.get("/api/theme")

        assert response.status_code == 200
        assert response.json()["primaryColor"] == "#3b82f6"
        assert response.json()["darkMode"] is False

    async def test_admin_saves_theme(self, admin_client: AsyncClient, client: AsyncClient):
        response = await admin_client.put("/api/theme", json={"primaryColor": "#112233", "darkMode": True})

        assert response.status_code == 200
        saved = (await client.get("/api/theme")).json()
        assert saved["primaryColor"] == "#112233"
        assert saved["darkMode"] is True
        assert saved["secondaryColor"] == "#f97316"

    async def test_preview_does_not_save(self, admin_client: AsyncClient, store):
        response = await admin_client.post("/api/theme/preview", json={"logoText": "Preview"})

        assert response.status_code == 200
        assert response.json()["logoText"] == "Preview"
        assert store.get_theme().logo_text == "VideoShare"

    async def test_invalid_theme(self, admin_client: AsyncClient):
        response = await admin_client.put("/api/theme", json={"borderRadius": 5})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "borderRadius"

    async def test_regular_user_cannot_save(self, user_client: AsyncClient):
        response = await user_client.put("/api/theme", json={"darkMode": True})

        assert response.status_code == 403


class TestHealth:

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_unknown_route_uses_error_format(self, client: AsyncClient):
        response = await client.get("/api/nope")

        assert response.status_code == 404
        assert response.json()["status"] is False
