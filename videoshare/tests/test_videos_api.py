"""
Tests for Video API endpoints
"""

import json
from pathlib import Path

from httpx import AsyncClient


def upload_files(content: bytes = b"\x00" * 2048, content_type: str = "video/mp4", filename: str = "clip.mp4"):
    return {"file": (filename, content, content_type)}


def video_data(**fields) -> dict:
    fields.setdefault("title", "Weekend trip")
    return {"videoData": json.dumps(fields)}


class TestListVideos:

    async def test_empty_list(self, client: AsyncClient):
        response = await client.get("/api/videos")

        assert response.status_code == 200
        assert response.json() == []

    async def test_camel_case_response(self, client: AsyncClient, stored_video, test_user):
        response = await client.get(f"/api/videos/{stored_video.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["uploaderId"] == test_user.id
        assert data["isEmbedded"] is False
        assert data["fileName"] == "clip.mp4"
        assert data["views"] == 0
        assert "uploadDate" in data

    async def test_unknown_video(self, client: AsyncClient):
        response = await client.get("/api/videos/999")

        assert response.status_code == 404
        assert response.json()["message"] == "Video not found"

    async def test_category_filter(self, client: AsyncClient, stored_video, embedded_video):
        travel = await client.get("/api/videos", params={"category": "Travel"})
        everything = await client.get("/api/videos", params={"category": "All"})

        assert [v["id"] for v in travel.json()] == [stored_video.id]
        assert [v["id"] for v in everything.json()] == [embedded_video.id, stored_video.id]

    async def test_empty_search_returns_everything(self, client: AsyncClient, stored_video, embedded_video):
        response = await client.get("/api/videos", params={"search": ""})

        assert [v["id"] for v in response.json()] == [embedded_video.id, stored_video.id]

    async def test_search_wins_over_category(self, client: AsyncClient, stored_video, embedded_video):
        response = await client.get("/api/videos", params={"category": "Travel", "search": "hosted"})

        assert [v["id"] for v in response.json()] == [embedded_video.id]


class TestUploadVideo:

    async def test_upload(self, user_client: AsyncClient, store, test_user, upload_dir: Path):
        response = await user_client.post(
            "/api/videos",
            files=upload_files(),
            data=video_data(description="Hills", category="Travel", uploaderId=999)
        )

        assert response.status_code == 201, response.text
        data = response.json()
        assert data["title"] == "Weekend trip"
        assert data["uploaderId"] == test_user.id
        assert data["fileName"] == "clip.mp4"
        assert data["isEmbedded"] is False

        stored_path = Path(data["filePath"])
        assert stored_path.parent == upload_dir
        assert stored_path.name != "clip.mp4"
        assert stored_path.read_bytes() == b"\x00" * 2048
        assert store.get_video(data["id"]) is not None

    async def test_uploaded_video_streams(self, user_client: AsyncClient):
        content = bytes(range(256)) * 4
        created = await user_client.post("/api/videos", files=upload_files(content), data=video_data())

        response = await user_client.get(f"/api/stream/{created.json()['id']}", headers={"Range": "bytes=0-9"})

        assert response.status_code == 206
        assert response.content == content[:10]

    async def test_non_video_rejected(self, user_client: AsyncClient, store, upload_dir: Path):
        response = await user_client.post(
            "/api/videos",
            files=upload_files(b"plain text", "text/plain", "notes.txt"),
            data=video_data()
        )

        assert response.status_code == 400
        assert response.json()["error_type"] == "FileTypeError"
        assert store.list_videos() == []
        assert list(upload_dir.iterdir()) == []

    async def test_invalid_metadata_removes_file(self, user_client: AsyncClient, store, upload_dir: Path):
        response = await user_client.post("/api/videos", files=upload_files(), data=video_data(title=""))

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "title", "message": "Title is required"}]
        assert store.list_videos() == []
        assert list(upload_dir.iterdir()) == []

    async def test_malformed_video_data(self, user_client: AsyncClient, store):
        response = await user_client.post("/api/videos", files=upload_files(), data={"videoData": "{oops"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "videoData"
        assert store.list_videos() == []

    async def test_missing_file(self, user_client: AsyncClient):
        response = await user_client.post("/api/videos", data=video_data())

        assert response.status_code == 400

    async def test_requires_login(self, client: AsyncClient, store):
        response = await client.post("/api/videos", files=upload_files(), data=video_data())

        assert response.status_code == 401
        assert store.list_videos() == []


class TestEmbedVideo:

    async def test_embed(self, user_client: AsyncClient, test_user):
        response = await user_client.post("/api/videos/embed", json={
            "title": "Concert",
            "embedUrl": "https://www.youtube.com/embed/xyz",
            "category": "Music"
        })

        assert response.status_code == 201
        data = response.json()
        assert data["isEmbedded"] is True
        assert data["embedUrl"] == "https://www.youtube.com/embed/xyz"
        assert data["filePath"] is None
        assert data["uploaderId"] == test_user.id

    async def test_embed_invalid_url(self, user_client: AsyncClient, store):
        response = await user_client.post("/api/videos/embed", json={"title": "Concert", "embedUrl": "youtube"})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "embedUrl", "message": "Please enter a valid URL"}]
        assert store.list_videos() == []


class TestUpdateVideo:

    async def test_owner_updates(self, user_client: AsyncClient, stored_video):
        response = await user_client.put(f"/api/videos/{stored_video.id}", json={"title": "Renamed"})

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Renamed"
        assert data["description"] == stored_video.description

    async def test_views_and_owner_cannot_be_patched(self, user_client: AsyncClient, stored_video, store):
        await user_client.put(f"/api/videos/{stored_video.id}", json={"views": 500, "uploaderId": 42})

        video = store.get_video(stored_video.id)
        assert video.views == 0
        assert video.uploader_id == stored_video.uploader_id

    async def test_other_user_forbidden(self, other_user_client: AsyncClient, stored_video, store):
        response = await other_user_client.put(f"/api/videos/{stored_video.id}", json={"title": "Mine now"})

        assert response.status_code == 403
        assert store.get_video(stored_video.id).title == "Stored clip"

    async def test_admin_updates_any_video(self, admin_client: AsyncClient, stored_video):
        response = await admin_client.put(f"/api/videos/{stored_video.id}", json={"category": "Sports"})

        assert response.status_code == 200
        assert response.json()["category"] == "Sports"

    async def test_null_title_rejected(self, user_client: AsyncClient, client: AsyncClient, stored_video, store):
        response = await user_client.put(f"/api/videos/{stored_video.id}", json={"title": None})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "title", "message": "Title is required"}]
        assert store.get_video(stored_video.id).title == "Stored clip"
        assert (await client.get("/api/videos")).status_code == 200
        assert (await client.get("/api/videos", params={"search": "clip"})).status_code == 200

    async def test_embed_url_rejected_for_uploaded_video(self, user_client: AsyncClient, stored_video, store):
        response = await user_client.put(
            f"/api/videos/{stored_video.id}",
            json={"embedUrl": "https://www.youtube.com/embed/xyz"}
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "embedUrl"
        video = store.get_video(stored_video.id)
        assert video.embed_url is None
        assert video.is_embedded is False

    async def test_embedded_video_url_can_change(self, user_client: AsyncClient, embedded_video):
        response = await user_client.put(
            f"/api/videos/{embedded_video.id}",
            json={"embedUrl": "https://player.vimeo.com/video/42"}
        )

        assert response.status_code == 200
        assert response.json()["embedUrl"] == "https://player.vimeo.com/video/42"

    async def test_null_embed_url_rejected(self, user_client: AsyncClient, embedded_video, store):
        response = await user_client.put(f"/api/videos/{embedded_video.id}", json={"embedUrl": None})

        assert response.status_code == 400
        assert store.get_video(embedded_video.id).embed_url == embedded_video.embed_url

    async def test_unknown_video(self, user_client: AsyncClient):
        response = await user_client.put("/api/videos/999", json={"title": "x"})

        assert response.status_code == 404


class TestDeleteVideo:

    async def test_other_user_forbidden_leaves_record_and_file(self, other_user_client: AsyncClient, stored_video, store):
        response = await other_user_client.delete(f"/api/videos/{stored_video.id}")

        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to delete this video"
        assert store.get_video(stored_video.id) is not None
        assert Path(stored_video.file_path).exists()

    async def test_owner_deletes_record_and_file(self, user_client: AsyncClient, stored_video, store):
        response = await user_client.delete(f"/api/videos/{stored_video.id}")

        assert response.status_code == 200
        assert store.get_video(stored_video.id) is None
        assert not Path(stored_video.file_path).exists()

    async def test_admin_deletes_embedded_video(self, admin_client: AsyncClient, embedded_video, store):
        response = await admin_client.delete(f"/api/videos/{embedded_video.id}")

        assert response.status_code == 200
        assert store.get_video(embedded_video.id) is None

    async def test_missing_file_still_deletes_record(self, user_client: AsyncClient, stored_video, store):
        Path(stored_video.file_path).unlink()

        response = await user_client.delete(f"/api/videos/{stored_video.id}")

        assert response.status_code == 200
        assert store.get_video(stored_video.id) is None

    async def test_anonymous_rejected(self, client: AsyncClient, stored_video):
        response = await client.delete(f"/api/videos/{stored_video.id}")

        assert response.status_code == 401


class TestViews:

    async def test_increment(self, client: AsyncClient, stored_video):
        await client.post(f"/api/videos/{stored_video.id}/views")
        response = await client.post(f"/api/videos/{stored_video.id}/views")

        assert response.status_code == 200
        assert response.json() == {"views": 2}

    async def test_unknown_video(self, client: AsyncClient):
        response = await client.post("/api/videos/999/views")

        assert response.status_code == 404
