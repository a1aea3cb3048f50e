"""
照片上傳測試（本地儲存與 Cloudinary）
"""
import cloudinary.uploader
import pytest
from httpx import AsyncClient

from hiking_journal.config import settings
from hiking_journal.services.storage_service import StorageService
from tests.conftest import OTHER_USER_ID, TEST_USER_ID

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 256


class TestUploadImage:
    """測試上傳照片"""

    @pytest.mark.asyncio
    async def test_upload_png(self, app_client: AsyncClient, upload_dir):
        response = await app_client.post(
            "/api/v1/upload/image",
            files={"file": ("summit.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["url"].startswith(f"/uploads/images/{TEST_USER_ID}/")
        assert data["url"].endswith(".png")
        assert data["public_id"] == data["url"][len("/uploads/"):]

        saved = upload_dir.joinpath(*data["public_id"].split("/"))
        assert saved.read_bytes() == PNG_BYTES

    @pytest.mark.asyncio
    async def test_upload_invalid_type(self, app_client: AsyncClient, upload_dir):
        response = await app_client.post(
            "/api/v1/upload/image",
            files={"file": ("notes.txt", b"hello", "text/plain")}
        )

        assert response.status_code == 400
        assert "Invalid file type" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_upload_too_large(self, app_client: AsyncClient, upload_dir, monkeypatch):
        monkeypatch.setattr(settings, "MAX_IMAGE_SIZE_MB", 0)

        response = await app_client.post(
            "/api/v1/upload/image",
            files={"file": ("summit.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 400
        assert "File too large" in response.json()["detail"]
        # 不會留下部分寫入的檔案
        images_dir = upload_dir / "images" / TEST_USER_ID
        assert list(images_dir.iterdir()) == []


class TestDeleteImage:
    """測試刪除照片"""

    @pytest.mark.asyncio
    async def test_delete_own_image(self, app_client: AsyncClient, upload_dir):
        upload = await app_client.post(
            "/api/v1/upload/image",
            files={"file": ("summit.jpg", b"\xff\xd8\xff" + b"\x00" * 64, "image/jpeg")}
        )
        public_id = upload.json()["public_id"]

        response = await app_client.delete("/api/v1/upload/image", params={"public_id": public_id})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert not upload_dir.joinpath(*public_id.split("/")).exists()

        again = await app_client.delete("/api/v1/upload/image", params={"public_id": public_id})
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_other_users_image(self, app_client: AsyncClient, upload_dir):
        target = upload_dir / "images" / OTHER_USER_ID
        target.mkdir(parents=True)
        (target / "photo.png").write_bytes(PNG_BYTES)

        response = await app_client.delete(
            "/api/v1/upload/image",
            params={"public_id": f"images/{OTHER_USER_ID}/photo.png"}
        )

        assert response.status_code == 404
        assert (target / "photo.png").exists()


class TestOwnership:
    """測試 public_id 擁有者判斷"""

    @pytest.mark.parametrize("public_id,expected", [
        (f"images/{TEST_USER_ID}/a.png", True),
        (f"hiking-journal/{TEST_USER_ID}/abc123", True),
        (f"images/{OTHER_USER_ID}/a.png", False),
        (f"images/{TEST_USER_ID}/../{OTHER_USER_ID}/a.png", False),
        ("a.png", False),
    ])
    def test_owns(self, public_id, expected):
        assert StorageService.owns(public_id, TEST_USER_ID) is expected


@pytest.fixture
def cloudinary_storage(monkeypatch):
    """改用 Cloudinary，並把 SDK 的上傳與刪除換成假的實作"""
    calls = {"upload": [], "destroy": []}
    destroy_results = {}

    def fake_upload(file, **options):
        calls["upload"].append((file, options))
        public_id = f"{options['folder']}/abc123"
        return {
            "public_id": public_id,
            "secure_url": f"https://res.cloudinary.com/demo/image/upload/{public_id}.jpg",
        }

    def fake_destroy(public_id, **options):
        calls["destroy"].append(public_id)
        return {"result": destroy_results.get(public_id, "ok")}

    monkeypatch.setattr(settings, "STORAGE_TYPE", "cloudinary")
    monkeypatch.setattr(settings, "CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setattr(settings, "CLOUDINARY_API_KEY", "key")
    monkeypatch.setattr(settings, "CLOUDINARY_API_SECRET", "secret")
    monkeypatch.setattr(settings, "CLOUDINARY_FOLDER", "hiking-journal")
    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    monkeypatch.setattr(cloudinary.uploader, "destroy", fake_destroy)
    calls["destroy_results"] = destroy_results
    return calls


class TestCloudinaryStorage:
    """測試 Cloudinary 儲存"""

    @pytest.mark.asyncio
    async def test_upload(self, app_client: AsyncClient, cloudinary_storage):
        response = await app_client.post(
            "/api/v1/upload/image",
            files={"file": ("summit.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["public_id"] == f"hiking-journal/{TEST_USER_ID}/abc123"
        assert data["url"] == f"https://res.cloudinary.com/demo/image/upload/hiking-journal/{TEST_USER_ID}/abc123.jpg"

        assert len(cloudinary_storage["upload"]) == 1
        content, options = cloudinary_storage["upload"][0]
        assert content == PNG_BYTES
        assert options["folder"] == f"hiking-journal/{TEST_USER_ID}"
        assert options["format"] == "jpg"
        assert options["resource_type"] == "image"
        assert options["transformation"] == [
            {"width": 1200, "height": 800, "crop": "limit"},
            {"quality": "auto"},
        ]

    @pytest.mark.asyncio
    async def test_upload_too_large(self, app_client: AsyncClient, cloudinary_storage, monkeypatch):
        monkeypatch.setattr(settings, "MAX_IMAGE_SIZE_MB", 0)

        response = await app_client.post(
            "/api/v1/upload/image",
            files={"file": ("summit.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 400
        assert "File too large" in response.json()["detail"]
        assert cloudinary_storage["upload"] == []

    @pytest.mark.asyncio
    async def test_upload_invalid_type(self, app_client: AsyncClient, cloudinary_storage):
        response = await app_client.post(
            "/api/v1/upload/image",
            files={"file": ("clip.mp4", b"\x00" * 16, "video/mp4")}
        )

        assert response.status_code == 400
        assert cloudinary_storage["upload"] == []

    @pytest.mark.asyncio
    async def test_upload_without_credentials(self, app_client: AsyncClient, cloudinary_storage, monkeypatch):
        """缺少 Cloudinary 設定時回傳 500"""
        monkeypatch.setattr(settings, "CLOUDINARY_API_SECRET", None)

        response = await app_client.post(
            "/api/v1/upload/image",
            files={"file": ("summit.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to upload image"
        assert cloudinary_storage["upload"] == []

    @pytest.mark.asyncio
    async def test_delete(self, app_client: AsyncClient, cloudinary_storage):
        public_id = f"hiking-journal/{TEST_USER_ID}/abc123"

        response = await app_client.delete("/api/v1/upload/image", params={"public_id": public_id})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert cloudinary_storage["destroy"] == [public_id]

    @pytest.mark.asyncio
    async def test_delete_not_found(self, app_client: AsyncClient, cloudinary_storage):
        public_id = f"hiking-journal/{TEST_USER_ID}/gone"
        cloudinary_storage["destroy_results"][public_id] = "not found"

        response = await app_client.delete("/api/v1/upload/image", params={"public_id": public_id})

        assert response.status_code == 404
        assert cloudinary_storage["destroy"] == [public_id]

    @pytest.mark.asyncio
    async def test_delete_other_users_image(self, app_client: AsyncClient, cloudinary_storage):
        response = await app_client.delete(
            "/api/v1/upload/image",
            params={"public_id": f"hiking-journal/{OTHER_USER_ID}/abc123"}
        )

        assert response.status_code == 404
        assert cloudinary_storage["destroy"] == []
