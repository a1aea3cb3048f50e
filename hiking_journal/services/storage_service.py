import logging
import os
import uuid
from datetime import datetime
from typing import List

import aiofiles
import cloudinary
import cloudinary.uploader
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from hiking_journal.config import settings

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
LOCAL_PREFIX = "images"

EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}


class StorageService:
    """照片儲存服務（本地或 Cloudinary）"""

    @classmethod
    def _get_upload_dir(cls) -> str:
        """取得上傳目錄路徑"""
        upload_dir = os.path.abspath(settings.UPLOAD_DIR)
        os.makedirs(upload_dir, exist_ok=True)
        return upload_dir

    @classmethod
    def _allowed_types(cls) -> List[str]:
        return [
            content_type.strip().lower()
            for content_type in settings.ALLOWED_IMAGE_TYPES.split(",")
            if content_type.strip()
        ]

    @classmethod
    def _max_bytes(cls) -> int:
        return settings.MAX_IMAGE_SIZE_MB * 1024 * 1024

    @classmethod
    def _generate_filename(cls, content_type: str) -> str:
        """產生唯一的檔案名稱"""
        ext = EXTENSIONS.get(content_type, ".jpg")
        timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S")
        unique_id = uuid.uuid4().hex[:8]
        return f"{timestamp}_{unique_id}{ext}"

    @classmethod
    def _validate_type(cls, file: UploadFile) -> str:
        content_type = (file.content_type or "").lower()
        allowed = cls._allowed_types()
        if content_type not in allowed:
            raise ValueError(
                f"Invalid file type: {content_type or 'unknown'}. Allowed types: {', '.join(allowed)}"
            )
        return content_type

    @classmethod
    def _too_large(cls, size: int) -> ValueError:
        return ValueError(
            f"File too large: {size / 1024 / 1024:.2f}MB. Maximum size: {settings.MAX_IMAGE_SIZE_MB}MB"
        )

    @classmethod
    def owns(cls, public_id: str, user_id: str) -> bool:
        """public_id 的格式為 <prefix>/<user_id>/<name>"""
        parts = public_id.split("/")
        return len(parts) == 3 and parts[1] == user_id and ".." not in parts

    @classmethod
    async def save_image(cls, file: UploadFile, user_id: str) -> dict:
        """
        儲存照片

        :return: {"url", "public_id"}
        :raises ValueError: 格式或大小不符
        """
        content_type = cls._validate_type(file)
        if settings.STORAGE_TYPE == "cloudinary":
            return await cls._save_to_cloudinary(file, user_id)
        return await cls._save_to_local(file, user_id, content_type)

    @classmethod
    async def _save_to_local(cls, file: UploadFile, user_id: str, content_type: str) -> dict:
        """儲存到本地（開發與測試用）"""
        user_dir = os.path.join(cls._get_upload_dir(), LOCAL_PREFIX, user_id)
        os.makedirs(user_dir, exist_ok=True)

        new_filename = cls._generate_filename(content_type)
        file_path = os.path.join(user_dir, new_filename)

        # 讀取並寫入檔案
        file_size = 0
        async with aiofiles.open(file_path, "wb") as out_file:
            while True:
                content = await file.read(CHUNK_SIZE)
                if not content:
                    break
                file_size += len(content)
                if file_size > cls._max_bytes():
                    break
                await out_file.write(content)

        if file_size > cls._max_bytes():
            os.remove(file_path)
            raise cls._too_large(file_size)

        logger.info(f"Saved image {new_filename} ({file_size} bytes) for user {user_id}")
        return {
            "url": f"/uploads/{LOCAL_PREFIX}/{user_id}/{new_filename}",
            "public_id": f"{LOCAL_PREFIX}/{user_id}/{new_filename}",
        }

    @classmethod
    def _configure_cloudinary(cls):
        if not (
            settings.CLOUDINARY_CLOUD_NAME
            and settings.CLOUDINARY_API_KEY
            and settings.CLOUDINARY_API_SECRET
        ):
            raise RuntimeError("Cloudinary configuration missing")
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )

    @classmethod
    async def _save_to_cloudinary(cls, file: UploadFile, user_id: str) -> dict:
        """上傳到 Cloudinary（統一轉成 jpg，最大 1200x800）"""
        cls._configure_cloudinary()

        content = await file.read(cls._max_bytes() + 1)
        if len(content) > cls._max_bytes():
            raise cls._too_large(len(content))

        result = await run_in_threadpool(
            cloudinary.uploader.upload,
            content,
            folder=f"{settings.CLOUDINARY_FOLDER}/{user_id}",
            resource_type="image",
            format="jpg",
            transformation=[
                {"width": 1200, "height": 800, "crop": "limit"},
                {"quality": "auto"},
            ],
        )
        logger.info(f"Uploaded image {result['public_id']} to Cloudinary for user {user_id}")
        return {"url": result["secure_url"], "public_id": result["public_id"]}

    @classmethod
    async def delete_image(cls, public_id: str) -> bool:
        """刪除照片"""
        if settings.STORAGE_TYPE == "cloudinary":
            cls._configure_cloudinary()
            result = await run_in_threadpool(cloudinary.uploader.destroy, public_id)
            return result.get("result") == "ok"

        file_path = os.path.join(cls._get_upload_dir(), *public_id.split("/"))
        if os.path.isfile(file_path):
            os.remove(file_path)
            return True
        return False
