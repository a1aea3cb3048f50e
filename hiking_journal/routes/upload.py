import logging
from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Query
from pydantic import BaseModel

from hiking_journal.dependencies import CurrentUser, get_session_user
from hiking_journal.services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["Upload"])


class ImageUploadResponse(BaseModel):
    """照片上傳回應"""
    url: str
    public_id: str


@router.post("/image", response_model=ImageUploadResponse)
async def upload_image(
    file: UploadFile = File(..., description="照片檔案"),
    user: CurrentUser = Depends(get_session_user)
):
    """
    上傳照片

    - 支援的格式: jpeg, png, webp
    - 檔案大小限制: 5MB（可在設定中調整）

    **Response:**
    - **url**: 照片網址（建立 Entry 時放進 photos[].url）
    - **public_id**: 刪除照片時使用
    """
    try:
        result = await StorageService.save_image(file, user.user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error uploading image: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to upload image")

    return ImageUploadResponse(**result)


@router.delete("/image")
async def delete_image(
    public_id: str = Query(..., description="上傳時回傳的 public_id"),
    user: CurrentUser = Depends(get_session_user)
):
    """
    刪除照片（只能刪除自己上傳的）
    """
    if not StorageService.owns(public_id, user.user_id):
        raise HTTPException(status_code=404, detail="Image not found")

    deleted = await StorageService.delete_image(public_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Image not found")

    return {"success": True, "message": "Image deleted"}
