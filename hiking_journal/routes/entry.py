from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException, Query
import math

from hiking_journal.dependencies import CurrentUser, get_session_user
from hiking_journal.models.entry import Difficulty, EntryStatus
from hiking_journal.schemas.entry import (
    EntryCreate,
    EntryUpdate,
    EntryResponse,
    EntryListResponse
)
from hiking_journal.services.entry_service import EntryService, StatusTransitionError

router = APIRouter(prefix="/entries", tags=["Entries"])


@router.post("", response_model=EntryResponse, status_code=201, response_model_by_alias=True)
async def create_entry(entry: EntryCreate, user: CurrentUser = Depends(get_session_user)):
    """
    建立新的健行記錄

    - **title** / **description** / **date** / **location**: 必填
    - **trail**: 步道（難度、距離、時間、爬升、類型）
    - **weather**: 天氣
    - **photos**: 先透過 `/upload/image` 上傳後帶入
    - **rating**: 1-5，預設 3
    - **status**: draft（預設）或 completed
    """
    return await EntryService.create(user.user_id, entry)


@router.get("", response_model=EntryListResponse, response_model_by_alias=True)
async def get_entries(
    page: int = Query(1, ge=1, description="頁碼"),
    page_size: int = Query(10, ge=1, le=100, description="每頁數量"),
    search: Optional[str] = Query(None, description="搜尋標題、描述、地點、標籤"),
    difficulty: Optional[Difficulty] = Query(None, description="難度篩選"),
    tags: Optional[List[str]] = Query(None, description="標籤篩選"),
    status: Optional[EntryStatus] = Query(None, description="狀態篩選"),
    user: CurrentUser = Depends(get_session_user)
):
    """
    取得記錄列表

    依日期由新到舊，支援分頁與多種篩選條件
    """
    entries, total = await EntryService.get_list(
        user_id=user.user_id,
        page=page,
        page_size=page_size,
        search=search,
        difficulty=difficulty.value if difficulty else None,
        tags=tags,
        status=status.value if status else None
    )

    total_pages = math.ceil(total / page_size) if total > 0 else 1

    return EntryListResponse(
        entries=entries,
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages
    )


@router.get("/{entry_id}", response_model=EntryResponse, response_model_by_alias=True)
async def get_entry(entry_id: str, user: CurrentUser = Depends(get_session_user)):
    """
    取得單一記錄
    """
    entry = await EntryService.get_by_id(entry_id, user.user_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@router.put("/{entry_id}", response_model=EntryResponse, response_model_by_alias=True)
async def update_entry(
    entry_id: str,
    entry: EntryUpdate,
    user: CurrentUser = Depends(get_session_user)
):
    """
    更新記錄

    只更新有提供的欄位；completed 不能改回 draft
    """
    try:
        updated_entry = await EntryService.update(entry_id, user.user_id, entry)
    except StatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if not updated_entry:
        raise HTTPException(status_code=404, detail="Entry not found")
    return updated_entry


@router.post("/{entry_id}/complete", response_model=EntryResponse, response_model_by_alias=True)
async def complete_entry(entry_id: str, user: CurrentUser = Depends(get_session_user)):
    """
    將草稿標記為完成
    """
    entry = await EntryService.complete(entry_id, user.user_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@router.delete("/{entry_id}", status_code=204)
async def delete_entry(entry_id: str, user: CurrentUser = Depends(get_session_user)):
    """
    永久刪除記錄
    """
    deleted = await EntryService.delete(entry_id, user.user_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Entry not found")

    return None
