from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from hiking_journal.dependencies import CurrentUser, get_session_user, get_trail_catalog
from hiking_journal.services.trail_catalog import TrailCatalog, TrailInfo

router = APIRouter(prefix="/trails", tags=["Trails"])


class TrailListResponse(BaseModel):
    trails: List[TrailInfo]
    total: int


@router.get("/{trail_id}", response_model=TrailInfo)
async def get_trail(
    trail_id: str,
    catalog: TrailCatalog = Depends(get_trail_catalog),
    user: CurrentUser = Depends(get_session_user)
):
    """取得單一步道"""
    trail = catalog.get(trail_id)
    if not trail:
        raise HTTPException(status_code=404, detail="Trail not found")
    return trail


@router.get("", response_model=TrailListResponse)
async def get_trails(
    search: Optional[str] = Query(None, description="步道名稱關鍵字"),
    location: Optional[str] = Query(None, description="地點關鍵字"),
    catalog: TrailCatalog = Depends(get_trail_catalog),
    user: CurrentUser = Depends(get_session_user)
):
    """
    搜尋步道

    沒有關鍵字時回傳全部
    """
    term = search or location
    trails = catalog.search(term) if term else catalog.all()
    return TrailListResponse(trails=trails, total=len(trails))
