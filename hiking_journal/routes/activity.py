import math
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from hiking_journal.config import settings
from hiking_journal.dependencies import CurrentUser, get_activity_reader, get_session_user
from hiking_journal.models.activity import Activity
from hiking_journal.schemas.activity import (
    ActivityCreate,
    ActivityListResponse,
    ActivityUpdate,
    Pagination,
    PublicActivityResponse,
    SummaryResponse,
)
from hiking_journal.services.activity_service import ActivityService

router = APIRouter(prefix="/activities", tags=["Activities"])

PUBLIC_LIMIT = 10


@router.get("", response_model=ActivityListResponse)
async def get_activities(
    page: int = Query(1, ge=1, description="頁碼"),
    limit: int = Query(50, ge=1, le=100, description="每頁數量"),
    start_date: Optional[datetime] = Query(None, alias="startDate", description="開始日期 (ISO 8601)"),
    end_date: Optional[datetime] = Query(None, alias="endDate", description="結束日期 (ISO 8601)"),
    user: CurrentUser = Depends(get_activity_reader)
):
    """
    取得已完成的健行（Health-First 格式）

    只包含 status=completed 的記錄
    """
    activities, total = await ActivityService.get_list(
        user_id=user.user_id,
        page=page,
        limit=limit,
        start_date=start_date,
        end_date=end_date
    )
    return ActivityListResponse(
        activities=activities,
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit) if total > 0 else 1
        )
    )


@router.post("", response_model=Activity, status_code=201)
async def create_activity(activity: ActivityCreate, user: CurrentUser = Depends(get_session_user)):
    """
    以 Activity 格式建立健行，直接標記為 completed
    """
    return await ActivityService.create(user.user_id, activity)


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    period: str = Query("all", pattern="^(all|week|month|year)$", description="統計期間"),
    start_date: Optional[datetime] = Query(None, alias="startDate", description="自訂開始日期"),
    end_date: Optional[datetime] = Query(None, alias="endDate", description="自訂結束日期"),
    user: CurrentUser = Depends(get_activity_reader)
):
    """
    健行統計

    - **period**: all / week / month / year
    - **startDate** / **endDate**: 自訂區間（有提供時取代 period，兩端皆包含）
    """
    summary = await ActivityService.get_summary(
        user_id=user.user_id,
        period=period,
        start_date=start_date,
        end_date=end_date
    )
    return SummaryResponse.from_summary(summary, period, start_date, end_date)


@router.get("/public", response_model=PublicActivityResponse)
async def get_public_activities():
    """
    公開的最新健行（不需驗證）

    只包含 privacy=public 且已完成的記錄
    """
    activities = await ActivityService.get_public(limit=PUBLIC_LIMIT)
    return PublicActivityResponse(
        data=activities,
        message="Hiking entries retrieved successfully",
        count=len(activities),
        timestamp=datetime.utcnow()
    )


@router.get("/docs")
async def get_activity_docs():
    """Activities API 說明"""
    base_url = f"{settings.APP_URL.rstrip('/')}/api/v1/activities"
    return {
        "name": "Hiking Journal Activities API",
        "version": "1.0.0",
        "description": (
            "Completed hiking journal entries in a format compatible with "
            "health tracking and fitness applications."
        ),
        "baseUrl": base_url,
        "authentication": {
            "type": "Bearer Token",
            "description": (
                "Send a session token from the auth provider, or a personal API "
                "token from POST /api/v1/tokens (read-only, scope 'read:activities')."
            )
        },
        "endpoints": {
            "GET /api/v1/activities": {
                "description": "List completed hikes",
                "parameters": {
                    "page": "Page number (default: 1)",
                    "limit": "Activities per page (default: 50, max: 100)",
                    "startDate": "Only activities on or after this date (ISO 8601)",
                    "endDate": "Only activities on or before this date (ISO 8601)"
                },
                "example": f"{base_url}?page=1&limit=10&startDate=2024-01-01"
            },
            "GET /api/v1/activities/{id}": {"description": "Retrieve one completed hike"},
            "POST /api/v1/activities": {
                "description": "Create a completed hike",
                "body": {
                    "title": "required",
                    "description": "required",
                    "date": "required, ISO 8601",
                    "location": "required, name or {name, coordinates, elevation}",
                    "duration": "minutes",
                    "distance": "miles",
                    "difficulty": "easy, moderate, hard, expert",
                    "elevationGain": "feet",
                    "trailType": "loop, out-and-back, lollipop, point-to-point, other",
                    "weather": "{temperature, conditions, windSpeed, humidity}",
                    "tags": "array of strings",
                    "rating": "1-5",
                    "photos": "array of {url, publicId, caption}"
                }
            },
            "PUT /api/v1/activities/{id}": {"description": "Update a completed hike, same body as POST with every field optional"},
            "DELETE /api/v1/activities/{id}": {"description": "Delete a completed hike"},
            "GET /api/v1/activities/summary": {
                "description": "Aggregated statistics and trends",
                "parameters": {
                    "period": "all, week, month, year",
                    "startDate": "Custom start date, overrides period",
                    "endDate": "Custom end date, overrides period"
                }
            },
            "GET /api/v1/activities/public": {"description": "Latest public hikes, no authentication"}
        },
        "activityFields": {
            "calories": "round(duration * 4.5)",
            "distanceUnit": "always 'miles'",
            "elevation.loss": "equal to elevation.gain, descent is not recorded",
            "mood": "always 'good'"
        }
    }


@router.get("/{activity_id}", response_model=Activity)
async def get_activity(activity_id: str, user: CurrentUser = Depends(get_activity_reader)):
    """
    取得單一健行
    """
    activity = await ActivityService.get_by_id(activity_id, user.user_id)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")
    return activity


@router.put("/{activity_id}", response_model=Activity)
async def update_activity(
    activity_id: str,
    activity: ActivityUpdate,
    user: CurrentUser = Depends(get_session_user)
):
    """
    以 Activity 格式更新健行
    """
    updated = await ActivityService.update(activity_id, user.user_id, activity)
    if not updated:
        raise HTTPException(status_code=404, detail="Activity not found")
    return updated


@router.delete("/{activity_id}")
async def delete_activity(activity_id: str, user: CurrentUser = Depends(get_session_user)):
    """
    刪除健行
    """
    deleted = await ActivityService.delete(activity_id, user.user_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Activity not found")

    return {"message": "Activity deleted successfully"}
