"""FastAPI 共用依賴：身分驗證、步道目錄、天氣來源"""

import logging
from functools import lru_cache
from typing import List, Optional

import httpx
from fastapi import Depends, Header, HTTPException
from pydantic import BaseModel, Field

from hiking_journal.config import settings
from hiking_journal.services.token_service import READ_ACTIVITIES, TokenService
from hiking_journal.services.trail_catalog import (
    DEFAULT_TRAILS,
    InMemoryTrailCatalog,
    TrailCatalog,
)
from hiking_journal.services.weather_provider import (
    OpenWeatherMapProvider,
    StaticWeatherProvider,
    WeatherProvider,
)

logger = logging.getLogger(__name__)


class CurrentUser(BaseModel):
    """已驗證的呼叫者"""
    user_id: str
    scopes: List[str] = Field(default_factory=list)
    via_api_token: bool = False


def _bearer_token(authorization: Optional[str]) -> str:
    if authorization is None:
        raise HTTPException(status_code=401, detail="No authorization header passed with request")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Wrong authorization header")
    return parts[1]


async def _verify_with_provider(authorization: str) -> str:
    """向託管的身分驗證服務確認 session，回傳 user_id"""
    auth_url = (settings.AUTH_PROVIDER_URL or "").rstrip("/")
    if not auth_url:
        logger.error("AUTH_PROVIDER_URL is not set")
        raise HTTPException(status_code=500, detail="Authentication is not configured")

    try:
        async with httpx.AsyncClient(timeout=settings.AUTH_PROVIDER_TIMEOUT) as client:
            response = await client.get(f"{auth_url}/auth", headers={"Authorization": authorization})
    except httpx.HTTPError as e:
        logger.error(f"Error interacting with auth provider: {str(e)}")
        raise HTTPException(status_code=502, detail="Authentication provider unavailable")

    if response.status_code in (401, 403):
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    if response.status_code != 200:
        logger.error(f"Auth provider returned {response.status_code}")
        raise HTTPException(status_code=502, detail="Authentication provider error")

    user_id = response.json().get("user_id")
    if not user_id:
        logger.error("Auth provider returned a response without user_id")
        raise HTTPException(status_code=502, detail="Authentication provider error")
    return user_id


async def get_current_user(authorization: Optional[str] = Header(None)) -> CurrentUser:
    """
    解析 Authorization: Bearer <token>

    先比對個人 API token，不符合時再交給身分驗證服務
    """
    token = _bearer_token(authorization)

    api_token = await TokenService.verify(token)
    if api_token:
        return CurrentUser(
            user_id=api_token["user_id"],
            scopes=api_token["scopes"],
            via_api_token=True
        )

    user_id = await _verify_with_provider(authorization)
    return CurrentUser(user_id=user_id)


async def get_session_user(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """只接受登入 session（API token 不能寫入或管理 token）"""
    if user.via_api_token:
        raise HTTPException(status_code=403, detail="API tokens cannot access this endpoint")
    return user


async def get_activity_reader(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """讀取 activities：session 或具備 read:activities 的 API token"""
    if user.via_api_token and READ_ACTIVITIES not in user.scopes:
        raise HTTPException(status_code=403, detail=f"Token is missing scope '{READ_ACTIVITIES}'")
    return user


@lru_cache(maxsize=1)
def get_trail_catalog() -> TrailCatalog:
    """Singleton TrailCatalog."""
    return InMemoryTrailCatalog(DEFAULT_TRAILS)


@lru_cache(maxsize=1)
def get_weather_provider() -> WeatherProvider:
    """有 API key 時使用 OpenWeatherMap，否則回傳固定資料"""
    if settings.OPENWEATHER_API_KEY:
        return OpenWeatherMapProvider(settings.OPENWEATHER_API_KEY, settings.OPENWEATHER_URL)
    logger.warning("OPENWEATHER_API_KEY is not set, using static weather data")
    return StaticWeatherProvider()
