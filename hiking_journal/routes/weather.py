from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from hiking_journal.dependencies import CurrentUser, get_session_user, get_weather_provider
from hiking_journal.services.weather_provider import (
    WeatherProvider,
    WeatherProviderError,
    WeatherReport,
)

router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get("", response_model=WeatherReport)
async def get_weather(
    lat: Optional[float] = Query(None, ge=-90, le=90, description="緯度"),
    lon: Optional[float] = Query(None, ge=-180, le=180, description="經度"),
    location: Optional[str] = Query(None, description="地點名稱（用於提醒）"),
    provider: WeatherProvider = Depends(get_weather_provider),
    user: CurrentUser = Depends(get_session_user)
):
    """
    目前天氣與 3 日預報
    """
    if lat is None or lon is None:
        raise HTTPException(status_code=400, detail="Location coordinates required")

    try:
        return await provider.get_weather(lat, lon, location)
    except WeatherProviderError:
        raise HTTPException(status_code=502, detail="Failed to fetch weather data")
