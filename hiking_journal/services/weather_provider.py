"""天氣資料來源"""

import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

import httpx
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

FORECAST_DAYS = 3


class CurrentWeather(BaseModel):
    temperature: float
    conditions: str
    wind_speed: float
    humidity: float
    feels_like: Optional[float] = None
    uv_index: Optional[float] = None
    visibility: Optional[float] = None


class DailyForecast(BaseModel):
    date: date
    high: float
    low: float
    conditions: str
    precipitation: float = 0
    wind_speed: float = 0


class WeatherAlert(BaseModel):
    type: str
    title: str
    description: str
    severity: str


class WeatherReport(BaseModel):
    current: CurrentWeather
    forecast: List[DailyForecast] = Field(default_factory=list)
    alerts: List[WeatherAlert] = Field(default_factory=list)


class WeatherProviderError(Exception):
    """外部天氣服務錯誤"""


HIGH_ELEVATION_ALERT = WeatherAlert(
    type="Weather Alert",
    title="High Elevation Weather Warning",
    description="Be prepared for rapidly changing weather conditions at high elevations.",
    severity="moderate",
)


def location_alerts(location: Optional[str]) -> List[WeatherAlert]:
    """依地點加上的提醒（目前只有科羅拉多高海拔）"""
    if location and "colorado" in location.lower():
        return [HIGH_ELEVATION_ALERT]
    return []


class WeatherProvider(ABC):
    """天氣資料來源介面"""

    @abstractmethod
    async def get_weather(
        self,
        lat: float,
        lon: float,
        location: Optional[str] = None
    ) -> WeatherReport:
        ...


class StaticWeatherProvider(WeatherProvider):
    """回傳固定天氣（未設定 API key 時與測試使用）"""

    def __init__(self, current: Optional[CurrentWeather] = None, today: Optional[date] = None):
        self.current = current or CurrentWeather(
            temperature=65,
            conditions="Partly Cloudy",
            wind_speed=8,
            humidity=45,
            feels_like=64,
            uv_index=5,
            visibility=10,
        )
        self.today = today

    async def get_weather(
        self,
        lat: float,
        lon: float,
        location: Optional[str] = None
    ) -> WeatherReport:
        today = self.today or date.today()
        forecast = [
            DailyForecast(
                date=today + timedelta(days=offset),
                high=self.current.temperature + 5,
                low=self.current.temperature - 15,
                conditions=self.current.conditions,
                wind_speed=self.current.wind_speed,
            )
            for offset in range(FORECAST_DAYS)
        ]
        return WeatherReport(current=self.current, forecast=forecast, alerts=location_alerts(location))


class OpenWeatherMapProvider(WeatherProvider):
    """OpenWeatherMap（英制單位）"""

    def __init__(self, api_key: str, base_url: str, timeout: float = 10.0):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _fetch(self, client: httpx.AsyncClient, path: str, lat: float, lon: float) -> dict:
        response = await client.get(
            f"{self.base_url}/{path}",
            params={"lat": lat, "lon": lon, "units": "imperial", "appid": self.api_key},
        )
        response.raise_for_status()
        return response.json()

    async def get_weather(
        self,
        lat: float,
        lon: float,
        location: Optional[str] = None
    ) -> WeatherReport:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                current = await self._fetch(client, "weather", lat, lon)
                forecast = await self._fetch(client, "forecast", lat, lon)
        except httpx.HTTPError as e:
            logger.error(f"Error interacting with OpenWeatherMap: {str(e)}")
            raise WeatherProviderError(str(e)) from e

        try:
            report = WeatherReport(
                current=CurrentWeather(
                    temperature=current["main"]["temp"],
                    conditions=current["weather"][0]["main"],
                    wind_speed=current["wind"]["speed"],
                    humidity=current["main"]["humidity"],
                    feels_like=current["main"].get("feels_like"),
                    # OpenWeatherMap 回傳公尺，轉換為英里
                    visibility=round(current["visibility"] / 1609.34, 1) if "visibility" in current else None,
                ),
                forecast=self._daily(forecast.get("list", [])),
                alerts=location_alerts(location),
            )
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Unexpected OpenWeatherMap response: {e!r}")
            raise WeatherProviderError(f"Unexpected response: {e!r}") from e
        return report

    @staticmethod
    def _daily(items: List[dict]) -> List[DailyForecast]:
        """3 小時一筆的預報彙整成每日"""
        days = {}
        for item in items:
            day = datetime.fromtimestamp(item["dt"], tz=timezone.utc).date()
            days.setdefault(day, []).append(item)

        forecast = []
        for day, rows in list(days.items())[:FORECAST_DAYS]:
            forecast.append(DailyForecast(
                date=day,
                high=max(row["main"]["temp_max"] for row in rows),
                low=min(row["main"]["temp_min"] for row in rows),
                conditions=rows[len(rows) // 2]["weather"][0]["main"],
                precipitation=round(max(row.get("pop", 0) for row in rows) * 100),
                wind_speed=max(row["wind"]["speed"] for row in rows),
            ))
        return forecast
