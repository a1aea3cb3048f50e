"""JournalEntry -> Activity 轉換（純函數，不存取資料庫）"""

import math
from typing import Any, Dict, Union

from hiking_journal.models.activity import (
    Activity,
    ActivityElevation,
    ActivityLocation,
    ActivityMetadata,
    ActivityPhoto,
    ActivityWeather,
)
from hiking_journal.models.entry import JournalEntry
from hiking_journal.utils.helpers import round_half_up

CALORIES_PER_MINUTE = 4.5
DEFAULT_DIFFICULTY = "moderate"
DEFAULT_MOOD = "good"
DISTANCE_UNIT = "miles"


def entry_to_dict(entry: Union[JournalEntry, Dict[str, Any]]) -> Dict[str, Any]:
    """JournalEntry 模型或資料庫文件都轉成 dict"""
    if isinstance(entry, JournalEntry):
        return entry.model_dump(by_alias=True)
    return entry


def sub_document(entry: Dict[str, Any], key: str) -> Dict[str, Any]:
    return entry.get(key) or {}


def number(value: Any) -> float:
    """數值欄位；缺少或無法轉成有限數字時視為 0"""
    if value is None or isinstance(value, bool):
        return 0
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0
    return value if math.isfinite(value) else 0


def transform(entry: Union[JournalEntry, Dict[str, Any]]) -> Activity:
    """
    將已完成的健行記錄轉成 Activity

    - 缺少的數值欄位一律視為 0
    - calories = round(duration * 4.5)
    - elevation.loss 直接沿用 elevation.gain（沒有實際的下降資料）
    """
    entry = entry_to_dict(entry)
    trail = sub_document(entry, "trail")
    location = sub_document(entry, "location")
    weather = sub_document(entry, "weather")

    duration = number(trail.get("duration"))
    elevation_gain = number(trail.get("elevation_gain"))
    coordinates = location.get("coordinates")

    return Activity(
        id=str(entry.get("_id") or ""),
        title=entry.get("title") or "",
        description=entry.get("description") or "",
        date=entry.get("date"),
        duration=duration,
        distance=number(trail.get("distance")),
        distance_unit=DISTANCE_UNIT,
        calories=round_half_up(duration * CALORIES_PER_MINUTE),
        elevation=ActivityElevation(gain=elevation_gain, loss=elevation_gain),
        location=ActivityLocation(
            name=location.get("name") or "",
            coordinates=coordinates or {},
        ),
        weather=ActivityWeather(
            temperature=weather.get("temperature"),
            conditions=weather.get("conditions") or "",
        ),
        difficulty=trail.get("difficulty") or DEFAULT_DIFFICULTY,
        mood=DEFAULT_MOOD,
        notes=entry.get("description") or "",
        photos=[
            ActivityPhoto(url=photo.get("url", ""), caption=photo.get("caption"))
            for photo in entry.get("photos") or []
        ],
        tags=entry.get("tags") or [],
        rating=entry.get("rating"),
        trail_type=trail.get("type"),
        metadata=ActivityMetadata(
            trail_name=trail.get("name"),
            coordinates=coordinates,
            elevation=location.get("elevation"),
            trailhead=location.get("trailhead"),
            created_at=entry.get("created_at"),
            updated_at=entry.get("updated_at"),
        ),
    )
