"""
對外的 Activity 格式（Health-First 相容）

由已完成的 JournalEntry 即時轉換而來，不會儲存。
JSON 欄位採 camelCase，以符合外部整合方的格式。
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActivityElevation(CamelModel):
    gain: float = 0
    # 原始資料沒有下降高度，以 gain 近似
    loss: float = 0


class ActivityLocation(CamelModel):
    name: str
    coordinates: Dict[str, float] = Field(default_factory=dict)


class ActivityWeather(CamelModel):
    temperature: Optional[float] = None
    conditions: str = ""


class ActivityPhoto(CamelModel):
    url: str
    caption: Optional[str] = None


class ActivityMetadata(CamelModel):
    trail_name: Optional[str] = None
    coordinates: Optional[Dict[str, float]] = None
    elevation: Optional[float] = None
    trailhead: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Activity(CamelModel):
    """已完成健行的外部投影"""
    id: str = Field(..., alias="_id")
    title: str
    description: str
    date: Optional[datetime] = None
    duration: float = 0
    distance: float = 0
    distance_unit: str = "miles"
    calories: int = 0
    elevation: ActivityElevation = Field(default_factory=ActivityElevation)
    location: ActivityLocation
    weather: ActivityWeather = Field(default_factory=ActivityWeather)
    difficulty: str = "moderate"
    mood: str = "good"
    notes: str = ""
    photos: List[ActivityPhoto] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    rating: Optional[int] = None
    trail_type: Optional[str] = None
    metadata: ActivityMetadata = Field(default_factory=ActivityMetadata)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
