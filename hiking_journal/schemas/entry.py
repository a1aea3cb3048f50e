from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from hiking_journal.models.entry import (
    EntryStatus,
    Location,
    Photo,
    Privacy,
    Trail,
    Weather,
)


class EntryCreate(BaseModel):
    """建立 Entry 的請求 Schema（擁有者由驗證資訊決定）"""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    date: datetime
    location: Location
    trail: Trail = Field(default_factory=Trail)
    weather: Weather = Field(default_factory=Weather)
    photos: List[Photo] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    rating: int = Field(default=3, ge=1, le=5)
    privacy: Privacy = Privacy.PRIVATE
    status: EntryStatus = EntryStatus.DRAFT

    model_config = ConfigDict(
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "title": "Rampart Reservoir loop",
                "description": "Windy but clear, saw two elk near the dam.",
                "date": "2025-06-14T08:30:00",
                "location": {
                    "name": "Pike National Forest, Colorado",
                    "coordinates": {"latitude": 38.9567, "longitude": -105.0167}
                },
                "trail": {
                    "difficulty": "moderate",
                    "distance": 6.2,
                    "duration": 180,
                    "elevation_gain": 800,
                    "type": "out-and-back"
                },
                "weather": {"temperature": 62, "conditions": "Sunny"},
                "tags": ["lake"],
                "rating": 4
            }
        }
    )


class EntryUpdate(BaseModel):
    """
    更新 Entry 的請求 Schema

    有提供的欄位整個取代；子文件（location、trail...）不做深層合併
    """
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    location: Optional[Location] = None
    trail: Optional[Trail] = None
    weather: Optional[Weather] = None
    photos: Optional[List[Photo]] = None
    tags: Optional[List[str]] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    privacy: Optional[Privacy] = None
    status: Optional[EntryStatus] = None

    model_config = ConfigDict(use_enum_values=True)


class EntryResponse(BaseModel):
    """Entry 回應 Schema"""
    id: str = Field(..., alias="_id", serialization_alias="_id")
    user_id: str

    title: str
    description: str
    date: datetime
    location: Location
    trail: Trail = Field(default_factory=Trail)
    weather: Weather = Field(default_factory=Weather)
    photos: List[Photo] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    rating: Optional[int] = None
    privacy: Privacy = Privacy.PRIVATE
    status: EntryStatus

    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)


class EntryListResponse(BaseModel):
    """Entry 列表回應 Schema"""
    entries: List[EntryResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
