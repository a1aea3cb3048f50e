from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"
    EXPERT = "expert"


class TrailType(str, Enum):
    LOOP = "loop"
    OUT_AND_BACK = "out-and-back"
    LOLLIPOP = "lollipop"
    POINT_TO_POINT = "point-to-point"
    OTHER = "other"


class Privacy(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class EntryStatus(str, Enum):
    """只允許 draft -> completed"""
    DRAFT = "draft"
    COMPLETED = "completed"


class Coordinates(BaseModel):
    """GPS 座標"""
    latitude: float = Field(..., ge=-90, le=90, description="緯度")
    longitude: float = Field(..., ge=-180, le=180, description="經度")


class Location(BaseModel):
    """健行地點"""
    name: str = Field(..., min_length=1, description="地點名稱")
    coordinates: Optional[Coordinates] = Field(default=None, description="GPS 座標")
    elevation: Optional[float] = Field(default=None, description="海拔高度（英尺）")
    trailhead: Optional[str] = Field(default=None, description="登山口")


class Trail(BaseModel):
    """步道資訊"""
    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = Field(default=None, description="步道名稱")
    difficulty: Optional[Difficulty] = Field(default=None, description="難度")
    distance: Optional[float] = Field(default=None, ge=0, description="距離（英里）")
    duration: Optional[float] = Field(default=None, ge=0, description="時間（分鐘）")
    elevation_gain: Optional[float] = Field(default=None, ge=0, description="爬升（英尺）")
    type: Optional[TrailType] = Field(default=None, description="步道類型")


class Weather(BaseModel):
    """天氣"""
    temperature: Optional[float] = None
    conditions: Optional[str] = None
    wind_speed: Optional[float] = None
    humidity: Optional[float] = Field(default=None, ge=0, le=100)


class Photo(BaseModel):
    """照片（實際檔案存在 Cloudinary 或本地）"""
    url: str
    public_id: str
    caption: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class JournalEntry(BaseModel):
    """健行日誌記錄"""
    id: Optional[str] = Field(default=None, alias="_id")
    user_id: str = Field(..., description="擁有者 ID")

    title: str
    description: str
    date: datetime
    location: Location
    trail: Trail = Field(default_factory=Trail)
    weather: Weather = Field(default_factory=Weather)
    photos: List[Photo] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    rating: Optional[int] = Field(default=3, ge=1, le=5)
    privacy: Privacy = Privacy.PRIVATE
    status: EntryStatus = EntryStatus.DRAFT

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "user_id": "user_2abc",
                "title": "Rampart Reservoir loop",
                "description": "Windy but clear, saw two elk near the dam.",
                "date": "2025-06-14T08:30:00",
                "location": {
                    "name": "Pike National Forest, Colorado",
                    "coordinates": {"latitude": 38.9567, "longitude": -105.0167},
                    "elevation": 9200,
                    "trailhead": "Rampart Reservoir Trailhead"
                },
                "trail": {
                    "name": "Shubarth Trail",
                    "difficulty": "moderate",
                    "distance": 6.2,
                    "duration": 180,
                    "elevation_gain": 800,
                    "type": "out-and-back"
                },
                "weather": {"temperature": 62, "conditions": "Sunny"},
                "tags": ["lake", "forest"],
                "rating": 4,
                "status": "completed"
            }
        }
    )
