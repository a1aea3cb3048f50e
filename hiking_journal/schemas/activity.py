from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from pydantic import Field

from hiking_journal.models.activity import Activity, CamelModel
from hiking_journal.models.entry import (
    Coordinates,
    Difficulty,
    EntryStatus,
    Location,
    Photo,
    Privacy,
    TrailType,
)
from hiking_journal.models.summary import (
    LocationCount,
    MonthlyTrend,
    PersonalRecords,
    RecentActivity,
    Summary,
)
from hiking_journal.schemas.entry import EntryCreate, EntryUpdate


class ActivityLocationIn(CamelModel):
    name: str = Field(..., min_length=1)
    coordinates: Optional[Coordinates] = None
    elevation: Optional[float] = None


class ActivityElevationIn(CamelModel):
    gain: Optional[float] = Field(default=None, ge=0)


class ActivityWeatherIn(CamelModel):
    temperature: Optional[float] = None
    conditions: Optional[str] = None
    wind_speed: Optional[float] = None
    humidity: Optional[float] = Field(default=None, ge=0, le=100)


class ActivityPhotoIn(CamelModel):
    url: str
    public_id: Optional[str] = None
    caption: Optional[str] = None


class ActivityUpdate(CamelModel):
    """
    以 Activity 格式更新（外部整合方使用）

    location 可為字串或物件；elevationGain 與 elevation.gain 皆可
    """
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    location: Optional[Union[str, ActivityLocationIn]] = None
    coordinates: Optional[Coordinates] = None
    trailhead: Optional[str] = None
    trail_name: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    distance: Optional[float] = Field(default=None, ge=0)
    duration: Optional[float] = Field(default=None, ge=0)
    elevation: Optional[ActivityElevationIn] = None
    elevation_gain: Optional[float] = Field(default=None, ge=0)
    trail_type: Optional[TrailType] = None
    weather: Optional[ActivityWeatherIn] = None
    tags: Optional[List[str]] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    photos: Optional[List[ActivityPhotoIn]] = None
    privacy: Optional[Privacy] = None

    def _location(self) -> Optional[Location]:
        if self.location is None:
            return None
        if isinstance(self.location, str):
            return Location(name=self.location, coordinates=self.coordinates, trailhead=self.trailhead)
        return Location(
            name=self.location.name,
            coordinates=self.location.coordinates or self.coordinates,
            elevation=self.location.elevation,
            trailhead=self.trailhead,
        )

    def _trail(self) -> Optional[Dict[str, Any]]:
        gain = self.elevation.gain if self.elevation and self.elevation.gain is not None else self.elevation_gain
        trail = {
            "name": self.trail_name,
            "difficulty": self.difficulty,
            "distance": self.distance,
            "duration": self.duration,
            "elevation_gain": gain,
            "type": self.trail_type,
        }
        if all(value is None for value in trail.values()):
            return None
        return trail

    def _photos(self) -> Optional[List[Photo]]:
        if self.photos is None:
            return None
        return [
            Photo(url=photo.url, public_id=photo.public_id or "", caption=photo.caption)
            for photo in self.photos
        ]

    def to_entry_fields(self) -> Dict[str, Any]:
        """轉成 JournalEntry 欄位（只包含有提供的值）"""
        fields = {
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "location": self._location(),
            "trail": self._trail(),
            "weather": self.weather.model_dump() if self.weather else None,
            "photos": self._photos(),
            "tags": self.tags,
            "rating": self.rating,
            "privacy": self.privacy,
        }
        return {key: value for key, value in fields.items() if value is not None}

    def to_entry_update(self, current: Optional[Dict[str, Any]] = None) -> EntryUpdate:
        """
        current 為目前儲存的記錄

        Activity 的步道與地點欄位是攤平的，只覆蓋有提供的部分
        """
        fields = self.to_entry_fields()
        current = current or {}
        if "trail" in fields and current.get("trail"):
            changes = {key: value for key, value in fields["trail"].items() if value is not None}
            fields["trail"] = {**current["trail"], **changes}
        if "location" in fields and current.get("location"):
            changes = fields["location"].model_dump(exclude_none=True)
            fields["location"] = {**current["location"], **changes}
        return EntryUpdate(**fields)


class ActivityCreate(ActivityUpdate):
    """以 Activity 格式建立（直接為 completed）"""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    date: datetime
    location: Union[str, ActivityLocationIn]

    def to_entry_create(self) -> EntryCreate:
        return EntryCreate(**self.to_entry_fields(), status=EntryStatus.COMPLETED)


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class ActivityListResponse(CamelModel):
    activities: List[Activity]
    pagination: Pagination


class PublicActivityResponse(CamelModel):
    data: List[Activity]
    message: str
    count: int
    timestamp: datetime


class SummaryTotals(CamelModel):
    total_activities: int
    total_distance: float
    total_duration: float
    total_elevation_gain: float
    average_rating: float
    average_distance: float
    average_duration: float
    average_elevation_gain: float
    personal_records: PersonalRecords


class SummaryBreakdowns(CamelModel):
    difficulty: Dict[str, int]
    trail_type: Dict[str, int]
    weather: Dict[str, int]


class SummaryTrends(CamelModel):
    monthly: List[MonthlyTrend]


class SummaryPeriod(CamelModel):
    type: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class SummaryResponse(CamelModel):
    """GET /activities/summary 回應"""
    summary: SummaryTotals
    breakdowns: SummaryBreakdowns
    trends: SummaryTrends
    top_locations: List[LocationCount]
    recent_activities: List[RecentActivity]
    period: SummaryPeriod

    @classmethod
    def from_summary(
        cls,
        summary: Summary,
        period: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> "SummaryResponse":
        return cls(
            summary=SummaryTotals(
                total_activities=summary.total_activities,
                total_distance=summary.total_distance,
                total_duration=summary.total_duration,
                total_elevation_gain=summary.total_elevation_gain,
                average_rating=summary.average_rating,
                average_distance=summary.average_distance,
                average_duration=summary.average_duration,
                average_elevation_gain=summary.average_elevation_gain,
                personal_records=summary.personal_records,
            ),
            breakdowns=SummaryBreakdowns(
                difficulty=summary.difficulty_breakdown,
                trail_type=summary.trail_type_breakdown,
                weather=summary.weather_condition_breakdown,
            ),
            trends=SummaryTrends(monthly=summary.monthly_trends),
            top_locations=summary.top_locations,
            recent_activities=summary.recent_activities,
            period=SummaryPeriod(type=period, start_date=start_date, end_date=end_date),
        )
