from datetime import datetime
from typing import Dict, List, Optional
from pydantic import Field

from hiking_journal.models.activity import CamelModel


class MonthlyTrend(CamelModel):
    """單月統計"""
    month: str = Field(..., description="YYYY-MM")
    activities: int = 0
    distance: float = 0
    duration: float = 0
    elevation_gain: float = 0


class PersonalRecords(CamelModel):
    longest_hike: float = 0
    highest_elevation: float = 0
    longest_duration: float = 0


class LocationCount(CamelModel):
    location: str
    count: int


class RecentActivity(CamelModel):
    id: str
    title: str
    date: Optional[datetime] = None
    distance: float = 0
    duration: float = 0
    difficulty: Optional[str] = None
    rating: Optional[int] = None


class Summary(CamelModel):
    """健行統計結果"""
    total_activities: int = 0
    total_distance: float = 0
    total_duration: float = 0
    total_elevation_gain: float = 0
    average_distance: float = 0
    average_duration: float = 0
    average_elevation_gain: float = 0
    average_rating: float = 0
    difficulty_breakdown: Dict[str, int] = Field(default_factory=dict)
    trail_type_breakdown: Dict[str, int] = Field(default_factory=dict)
    weather_condition_breakdown: Dict[str, int] = Field(default_factory=dict)
    monthly_trends: List[MonthlyTrend] = Field(default_factory=list)
    personal_records: PersonalRecords = Field(default_factory=PersonalRecords)
    top_locations: List[LocationCount] = Field(default_factory=list)
    recent_activities: List[RecentActivity] = Field(default_factory=list)
