"""步道目錄"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from hiking_journal.models.entry import Location, Trail


class Seasonality(BaseModel):
    best_seasons: List[str] = Field(default_factory=list)
    accessibility: Optional[str] = None


class TrailInfo(BaseModel):
    """目錄中的步道，欄位可直接帶入新的 Entry"""
    id: str
    name: str
    location: Location
    trail: Trail
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    seasonality: Seasonality = Field(default_factory=Seasonality)


class TrailCatalog(ABC):
    """步道資料來源介面"""

    @abstractmethod
    def get(self, trail_id: str) -> Optional[TrailInfo]:
        ...

    @abstractmethod
    def search(self, term: str) -> List[TrailInfo]:
        ...

    @abstractmethod
    def all(self) -> List[TrailInfo]:
        ...


class InMemoryTrailCatalog(TrailCatalog):
    """固定資料的目錄"""

    def __init__(self, trails: List[TrailInfo]):
        self._trails: Dict[str, TrailInfo] = {trail.id: trail for trail in trails}

    def get(self, trail_id: str) -> Optional[TrailInfo]:
        return self._trails.get(trail_id)

    def search(self, term: str) -> List[TrailInfo]:
        """名稱或地點包含關鍵字（不分大小寫）"""
        term = term.lower()
        return [
            trail for trail in self._trails.values()
            if term in trail.name.lower() or term in trail.location.name.lower()
        ]

    def all(self) -> List[TrailInfo]:
        return list(self._trails.values())


DEFAULT_TRAILS = [
    TrailInfo(
        id="rampart-reservoir-via-shubarth-trail",
        name="Rampart Reservoir via Shubarth Trail",
        location=Location(
            name="Pike National Forest, Colorado",
            coordinates={"latitude": 38.9567, "longitude": -105.0167},
            elevation=9200,
        ),
        trail=Trail(
            name="Shubarth Trail",
            difficulty="moderate",
            distance=6.2,
            duration=180,
            elevation_gain=800,
            type="out-and-back",
        ),
        description=(
            "A scenic trail leading to Rampart Reservoir with beautiful mountain "
            "views and forested sections."
        ),
        tags=["lake", "forest", "wildlife", "scenic-views"],
        features=["waterfall", "wildlife", "scenic-views", "lake"],
        seasonality=Seasonality(
            best_seasons=["spring", "summer", "fall"],
            accessibility="Year-round access",
        ),
    ),
]
