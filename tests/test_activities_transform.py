"""
JournalEntry -> Activity 轉換測試（不需要資料庫）
"""
from datetime import datetime

from hiking_journal.models.entry import JournalEntry
from hiking_journal.services.activities import transform


def full_entry():
    return {
        "_id": "665f1c2e9b1e8a0012345678",
        "user_id": "test_user_123",
        "title": "Rampart Reservoir loop",
        "description": "Windy but clear, saw two elk near the dam.",
        "date": datetime(2025, 6, 14, 8, 30),
        "location": {
            "name": "Pike National Forest, Colorado",
            "coordinates": {"latitude": 38.9567, "longitude": -105.0167},
            "elevation": 9200,
            "trailhead": "Rampart Reservoir Trailhead",
        },
        "trail": {
            "name": "Shubarth Trail",
            "difficulty": "moderate",
            "distance": 6.2,
            "duration": 180,
            "elevation_gain": 800,
            "type": "out-and-back",
        },
        "weather": {"temperature": 62, "conditions": "Sunny", "wind_speed": 12},
        "photos": [
            {"url": "https://example.com/dam.jpg", "public_id": "hiking-journal/u/dam", "caption": "The dam"},
        ],
        "tags": ["lake", "forest"],
        "rating": 4,
        "status": "completed",
        "created_at": datetime(2025, 6, 14, 20, 0),
        "updated_at": datetime(2025, 6, 15, 7, 0),
    }


class TestTransform:
    """測試 Activity 轉換"""

    def test_full_entry(self):
        activity = transform(full_entry())

        assert activity.id == "665f1c2e9b1e8a0012345678"
        assert activity.duration == 180
        assert activity.distance == 6.2
        assert activity.distance_unit == "miles"
        assert activity.calories == 810
        assert activity.elevation.gain == 800
        assert activity.elevation.loss == 800
        assert activity.location.name == "Pike National Forest, Colorado"
        assert activity.location.coordinates == {"latitude": 38.9567, "longitude": -105.0167}
        assert activity.weather.temperature == 62
        assert activity.weather.conditions == "Sunny"
        assert activity.difficulty == "moderate"
        assert activity.mood == "good"
        assert activity.notes == activity.description
        assert activity.trail_type == "out-and-back"
        assert activity.rating == 4
        assert activity.metadata.trail_name == "Shubarth Trail"
        assert activity.metadata.elevation == 9200
        assert activity.metadata.trailhead == "Rampart Reservoir Trailhead"
        assert activity.metadata.created_at == datetime(2025, 6, 14, 20, 0)

    def test_photos_keep_only_url_and_caption(self):
        data = transform(full_entry()).to_json()

        assert data["photos"] == [{"url": "https://example.com/dam.jpg", "caption": "The dam"}]

    def test_missing_trail_metrics(self):
        """只有 duration 時：calories 依時間計算，爬升為 0"""
        entry = full_entry()
        entry["trail"] = {"duration": 120}

        activity = transform(entry)

        assert activity.calories == 540
        assert activity.distance == 0
        assert activity.elevation.gain == 0
        assert activity.elevation.loss == 0
        assert activity.difficulty == "moderate"

    def test_calories_round_half_up(self):
        entry = full_entry()
        entry["trail"] = {"duration": 1}
        assert transform(entry).calories == 5

        entry["trail"] = {"duration": 3}
        assert transform(entry).calories == 14

    def test_empty_sub_documents(self):
        entry = full_entry()
        entry["trail"] = None
        entry["weather"] = {}
        entry["location"] = {"name": "Somewhere"}
        entry["photos"] = []

        activity = transform(entry)

        assert activity.duration == 0
        assert activity.calories == 0
        assert activity.weather.temperature is None
        assert activity.weather.conditions == ""
        assert activity.location.coordinates == {}
        assert activity.metadata.coordinates is None
        assert activity.trail_type is None
        assert activity.photos == []

    def test_json_keys_are_camel_case(self):
        data = transform(full_entry()).to_json()

        assert data["_id"] == "665f1c2e9b1e8a0012345678"
        assert data["distanceUnit"] == "miles"
        assert data["trailType"] == "out-and-back"
        assert data["metadata"]["trailName"] == "Shubarth Trail"
        assert "createdAt" in data["metadata"]
        assert "heartRate" not in data
        assert data["date"] == "2025-06-14T08:30:00"

    def test_accepts_model(self):
        entry = JournalEntry(**full_entry())

        activity = transform(entry)

        assert activity.id == "665f1c2e9b1e8a0012345678"
        assert activity.calories == 810
        assert activity.photos[0].caption == "The dam"

    def test_does_not_mutate_input(self):
        entry = full_entry()
        transform(entry)
        assert entry == full_entry()

    def test_non_numeric_values(self):
        entry = full_entry()
        entry["trail"] = {"duration": "120", "distance": "n/a", "elevation_gain": None}

        activity = transform(entry)

        assert activity.duration == 120
        assert activity.calories == 540
        assert activity.distance == 0
        assert activity.elevation.gain == 0
