"""
測試配置和共用 fixtures
"""
import os
import uuid
from typing import AsyncGenerator
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from hiking_journal.main import app
from hiking_journal.config import settings
from hiking_journal.database import database
from hiking_journal.dependencies import CurrentUser, get_current_user


# 測試用的 MongoDB URL（使用本地 MongoDB 或測試專用的 Atlas）
TEST_MONGODB_URL = os.environ.get("TEST_MONGODB_URL", "mongodb://localhost:27017")
TEST_DATABASE_NAME = "hiking_journal_test_db"
TEST_USER_ID = "test_user_123"
OTHER_USER_ID = "other_user_456"


def login_as(user_id: str):
    """以指定使用者身分呼叫 API（略過身分驗證服務）"""
    app.dependency_overrides[get_current_user] = lambda: CurrentUser(user_id=user_id)


@pytest_asyncio.fixture(scope="function")
async def test_db():
    """
    測試用資料庫 fixture
    每個測試函數使用唯一的資料庫名稱確保隔離，沒有 MongoDB 時略過
    """
    # 使用唯一的資料庫名稱
    unique_db_name = f"{TEST_DATABASE_NAME}_{uuid.uuid4().hex[:8]}"

    # 連接測試資料庫
    client = AsyncIOMotorClient(TEST_MONGODB_URL, serverSelectionTimeoutMS=2000)
    try:
        await client.admin.command("ping")
    except PyMongoError:
        client.close()
        pytest.skip(f"MongoDB is not available at {TEST_MONGODB_URL}")

    test_database = client[unique_db_name]

    # 替換全域資料庫實例
    database.client = client
    original_get_database = database.get_database
    original_get_collection = database.get_collection
    database.get_database = lambda: test_database
    database.get_collection = lambda name: test_database[name]

    yield test_database

    # 測試結束後刪除整個資料庫
    await client.drop_database(unique_db_name)

    # 恢復原始方法
    database.get_database = original_get_database
    database.get_collection = original_get_collection
    database.client = None

    client.close()


@pytest.fixture
def auth_user():
    """預設以 TEST_USER_ID 登入"""
    login_as(TEST_USER_ID)
    yield TEST_USER_ID
    app.dependency_overrides.clear()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """照片存到暫存目錄"""
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "STORAGE_TYPE", "local")
    return tmp_path


@pytest_asyncio.fixture(scope="function")
async def client(test_db, auth_user) -> AsyncGenerator[AsyncClient, None]:
    """
    測試用 HTTP 客戶端 fixture
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def app_client(auth_user) -> AsyncGenerator[AsyncClient, None]:
    """
    不需要資料庫的 HTTP 客戶端（步道、天氣、上傳）
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def sample_entry_data():
    """測試用的 Entry 資料"""
    return {
        "title": "Rampart Reservoir loop",
        "description": "Windy but clear, saw two elk near the dam.",
        "date": "2025-06-14T08:30:00",
        "location": {
            "name": "Pike National Forest, Colorado",
            "coordinates": {
                "latitude": 38.9567,
                "longitude": -105.0167
            },
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
        "weather": {
            "temperature": 62,
            "conditions": "Sunny",
            "wind_speed": 12,
            "humidity": 30
        },
        "photos": [
            {
                "url": "https://res.cloudinary.com/demo/image/upload/hiking-journal/dam.jpg",
                "public_id": "hiking-journal/test_user_123/dam",
                "caption": "The dam"
            }
        ],
        "tags": ["lake", "forest"],
        "rating": 4
    }


@pytest.fixture
def sample_entry_minimal():
    """最小化的 Entry 資料（只有必填欄位）"""
    return {
        "title": "Quick walk",
        "description": "Short loop after work.",
        "date": "2025-06-10T18:00:00",
        "location": {"name": "Red Rock Canyon"}
    }


@pytest.fixture
def sample_activity_data():
    """Activity 格式的資料（Health-First）"""
    return {
        "title": "Mountain Trail Adventure",
        "description": "Beautiful hike through mountain trails with scenic views",
        "date": "2025-06-12T09:00:00",
        "duration": 120,
        "distance": 5.2,
        "location": {
            "name": "Mountain Trail Park",
            "coordinates": {"latitude": 37.7749, "longitude": -122.4194}
        },
        "difficulty": "hard",
        "elevationGain": 1200,
        "trailType": "loop",
        "weather": {"temperature": 65, "conditions": "Sunny", "windSpeed": 5},
        "tags": ["mountain"],
        "rating": 5
    }
