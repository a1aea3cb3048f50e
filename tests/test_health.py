"""
健康檢查與基本端點測試
"""
import pytest
from httpx import AsyncClient

from hiking_journal import __version__


class TestHealthCheck:
    """測試健康檢查端點"""

    @pytest.mark.asyncio
    async def test_root_endpoint(self, app_client: AsyncClient):
        """測試根路徑"""
        response = await app_client.get("/")

        assert response.status_code == 200
        data = response.json()

        assert data["message"] == "Welcome to Hiking Journal API"
        assert data["version"] == __version__
        assert data["docs"] == "/docs"

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        """測試健康檢查端點"""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()

        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_check_without_database(self, app_client: AsyncClient):
        """沒有資料庫連線時回傳 503"""
        response = await app_client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"


class TestAPIDocumentation:
    """測試 API 文件端點"""

    @pytest.mark.asyncio
    async def test_swagger_docs(self, app_client: AsyncClient):
        """測試 Swagger 文件頁面"""
        response = await app_client.get("/docs")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_redoc(self, app_client: AsyncClient):
        """測試 ReDoc 文件頁面"""
        response = await app_client.get("/redoc")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_openapi_json(self, app_client: AsyncClient):
        """測試 OpenAPI JSON"""
        response = await app_client.get("/openapi.json")

        assert response.status_code == 200
        data = response.json()

        assert data["info"]["title"] == "Hiking Journal API"
        assert "/api/v1/activities/summary" in data["paths"]
        assert "/api/v1/entries/{entry_id}/complete" in data["paths"]
