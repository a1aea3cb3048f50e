from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import logging
import os

from hiking_journal import __version__
from hiking_journal.config import settings
from hiking_journal.database import database
from hiking_journal.routes import (
    activity_router,
    entry_router,
    token_router,
    trail_router,
    upload_router,
    weather_router,
)

LOG_LEVEL = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
LOG_FORMAT = "[%(levelname)s] %(name)s (Time: %(asctime)s) - %(message)s"
logging.basicConfig(format=LOG_FORMAT, level=LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """應用程式生命週期管理"""
    # 啟動時連接資料庫
    await database.connect()
    yield
    # 關閉時斷開連接
    await database.disconnect()


# 建立 FastAPI 應用程式
app = FastAPI(
    title="Hiking Journal API",
    description="""
    健行日誌後端 API 服務

    ## 功能

    * **Entries** - 健行記錄管理（步道、天氣、照片、標籤、評分）
    * **Activities** - 已完成健行的對外格式與統計
    * **Tokens** - 外部整合用的個人 API token
    * **Upload** - 照片上傳
    * **Trails / Weather** - 步道目錄與天氣

    ## 記錄狀態

    1. 記錄建立時為 `draft`（或直接建立為 `completed`）
    2. `POST /api/v1/entries/{id}/complete` 標記為完成
    3. 只有 `completed` 的記錄會出現在 activities 與統計中
    4. 完成後不能改回 `draft`
    """,
    version=__version__,
    lifespan=lifespan
)

# CORS 設定
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 生產環境應該限制來源
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 確保 uploads 目錄存在
uploads_dir = os.path.abspath(settings.UPLOAD_DIR)
os.makedirs(uploads_dir, exist_ok=True)

# 掛載靜態檔案（本地儲存的照片）
app.mount("/uploads", StaticFiles(directory=uploads_dir), name="uploads")

# 註冊路由
app.include_router(entry_router, prefix="/api/v1")
app.include_router(activity_router, prefix="/api/v1")
app.include_router(token_router, prefix="/api/v1")
app.include_router(upload_router, prefix="/api/v1")
app.include_router(trail_router, prefix="/api/v1")
app.include_router(weather_router, prefix="/api/v1")


@app.get("/")
async def root():
    """API 根路徑"""
    return {
        "message": "Welcome to Hiking Journal API",
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
async def health_check():
    """健康檢查端點"""
    connected = await database.ping()
    return JSONResponse(
        status_code=200 if connected else 503,
        content={
            "status": "healthy" if connected else "degraded",
            "version": __version__,
            "database": "connected" if connected else "disconnected"
        }
    )
