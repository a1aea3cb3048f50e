from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """應用程式設定"""

    # MongoDB Atlas
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "hiking_journal"

    # App Settings
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    APP_URL: str = "http://localhost:8000"

    # Auth provider（託管的身分驗證服務，回傳 {"user_id": ...}）
    AUTH_PROVIDER_URL: Optional[str] = None
    AUTH_PROVIDER_TIMEOUT: float = 10.0
    API_TOKEN_TTL_DAYS: int = 365

    # Image Storage
    STORAGE_TYPE: str = "local"  # local or cloudinary
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_FOLDER: str = "hiking-journal"

    # Upload Settings
    MAX_IMAGE_SIZE_MB: int = 5
    ALLOWED_IMAGE_TYPES: str = "image/jpeg,image/png,image/webp"
    UPLOAD_DIR: str = "uploads"

    # Weather
    OPENWEATHER_API_KEY: Optional[str] = None
    OPENWEATHER_URL: str = "https://api.openweathermap.org/data/2.5"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True
    )


settings = Settings()
