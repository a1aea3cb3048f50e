from hiking_journal.routes.entry import router as entry_router
from hiking_journal.routes.activity import router as activity_router
from hiking_journal.routes.upload import router as upload_router
from hiking_journal.routes.token import router as token_router
from hiking_journal.routes.trail import router as trail_router
from hiking_journal.routes.weather import router as weather_router

__all__ = [
    "entry_router",
    "activity_router",
    "upload_router",
    "token_router",
    "trail_router",
    "weather_router"
]
