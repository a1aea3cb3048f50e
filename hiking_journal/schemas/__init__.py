from hiking_journal.schemas.entry import (
    EntryCreate,
    EntryUpdate,
    EntryResponse,
    EntryListResponse
)
from hiking_journal.schemas.activity import (
    ActivityCreate,
    ActivityUpdate,
    ActivityListResponse,
    PublicActivityResponse,
    SummaryResponse
)

__all__ = [
    "EntryCreate",
    "EntryUpdate",
    "EntryResponse",
    "EntryListResponse",
    "ActivityCreate",
    "ActivityUpdate",
    "ActivityListResponse",
    "PublicActivityResponse",
    "SummaryResponse"
]
