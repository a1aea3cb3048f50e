from hiking_journal.services.entry_service import EntryService
from hiking_journal.services.activity_service import ActivityService
from hiking_journal.services.storage_service import StorageService
from hiking_journal.services.token_service import TokenService

__all__ = ["EntryService", "ActivityService", "StorageService", "TokenService"]
