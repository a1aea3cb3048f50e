from datetime import datetime
from typing import List, Optional, Tuple

from hiking_journal.models.activity import Activity
from hiking_journal.models.entry import EntryStatus
from hiking_journal.models.summary import Summary
from hiking_journal.schemas.activity import ActivityCreate, ActivityUpdate
from hiking_journal.services.activities import transform
from hiking_journal.services.analytics import summarize
from hiking_journal.services.entry_service import EntryService

COMPLETED = EntryStatus.COMPLETED.value


class ActivityService:
    """Activity API：只讀寫 status=completed 的記錄"""

    @classmethod
    async def get_list(
        cls,
        user_id: str,
        page: int = 1,
        limit: int = 50,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> Tuple[List[Activity], int]:
        entries, total = await EntryService.get_list(
            user_id=user_id,
            page=page,
            page_size=limit,
            status=COMPLETED,
            start_date=start_date,
            end_date=end_date
        )
        return [transform(entry) for entry in entries], total

    @classmethod
    async def get_by_id(cls, activity_id: str, user_id: str) -> Optional[Activity]:
        entry = await EntryService.get_by_id(activity_id, user_id, status=COMPLETED)
        return transform(entry) if entry else None

    @classmethod
    async def create(cls, user_id: str, activity_data: ActivityCreate) -> Activity:
        entry = await EntryService.create(user_id, activity_data.to_entry_create())
        return transform(entry)

    @classmethod
    async def update(
        cls,
        activity_id: str,
        user_id: str,
        activity_data: ActivityUpdate
    ) -> Optional[Activity]:
        existing = await EntryService.get_by_id(activity_id, user_id, status=COMPLETED)
        if not existing:
            return None
        entry = await EntryService.update(
            activity_id,
            user_id,
            activity_data.to_entry_update(current=existing),
            status=COMPLETED
        )
        return transform(entry) if entry else None

    @classmethod
    async def delete(cls, activity_id: str, user_id: str) -> bool:
        return await EntryService.delete(activity_id, user_id, status=COMPLETED)

    @classmethod
    async def get_public(cls, limit: int = 10) -> List[Activity]:
        entries = await EntryService.get_public(limit=limit)
        return [transform(entry) for entry in entries]

    @classmethod
    async def get_summary(
        cls,
        user_id: str,
        period: str = "all",
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> Summary:
        """單次查詢取得所有已完成記錄，再於記憶體中彙總"""
        entries = await EntryService.get_completed(user_id)
        return summarize(entries, period=period, start_date=start_date, end_date=end_date)
