import logging
import re
from datetime import datetime
from typing import Any, Dict, Optional, List, Tuple
from pymongo import ReturnDocument

from hiking_journal.database import database
from hiking_journal.models.entry import EntryStatus, Privacy
from hiking_journal.schemas.entry import EntryCreate, EntryUpdate
from hiking_journal.utils.helpers import parse_object_id, to_naive_utc

logger = logging.getLogger(__name__)


class StatusTransitionError(ValueError):
    """completed 的記錄不能再改回 draft"""


def _serialize(entry: Optional[dict]) -> Optional[dict]:
    if entry:
        entry["_id"] = str(entry["_id"])
    return entry


class EntryService:
    """健行日誌業務邏輯服務（所有操作都限定擁有者）"""

    COLLECTION_NAME = "journal_entries"

    @classmethod
    def _get_collection(cls):
        """取得 journal_entries collection"""
        return database.get_collection(cls.COLLECTION_NAME)

    @classmethod
    def _owner_query(
        cls,
        entry_id: str,
        user_id: str,
        status: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(entry_id)
        if oid is None:
            return None
        query: Dict[str, Any] = {"_id": oid, "user_id": user_id}
        if status:
            query["status"] = status
        return query

    @classmethod
    async def create(cls, user_id: str, entry_data: EntryCreate) -> dict:
        """建立新的 Entry"""
        collection = cls._get_collection()

        now = datetime.utcnow()
        entry_dict = entry_data.model_dump()
        entry_dict["user_id"] = user_id
        entry_dict["date"] = to_naive_utc(entry_dict["date"])
        entry_dict["created_at"] = now
        entry_dict["updated_at"] = now

        result = await collection.insert_one(entry_dict)
        entry_dict["_id"] = str(result.inserted_id)

        logger.info(f"Created entry {entry_dict['_id']} for user {user_id} ({entry_dict['status']})")
        return entry_dict

    @classmethod
    async def get_by_id(
        cls,
        entry_id: str,
        user_id: str,
        status: Optional[str] = None
    ) -> Optional[dict]:
        """根據 ID 取得 Entry（不存在或不屬於該使用者時回傳 None）"""
        query = cls._owner_query(entry_id, user_id, status)
        if query is None:
            return None
        entry = await cls._get_collection().find_one(query)
        return _serialize(entry)

    @classmethod
    def _list_query(
        cls,
        user_id: str,
        search: Optional[str] = None,
        difficulty: Optional[str] = None,
        tags: Optional[List[str]] = None,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {"user_id": user_id}

        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query["$or"] = [
                {"title": pattern},
                {"description": pattern},
                {"location.name": pattern},
                {"tags": pattern},
            ]

        if difficulty:
            query["trail.difficulty"] = difficulty

        if tags:
            query["tags"] = {"$in": tags}

        if status:
            query["status"] = status

        date_range = {}
        if start_date:
            date_range["$gte"] = to_naive_utc(start_date)
        if end_date:
            date_range["$lte"] = to_naive_utc(end_date)
        if date_range:
            query["date"] = date_range

        return query

    @classmethod
    async def _find(cls, query: Dict[str, Any], skip: int = 0, limit: int = 0) -> List[dict]:
        cursor = cls._get_collection().find(query).sort("date", -1).skip(skip)
        if limit:
            cursor = cursor.limit(limit)

        entries = []
        async for entry in cursor:
            entries.append(_serialize(entry))
        return entries

    @classmethod
    async def get_list(
        cls,
        user_id: str,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        difficulty: Optional[str] = None,
        tags: Optional[List[str]] = None,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> Tuple[List[dict], int]:
        """取得 Entry 列表（支援分頁與篩選，依日期由新到舊）"""
        query = cls._list_query(
            user_id,
            search=search,
            difficulty=difficulty,
            tags=tags,
            status=status,
            start_date=start_date,
            end_date=end_date
        )

        # 計算總數
        total = await cls._get_collection().count_documents(query)

        # 分頁查詢
        skip = (page - 1) * page_size
        entries = await cls._find(query, skip=skip, limit=page_size)

        return entries, total

    @classmethod
    async def get_completed(
        cls,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[dict]:
        """取得使用者所有已完成的記錄（統計用，依日期由新到舊）"""
        query = cls._list_query(
            user_id,
            status=EntryStatus.COMPLETED.value,
            start_date=start_date,
            end_date=end_date
        )
        return await cls._find(query)

    @classmethod
    async def get_public(cls, limit: int = 10) -> List[dict]:
        """取得公開且已完成的最新記錄（不限使用者）"""
        query = {
            "status": EntryStatus.COMPLETED.value,
            "privacy": Privacy.PUBLIC.value,
        }
        return await cls._find(query, limit=limit)

    @classmethod
    async def update(
        cls,
        entry_id: str,
        user_id: str,
        entry_data: EntryUpdate,
        status: Optional[str] = None
    ) -> Optional[dict]:
        """
        更新 Entry

        只更新有提供的欄位；已完成的記錄不能改回 draft
        """
        existing = await cls.get_by_id(entry_id, user_id, status)
        if not existing:
            return None

        update_dict = entry_data.model_dump(exclude_none=True)
        if (
            existing.get("status") == EntryStatus.COMPLETED.value
            and update_dict.get("status") == EntryStatus.DRAFT.value
        ):
            raise StatusTransitionError("A completed entry cannot be reverted to draft")

        if "date" in update_dict:
            update_dict["date"] = to_naive_utc(update_dict["date"])
        update_dict["updated_at"] = datetime.utcnow()

        result = await cls._get_collection().find_one_and_update(
            cls._owner_query(entry_id, user_id, status),
            {"$set": update_dict},
            return_document=ReturnDocument.AFTER
        )
        return _serialize(result)

    @classmethod
    async def complete(cls, entry_id: str, user_id: str) -> Optional[dict]:
        """將 draft 標記為 completed（已完成的記錄原樣回傳）"""
        return await cls.update(
            entry_id,
            user_id,
            EntryUpdate(status=EntryStatus.COMPLETED)
        )

    @classmethod
    async def delete(cls, entry_id: str, user_id: str, status: Optional[str] = None) -> bool:
        """永久刪除 Entry"""
        query = cls._owner_query(entry_id, user_id, status)
        if query is None:
            return False
        result = await cls._get_collection().delete_one(query)
        if result.deleted_count:
            logger.info(f"Deleted entry {entry_id} for user {user_id}")
        return result.deleted_count > 0
