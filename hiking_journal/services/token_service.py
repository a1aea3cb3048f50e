import logging
from datetime import datetime, timedelta
from typing import List, Optional

from hiking_journal.config import settings
from hiking_journal.database import database
from hiking_journal.utils.helpers import generate_token, hash_token, parse_object_id

logger = logging.getLogger(__name__)

READ_ACTIVITIES = "read:activities"


def _public_view(doc: dict) -> dict:
    return {
        "id": str(doc["_id"]),
        "scopes": doc["scopes"],
        "created_at": doc["created_at"],
        "expires_at": doc["expires_at"],
    }


class TokenService:
    """個人 API token（給外部整合方讀取 activities）"""

    COLLECTION_NAME = "api_tokens"

    @classmethod
    def _get_collection(cls):
        return database.get_collection(cls.COLLECTION_NAME)

    @classmethod
    async def create(cls, user_id: str) -> dict:
        """
        產生新的 token

        明文只在建立時回傳一次，資料庫只存雜湊值
        """
        token = generate_token()
        now = datetime.utcnow()
        doc = {
            "user_id": user_id,
            "token_hash": hash_token(token),
            "scopes": [READ_ACTIVITIES],
            "created_at": now,
            "expires_at": now + timedelta(days=settings.API_TOKEN_TTL_DAYS),
        }
        result = await cls._get_collection().insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info(f"Issued API token {result.inserted_id} for user {user_id}")
        return {**_public_view(doc), "token": token}

    @classmethod
    async def list_for_user(cls, user_id: str) -> List[dict]:
        cursor = cls._get_collection().find({"user_id": user_id}).sort("created_at", -1)
        return [_public_view(doc) async for doc in cursor]

    @classmethod
    async def revoke(cls, token_id: str, user_id: str) -> bool:
        oid = parse_object_id(token_id)
        if oid is None:
            return False
        result = await cls._get_collection().delete_one({"_id": oid, "user_id": user_id})
        return result.deleted_count > 0

    @classmethod
    async def verify(cls, token: str) -> Optional[dict]:
        """token 有效時回傳 {"user_id", "scopes"}，否則 None"""
        doc = await cls._get_collection().find_one({"token_hash": hash_token(token)})
        if not doc:
            return None
        if doc["expires_at"] < datetime.utcnow():
            logger.info(f"Rejected expired API token {doc['_id']}")
            return None
        return {"user_id": doc["user_id"], "scopes": doc["scopes"]}
