import hashlib
import math
import secrets
from datetime import date, datetime, timezone
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId


def generate_token() -> str:
    """產生 API token（64 字元 hex）"""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    """API token 只儲存 SHA-256 雜湊值"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def to_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    轉換為不含時區的 UTC 時間

    MongoDB 回傳的 datetime 不帶時區，與帶時區的值比較會出錯
    """
    if dt is None:
        return None
    if isinstance(dt, datetime):
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
        return dt
    if isinstance(dt, date):
        return datetime(dt.year, dt.month, dt.day)
    raise TypeError(f"Expected datetime, got {type(dt).__name__}")


def month_start(dt: datetime) -> datetime:
    """取得該月第一天 00:00"""
    return datetime(dt.year, dt.month, 1)


def add_months(dt: datetime, months: int) -> datetime:
    """月份加減，回傳該月第一天（處理跨年）"""
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    return datetime(year, month, 1)


def round_half_up(value: float) -> int:
    """四捨五入（.5 一律往上，不使用 Python 的銀行家捨入）"""
    return math.floor(value + 0.5)


def parse_object_id(value: str) -> Optional[ObjectId]:
    """字串轉 ObjectId，格式錯誤時回傳 None"""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None
