"""
健行統計

summarize() 只做記憶體內的彙總：呼叫端負責先查出單一使用者
status=completed 的記錄，並依 date 由新到舊排序。
"""

from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from hiking_journal.models.entry import JournalEntry
from hiking_journal.models.summary import (
    LocationCount,
    MonthlyTrend,
    PersonalRecords,
    RecentActivity,
    Summary,
)
from hiking_journal.services.activities import entry_to_dict, number, sub_document
from hiking_journal.utils.helpers import add_months, month_start, to_naive_utc

UNKNOWN = "unknown"
TREND_MONTHS = 12
TOP_LOCATIONS_LIMIT = 5
RECENT_ACTIVITIES_LIMIT = 5

EntryLike = Union[JournalEntry, Dict[str, Any]]


def period_start(period: str, now: datetime) -> Optional[datetime]:
    """期間的起始時間；all 或無法辨識的期間回傳 None（不設下限）"""
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return month_start(now)
    if period == "year":
        return datetime(now.year, 1, 1)
    return None


def date_bounds(
    period: str,
    now: datetime,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """自訂日期區間（任一邊界有值）完全取代 period"""
    if start_date is not None or end_date is not None:
        return to_naive_utc(start_date), to_naive_utc(end_date)
    return period_start(period, now), None


def _within(
    value: Optional[datetime],
    lower: Optional[datetime],
    upper: Optional[datetime],
) -> bool:
    if lower is None and upper is None:
        return True
    if value is None:
        return False
    if lower is not None and value < lower:
        return False
    if upper is not None and value > upper:
        return False
    return True


def _counts(values: Iterable[Optional[str]]) -> Dict[str, int]:
    return dict(Counter(value for value in values if value))


def _monthly_trends(
    rows: List[Tuple[Dict[str, Any], Optional[datetime]]],
    now: datetime,
) -> List[MonthlyTrend]:
    current = month_start(now)
    trends = []
    for offset in range(TREND_MONTHS - 1, -1, -1):
        start = add_months(current, -offset)
        end = add_months(current, -offset + 1)
        bucket = [
            sub_document(entry, "trail")
            for entry, entry_date in rows
            if entry_date is not None and start <= entry_date < end
        ]
        trends.append(MonthlyTrend(
            month=start.strftime("%Y-%m"),
            activities=len(bucket),
            distance=sum(number(trail.get("distance")) for trail in bucket),
            duration=sum(number(trail.get("duration")) for trail in bucket),
            elevation_gain=sum(number(trail.get("elevation_gain")) for trail in bucket),
        ))
    return trends


def _top_locations(entries: List[Dict[str, Any]]) -> List[LocationCount]:
    counts: Dict[str, int] = {}
    for entry in entries:
        name = sub_document(entry, "location").get("name")
        if name:
            counts[name] = counts.get(name, 0) + 1
    # sorted() 是穩定排序，同數量時保留首次出現的順序
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        LocationCount(location=name, count=count)
        for name, count in ranked[:TOP_LOCATIONS_LIMIT]
    ]


def _recent(entry: Dict[str, Any]) -> RecentActivity:
    trail = sub_document(entry, "trail")
    return RecentActivity(
        id=str(entry.get("_id") or ""),
        title=entry.get("title") or "",
        date=entry.get("date"),
        distance=number(trail.get("distance")),
        duration=number(trail.get("duration")),
        difficulty=trail.get("difficulty"),
        rating=entry.get("rating"),
    )


def summarize(
    entries: Optional[List[EntryLike]],
    period: str = "all",
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Summary:
    """
    計算健行統計

    :param entries: 已過濾（單一擁有者、completed）且依日期新到舊排序的記錄
    :param period: all | week | month | year
    :param start_date: 自訂起始時間（含），與 end_date 任一有值時忽略 period
    :param end_date: 自訂結束時間（含）
    :param now: 目前時間，預設為 UTC now
    :raises ValueError: entries 為 None
    """
    if entries is None:
        raise ValueError("entries must be a list, got None")

    now = to_naive_utc(now) if now is not None else datetime.utcnow()
    lower, upper = date_bounds(period, now, start_date, end_date)

    rows = []
    for raw in entries:
        entry = entry_to_dict(raw)
        entry_date = to_naive_utc(entry.get("date"))
        if _within(entry_date, lower, upper):
            rows.append((entry, entry_date))
    filtered = [entry for entry, _ in rows]
    trails = [sub_document(entry, "trail") for entry in filtered]

    distances = [number(trail.get("distance")) for trail in trails]
    durations = [number(trail.get("duration")) for trail in trails]
    elevation_gains = [number(trail.get("elevation_gain")) for trail in trails]
    # 沒有評分的記錄以 0 計入平均
    ratings = [number(entry.get("rating")) for entry in filtered]

    total = len(filtered)
    total_distance = sum(distances)
    total_duration = sum(durations)
    total_elevation_gain = sum(elevation_gains)

    def average(value: float) -> float:
        return value / total if total else 0

    return Summary(
        total_activities=total,
        total_distance=total_distance,
        total_duration=total_duration,
        total_elevation_gain=total_elevation_gain,
        average_distance=average(total_distance),
        average_duration=average(total_duration),
        average_elevation_gain=average(total_elevation_gain),
        average_rating=average(sum(ratings)),
        difficulty_breakdown=_counts(trail.get("difficulty") or UNKNOWN for trail in trails),
        trail_type_breakdown=_counts(trail.get("type") or UNKNOWN for trail in trails),
        weather_condition_breakdown=_counts(
            sub_document(entry, "weather").get("conditions") for entry in filtered
        ),
        monthly_trends=_monthly_trends(rows, now),
        personal_records=PersonalRecords(
            longest_hike=max(distances, default=0),
            highest_elevation=max(elevation_gains, default=0),
            longest_duration=max(durations, default=0),
        ),
        top_locations=_top_locations(filtered),
        recent_activities=[_recent(entry) for entry in filtered[:RECENT_ACTIVITIES_LIMIT]],
    )
