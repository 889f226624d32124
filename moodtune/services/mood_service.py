"""Mood entry persistence and aggregation (heatmap, trailing statistics)."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from moodtune.models.mood_entry import MoodEntry
from moodtune.schemas.mood import HeatmapBucket, MoodStats, RecentMoodEntry

TREND_MIN_ENTRIES = 4
TREND_THRESHOLD = 0.5


def create_mood_entry(db: Session, mood: int, mood_emoji: str) -> MoodEntry:
    """Persist a mood submission."""
    entry = MoodEntry(mood=mood, mood_emoji=mood_emoji)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def get_recent_entries(db: Session, limit: int = 10) -> list[MoodEntry]:
    """Get latest mood entries, newest first."""
    stmt = (
        select(MoodEntry)
        .order_by(desc(MoodEntry.created_at), desc(MoodEntry.id))
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def get_heatmap(db: Session) -> list[HeatmapBucket]:
    """Mean mood per UTC calendar day over every stored entry, newest day first."""
    stmt = select(MoodEntry).order_by(desc(MoodEntry.created_at), desc(MoodEntry.id))
    entries = db.execute(stmt).scalars().all()
    return build_heatmap(entries)


def get_recent_stats(db: Session, window_days: int = 30, limit: int = 20) -> MoodStats:
    """Summarize the most recent entries inside a trailing window."""
    since = datetime.now(timezone.utc) - timedelta(days=window_days)
    stmt = (
        select(MoodEntry)
        .where(MoodEntry.created_at >= since)
        .order_by(desc(MoodEntry.created_at), desc(MoodEntry.id))
        .limit(limit)
    )
    entries = list(db.execute(stmt).scalars().all())
    return build_stats(entries)


def build_heatmap(entries: Sequence[MoodEntry]) -> list[HeatmapBucket]:
    grouped: dict[str, list[int]] = {}
    for entry in entries:
        grouped.setdefault(_day(entry.created_at), []).append(entry.mood)

    return [
        HeatmapBucket(date=day, mood=sum(moods) / len(moods), count=len(moods))
        for day, moods in grouped.items()
    ]


def build_stats(entries: Sequence[MoodEntry]) -> MoodStats:
    """Build stats from entries ordered newest first."""
    moods = [entry.mood for entry in entries]
    average = sum(moods) / len(moods) if moods else 0.0

    return MoodStats(
        recent_entries=[
            RecentMoodEntry(mood=entry.mood, emoji=entry.mood_emoji, date=_day(entry.created_at))
            for entry in entries
        ],
        average_mood=round(average, 1),
        trend=compute_trend(list(reversed(moods))),
        most_common_mood=most_common_mood(moods),
        total_days=len(entries),
    )


def compute_trend(moods: Sequence[int]) -> str:
    """Compare the older half against the newer half of chronologically ordered moods.

    Returns "improving", "declining" or "stable".
    """
    if len(moods) < TREND_MIN_ENTRIES:
        return "stable"

    middle = len(moods) // 2
    first_half = moods[:middle]
    second_half = moods[middle:]
    first_avg = sum(first_half) / len(first_half)
    second_avg = sum(second_half) / len(second_half)

    if second_avg > first_avg + TREND_THRESHOLD:
        return "improving"
    if second_avg < first_avg - TREND_THRESHOLD:
        return "declining"
    return "stable"


def most_common_mood(moods: Sequence[int]) -> int:
    """Most frequent mood value; ties go to the lowest value, 0 when empty."""
    if not moods:
        return 0
    counts = Counter(moods)
    best = 0
    best_count = 0
    for mood in sorted(counts):
        if counts[mood] > best_count:
            best, best_count = mood, counts[mood]
    return best


def _day(value: datetime) -> str:
    # SQLite hands back naive datetimes that are already UTC.
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date().isoformat()
