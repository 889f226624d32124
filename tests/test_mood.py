"""Mood entry API and aggregation tests."""

from datetime import datetime, timedelta, timezone

from moodtune.models.mood_entry import MoodEntry
from moodtune.services.mood_service import (
    build_heatmap,
    compute_trend,
    get_heatmap,
    get_recent_stats,
    most_common_mood,
)


def _entry(mood: int, created_at: datetime, emoji: str = "🙂") -> MoodEntry:
    return MoodEntry(mood=mood, mood_emoji=emoji, created_at=created_at)


def test_create_mood_entry(client):
    r = client.post("/mood", json={"mood": 4, "moodEmoji": "😊"})
    assert r.status_code == 200
    data = r.json()
    assert data["mood"] == 4
    assert data["moodEmoji"] == "😊"
    assert "id" in data
    assert "createdAt" in data


def test_mood_validation(client):
    """mood must be 1-5."""
    assert client.post("/mood", json={"mood": 0, "moodEmoji": "😶"}).status_code == 422
    assert client.post("/mood", json={"mood": 6, "moodEmoji": "😶"}).status_code == 422
    assert client.post("/mood", json={"mood": 3}).status_code == 422


def test_recent_returns_newest_first_with_default_limit(client):
    for i in range(12):
        client.post("/mood", json={"mood": (i % 5) + 1, "moodEmoji": str(i)})

    r = client.get("/mood/recent")
    assert r.status_code == 200
    items = r.json()
    assert len(items) == 10
    assert items[0]["moodEmoji"] == "11"
    assert items[1]["moodEmoji"] == "10"

    r = client.get("/mood/recent?limit=3")
    assert [item["moodEmoji"] for item in r.json()] == ["11", "10", "9"]


def test_heatmap_groups_by_day(client, db_session):
    day_one = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)
    day_two = datetime(2026, 10, 2, 18, 30, tzinfo=timezone.utc)
    db_session.add_all(
        [
            _entry(2, day_one),
            _entry(4, day_one + timedelta(hours=3)),
            _entry(5, day_two),
        ]
    )
    db_session.commit()

    r = client.get("/mood/heatmap")
    assert r.status_code == 200
    assert r.json() == [
        {"date": "2026-10-02", "mood": 5.0, "count": 1},
        {"date": "2026-10-01", "mood": 3.0, "count": 2},
    ]


def test_heatmap_bucket_per_distinct_day(db_session):
    start = datetime(2026, 9, 1, 12, 0, tzinfo=timezone.utc)
    moods = [1, 2, 3, 4, 5, 5, 4]
    for i, mood in enumerate(moods):
        db_session.add(_entry(mood, start + timedelta(days=i // 2)))
    db_session.commit()

    buckets = get_heatmap(db_session)

    assert len(buckets) == 4
    by_date = {b.date: b for b in buckets}
    assert by_date["2026-09-01"].mood == 1.5
    assert by_date["2026-09-01"].count == 2
    assert by_date["2026-09-04"].mood == 4.0
    assert by_date["2026-09-04"].count == 1


def test_heatmap_uses_utc_day_for_aware_timestamps():
    late = datetime(2026, 10, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    buckets = build_heatmap([_entry(3, late)])
    assert buckets[0].date == "2026-10-02"


def test_trend_needs_four_entries():
    assert compute_trend([]) == "stable"
    assert compute_trend([1, 5, 5]) == "stable"


def test_trend_directions():
    assert compute_trend([5, 5, 1, 1]) == "declining"
    assert compute_trend([1, 1, 5, 5]) == "improving"
    assert compute_trend([3, 3, 3, 4]) == "stable"
    # odd count: older half is the shorter one
    assert compute_trend([1, 1, 2, 3, 3]) == "improving"


def test_most_common_mood_breaks_ties_on_lowest_value():
    assert most_common_mood([]) == 0
    assert most_common_mood([4, 4, 2]) == 4
    assert most_common_mood([3, 1, 3, 1]) == 1


def test_recent_stats_declining(db_session):
    now = datetime.now(timezone.utc)
    for i, mood in enumerate([5, 5, 1, 1]):
        db_session.add(_entry(mood, now - timedelta(hours=4 - i)))
    db_session.commit()

    stats = get_recent_stats(db_session)

    assert stats.trend == "declining"
    assert stats.average_mood == 3.0
    assert stats.most_common_mood == 1
    assert stats.total_days == 4
    assert [e.mood for e in stats.recent_entries] == [1, 1, 5, 5]


def test_recent_stats_window_and_limit(db_session):
    now = datetime.now(timezone.utc)
    db_session.add(_entry(1, now - timedelta(days=40)))
    for i in range(25):
        db_session.add(_entry(4, now - timedelta(minutes=i)))
    db_session.commit()

    stats = get_recent_stats(db_session)

    assert stats.total_days == 20
    assert stats.average_mood == 4.0
    assert stats.trend == "stable"


def test_recent_stats_few_entries_is_stable(db_session):
    now = datetime.now(timezone.utc)
    db_session.add_all([_entry(1, now - timedelta(hours=2)), _entry(5, now - timedelta(hours=1))])
    db_session.commit()

    assert get_recent_stats(db_session).trend == "stable"


def test_stats_endpoint_empty(client):
    r = client.get("/mood/stats")
    assert r.status_code == 200
    assert r.json() == {
        "recentEntries": [],
        "averageMood": 0.0,
        "trend": "stable",
        "mostCommonMood": 0,
        "totalDays": 0,
    }
