"""
Unit tests for dashboard task filtering, sorting and formatting
"""
from datetime import datetime, timedelta, timezone

import pytest
from dashboard.task_view import (
    collect_tags,
    count_by_status,
    filter_tasks,
    sort_tasks,
    time_ago,
    validate_transcript,
)

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def make_task(title, status="PENDING", priority="MEDIUM", minutes_ago=0, description=None, tags=None):
    return {
        "id": title.lower().replace(" ", "-"),
        "title": title,
        "description": description,
        "status": status,
        "priority": priority,
        "tags": tags or [],
        "createdAt": (NOW - timedelta(minutes=minutes_ago)).isoformat(),
    }


class TestTaskView:
    """Test cases for task list helpers."""

    def setup_method(self):
        self.tasks = [
            make_task("Send notes", status="COMPLETED", priority="LOW", minutes_ago=1, tags=["notes"]),
            make_task("Review budget", priority="HIGH", minutes_ago=30,
                      description="Check Q3 numbers", tags=["budget", "review"]),
            make_task("Fix outage", priority="URGENT", minutes_ago=60, tags=["incident"]),
            make_task("Book room", status="COMPLETED", minutes_ago=5),
        ]

    def test_filter_by_status(self):
        assert [t["title"] for t in filter_tasks(self.tasks, status="pending")] == ["Review budget", "Fix outage"]
        assert len(filter_tasks(self.tasks, status="completed")) == 2
        assert len(filter_tasks(self.tasks, status="all")) == 4

    def test_search_matches_title_and_description(self):
        """Search is case-insensitive over title and description."""
        assert [t["title"] for t in filter_tasks(self.tasks, query="q3")] == ["Review budget"]
        assert [t["title"] for t in filter_tasks(self.tasks, query="  OUTAGE ")] == ["Fix outage"]
        assert filter_tasks(self.tasks, query="nothing like this") == []

    def test_filter_by_priority_and_tag(self):
        assert [t["title"] for t in filter_tasks(self.tasks, priority="URGENT")] == ["Fix outage"]
        assert [t["title"] for t in filter_tasks(self.tasks, tag="Budget")] == ["Review budget"]

    def test_sort_pending_first_then_newest(self):
        """Default sort groups pending tasks first, newest first within a group."""
        titles = [t["title"] for t in sort_tasks(self.tasks)]
        assert titles == ["Review budget", "Fix outage", "Send notes", "Book room"]

    @pytest.mark.parametrize("sort_by,expected", [
        ("newest", ["Send notes", "Book room", "Review budget", "Fix outage"]),
        ("oldest", ["Fix outage", "Review budget", "Book room", "Send notes"]),
        ("priority", ["Fix outage", "Review budget", "Book room", "Send notes"]),
        ("title", ["Book room", "Fix outage", "Review budget", "Send notes"]),
    ])
    def test_sort_options(self, sort_by, expected):
        assert [t["title"] for t in sort_tasks(self.tasks, sort_by)] == expected

    def test_sort_does_not_mutate(self):
        original = list(self.tasks)
        sort_tasks(self.tasks, "title")
        assert self.tasks == original

    def test_count_by_status(self):
        assert count_by_status(self.tasks) == {"all": 4, "pending": 2, "completed": 2}
        assert count_by_status([]) == {"all": 0, "pending": 0, "completed": 0}

    def test_collect_tags(self):
        assert collect_tags(self.tasks) == ["budget", "incident", "notes", "review"]

    @pytest.mark.parametrize("delta,expected", [
        (timedelta(seconds=10), "just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=2, minutes=10), "2 hours ago"),
        (timedelta(days=3), "3 days ago"),
    ])
    def test_time_ago(self, delta, expected):
        assert time_ago((NOW - delta).isoformat(), now=NOW) == expected

    def test_time_ago_naive_timestamp_is_utc(self):
        """Timestamps without an offset are read as UTC."""
        naive = (NOW - timedelta(hours=1)).replace(tzinfo=None).isoformat()
        assert time_ago(naive, now=NOW) == "1 hour ago"

    def test_validate_transcript(self):
        assert validate_transcript("short") == "Transcript needs at least 5 more characters"
        assert validate_transcript("x" * 50_010) == "Transcript exceeds maximum length by 10 characters"
        assert validate_transcript("A perfectly fine transcript") is None
