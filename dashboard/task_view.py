# dashboard/task_view.py
"""Filtering, sorting and formatting of task dicts as returned by the API."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

Task = Dict[str, Any]

MIN_TRANSCRIPT_LENGTH = 10
MAX_TRANSCRIPT_LENGTH = 50_000

STATUS_FILTERS = ("all", "pending", "completed")
SORT_OPTIONS = {
    "status": "Pending first",
    "newest": "Newest",
    "oldest": "Oldest",
    "priority": "Priority",
    "title": "Title",
}
PRIORITY_ORDER = {"URGENT": 0, "HIGH": 1, "MEDIUM": 2, "LOW": 3}


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        # offset-less timestamps are read as UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def filter_tasks(tasks: List[Task], status: str = "all", query: str = "",
                 priority: Optional[str] = None, tag: Optional[str] = None) -> List[Task]:
    needle = query.strip().lower()
    out = []
    for task in tasks:
        if status == "pending" and task["status"] != "PENDING":
            continue
        if status == "completed" and task["status"] != "COMPLETED":
            continue
        if priority and task.get("priority") != priority:
            continue
        if tag and tag.lower() not in (task.get("tags") or []):
            continue
        if needle:
            haystack = f"{task.get('title', '')}\n{task.get('description') or ''}".lower()
            if needle not in haystack:
                continue
        out.append(task)
    return out


def sort_tasks(tasks: List[Task], sort_by: str = "status") -> List[Task]:
    newest_first = sorted(tasks, key=lambda t: parse_timestamp(t["createdAt"]), reverse=True)
    if sort_by == "newest":
        return newest_first
    if sort_by == "oldest":
        return list(reversed(newest_first))
    if sort_by == "priority":
        return sorted(newest_first, key=lambda t: PRIORITY_ORDER.get(t.get("priority"), len(PRIORITY_ORDER)))
    if sort_by == "title":
        return sorted(tasks, key=lambda t: t["title"].lower())
    # sorted() is stable, so ties keep newest-first order
    return sorted(newest_first, key=lambda t: t["status"] != "PENDING")


def count_by_status(tasks: List[Task]) -> Dict[str, int]:
    completed = sum(1 for task in tasks if task["status"] == "COMPLETED")
    return {"all": len(tasks), "pending": len(tasks) - completed, "completed": completed}


def collect_tags(tasks: List[Task]) -> List[str]:
    return sorted({tag for task in tasks for tag in task.get("tags") or []})


def time_ago(timestamp: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    seconds = int((now - parse_timestamp(timestamp)).total_seconds())
    if seconds < 60:
        return "just now"
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    return "just now"


def validate_transcript(content: str) -> Optional[str]:
    length = len(content.strip())
    if length < MIN_TRANSCRIPT_LENGTH:
        return f"Transcript needs at least {MIN_TRANSCRIPT_LENGTH - length} more characters"
    if length > MAX_TRANSCRIPT_LENGTH:
        return f"Transcript exceeds maximum length by {length - MAX_TRANSCRIPT_LENGTH} characters"
    return None
