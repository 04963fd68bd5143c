# backend/stats.py
import math
from typing import Iterable, List, Mapping

from backend.models import Task, TaskPriority, TaskStatus
from backend.schemas import ChartData, ChartPoint, TaskSummary

STATUS_COLORS = {
    TaskStatus.COMPLETED: "#22c55e",
    TaskStatus.PENDING: "#f59e0b",
}

PRIORITY_COLORS = {
    TaskPriority.URGENT: "#ef4444",
    TaskPriority.HIGH: "#f97316",
    TaskPriority.MEDIUM: "#eab308",
    TaskPriority.LOW: "#22c55e",
}


def completion_percentage(completed: int, total: int) -> int:
    """Integer percent, halves rounded up."""
    if total <= 0:
        return 0
    return math.floor(completed * 100 / total + 0.5)


def summarize_counts(total: int, completed: int) -> TaskSummary:
    return TaskSummary(
        total_tasks=total,
        pending_tasks=total - completed,
        completed_tasks=completed,
        completion_percentage=completion_percentage(completed, total),
    )


def build_summary(tasks: Iterable[Task]) -> TaskSummary:
    statuses = [task.status for task in tasks]
    completed = sum(1 for status in statuses if status == TaskStatus.COMPLETED)
    return summarize_counts(len(statuses), completed)


def build_chart_data(status_counts: Mapping[TaskStatus, int],
                     priority_counts: Mapping[TaskPriority, int]) -> ChartData:
    pie_chart = [
        ChartPoint(name=status.value.title(), value=status_counts.get(status, 0), color=color)
        for status, color in STATUS_COLORS.items()
    ]
    bar_chart: List[ChartPoint] = [
        ChartPoint(name=priority.value.title(), value=priority_counts.get(priority, 0), color=color)
        for priority, color in PRIORITY_COLORS.items()
    ]
    return ChartData(pie_chart=pie_chart, bar_chart=bar_chart)
