"""Display formatting of analytics records for the dashboard pages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from sparkhistory.legacy_analytics import (
    DataLocalitySummary,
    PerformanceTrend,
    ResourceUtilizationMetrics,
    TaskDistribution,
)

_MIB = 1048576
_GIB = 1024.0 * 1024.0 * 1024.0
_MISSING = "-"


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _one_decimal(value: float | None) -> str:
    return _MISSING if value is None else f"{value:.1f}"


@dataclass
class ResourceSummary:
    """Cluster-wide resource totals across executors."""

    total_executors: int
    unique_hosts: int
    total_memory_gb: int
    memory_utilization_percent: float
    total_cpu_cores: int
    cpu_utilization_percent: float
    total_spill_gb: float
    spill_applications: int


@dataclass
class DisplayPerformanceTrend:
    """A performance trend with its figures formatted for display."""

    date: str
    app_id: str
    avg_task_duration_ms: str
    total_tasks: int
    failed_tasks: int
    avg_input_bytes: str
    avg_output_bytes: str


@dataclass
class DisplayResourceUtilizationMetrics:
    """Executor resource metrics formatted for display; byte counts are in MiB."""

    executor_id: str
    host: str
    app_id: str
    app_name: str
    total_tasks: int
    completed_tasks: int
    failed_tasks: int
    total_duration_ms: int
    avg_task_duration_ms: str
    cpu_time_ms: int
    peak_memory_usage_mb: str
    max_memory_mb: int
    memory_utilization_percent: str
    input_bytes: int
    output_bytes: int
    shuffle_read_bytes: int
    shuffle_write_bytes: int
    disk_spill_bytes: int
    memory_spill_bytes: int
    data_locality_process_local: int
    data_locality_node_local: int
    data_locality_rack_local: int
    data_locality_any: int
    is_active: bool


@dataclass
class DisplayTaskDistribution:
    """A stage's task distribution formatted for display."""

    app_id: str
    stage_id: int
    total_tasks: int
    completed_tasks: int
    failed_tasks: int
    avg_duration_ms: str
    data_locality_summary: DataLocalitySummary


def format_duration(duration_ms: int) -> str:
    """Render a duration in milliseconds as minutes, or hours and minutes."""
    minutes = _trunc_div(duration_ms, 60000)
    if minutes < 60:
        return f"{minutes}min"
    hours, remaining = divmod(minutes, 60)
    if remaining == 0:
        return f"{hours}h"
    return f"{hours}h {remaining}min"


def format_time_ago(end_time: datetime, now: datetime) -> str:
    """Render how long before ``now`` the moment ``end_time`` lies."""
    elapsed_us = (now - end_time) // timedelta(microseconds=1)
    seconds = _trunc_div(elapsed_us, 1_000_000)
    hours = _trunc_div(seconds, 3600)
    if hours < 1:
        return f"{_trunc_div(seconds, 60)}min ago"
    days = _trunc_div(seconds, 86400)
    if days < 1:
        return f"{hours}h ago"
    return f"{days}d ago"


def create_resource_summary(metrics: Iterable[ResourceUtilizationMetrics]) -> ResourceSummary:
    """Aggregate per-executor metrics into cluster totals."""
    rows = list(metrics)
    total_executors = len(rows)
    unique_hosts = len({r.host for r in rows})

    total_memory_mb = sum(r.max_memory_mb for r in rows)
    peak_memory_mb = sum(r.peak_memory_usage_mb or 0 for r in rows)
    memory_utilization = (
        min(peak_memory_mb / total_memory_mb * 100.0, 100.0) if total_memory_mb > 0 else 0.0
    )

    total_cpu_time = sum(r.cpu_time_ms for r in rows)
    total_runtime = sum(r.total_duration_ms for r in rows)
    cpu_utilization = (
        min(total_cpu_time / total_runtime * 100.0, 100.0) if total_runtime > 0 else 0.0
    )

    total_spill = sum(r.disk_spill_bytes + r.memory_spill_bytes for r in rows)
    spill_applications = len(
        {r.app_id for r in rows if r.disk_spill_bytes > 0 or r.memory_spill_bytes > 0}
    )

    return ResourceSummary(
        total_executors=total_executors,
        unique_hosts=unique_hosts,
        total_memory_gb=_trunc_div(total_memory_mb, 1024),
        memory_utilization_percent=memory_utilization,
        # One core per executor is assumed.
        total_cpu_cores=total_executors,
        cpu_utilization_percent=cpu_utilization,
        total_spill_gb=total_spill / _GIB,
        spill_applications=spill_applications,
    )


def display_performance_trend(trend: PerformanceTrend) -> DisplayPerformanceTrend:
    """Format a performance trend; byte averages are shown in MiB."""
    return DisplayPerformanceTrend(
        date=trend.date,
        app_id=trend.app_id,
        avg_task_duration_ms=_one_decimal(trend.avg_task_duration_ms),
        total_tasks=trend.total_tasks,
        failed_tasks=trend.failed_tasks,
        avg_input_bytes=_one_decimal(
            None if trend.avg_input_bytes is None else trend.avg_input_bytes / _MIB
        ),
        avg_output_bytes=_one_decimal(
            None if trend.avg_output_bytes is None else trend.avg_output_bytes / _MIB
        ),
    )


def display_resource_metrics(metrics: ResourceUtilizationMetrics) -> DisplayResourceUtilizationMetrics:
    """Format executor metrics, converting byte counts to whole MiB."""
    peak = metrics.peak_memory_usage_mb
    utilization = (
        (peak or 0) / metrics.max_memory_mb * 100.0 if metrics.max_memory_mb > 0 else 0.0
    )
    return DisplayResourceUtilizationMetrics(
        executor_id=metrics.executor_id,
        host=metrics.host,
        app_id=metrics.app_id,
        app_name=metrics.app_name,
        total_tasks=metrics.total_tasks,
        completed_tasks=metrics.completed_tasks,
        failed_tasks=metrics.failed_tasks,
        total_duration_ms=metrics.total_duration_ms,
        avg_task_duration_ms=_one_decimal(metrics.avg_task_duration_ms),
        cpu_time_ms=metrics.cpu_time_ms,
        peak_memory_usage_mb=str(peak) if peak is not None else "0",
        max_memory_mb=metrics.max_memory_mb,
        memory_utilization_percent=f"{utilization:.1f}",
        input_bytes=_trunc_div(metrics.input_bytes, _MIB),
        output_bytes=_trunc_div(metrics.output_bytes, _MIB),
        shuffle_read_bytes=_trunc_div(metrics.shuffle_read_bytes, _MIB),
        shuffle_write_bytes=_trunc_div(metrics.shuffle_write_bytes, _MIB),
        disk_spill_bytes=_trunc_div(metrics.disk_spill_bytes, _MIB),
        memory_spill_bytes=_trunc_div(metrics.memory_spill_bytes, _MIB),
        data_locality_process_local=metrics.data_locality_process_local,
        data_locality_node_local=metrics.data_locality_node_local,
        data_locality_rack_local=metrics.data_locality_rack_local,
        data_locality_any=metrics.data_locality_any,
        is_active=metrics.is_active,
    )


def display_task_distribution(dist: TaskDistribution) -> DisplayTaskDistribution:
    """Format a stage's task distribution."""
    return DisplayTaskDistribution(
        app_id=dist.app_id,
        stage_id=dist.stage_id,
        total_tasks=dist.total_tasks,
        completed_tasks=dist.completed_tasks,
        failed_tasks=dist.failed_tasks,
        avg_duration_ms=_one_decimal(dist.avg_duration_ms),
        data_locality_summary=dist.data_locality_summary,
    )