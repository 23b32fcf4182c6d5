"""Record shapes of the earlier per-executor and per-stage analytics API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sparkhistory.analytics import to_json_dict


@dataclass
class PerformanceTrend:
    """Task performance of one application on one day."""

    date: str
    app_id: str
    avg_task_duration_ms: float | None
    total_tasks: int
    failed_tasks: int
    avg_input_bytes: float | None
    avg_output_bytes: float | None


@dataclass
class GcTimeTrend:
    """Garbage collection time of one application on one day."""

    date: str
    app_id: str
    total_gc_time_ms: int
    avg_gc_time_ms: float | None
    total_tasks: int
    gc_time_per_task_ms: float | None


@dataclass
class CpuUtilizationAnalysis:
    """CPU use and idle cores of one executor on one day."""

    date: str
    app_id: str
    executor_id: str
    total_tasks: int
    total_duration_ms: int
    actual_cpu_time_ms: int
    theoretical_cpu_time_ms: int
    idle_cpu_time_ms: int
    cpu_utilization_percent: float | None
    efficiency_rating: str


@dataclass
class MemoryUsageAnalysis:
    """Memory use and spilling of one executor on one day."""

    date: str
    app_id: str
    executor_id: str
    max_memory_mb: int
    peak_memory_usage_mb: int
    avg_memory_usage_mb: float | None
    memory_utilization_percent: float | None
    memory_spill_mb: int
    disk_spill_mb: int
    total_tasks: int
    memory_efficiency_rating: str
    spill_ratio: float | None


@dataclass
class DateRange:
    """Inclusive range of dates covered by an analytics result."""

    start_date: str
    end_date: str


@dataclass
class DataLocalitySummary:
    """Task counts per data locality level."""

    process_local: int = 0
    node_local: int = 0
    rack_local: int = 0
    any: int = 0


@dataclass
class CrossAppSummary:
    """Totals across all applications."""

    total_applications: int
    active_applications: int
    total_events: int
    total_tasks_completed: int
    total_tasks_failed: int
    avg_task_duration_ms: float | None
    total_data_processed_gb: float | None
    peak_concurrent_executors: int
    date_range: DateRange


@dataclass
class TaskDistribution:
    """Task outcomes and durations of one stage."""

    app_id: str
    stage_id: int
    total_tasks: int
    completed_tasks: int
    failed_tasks: int
    avg_duration_ms: float | None
    min_duration_ms: int | None
    max_duration_ms: int | None
    data_locality_summary: DataLocalitySummary = field(default_factory=DataLocalitySummary)


@dataclass
class ExecutorUtilization:
    """Work done by one executor across applications."""

    executor_id: str
    host: str
    total_tasks: int
    total_duration_ms: int
    avg_cpu_utilization: float | None
    peak_memory_usage_mb: int | None
    data_locality_hits: int
    apps_served: list[str] = field(default_factory=list)


@dataclass
class ResourceUtilizationMetrics:
    """Detailed resource use of one executor within one application."""

    executor_id: str
    host: str
    app_id: str
    app_name: str
    total_tasks: int
    completed_tasks: int
    failed_tasks: int
    total_duration_ms: int
    avg_task_duration_ms: float | None
    cpu_time_ms: int
    gc_time_ms: int
    peak_memory_usage_mb: int | None
    max_memory_mb: int
    memory_utilization_percent: float | None
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
    start_time: str
    end_time: str | None
    is_active: bool


def legacy_to_json_dict(obj: Any) -> Any:
    """Convert legacy analytics records, or lists of them, into JSON-ready values."""
    return to_json_dict(obj)