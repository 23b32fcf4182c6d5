from datetime import datetime, timedelta, timezone

import pytest

from sparkhistory.display import (
    create_resource_summary,
    display_performance_trend,
    display_resource_metrics,
    display_task_distribution,
    format_duration,
    format_time_ago,
)
from sparkhistory.legacy_analytics import (
    DataLocalitySummary,
    PerformanceTrend,
    ResourceUtilizationMetrics,
    TaskDistribution,
)

MIB = 1048576


def make_metrics(**overrides):
    values = dict(
        executor_id="1",
        host="worker-1.example.com",
        app_id="app-1",
        app_name="Job",
        total_tasks=10,
        completed_tasks=9,
        failed_tasks=1,
        total_duration_ms=1000,
        avg_task_duration_ms=None,
        cpu_time_ms=500,
        gc_time_ms=10,
        peak_memory_usage_mb=None,
        max_memory_mb=1024,
        memory_utilization_percent=None,
        input_bytes=0,
        output_bytes=0,
        shuffle_read_bytes=0,
        shuffle_write_bytes=0,
        disk_spill_bytes=0,
        memory_spill_bytes=0,
        data_locality_process_local=1,
        data_locality_node_local=2,
        data_locality_rack_local=3,
        data_locality_any=4,
        start_time="2024-01-01T00:00:00Z",
        end_time=None,
        is_active=True,
    )
    values.update(overrides)
    return ResourceUtilizationMetrics(**values)


@pytest.mark.parametrize("minutes", [0, 1, 59])
def test_format_duration_under_an_hour(minutes):
    assert format_duration(minutes * 60000) == f"{minutes}min"


@pytest.mark.parametrize("hours", [1, 2, 10])
def test_format_duration_whole_hours(hours):
    assert format_duration(hours * 3600000) == f"{hours}h"


def test_format_duration_hours_and_minutes():
    assert format_duration(2 * 3600000 + 15 * 60000) == "2h 15min"


def test_format_duration_truncates_partial_minutes():
    assert format_duration(3 * 60000 + 59999) == "3min"


def test_format_time_ago_minutes_hours_days():
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert format_time_ago(now - timedelta(minutes=5), now) == "5min ago"
    assert format_time_ago(now - timedelta(hours=3), now) == "3h ago"
    assert format_time_ago(now - timedelta(days=2, hours=5), now) == "2d ago"


def test_create_resource_summary_empty():
    summary = create_resource_summary([])
    assert summary.total_executors == 0
    assert summary.unique_hosts == 0
    assert summary.memory_utilization_percent == 0.0
    assert summary.cpu_utilization_percent == 0.0
    assert summary.total_spill_gb == 0.0


def test_create_resource_summary_counts_and_caps():
    rows = [
        make_metrics(host="a", app_id="x", max_memory_mb=1024, peak_memory_usage_mb=4096,
                     cpu_time_ms=5000, total_duration_ms=100, disk_spill_bytes=1),
        make_metrics(host="a", app_id="x", max_memory_mb=1024, memory_spill_bytes=1),
        make_metrics(host="b", app_id="y", max_memory_mb=1024),
    ]
    summary = create_resource_summary(rows)
    assert summary.total_executors == 3
    assert summary.total_cpu_cores == summary.total_executors
    assert summary.unique_hosts == 2
    assert summary.total_memory_gb == 3
    assert summary.memory_utilization_percent == 100.0
    assert summary.cpu_utilization_percent == 100.0
    assert summary.spill_applications == 1


def test_create_resource_summary_spill_in_gib():
    gib = 1024 * MIB
    summary = create_resource_summary([make_metrics(disk_spill_bytes=gib, memory_spill_bytes=gib)])
    assert summary.total_spill_gb == pytest.approx(2.0)


def test_display_performance_trend_missing_values():
    trend = PerformanceTrend("2024-01-01", "app-1", None, 5, 1, None, None)
    shown = display_performance_trend(trend)
    assert shown.avg_task_duration_ms == "-"
    assert shown.avg_input_bytes == "-"
    assert shown.avg_output_bytes == "-"
    assert (shown.total_tasks, shown.failed_tasks) == (5, 1)


def test_display_performance_trend_converts_to_mib():
    trend = PerformanceTrend("2024-01-01", "app-1", 12.25, 5, 1, 3.0 * MIB, 7.0 * MIB)
    shown = display_performance_trend(trend)
    assert shown.avg_input_bytes == "3.0"
    assert shown.avg_output_bytes == "7.0"
    assert shown.date == "2024-01-01"


def test_display_resource_metrics_bytes_in_whole_mib():
    shown = display_resource_metrics(
        make_metrics(input_bytes=5 * MIB + 100, output_bytes=2 * MIB, shuffle_read_bytes=MIB - 1)
    )
    assert shown.input_bytes == 5
    assert shown.output_bytes == 2
    assert shown.shuffle_read_bytes == 0


def test_display_resource_metrics_without_peak():
    shown = display_resource_metrics(make_metrics(peak_memory_usage_mb=None))
    assert shown.peak_memory_usage_mb == "0"
    assert shown.memory_utilization_percent == "0.0"
    assert shown.avg_task_duration_ms == "-"


def test_display_resource_metrics_zero_max_memory():
    shown = display_resource_metrics(make_metrics(max_memory_mb=0, peak_memory_usage_mb=300))
    assert shown.memory_utilization_percent == "0.0"
    assert shown.peak_memory_usage_mb == "300"


def test_display_resource_metrics_full_utilization():
    shown = display_resource_metrics(make_metrics(max_memory_mb=256, peak_memory_usage_mb=256))
    assert shown.memory_utilization_percent == "100.0"
    assert shown.is_active is True


def test_display_task_distribution_keeps_locality():
    locality = DataLocalitySummary(process_local=4, node_local=3, rack_local=2, any=1)
    dist = TaskDistribution("app-1", 7, 10, 8, 2, None, None, None, locality)
    shown = display_task_distribution(dist)
    assert shown.avg_duration_ms == "-"
    assert shown.data_locality_summary == locality
    assert shown.stage_id == 7


def test_display_task_distribution_formats_average():
    dist = TaskDistribution("app-1", 0, 1, 1, 0, 42.0, 42, 42)
    assert display_task_distribution(dist).avg_duration_ms == "42.0"