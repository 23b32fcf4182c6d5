import dataclasses
import json

import pytest

from sparkhistory.legacy_analytics import (
    CpuUtilizationAnalysis,
    CrossAppSummary,
    DataLocalitySummary,
    DateRange,
    ExecutorUtilization,
    GcTimeTrend,
    MemoryUsageAnalysis,
    PerformanceTrend,
    ResourceUtilizationMetrics,
    TaskDistribution,
    legacy_to_json_dict,
)


def _metrics(**overrides):
    values = dict(
        executor_id="executor-1",
        host="worker-1.example.com",
        app_id="app-0001-spark",
        app_name="Test Application",
        total_tasks=10,
        completed_tasks=9,
        failed_tasks=1,
        total_duration_ms=5000,
        avg_task_duration_ms=500.0,
        cpu_time_ms=4000,
        gc_time_ms=100,
        peak_memory_usage_mb=None,
        max_memory_mb=2048,
        memory_utilization_percent=None,
        input_bytes=1048576,
        output_bytes=2097152,
        shuffle_read_bytes=0,
        shuffle_write_bytes=0,
        disk_spill_bytes=0,
        memory_spill_bytes=0,
        data_locality_process_local=5,
        data_locality_node_local=3,
        data_locality_rack_local=1,
        data_locality_any=1,
        start_time="2023-11-20T12:00:00Z",
        end_time=None,
        is_active=True,
    )
    values.update(overrides)
    return ResourceUtilizationMetrics(**values)


def test_cross_app_summary_nests_date_range():
    summary = CrossAppSummary(
        total_applications=3,
        active_applications=1,
        total_events=100,
        total_tasks_completed=80,
        total_tasks_failed=2,
        avg_task_duration_ms=None,
        total_data_processed_gb=1.5,
        peak_concurrent_executors=4,
        date_range=DateRange(start_date="2023-01-01", end_date="2024-01-01"),
    )
    result = legacy_to_json_dict(summary)
    assert result["date_range"] == {"start_date": "2023-01-01", "end_date": "2024-01-01"}
    assert result["avg_task_duration_ms"] is None
    assert result["total_applications"] == 3


def test_task_distribution_default_locality_is_zero():
    dist = TaskDistribution(
        app_id="app-1",
        stage_id=2,
        total_tasks=4,
        completed_tasks=4,
        failed_tasks=0,
        avg_duration_ms=None,
        min_duration_ms=None,
        max_duration_ms=None,
    )
    result = legacy_to_json_dict(dist)
    assert result["data_locality_summary"] == {
        "process_local": 0,
        "node_local": 0,
        "rack_local": 0,
        "any": 0,
    }


def test_default_locality_is_not_shared():
    first = TaskDistribution("a", 0, 0, 0, 0, None, None, None)
    second = TaskDistribution("b", 0, 0, 0, 0, None, None, None)
    first.data_locality_summary.any = 7
    assert second.data_locality_summary.any == 0


def test_executor_utilization_apps_list_is_copied():
    util = ExecutorUtilization(
        executor_id="executor-2",
        host="worker-2.example.com",
        total_tasks=5,
        total_duration_ms=100,
        avg_cpu_utilization=None,
        peak_memory_usage_mb=None,
        data_locality_hits=2,
        apps_served=["app-a", "app-b"],
    )
    result = legacy_to_json_dict(util)
    assert result["apps_served"] == ["app-a", "app-b"]
    result["apps_served"].append("app-c")
    assert util.apps_served == ["app-a", "app-b"]


def test_resource_metrics_keys_follow_field_order():
    metrics = _metrics()
    result = legacy_to_json_dict(metrics)
    assert list(result) == [f.name for f in dataclasses.fields(ResourceUtilizationMetrics)]
    assert result["is_active"] is True
    assert result["end_time"] is None


def test_list_of_records_serialises_to_json_and_back():
    trends = [
        PerformanceTrend("2023-11-20", "app-1", 12.5, 10, 1, None, 2048.0),
        PerformanceTrend("2023-11-21", "app-1", None, 0, 0, None, None),
    ]
    encoded = json.dumps(legacy_to_json_dict(trends))
    decoded = json.loads(encoded)
    assert [PerformanceTrend(**item) for item in decoded] == trends


@pytest.mark.parametrize(
    "record",
    [
        GcTimeTrend("2023-11-20", "app-1", 300, 30.0, 10, 30.0),
        CpuUtilizationAnalysis("2023-11-20", "app-1", "executor-1", 10, 1000, 800, 1000, 200, 80.0, "High"),
        MemoryUsageAnalysis(
            "2023-11-20", "app-1", "executor-1", 4096, 2048, None, 50.0, 0, 0, 10, "Good", None
        ),
        DataLocalitySummary(process_local=1, node_local=2, rack_local=3, any=4),
    ],
)
def test_flat_records_round_trip(record):
    result = legacy_to_json_dict(record)
    assert type(record)(**result) == record


def test_plain_values_pass_through():
    assert legacy_to_json_dict({"key": [1, None, "x"]}) == {"key": [1, None, "x"]}


def test_missing_field_raises():
    with pytest.raises(TypeError):
        DateRange(start_date="2023-01-01")