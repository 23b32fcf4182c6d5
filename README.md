# sparkhistory

Building blocks for a read-only Spark history server. The package covers
configuration loading, a circuit breaker for calls to external storage,
request-parameter parsing, the record types of the resource-optimisation
analytics, and helpers that prepare figures and rows for dashboard pages.

It has no runtime dependencies beyond the standard library and needs Python 3.11
or later.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Modules

### `sparkhistory.config`

The dataclasses `Settings`, `ServerConfig`, `HistoryConfig`, `HdfsConfig`,
`KerberosConfig` and `S3Config`. `Settings()` with no arguments holds the
defaults: the server listens on `0.0.0.0:18080`, event logs are read from
`./test-data/spark-events`, and the database directory is `./data`.

- `load_settings(config_path)` reads a TOML file. If the file does not exist,
  it logs a warning and returns the defaults.
- `settings_from_dict(data)` builds `Settings` from a parsed mapping. The
  `[server]` and `[history]` tables and their required fields must be present.
  A missing field, a field of the wrong type, a negative integer or a port above
  65535 raises `ValueError`.

### `sparkhistory.circuit_breaker`

`CircuitBreaker(name, config=None)` guards calls to coroutines.
`await breaker.call(func)` awaits `func()`.

- After `failure_threshold` failures within the `window`, the circuit opens.
- While the circuit is open, calls are refused with `CircuitOpenError`.
- Once `timeout` seconds have passed since the last failure, the next call moves
  the circuit to half-open.
- After `success_threshold` successes in the half-open state, the circuit closes
  again.

If the wrapped call raises, the breaker raises `CallFailedError`, with the
original exception in its `error` attribute. Both error classes derive from
`CircuitBreakerError`.

`CircuitBreakerConfig` holds `failure_threshold` (default 5),
`success_threshold` (3), `timeout` (60 s) and `window` (300 s). The properties
`state` (a `CircuitState`), `failure_count` and `success_count` report the
current condition. `force_open()` and `force_close()` set the state directly.

### `sparkhistory.query`

- `parse_date_param(value)` reads epoch milliseconds, an RFC 3339 timestamp or a
  `YYYY-MM-DD` date and returns an aware UTC `datetime`. It returns `None` when
  the value is absent or matches no format.
- `parse_status_filter(value)` reads a comma-separated list such as
  `running,COMPLETED` into `ApplicationStatus` members. It is case-insensitive
  and skips unknown entries.
- `ApplicationListQuery.from_params(params)` reads the `status`, `minDate`,
  `maxDate`, `minEndDate`, `maxEndDate` and `limit` parameters. A `limit` that
  is not an unsigned integer raises `ValueError`.
- `health_payload(now=None)` and `version_payload()` return the bodies of the
  health and version responses.

### `sparkhistory.analytics`

- `AnalyticsQuery.from_params(params)` reads `startDate`, `endDate`, `limit`
  and `appId`.
- The records are `ResourceHog`, `EfficiencyAnalysis`, `CapacityTrend` and
  `CostOptimization`.
- The enums are `ResourceType`, `EfficiencyCategory`, `RiskLevel`,
  `OptimizationType` and `DifficultyLevel`. For `EfficiencyCategory`,
  `OptimizationType` and `DifficultyLevel`, `str()` gives a human label such as
  `Over-Provisioned` or `Schedule Off-Peak`.
- `to_json_dict(obj)` turns records, lists and mappings into JSON-ready values.
  Enums become their variant names, such as `"OverProvisioned"`.

### `sparkhistory.legacy_analytics`

The earlier record types:

- `PerformanceTrend`, `GcTimeTrend`, `CpuUtilizationAnalysis` and
  `MemoryUsageAnalysis`
- `CrossAppSummary` with its `DateRange`
- `TaskDistribution` with its `DataLocalitySummary`
- `ExecutorUtilization` and `ResourceUtilizationMetrics`

`legacy_to_json_dict(obj)` serialises them.

### `sparkhistory.dashboard`

- The view models are `SimpleCrossAppSummary`, `SimpleApplicationSummary` and
  `SummaryStats`.
- `summarize_optimizations(resource_hogs, efficiency_analysis, cost_optimizations)`
  counts resource hogs and over- and under-provisioned applications. It adds up
  the positive savings and formats the total as `$x.xx`. It also counts cost
  optimisations with a confidence score above 80.
- `resources_page()` returns a static HTML page that redirects to `/optimize`.
- `teams_page()` returns a static placeholder page.

### `sparkhistory.display`

- `format_duration(duration_ms)` gives results such as `45min`, `2h` or
  `1h 30min`.
- `format_time_ago(end_time, now)` gives results such as `5min ago`, `3h ago`
  or `2d ago`.
- `create_resource_summary(metrics)` aggregates `ResourceUtilizationMetrics`
  into a `ResourceSummary`.
- `display_performance_trend`, `display_resource_metrics` and
  `display_task_distribution` format records for display. Byte figures are
  converted to MiB, and a missing average is shown as `-`.

## Example

```python
import asyncio

from sparkhistory.circuit_breaker import CircuitBreaker, CircuitBreakerConfig
from sparkhistory.config import load_settings
from sparkhistory.query import parse_date_param

settings = load_settings("config.toml")  # defaults if the file is absent
print(settings.server.port)

print(parse_date_param("2023-11-20"))  # 2023-11-20 00:00:00+00:00

breaker = CircuitBreaker("storage", CircuitBreakerConfig(failure_threshold=3))

async def fetch():
    return 42

print(asyncio.run(breaker.call(fetch)))  # 42
```

## What this package does not do

This package is a library only. It does not provide the following:

- an HTTP server, routes or a command to start one
- reading or parsing of event logs from local disk, HDFS or S3
- storage or a database
- the queries that would compute the analytics records from events
- HTML templates for the cluster overview and optimisation pages

The config classes for HDFS and S3 only describe connection settings. The
analytics records and dashboard helpers expect data that you supply.

## Running the tests

```
pytest
```