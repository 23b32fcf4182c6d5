"""Data shapes for the resource optimisation analytics API."""

from __future__ import annotations

import dataclasses
import enum
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

_UNSIGNED = re.compile(r"\+?[0-9]+")


@dataclass
class AnalyticsQuery:
    """Filters accepted by the analytics endpoints."""

    start_date: str | None = None
    end_date: str | None = None
    limit: int | None = None
    app_id: str | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> AnalyticsQuery:
        """Build the query from request parameters; raise ValueError on a bad limit."""
        raw_limit = params.get("limit")
        limit = None
        if raw_limit is not None:
            if not _UNSIGNED.fullmatch(raw_limit):
                raise ValueError(f"invalid limit: {raw_limit!r}")
            limit = int(raw_limit)
        return cls(
            start_date=params.get("startDate"),
            end_date=params.get("endDate"),
            limit=limit,
            app_id=params.get("appId"),
        )


class ResourceType(enum.Enum):
    """Kind of resource an application consumes."""

    MEMORY = "Memory"
    CPU = "Cpu"
    DISK = "Disk"
    NETWORK = "Network"


class EfficiencyCategory(enum.Enum):
    """How well an application's allocation matches its use."""

    OVER_PROVISIONED = "OverProvisioned"
    WELL_TUNED = "WellTuned"
    UNDER_PROVISIONED = "UnderProvisioned"

    def __str__(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    EfficiencyCategory.OVER_PROVISIONED: "Over-Provisioned",
    EfficiencyCategory.WELL_TUNED: "Well-Tuned",
    EfficiencyCategory.UNDER_PROVISIONED: "Under-Provisioned",
}


class RiskLevel(enum.Enum):
    """Risk of degrading performance by optimising."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class OptimizationType(enum.Enum):
    """Kind of cost optimisation."""

    REDUCE_EXECUTORS = "ReduceExecutors"
    REDUCE_MEMORY = "ReduceMemory"
    OPTIMIZE_PARTITIONING = "OptimizePartitioning"
    ENABLE_SPOT_INSTANCES = "EnableSpotInstances"
    SCHEDULE_OFF_PEAK = "ScheduleOffPeak"

    def __str__(self) -> str:
        return _OPTIMIZATION_LABELS[self]


_OPTIMIZATION_LABELS = {
    OptimizationType.REDUCE_EXECUTORS: "Reduce Executors",
    OptimizationType.REDUCE_MEMORY: "Reduce Memory",
    OptimizationType.OPTIMIZE_PARTITIONING: "Optimize Partitioning",
    OptimizationType.ENABLE_SPOT_INSTANCES: "Enable Spot Instances",
    OptimizationType.SCHEDULE_OFF_PEAK: "Schedule Off-Peak",
}


class DifficultyLevel(enum.Enum):
    """Effort needed to apply an optimisation."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    def __str__(self) -> str:
        return self.value


@dataclass
class ResourceHog:
    """An application among the top consumers of a resource."""

    app_id: str
    app_name: str
    resource_type: ResourceType
    consumption_value: float
    consumption_unit: str
    utilization_percentage: float
    efficiency_score: float
    efficiency_explanation: str
    cost_impact: float
    recommendation: str
    last_seen: str


@dataclass
class EfficiencyAnalysis:
    """Efficiency of an application's memory and CPU allocation."""

    app_id: str
    app_name: str
    efficiency_category: EfficiencyCategory
    memory_efficiency: float
    memory_efficiency_explanation: str
    cpu_efficiency: float
    cpu_efficiency_explanation: str
    recommended_memory_gb: float | None
    recommended_cpu_cores: float | None
    potential_cost_savings: float
    risk_level: RiskLevel
    optimization_actions: list[str] = field(default_factory=list)


@dataclass
class CapacityTrend:
    """Cluster usage on one day, for capacity planning."""

    date: str
    total_memory_gb_used: float
    total_cpu_cores_used: float
    peak_concurrent_applications: int
    average_resource_utilization: float
    cluster_capacity_percentage: float
    projected_growth_rate: float | None = None


@dataclass
class CostOptimization:
    """A cost saving opportunity for one application."""

    optimization_type: OptimizationType
    app_id: str
    app_name: str
    current_cost: float
    optimized_cost: float
    savings_percentage: float
    confidence_score: float
    implementation_difficulty: DifficultyLevel
    optimization_details: str
    formatted_savings: str


def to_json_dict(obj: Any) -> Any:
    """Convert analytics records into JSON-ready values; enums become their variant names."""
    if isinstance(obj, enum.Enum):
        return obj.value
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_json_dict(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, (list, tuple)):
        return [to_json_dict(item) for item in obj]
    if isinstance(obj, Mapping):
        return {key: to_json_dict(value) for key, value in obj.items()}
    return obj