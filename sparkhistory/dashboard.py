"""View models and fixed pages of the web dashboard."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Iterable, Sequence

from sparkhistory.analytics import (
    CostOptimization,
    EfficiencyAnalysis,
    EfficiencyCategory,
    ResourceHog,
)

_HIGH_CONFIDENCE = 80.0
_SITE_NAME = "Spark Platform"

_STYLE_RULES = (
    ("body", ("font-family: system-ui", "margin: 40px", "text-align: center")),
    (
        ".message",
        (
            "background: #f0f9ff",
            "border: 1px solid #0ea5e9",
            "padding: 20px",
            "border-radius: 8px",
        ),
    ),
)


def _render_page(
    title: str,
    heading: str,
    paragraphs: Sequence[str],
    redirect_to: str | None = None,
) -> str:
    """Build a small standalone HTML page with a single message box.

    ``paragraphs`` are inserted as given and may contain markup.
    """
    css = "\n".join(f"{selector} {{ {'; '.join(rules)}; }}" for selector, rules in _STYLE_RULES)
    head = [f"<title>{html.escape(title)} - {_SITE_NAME}</title>"]
    if redirect_to is not None:
        head.append(
            f'<meta http-equiv="refresh" content="0; url={html.escape(redirect_to, quote=True)}">'
        )
    head.append(f"<style>\n{css}\n</style>")
    body = "\n".join(f"<p>{text}</p>" for text in paragraphs)
    return "\n".join(
        [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            *head,
            "</head>",
            "<body>",
            '<div class="message">',
            f"<h2>{html.escape(heading)}</h2>",
            body,
            "</div>",
            "</body>",
            "</html>",
            "",
        ]
    )


@dataclass
class SimpleCrossAppSummary:
    """Cluster-wide totals shown on the overview page."""

    total_applications: int = 0
    active_applications: int = 0
    total_events: int = 0
    total_tasks_completed: int = 0
    total_tasks_failed: int = 0
    avg_task_duration_ms: str = "0"
    total_data_processed_gb: str = "0"
    peak_concurrent_executors: int = 0


@dataclass
class SimpleApplicationSummary:
    """One row of the active applications table."""

    id: str
    user: str
    duration: str
    cores: int
    memory: int
    status: str


@dataclass
class SummaryStats:
    """Headline figures of the optimisation page."""

    total_resource_hogs: int
    over_provisioned_apps: int
    under_provisioned_apps: int
    potential_monthly_savings: str
    apps_needing_optimization: int
    high_confidence_optimizations: int


def summarize_optimizations(
    resource_hogs: Iterable[ResourceHog],
    efficiency_analysis: Iterable[EfficiencyAnalysis],
    cost_optimizations: Iterable[CostOptimization],
) -> SummaryStats:
    """Compute the optimisation page's headline figures from the analytics results."""
    hogs = list(resource_hogs)
    analyses = list(efficiency_analysis)
    costs = list(cost_optimizations)

    total_savings = sum(
        (max(c.current_cost - c.optimized_cost, 0.0) for c in costs), 0.0
    )
    return SummaryStats(
        total_resource_hogs=len(hogs),
        over_provisioned_apps=sum(
            a.efficiency_category is EfficiencyCategory.OVER_PROVISIONED for a in analyses
        ),
        under_provisioned_apps=sum(
            a.efficiency_category is EfficiencyCategory.UNDER_PROVISIONED for a in analyses
        ),
        potential_monthly_savings=f"${total_savings:.2f}",
        apps_needing_optimization=len(costs),
        high_confidence_optimizations=sum(c.confidence_score > _HIGH_CONFIDENCE for c in costs),
    )


def resources_page() -> str:
    """HTML of the resources view, which redirects to the optimisation page."""
    return _render_page(
        "Resources",
        "Resources View Moved",
        [
            'The resources view has been integrated into the '
            '<a href="/optimize">Optimization Dashboard</a>.',
            "Redirecting automatically...",
        ],
        redirect_to="/optimize",
    )


def teams_page() -> str:
    """HTML of the teams view."""
    return _render_page(
        "Teams",
        "Teams View",
        [
            "Teams functionality coming soon...",
            '<a href="/">\u2190 Back to Overview</a>',
        ],
    )