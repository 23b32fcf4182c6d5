"""Configuration, circuit breaker, query parsing, analytics records and dashboard helpers for a Spark history server."""

__version__ = "0.0.1"

__all__ = [
    "config",
    "circuit_breaker",
    "query",
    "analytics",
    "legacy_analytics",
    "dashboard",
    "display",
]