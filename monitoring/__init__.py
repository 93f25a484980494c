"""Monitoring module - Prometheus metrics for the backend registry."""

from monitoring.recorders import Metrics

__all__ = [
    "Metrics",
]
