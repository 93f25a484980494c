"""Metrics recorder - stateless functions to record metrics."""

from monitoring.definitions import (
    BACKEND_REGISTRATIONS,
    REVERSE_INDEX_RECORDS,
)


class Metrics:
    """
    Stateless metrics recorder.

    Usage:
        from monitoring import Metrics

        Metrics.registered(alias=False)
        Metrics.reverse_recorded("memory")
    """

    @staticmethod
    def registered(alias: bool = False) -> None:
        """Record a descriptor appended to a registry."""
        BACKEND_REGISTRATIONS.labels(kind="alias" if alias else "primary").inc()

    @staticmethod
    def reverse_recorded(backend: str) -> None:
        """Record an instance -> backend mapping."""
        REVERSE_INDEX_RECORDS.labels(backend=backend).inc()
