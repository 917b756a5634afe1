"""Domain probe for integration test cleanup operations.

Records cleanup of IAM tables as domain events rather than raw logger calls.
"""

from typing import Protocol

import structlog


class TestCleanupProbe(Protocol):
    """Observability probe for test cleanup operations."""

    def table_cleaned(self, table_name: str, rows_deleted: int | None = None) -> None:
        """Record table cleanup."""
        ...

    def cleanup_failed(self, error: str) -> None:
        """Record cleanup failure."""
        ...


class DefaultTestCleanupProbe:
    """Default test cleanup probe using structlog."""

    def __init__(self) -> None:
        self._logger = structlog.get_logger()

    def table_cleaned(self, table_name: str, rows_deleted: int | None = None) -> None:
        self._logger.debug(
            "test_table_cleaned",
            table_name=table_name,
            rows_deleted=rows_deleted,
        )

    def cleanup_failed(self, error: str) -> None:
        self._logger.error("test_cleanup_failed", error=error)
