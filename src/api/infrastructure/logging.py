"""Structlog configuration for the application.

Every event emitted inside a tenant-bound unit of work is stamped with
``tenant_id`` and ``tenant_slug``, so one organization's activity can be
filtered out of the shared log stream. Output is colored console text in
development and JSON in production.
"""

import logging
import os
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from shared_kernel.tenancy import TenantManager, get_tenant_manager


def add_tenant_context(manager: TenantManager) -> Processor:
    """Build a processor stamping events with the current tenant.

    Events logged while no tenant is bound are left untouched. Keys already
    present on the event (e.g. from an ObservationContext) win.
    """

    def processor(
        _logger: WrappedLogger, _method_name: str, event_dict: EventDict
    ) -> EventDict:
        tenant = manager.get_current_tenant()
        if tenant is not None:
            event_dict.setdefault("tenant_id", tenant.id)
            event_dict.setdefault("tenant_slug", tenant.slug)
        return event_dict

    return processor


def use_colors() -> bool:
    """Return True for console output.

    FORCE_COLOR=1 enables colors in non-TTY environments (like Docker).
    """
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def configure_logging(
    debug: bool = False, tenant_manager: TenantManager | None = None
) -> None:
    """Configure structlog for the process.

    Args:
        debug: Whether to emit debug-level events (tenant binding, cache hits)
        tenant_manager: Source of the tenant stamped on events; defaults to
            the process-wide manager
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_tenant_context(tenant_manager or get_tenant_manager()),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors():
        processors: list[Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
