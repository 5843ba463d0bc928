"""
Event handlers for domain events.

These handlers process license lifecycle events for side effects:
the persistent audit trail and business metrics.
"""

import logging

from asgiref.sync import sync_to_async

from core.domain.events import DomainEvent, EventBus, EventHandler
from core.metrics import (
    licenses_created_total,
    licenses_extended_total,
    licenses_revoked_total,
)
from licenses.domain.events import LicenseCreated, LicenseExtended, LicenseRevoked

logger = logging.getLogger(__name__)

LOG_KINDS = {
    LicenseCreated: "created",
    LicenseExtended: "extended",
    LicenseRevoked: "revoked",
}


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Appends one LicenseLog row per lifecycle event. Rows are keyed by
    event id, so a redelivered event is not recorded twice.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        kind = LOG_KINDS.get(type(event))
        if kind is None:
            logger.debug("No audit kind for %s", event.event_type)
            return

        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
        await self._write(event, kind)

    @sync_to_async
    def _write(self, event: DomainEvent, kind: str) -> None:
        from licenses.infrastructure.models import LicenseLog

        LicenseLog.objects.get_or_create(
            event_id=event.event_id,
            defaults={
                "license_id": event.aggregate_id,
                "kind": kind,
                "data": event.payload(),
                "timestamp": event.occurred_at,
            },
        )


class LicenseMetricsEventHandler(EventHandler):
    """Event handler that counts lifecycle events in Prometheus."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for metrics.

        Args:
            event: Domain event
        """
        if isinstance(event, LicenseCreated):
            licenses_created_total.labels(
                has_expiration=str(event.expiration_date is not None).lower()
            ).inc()
        elif isinstance(event, LicenseExtended):
            licenses_extended_total.inc()
        elif isinstance(event, LicenseRevoked):
            licenses_revoked_total.inc()


def register_event_handlers(bus: EventBus = None):
    """Register all event handlers with the event bus."""
    if bus is None:
        from core.infrastructure.events import event_bus as bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = LicenseMetricsEventHandler()

    for event_type in LOG_KINDS:
        bus.subscribe(event_type, audit_handler)
        bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
