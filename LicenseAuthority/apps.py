"""
App configuration for License Authority.
"""
import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class LicenseAuthorityConfig(AppConfig):
    """App configuration for LicenseAuthority."""

    name = "LicenseAuthority"
    verbose_name = "License Authority"

    def ready(self):
        """Wire event subscribers and, when enabled, tracing."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

        if settings.OTEL_ENABLED:
            from core.instrumentation import setup_opentelemetry

            setup_opentelemetry()
            logger.info("Observability setup complete")
