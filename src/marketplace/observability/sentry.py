"""Sentry error reporting, bridged from structlog.

``init_sentry`` is a no-op without a DSN, so it is safe to call at every
startup.  Errors reach Sentry through the structlog processor returned by
``get_sentry_processor``; the SDK's own logging capture is switched off.
"""

from __future__ import annotations

import logging

import sentry_sdk
import structlog
from sentry_sdk.integrations.logging import LoggingIntegration
from structlog_sentry import SentryProcessor


def init_sentry(dsn: str, environment: str = "development") -> bool:
    """Initialize the Sentry SDK.

    Args:
        dsn: Sentry DSN.  Empty string disables Sentry.
        environment: Environment tag attached to every event.

    Returns:
        True if the SDK was initialized.
    """
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=0.1,
        send_default_pii=False,
        integrations=[LoggingIntegration(event_level=None, level=None)],
    )
    return True


def get_sentry_processor() -> structlog.types.Processor:
    """Processor forwarding ERROR-level events to Sentry; place it before the renderer."""
    return SentryProcessor(event_level=logging.ERROR)
