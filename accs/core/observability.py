"""
Logfire observability configuration for the ACCS engine.

Provides tracing for scoring calls. Scoring works the same with or
without Logfire; spans are only emitted once setup_logfire() succeeds.

Usage:
    # At process startup (e.g., in the CLI)
    from accs.core.observability import setup_logfire
    setup_logfire()

    # In scoring code
    lf = get_logfire()
    with lf.span("compute_accs", content_item_id=content_item_id):
        ...

Environment Variables:
    LOGFIRE_TOKEN: Your Logfire write token (required to send data)
    LOGFIRE_PROJECT_NAME: Project name in Logfire dashboard
    LOGFIRE_ENVIRONMENT: Environment name (development, staging, production)
"""

import logging
from typing import Optional

import logfire

from .config import Config

logger = logging.getLogger(__name__)

_logfire_configured = False


def setup_logfire(
    project_name: Optional[str] = None,
    environment: Optional[str] = None,
    service_name: str = "accs"
) -> bool:
    """
    Configure Logfire for observability.

    Args:
        project_name: Logfire project name (or LOGFIRE_PROJECT_NAME env var)
        environment: Environment name (or LOGFIRE_ENVIRONMENT env var)
        service_name: Service name for tracing

    Returns:
        True if Logfire was configured, False if skipped (no token)
    """
    global _logfire_configured

    if _logfire_configured:
        logger.debug("Logfire already configured")
        return True

    token = Config.LOGFIRE_TOKEN
    if not token:
        logger.info("LOGFIRE_TOKEN not set, skipping Logfire configuration")
        return False

    project = project_name or Config.LOGFIRE_PROJECT_NAME
    env = environment or Config.LOGFIRE_ENVIRONMENT

    try:
        logfire.configure(
            token=token,
            project_name=project,
            service_name=service_name,
            environment=env,
            send_to_logfire=True,
        )

        # Instrument Pydantic for validation tracing
        logfire.instrument_pydantic()

        _logfire_configured = True
        logger.info(f"Logfire configured: project={project}, environment={env}")
        return True

    except Exception as e:
        logger.error(f"Failed to configure Logfire: {e}")
        return False


def get_logfire():
    """
    Get the logfire module if configured, otherwise a no-op handle.

    Usage:
        lf = get_logfire()
        with lf.span("operation"):
            lf.info("message")
    """
    if _logfire_configured:
        return logfire

    return _LogfireNoOp()


class _LogfireNoOp:
    """No-op handle used until Logfire is configured."""

    def span(self, *args, **kwargs):
        return _NoOpContext()

    def __getattr__(self, name):
        return lambda *args, **kwargs: None


class _NoOpContext:
    """No-op context manager."""

    def __enter__(self):
        return self

    def __exit__(self, *args):
        pass
