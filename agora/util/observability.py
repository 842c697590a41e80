"""Logfire setup and instrumentation.

Agora code logs and traces through logfire directly:

    logfire.info("Vote stored", votable_id=str(votable_id), value=int(value))

    with logfire.span("pagination.list_subjects", sort_mode=sort_mode.value):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from agora.config import Settings

SERVICE_NAME = "agora-api"
SERVICE_VERSION = "0.1.0"

# Never exported, whatever attribute they appear under
SCRUBBED_PATTERNS = ["auth_token", "jwt_secret"]

# Probed constantly by the orchestrator
UNTRACED_URLS = "/health"


def _should_send(settings: Settings) -> bool:
    # An explicit setting wins over token presence
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure the process-wide logfire instance.

    Output always goes to the console. It is also exported to Logfire
    when a token is configured, or when ``OBSERVABILITY__SEND_TO_LOGFIRE``
    forces it.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)
    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        token=settings.observability.logfire_token,
        send_to_logfire=send_to_logfire,
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUBBED_PATTERNS),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request except health probes."""
    logfire.instrument_fastapi(
        app, capture_headers=False, excluded_urls=UNTRACED_URLS
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.debug("SQLAlchemy instrumented", url=engine.url.render_as_string())
