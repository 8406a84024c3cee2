"""Observability configuration using Logfire.

Domain services emit spans and structured events directly:

    import logfire

    logfire.info("Invite created", invite_id=str(invite.id))

    with logfire.span("invite_service.create_invite", user_id=str(user.id)):
        ...
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from agora.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Events are sent to Logfire cloud when explicitly enabled with
    ``OBSERVABILITY__SEND_TO_LOGFIRE``, or otherwise when a token is set.
    Without either they only reach the console.

    Args:
        settings: Application settings
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    else:
        send_to_logfire = bool(settings.observability.logfire_token)

    config_kwargs = {
        "service_name": "agora",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Traces every SQL query with its duration and transaction boundaries.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,
    )
    logfire.info("SQLAlchemy instrumented")
