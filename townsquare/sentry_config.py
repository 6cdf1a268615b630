"""
Sentry configuration for error tracking.

Captures unhandled exceptions with OAuth secrets scrubbed from the event.
"""
from urllib.parse import parse_qsl, urlencode

import sentry_sdk
import structlog
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from townsquare.config import settings
from townsquare.dependencies.auth import AUTH_COOKIE

logger = structlog.get_logger()

# Query parameters Twitter appends to the OAuth callback
SENSITIVE_QUERY_PARAMS = {"oauth_token", "oauth_verifier", "denied"}


def configure_sentry():
    """
    Initialize Sentry with FastAPI and SQLAlchemy integrations.
    
    Requires SENTRY_DSN environment variable to be set.
    """
    dsn = settings.SENTRY_DSN
    
    if not dsn:
        logger.info("sentry_disabled", reason="SENTRY_DSN not set")
        return False
    
    sentry_sdk.init(
        dsn=dsn,
        integrations=[
            FastApiIntegration(),
            SqlalchemyIntegration(),
        ],
        before_send=scrub_event,
        traces_sample_rate=0.1,
        environment=settings.ENVIRONMENT,
        release=settings.APP_VERSION,
    )
    
    logger.info("sentry_enabled", environment=settings.ENVIRONMENT)
    return True


def scrub_event(event, hint):
    """
    Strip OAuth callback parameters and the session token from an event.
    """
    request = event.get("request")
    if not request:
        return event

    query_string = request.get("query_string")
    if isinstance(query_string, str) and query_string:
        kept = [
            (key, value)
            for key, value in parse_qsl(query_string, keep_blank_values=True)
            if key not in SENSITIVE_QUERY_PARAMS
        ]
        request["query_string"] = urlencode(kept)

    cookies = request.get("cookies")
    if isinstance(cookies, dict):
        cookies.pop(AUTH_COOKIE, None)

    return event
