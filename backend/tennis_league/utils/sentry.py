import logging
import os
from typing import Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

logger = logging.getLogger(__name__)

DEFAULT_RELEASE = "tennis-league-scoring@0.1.0"


def sample_rate(env_var: str, default: float = 0.0) -> float:
    """Read a Sentry sample rate, falling back to ``default`` when unusable.

    Rates above 1.0 are clamped so a typo like ``10`` means "everything"
    rather than a rejected configuration.
    """
    raw = (os.getenv(env_var) or "").strip()
    if not raw:
        return default

    try:
        rate = float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number; using %.2f", env_var, raw, default)
        return default

    if rate < 0:
        logger.warning("%s=%r is negative; using %.2f", env_var, raw, default)
        return default
    if rate > 1:
        logger.warning("%s=%r is above 1.0; clamping", env_var, raw)
        return 1.0
    return rate


def _env(name: str) -> Optional[str]:
    return (os.getenv(name) or "").strip() or None


def init_sentry() -> bool:
    """Report unhandled API errors to Sentry when ``SENTRY_DSN`` is set.

    Returns whether reporting is enabled; the self-test endpoint checks it.
    """
    dsn = _env("SENTRY_DSN")
    if dsn is None:
        logger.info("SENTRY_DSN not set; error reporting disabled")
        return False

    environment = _env("SENTRY_ENVIRONMENT")
    release = _env("SENTRY_RELEASE") or DEFAULT_RELEASE
    sentry_sdk.init(
        dsn=dsn,
        integrations=[FastApiIntegration()],
        environment=environment,
        release=release,
        traces_sample_rate=sample_rate("SENTRY_TRACES_SAMPLE_RATE"),
        profiles_sample_rate=sample_rate("SENTRY_PROFILES_SAMPLE_RATE"),
    )
    logger.info("Sentry enabled (release=%s, environment=%s)", release, environment)
    return True
