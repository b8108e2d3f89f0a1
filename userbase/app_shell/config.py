import logging

from userbase.api.deps import Settings
from userbase.domain.errors import ConfigurationError
from userbase.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_startup(settings: Settings, rules: Rules) -> None:
    """
    Validate operational requirements before startup.
    Raises ConfigurationError; the process must not start with a bad configuration.
    """
    if not settings.jwt_secret:
        raise ConfigurationError("JWT_SECRET", "signing secret must be set and non-empty")

    if not 0 < settings.port < 65536:
        raise ConfigurationError("APP_PORT", f"{settings.port} is not a valid port")

    logger.info(
        "Configuration validated (hashing=%s/%d, token ttl=%ds)",
        rules.auth.password_hashing.scheme,
        rules.auth.password_hashing.rounds,
        rules.auth.tokens.ttl_seconds,
    )
