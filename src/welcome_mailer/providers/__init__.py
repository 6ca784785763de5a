"""Email provider implementations."""

from .base import BaseEmailProvider
from .mock import MockEmailProvider
from .resend import ResendProvider
from .sendgrid import SendGridProvider
from ..exceptions import ConfigurationError

__all__ = [
    "BaseEmailProvider",
    "MockEmailProvider",
    "ResendProvider",
    "SendGridProvider",
    "create_provider",
]


def create_provider(settings) -> BaseEmailProvider:
    """Create an email provider based on settings.

    Args:
        settings: Application settings

    Returns:
        Provider instance

    Raises:
        ConfigurationError: If provider creation fails
    """
    provider_type = settings.email_provider.lower()
    from_email = settings.from_email

    if provider_type == "mock":
        return MockEmailProvider(from_email=from_email or "noreply@localhost")

    if not from_email:
        raise ConfigurationError(
            "Sender address not provided. Set the FROM_EMAIL environment variable"
        )

    if provider_type == "resend":
        if not settings.resend_api_key:
            raise ConfigurationError(
                "Resend API key not provided. Set the RESEND_API_KEY environment variable"
            )
        return ResendProvider(
            from_email=from_email,
            api_key=settings.resend_api_key,
            timeout=settings.provider_timeout,
        )
    elif provider_type == "sendgrid":
        if not settings.sendgrid_api_key:
            raise ConfigurationError(
                "SendGrid API key not provided. Set the SENDGRID_API_KEY environment variable"
            )
        return SendGridProvider(
            from_email=from_email,
            api_key=settings.sendgrid_api_key,
            timeout=settings.provider_timeout,
        )
    else:
        raise ConfigurationError(f"Unknown provider type: {settings.email_provider}")
