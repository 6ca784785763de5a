"""Custom exceptions for the welcome mailer."""


class WelcomeMailerError(Exception):
    """Base exception for all welcome mailer errors."""

    pass


class ConfigurationError(WelcomeMailerError):
    """Raised when configuration is invalid or missing."""

    pass


class TemplateError(WelcomeMailerError):
    """Raised when there's an error with template loading or rendering."""

    pass


class ProviderError(WelcomeMailerError):
    """Raised when there's an error with the email provider."""

    pass


class AuthenticationError(ProviderError):
    """Raised when the provider rejects the API key."""

    pass


class DeliveryError(ProviderError):
    """Raised when the provider refuses or fails to accept the message."""

    pass
