"""Welcome email service: form validation, template rendering and delivery."""

__version__ = "0.1.0"

from .exceptions import (
    WelcomeMailerError,
    ConfigurationError,
    TemplateError,
    ProviderError,
    AuthenticationError,
    DeliveryError,
)
from .models import (
    DispatchOutcome,
    DispatchStatus,
    EmailMessage,
    EmailTemplate,
    ErrorCode,
    RenderedMessage,
    SendResult,
    SendStatus,
    SubmissionRequest,
    ValidationResult,
)
from .template import TemplateLoader, render_template
from .validators import validate_submission
from .sender import WelcomeSender
from .providers import MockEmailProvider, ResendProvider, SendGridProvider, create_provider
from .config import Settings, load_settings
from .app import create_app

__all__ = [
    "WelcomeMailerError",
    "ConfigurationError",
    "TemplateError",
    "ProviderError",
    "AuthenticationError",
    "DeliveryError",
    "DispatchOutcome",
    "DispatchStatus",
    "EmailMessage",
    "EmailTemplate",
    "ErrorCode",
    "RenderedMessage",
    "SendResult",
    "SendStatus",
    "SubmissionRequest",
    "ValidationResult",
    "TemplateLoader",
    "render_template",
    "validate_submission",
    "WelcomeSender",
    "MockEmailProvider",
    "ResendProvider",
    "SendGridProvider",
    "create_provider",
    "Settings",
    "load_settings",
    "create_app",
]
