"""Base email provider interface."""

from abc import ABC, abstractmethod
import logging

from ..models import EmailMessage, SendResult

logger = logging.getLogger(__name__)


class BaseEmailProvider(ABC):
    """Abstract base class for email providers."""

    name = "base"

    def __init__(self, from_email: str):
        """Initialize the provider.

        Args:
            from_email: Default sender email address
        """
        self.from_email = from_email

    @abstractmethod
    def send(self, message: EmailMessage, correlation_id: str = None) -> SendResult:
        """Send an email message.

        Implementations report provider failures through the returned
        SendResult; they may still raise on programming errors.

        Args:
            message: Email message to send
            correlation_id: Optional correlation ID for tracking

        Returns:
            SendResult with status and details
        """
        pass

    @abstractmethod
    def validate_connection(self) -> bool:
        """Validate that the provider is properly configured and reachable.

        Returns:
            True if connection is valid
        """
        pass

    def _get_from_email(self, message: EmailMessage) -> str:
        return message.from_email or self.from_email
