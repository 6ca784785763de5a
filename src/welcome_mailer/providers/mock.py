"""Mock email provider for local development and tests."""

from collections import deque
from typing import Deque, Optional

from ..models import EmailMessage, SendResult, SendStatus
from .base import BaseEmailProvider


class MockEmailProvider(BaseEmailProvider):
    """Email provider that records messages instead of sending them.

    Only the most recent ``history_size`` messages are kept so a dev server
    running with ``EMAIL_PROVIDER=mock`` does not grow without bound.
    """

    name = "mock"

    def __init__(
        self,
        from_email: str,
        message_id: Optional[str] = None,
        fail_with: Optional[str] = None,
        history_size: int = 100,
    ):
        """Initialize the mock provider.

        Args:
            from_email: Sender email address
            message_id: Fixed id to report for every send
            fail_with: If set, every send fails with this reason
            history_size: Number of sent messages kept in ``sent``
        """
        super().__init__(from_email)
        self.message_id = message_id
        self.fail_with = fail_with
        self.sent: Deque[EmailMessage] = deque(maxlen=history_size)

    def send(self, message: EmailMessage, correlation_id: str = None) -> SendResult:
        """Pretend to send an email."""
        if self.fail_with:
            return SendResult(
                recipient=message.recipient,
                status=SendStatus.FAILED,
                error_reason=self.fail_with,
                correlation_id=correlation_id,
            )

        self.sent.append(message)
        return SendResult(
            recipient=message.recipient,
            status=SendStatus.SUCCESS,
            message_id=self.message_id or f"mock-{correlation_id or 'test'}",
            correlation_id=correlation_id,
        )

    def validate_connection(self) -> bool:
        return True
