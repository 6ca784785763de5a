"""SendGrid email provider."""

import logging

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, Email, To, Content, CustomArg
from python_http_client.exceptions import HTTPError, UnauthorizedError

from ..models import EmailMessage, SendResult, SendStatus
from .base import BaseEmailProvider

logger = logging.getLogger(__name__)


class SendGridProvider(BaseEmailProvider):
    """SendGrid email provider."""

    name = "sendgrid"

    def __init__(self, from_email: str, api_key: str, timeout: float = 10.0):
        """Initialize SendGrid provider.

        Args:
            from_email: Sender email address
            api_key: SendGrid API key
            timeout: Seconds to wait for the API before giving up
        """
        super().__init__(from_email)
        self.api_key = api_key
        self.client = SendGridAPIClient(api_key)
        self.client.client.timeout = timeout

    def validate_connection(self) -> bool:
        try:
            response = self.client.client.scopes.get()
            return response.status_code == 200
        except (HTTPError, OSError) as e:
            logger.error(f"SendGrid connection validation failed: {e}")
            return False

    def send(self, message: EmailMessage, correlation_id: str = None) -> SendResult:
        """Send email via SendGrid in a single attempt.

        Args:
            message: Email message to send
            correlation_id: Optional correlation ID for tracking

        Returns:
            SendResult with status and details
        """
        result = SendResult(
            recipient=message.recipient, status=SendStatus.FAILED, correlation_id=correlation_id
        )

        mail = Mail(
            from_email=self._get_from_email(message),
            to_emails=To(message.recipient),
            subject=message.subject,
        )
        if message.text_body:
            mail.add_content(Content(mime_type="text/plain", content=message.text_body))
        if message.html_body:
            mail.add_content(Content(mime_type="text/html", content=message.html_body))
        if message.reply_to:
            mail.reply_to = Email(message.reply_to)
        if correlation_id:
            mail.custom_arg = CustomArg("correlation_id", correlation_id)

        try:
            response = self.client.send(mail)
        except UnauthorizedError as e:
            result.error_reason = "Authentication failed"
            logger.error(f"SendGrid rejected the API key: {e}")
            return result
        except (HTTPError, OSError) as e:
            result.error_reason = str(e)
            logger.error(f"Error sending email to {message.recipient}: {e}")
            return result

        if response.status_code not in (200, 201, 202):
            result.error_reason = f"SendGrid returned status {response.status_code}"
            logger.error(f"Delivery error for {message.recipient}: {result.error_reason}")
            return result

        message_id = response.headers.get("X-Message-Id")
        if not message_id:
            result.error_reason = "SendGrid response did not include a message id"
            logger.error(f"Delivery error for {message.recipient}: {result.error_reason}")
            return result

        result.status = SendStatus.SUCCESS
        result.message_id = message_id
        logger.info(
            f"Email sent to {message.recipient} via SendGrid (correlation_id: {correlation_id})"
        )
        return result
