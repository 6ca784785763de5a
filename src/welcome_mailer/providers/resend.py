"""Resend email provider."""

import logging
from typing import Any, Dict, Optional

import requests

from ..models import EmailMessage, SendResult, SendStatus
from ..exceptions import AuthenticationError, DeliveryError
from .base import BaseEmailProvider

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com"


class ResendProvider(BaseEmailProvider):
    """Sends email through the Resend HTTP API."""

    name = "resend"

    def __init__(
        self,
        from_email: str,
        api_key: str,
        timeout: float = 10.0,
        base_url: str = RESEND_API_URL,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Resend provider.

        Args:
            from_email: Sender address, e.g. ``Equipe <noreply@example.com>``
            api_key: Resend API key
            timeout: Seconds to wait for the API before giving up
            base_url: API root, overridable for tests
            session: Optional preconfigured requests session
        """
        super().__init__(from_email)
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )

    def validate_connection(self) -> bool:
        """Validate the API key against the domains endpoint.

        Returns:
            True if the key is accepted
        """
        try:
            response = self.session.get(f"{self.base_url}/domains", timeout=self.timeout)
            return response.status_code == 200
        except requests.exceptions.RequestException as e:
            logger.error(f"Resend connection validation failed: {e}")
            return False

    def send(self, message: EmailMessage, correlation_id: str = None) -> SendResult:
        """Send email via Resend.

        Args:
            message: Email message to send
            correlation_id: Used as the idempotency key of the request

        Returns:
            SendResult with status and details
        """
        result = SendResult(
            recipient=message.recipient, status=SendStatus.FAILED, correlation_id=correlation_id
        )

        try:
            result.message_id = self._post_email(self._build_payload(message), correlation_id)
            result.status = SendStatus.SUCCESS
            logger.info(
                f"Email sent to {message.recipient} via Resend "
                f"(id: {result.message_id}, correlation_id: {correlation_id})"
            )
        except AuthenticationError as e:
            result.error_reason = f"Authentication failed: {e}"
            logger.error(f"Resend rejected the API key: {e}")
        except DeliveryError as e:
            result.error_reason = str(e)
            logger.error(f"Delivery error for {message.recipient}: {e}")
        except requests.exceptions.RequestException as e:
            result.error_reason = f"Request to Resend failed: {e}"
            logger.error(f"Error sending email to {message.recipient}: {e}")

        return result

    def _build_payload(self, message: EmailMessage) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "from": self._get_from_email(message),
            "to": [message.recipient],
            "subject": message.subject,
        }
        if message.text_body:
            payload["text"] = message.text_body
        if message.html_body:
            payload["html"] = message.html_body
        if message.reply_to:
            payload["reply_to"] = message.reply_to
        if message.tags:
            payload["tags"] = [{"name": k, "value": v} for k, v in message.tags.items()]
        return payload

    def _post_email(self, payload: Dict[str, Any], correlation_id: Optional[str]) -> str:
        """POST one message and return the id Resend assigned to it.

        Raises:
            AuthenticationError: If the API key is rejected
            DeliveryError: If Resend does not accept the message
        """
        headers = {"Idempotency-Key": correlation_id} if correlation_id else None
        response = self.session.post(
            f"{self.base_url}/emails", json=payload, headers=headers, timeout=self.timeout
        )

        if response.status_code in (401, 403):
            raise AuthenticationError(self._error_detail(response))
        if not 200 <= response.status_code < 300:
            raise DeliveryError(
                f"Resend returned status {response.status_code}: {self._error_detail(response)}"
            )

        try:
            message_id = response.json().get("id")
        except ValueError as e:
            raise DeliveryError("Resend returned a non-JSON success response") from e
        if not message_id:
            raise DeliveryError("Resend response did not include a message id")
        return message_id

    @staticmethod
    def _error_detail(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            return str(body.get("message") or body)
        return str(body)
