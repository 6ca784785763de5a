"""Welcome email dispatch."""

import logging
import uuid
from typing import Any, Mapping, Optional, Union

from .models import (
    DispatchOutcome,
    DispatchStatus,
    EmailMessage,
    EmailTemplate,
    ErrorCode,
    RenderedMessage,
    SubmissionRequest,
)
from .template import render_template
from .validators import error_message, validate_submission
from .providers.base import BaseEmailProvider

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Boas-vindas enviadas para {name}! Verifique seu email."


class WelcomeSender:
    """Validates a submission, renders the welcome template and sends it."""

    def __init__(
        self,
        provider: BaseEmailProvider,
        template: EmailTemplate,
        escape_html: bool = True,
    ):
        """Initialize the welcome sender.

        Args:
            provider: Email provider instance
            template: Template loaded once at startup and shared by all requests
            escape_html: Escape the name inside the HTML body
        """
        self.provider = provider
        self.template = template
        self.escape_html = escape_html

    def preview(self, name: str) -> RenderedMessage:
        """Render the template for ``name`` without sending anything."""
        return render_template(self.template, name.strip(), escape_html=self.escape_html)

    def dispatch(
        self, submission: Union[SubmissionRequest, Mapping[str, Any], None]
    ) -> DispatchOutcome:
        """Handle one welcome submission.

        Never raises: rejected input, provider failures and unexpected
        errors are all reported through the returned outcome.

        Args:
            submission: Parsed request or raw ``{nome, email}`` payload

        Returns:
            DispatchOutcome ready to be mapped to an HTTP response
        """
        correlation_id = str(uuid.uuid4())

        try:
            if not isinstance(submission, SubmissionRequest):
                submission = SubmissionRequest.from_payload(submission)

            validation = validate_submission(submission)
            if not validation.is_valid:
                logger.warning(
                    f"Rejected submission ({validation.error.value}) "
                    f"(correlation_id: {correlation_id})"
                )
                return self._failure(validation.error, correlation_id)

            logger.info(
                f"Sending welcome to {validation.name} ({validation.email}) "
                f"(correlation_id: {correlation_id})"
            )

            rendered = render_template(
                self.template, validation.name, escape_html=self.escape_html
            )
            message = EmailMessage.from_rendered(
                validation.email, rendered, tags={"category": self.template.name}
            )

            result = self.provider.send(message, correlation_id=correlation_id)
            if not result.succeeded:
                logger.error(
                    f"Provider {self.provider.name} failed to send to {validation.email}: "
                    f"{result.error_reason} (correlation_id: {correlation_id})",
                    extra={"send_result": result.to_dict()},
                )
                return self._failure(ErrorCode.PROVIDER_SEND_FAILURE, correlation_id)

            logger.info(
                f"Welcome email sent, id: {result.message_id} (correlation_id: {correlation_id})"
            )
            return DispatchOutcome(
                status=DispatchStatus.CONFIRMED,
                message=SUCCESS_MESSAGE.format(name=validation.name),
                email_id=result.message_id,
                correlation_id=correlation_id,
            )

        except Exception:
            logger.exception(f"Unexpected error sending welcome (correlation_id: {correlation_id})")
            return self._failure(ErrorCode.UNHANDLED_FAULT, correlation_id)

    @staticmethod
    def _failure(code: ErrorCode, correlation_id: str) -> DispatchOutcome:
        return DispatchOutcome(
            status=DispatchStatus.REJECTED if code.is_client_error else DispatchStatus.FAILED,
            message=error_message(code),
            error_code=code,
            correlation_id=correlation_id,
        )
