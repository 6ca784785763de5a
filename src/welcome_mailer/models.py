"""Data models for the welcome mailer."""

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass, field
from typing import Dict, Optional, Any, Mapping, Tuple
from datetime import datetime, timezone
from enum import Enum


class ErrorCode(str, Enum):
    """Reason a submission was not turned into a sent email."""

    MISSING_FIELD = "missing_field"
    INVALID_EMAIL_FORMAT = "invalid_email_format"
    NAME_TOO_SHORT = "name_too_short"
    PROVIDER_SEND_FAILURE = "provider_send_failure"
    UNHANDLED_FAULT = "unhandled_fault"

    @property
    def is_client_error(self) -> bool:
        return self in (
            ErrorCode.MISSING_FIELD,
            ErrorCode.INVALID_EMAIL_FORMAT,
            ErrorCode.NAME_TOO_SHORT,
        )


@dataclass(frozen=True)
class SubmissionRequest:
    """Name/email pair as received from the browser form."""

    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "SubmissionRequest":
        """Build a request from the wire payload (``nome`` and ``email`` keys).

        Values that are absent or not strings are kept as ``None``.
        """
        if not isinstance(payload, MappingABC):
            return cls()

        name = payload.get("nome")
        email = payload.get("email")
        return cls(
            name=name if isinstance(name, str) else None,
            email=email if isinstance(email, str) else None,
        )


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a submission."""

    name: Optional[str] = None
    email: Optional[str] = None
    error: Optional[ErrorCode] = None

    @classmethod
    def ok(cls, name: str, email: str) -> "ValidationResult":
        return cls(name=name, email=email)

    @classmethod
    def invalid(cls, error: ErrorCode) -> "ValidationResult":
        return cls(error=error)

    @property
    def is_valid(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class EmailTemplate:
    """Static email template with a single placeholder token."""

    subject: str
    text_body: str
    html_body: str
    placeholder: str = "{{nome}}"
    name: str = "welcome"
    description: Optional[str] = None

    def __post_init__(self):
        if not self.placeholder:
            raise ValueError("placeholder must be a non-empty token")


@dataclass(frozen=True)
class RenderedMessage:
    """Template after placeholder substitution."""

    subject: str
    text_body: str
    html_body: str


@dataclass
class EmailMessage:
    """Represents an email message handed to a provider."""

    recipient: str
    subject: str
    html_body: Optional[str] = None
    text_body: Optional[str] = None
    from_email: Optional[str] = None
    reply_to: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not self.html_body and not self.text_body:
            raise ValueError("Either html_body or text_body must be provided")

    @classmethod
    def from_rendered(
        cls, recipient: str, rendered: RenderedMessage, **kwargs: Any
    ) -> "EmailMessage":
        return cls(
            recipient=recipient,
            subject=rendered.subject,
            html_body=rendered.html_body,
            text_body=rendered.text_body,
            **kwargs,
        )


class SendStatus(str, Enum):
    """Status of an email send operation."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class SendResult:
    """Result of sending an email."""

    recipient: str
    status: SendStatus
    message_id: Optional[str] = None
    error_reason: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    correlation_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == SendStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "recipient": self.recipient,
            "status": self.status.value,
            "message_id": self.message_id,
            "error_reason": self.error_reason,
            "timestamp": self.timestamp.isoformat(),
            "correlation_id": self.correlation_id,
        }


class DispatchStatus(str, Enum):
    """Terminal state of one welcome request."""

    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    FAILED = "failed"


_HTTP_STATUS = {
    DispatchStatus.CONFIRMED: 200,
    DispatchStatus.REJECTED: 400,
    DispatchStatus.FAILED: 500,
}


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of handling one welcome submission end to end."""

    status: DispatchStatus
    message: str
    email_id: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    correlation_id: Optional[str] = None

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self.status]

    def to_response(self) -> Tuple[Dict[str, Any], int]:
        """Convert to the JSON body and HTTP status returned to the browser."""
        body: Dict[str, Any] = {
            "sucesso": self.status == DispatchStatus.CONFIRMED,
            "mensagem": self.message,
        }
        if self.status == DispatchStatus.CONFIRMED:
            body["emailId"] = self.email_id
        return body, self.http_status
