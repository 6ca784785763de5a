"""Submission validation."""

import re
from typing import Any, Mapping, Union

from .models import ErrorCode, SubmissionRequest, ValidationResult

# local-part @ domain . suffix, no whitespace and no extra "@" in any part
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MIN_NAME_LENGTH = 2

ERROR_MESSAGES = {
    ErrorCode.MISSING_FIELD: "Nome e email são obrigatórios",
    ErrorCode.INVALID_EMAIL_FORMAT: "Formato de email inválido",
    ErrorCode.NAME_TOO_SHORT: "Nome deve ter pelo menos 2 caracteres",
    ErrorCode.PROVIDER_SEND_FAILURE: "Erro interno do servidor ao enviar email",
    ErrorCode.UNHANDLED_FAULT: "Erro interno do servidor ao enviar email",
}


def is_valid_email(email: str) -> bool:
    """Check an address against the ``local@domain.tld`` shape."""
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_submission(
    submission: Union[SubmissionRequest, Mapping[str, Any]]
) -> ValidationResult:
    """Validate a name/email submission.

    Rules run in order and the first failure wins:

    1. both fields present and non-empty after trimming
    2. email has the ``local@domain.tld`` shape
    3. trimmed name has at least two characters

    Args:
        submission: Parsed request, or the raw wire payload

    Returns:
        ValidationResult carrying the trimmed values or the error code
    """
    if not isinstance(submission, SubmissionRequest):
        submission = SubmissionRequest.from_payload(submission)

    name = (submission.name or "").strip()
    email = (submission.email or "").strip()

    if not name or not email:
        return ValidationResult.invalid(ErrorCode.MISSING_FIELD)

    if not is_valid_email(email):
        return ValidationResult.invalid(ErrorCode.INVALID_EMAIL_FORMAT)

    if len(name) < MIN_NAME_LENGTH:
        return ValidationResult.invalid(ErrorCode.NAME_TOO_SHORT)

    return ValidationResult.ok(name, email)


def error_message(code: ErrorCode) -> str:
    """Human-readable message for an error code."""
    return ERROR_MESSAGES[code]
