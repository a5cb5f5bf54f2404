"""
Data models for the contact form domain.

These type-safe data structures define clear contracts between the
validator, composer, dispatcher and response mapper.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any


class ErrorKind(Enum):
    """
    Validation failure categories.

    Each member's value is the client-facing text used to build the
    aggregated 400 message.
    """
    MALFORMED_BODY = 'request body is not a valid JSON object'
    MISSING_OR_INVALID_NAME = 'value "name" is not present or is invalid'
    MISSING_OR_INVALID_EMAIL = 'value "email" is not present or is invalid'
    INVALID_EMAIL_FORMAT = 'value "email" is improperly formatted'
    MISSING_OR_INVALID_MESSAGE = 'value "message" is not present or is invalid'

    @property
    def text(self) -> str:
        return self.value


@dataclass(frozen=True)
class ContactSubmission:
    """
    A contact form submission that passed validation.

    Attributes:
        name: Submitter's name
        email: Submitter's email address (displayed, never used as sender)
        message: Free-text message body
    """
    name: str
    email: str
    message: str


@dataclass
class ValidationResult:
    """
    Outcome of validating a raw request body.

    Attributes:
        errors: Violations in fixed check order (empty when valid)
        submission: Parsed submission (None unless valid)
    """
    errors: List[ErrorKind] = field(default_factory=list)
    submission: Optional[ContactSubmission] = None

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def error_message(self) -> str:
        """Error texts joined with '; ' in check order."""
        return "; ".join(error.text for error in self.errors)


@dataclass(frozen=True)
class EmailMessage:
    """
    Outbound email composed from a submission.

    Attributes:
        subject: Fixed subject line
        html_body: Rendered HTML body (all dynamic values escaped)
        text_body: Plain text alternative
        sender: Operator address the email is sent from
        recipient: Operator address the email is delivered to
        reply_to: Submitter's address, so replies go back to them
    """
    subject: str
    html_body: str
    text_body: str
    sender: str
    recipient: str
    reply_to: Optional[str] = None


@dataclass
class DispatchResult:
    """
    Result of handing an email to the sending provider.

    Attributes:
        success: True only when the provider answered with HTTP 200
        status_code: Provider status code (0 when no response was received)
        message_id: Provider message id (if sent)
        error_message: Failure description for logs (never sent to callers)
    """
    success: bool
    status_code: int
    message_id: Optional[str] = None
    error_message: Optional[str] = None

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.success:
            return f"DispatchResult(success=True, status_code={self.status_code}, message_id={self.message_id})"
        else:
            return f"DispatchResult(success=False, status_code={self.status_code}, error={self.error_message})"


@dataclass
class HttpResponse:
    """
    API Gateway proxy response.

    Attributes:
        status_code: 200, 400 or 500
        headers: Response headers (always includes CORS headers)
        body: Plain text body
    """
    status_code: int
    headers: Dict[str, str]
    body: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the Lambda proxy integration response format."""
        return {
            'statusCode': self.status_code,
            'headers': dict(self.headers),
            'body': self.body,
        }
