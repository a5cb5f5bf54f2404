"""
Input validation for contact form submissions.

Each field check is a pure predicate returning an optional ErrorKind.
All checks run (no short-circuit) so several violations are reported
together, always in the same order.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Union

from .models import ContactSubmission, ErrorKind, ValidationResult

logger = logging.getLogger(__name__)

# Local part (dot-atom or quoted) @ domain with alphabetic TLD, or bracketed IPv4 literal
EMAIL_PATTERN = re.compile(
    r'(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|("[^",\r\n]+"))'
    r'@'
    r'((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))'
)


def _is_non_empty_text(value: Any) -> bool:
    return isinstance(value, str) and value != ''


def is_valid_email(address: str) -> bool:
    """Check an address against the conventional email pattern."""
    return EMAIL_PATTERN.fullmatch(address) is not None


def check_name(body: Dict[str, Any]) -> Optional[ErrorKind]:
    if not _is_non_empty_text(body.get('name')):
        return ErrorKind.MISSING_OR_INVALID_NAME
    return None


def check_email_present(body: Dict[str, Any]) -> Optional[ErrorKind]:
    if not _is_non_empty_text(body.get('email')):
        return ErrorKind.MISSING_OR_INVALID_EMAIL
    return None


def check_email_format(body: Dict[str, Any]) -> Optional[ErrorKind]:
    # Only meaningful once presence passed; a missing email is reported once
    email = body.get('email')
    if _is_non_empty_text(email) and not is_valid_email(email):
        return ErrorKind.INVALID_EMAIL_FORMAT
    return None


def check_message(body: Dict[str, Any]) -> Optional[ErrorKind]:
    if not _is_non_empty_text(body.get('message')):
        return ErrorKind.MISSING_OR_INVALID_MESSAGE
    return None


# Evaluation order defines the order of the aggregated error message
FIELD_CHECKS = (
    check_name,
    check_email_present,
    check_email_format,
    check_message,
)


def parse_body(raw_body: Union[str, bytes, None]) -> Optional[Dict[str, Any]]:
    """
    Parse a raw request body into a JSON object.

    Args:
        raw_body: Request body as received from API Gateway

    Returns:
        The decoded dict, or None if the body is missing, not JSON,
        or not a JSON object
    """
    if raw_body is None:
        return None

    try:
        parsed = json.loads(raw_body)
    except (ValueError, TypeError, RecursionError) as e:
        logger.warning(f"Request body is not valid JSON: {e.__class__.__name__}")
        return None

    if not isinstance(parsed, dict):
        logger.warning(f"Request body is JSON {type(parsed).__name__}, expected object")
        return None

    return parsed


def validate(raw_body: Union[str, bytes, None]) -> ValidationResult:
    """
    Validate a raw contact form request body.

    Args:
        raw_body: Untrusted request body (JSON text expected)

    Returns:
        ValidationResult: errors in fixed order, plus the parsed
        submission when there are none

    Example:
        >>> result = validate('{"name": "Alice", "email": "bad", "message": "Hi"}')
        >>> result.error_message
        'value "email" is improperly formatted'
    """
    body = parse_body(raw_body)
    if body is None:
        return ValidationResult(errors=[ErrorKind.MALFORMED_BODY])

    errors: List[ErrorKind] = [
        error for error in (check(body) for check in FIELD_CHECKS)
        if error is not None
    ]

    if errors:
        return ValidationResult(errors=errors)

    return ValidationResult(
        submission=ContactSubmission(
            name=body['name'],
            email=body['email'],
            message=body['message']
        )
    )
