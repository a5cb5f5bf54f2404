"""
Composes the outbound relay email from a validated submission.

The operator address is both sender and recipient (the site operator
mails themselves); the submitter's address is only displayed in the body
and set as Reply-To.
"""

import logging

from .models import ContactSubmission, EmailMessage
from services import templates as template_service

logger = logging.getLogger(__name__)

SUBJECT = "New Message from your Portfolio Page"
HTML_TEMPLATE = "contact_email.html"
TEXT_TEMPLATE = "contact_email.txt"


class ConfigurationError(Exception):
    """Raised when the operator address is missing."""
    pass


def compose(submission: ContactSubmission, operator_address: str) -> EmailMessage:
    """
    Build the relay email for a submission.

    Args:
        submission: Validated contact form submission
        operator_address: Configured address used as sender and recipient

    Returns:
        EmailMessage: HTML and text bodies with all submitter values escaped

    Raises:
        ConfigurationError: If operator_address is empty
        ValueError: If a template cannot be loaded
    """
    if not operator_address:
        raise ConfigurationError(
            "SES_EMAIL_ADDRESS environment variable is required but not set"
        )

    values = {
        'name': submission.name,
        'email': submission.email,
        'message': submission.message,
    }

    html_body = template_service.render(
        template_service.load_template(HTML_TEMPLATE), **values
    )
    text_body = template_service.render(
        template_service.load_template(TEXT_TEMPLATE), escape_html=False, **values
    )

    logger.info(
        f"Composed email: html={len(html_body)}, text={len(text_body)}, "
        f"message_length={len(submission.message)}"
    )

    return EmailMessage(
        subject=SUBJECT,
        html_body=html_body,
        text_body=text_body,
        sender=operator_address,
        recipient=operator_address,
        reply_to=submission.email
    )
