"""
Amazon SES Dispatch Module

This module provides a simple interface for sending the composed contact
email through Amazon SES from Lambda handlers.

Usage:
    from integrations import ses_dispatch

    result = ses_dispatch.send_email(message)
    print(result.success, result.status_code)
"""

import logging
import os
import time

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from domain.models import DispatchResult, EmailMessage

# Configure logging
logger = logging.getLogger(__name__)

CHARSET = 'UTF-8'


# ============================================================================
# Custom Exception Classes
# ============================================================================

class EmailRejectedException(Exception):
    """Raised when SES rejects the message (e.g. it contains a virus)."""
    pass


class MailFromDomainNotVerifiedException(Exception):
    """Raised when the sender address or domain is not verified in SES."""
    pass


class ThrottlingException(Exception):
    """Raised when SES sending requests are throttled."""
    pass


# ============================================================================
# Module-Level Configuration and Initialization
# ============================================================================

def _read_region() -> str:
    """
    Read the SES region from environment variables.

    Returns:
        str: SES_REGION, else AWS_REGION, else us-west-2
    """
    return os.environ.get(
        'SES_REGION',
        os.environ.get('AWS_REGION', os.environ.get('AWS_DEFAULT_REGION', 'us-west-2'))
    )


def _initialize_ses_client(region: str):
    """
    Initialize boto3 SES client with timeout configuration.

    Args:
        region: AWS region hosting the verified SES identity

    Returns:
        boto3.client: Configured SES client
    """
    # Single attempt; a failed send is reported to the caller as a 500
    client_config = Config(
        retries={
            'max_attempts': 0,  # 0 retries = 1 total call
            'mode': 'standard'
        },
        connect_timeout=5,
        read_timeout=10
    )

    client = boto3.client(
        'ses',
        region_name=region,
        config=client_config
    )

    logger.info(
        f"SES client initialized: region={region}, "
        f"connect_timeout=5s, read_timeout=10s, max_attempts=0 (no retries)"
    )
    return client


# Initialize at module import time (thread-safe, reused across invocations)
SES_REGION = _read_region()
ses_client = _initialize_ses_client(SES_REGION)


# ============================================================================
# Sending
# ============================================================================

def _build_request(message: EmailMessage) -> dict:
    """Build SendEmail keyword arguments for a composed message."""
    request = {
        'Source': message.sender,
        'Destination': {
            'ToAddresses': [message.recipient],
        },
        'Message': {
            'Subject': {'Data': message.subject, 'Charset': CHARSET},
            'Body': {
                'Html': {'Data': message.html_body, 'Charset': CHARSET},
                'Text': {'Data': message.text_body, 'Charset': CHARSET},
            },
        },
    }
    if message.reply_to:
        request['ReplyToAddresses'] = [message.reply_to]
    return request


def send_email(message: EmailMessage) -> DispatchResult:
    """
    Send a composed email through SES (single attempt, no retries).

    Args:
        message: The composed email

    Returns:
        DispatchResult: success=True only when SES answered HTTP 200

    Raises:
        EmailRejectedException: If SES rejected the message
        MailFromDomainNotVerifiedException: If the sender is not verified
        ThrottlingException: If the sending rate was exceeded
        ClientError: For other AWS service errors
    """
    start_time = time.time()

    logger.info(
        f"Sending email via SES: region={SES_REGION}, "
        f"html_length={len(message.html_body)}"
    )

    try:
        response = ses_client.send_email(**_build_request(message))

    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', 'Unknown')
        error_message = e.response.get('Error', {}).get('Message', str(e))

        # Map AWS errors to domain-specific exceptions
        if error_code == 'MessageRejected':
            logger.error(f"SES rejected message: {error_message}")
            raise EmailRejectedException(f"Message rejected by SES: {error_message}")
        elif error_code in ('MailFromDomainNotVerifiedException', 'MailFromDomainNotVerified'):
            logger.error(f"Sender not verified: {error_message}")
            raise MailFromDomainNotVerifiedException(
                f"Sender address is not verified in SES ({SES_REGION}): {error_message}"
            )
        elif error_code in ('Throttling', 'ThrottlingException'):
            logger.error(f"Request throttled: {error_message}")
            raise ThrottlingException(f"Request throttled by SES: {error_message}")
        else:
            logger.error(
                f"SES send failed: error_code={error_code}, "
                f"error_message={error_message}"
            )
            raise

    metadata = (response or {}).get('ResponseMetadata', {})
    status_code = metadata.get('HTTPStatusCode', 0)
    message_id = (response or {}).get('MessageId')

    execution_time = time.time() - start_time

    if status_code == 200:
        logger.info(
            f"SES send succeeded: message_id={message_id}, "
            f"execution_time={execution_time:.2f}s"
        )
        return DispatchResult(success=True, status_code=status_code, message_id=message_id)

    logger.error(f"SES send returned unexpected status: {status_code}")
    return DispatchResult(
        success=False,
        status_code=status_code,
        message_id=message_id,
        error_message=f"SES returned HTTP {status_code}"
    )
