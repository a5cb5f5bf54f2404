"""
AWS Lambda handler for the static site's contact form.

Thin orchestration layer that delegates to ContactProcessor.
Policy: every request gets exactly one response; internal errors are
logged to CloudWatch and answered with a generic 500.
"""

import base64
import binascii
import json
import os
import logging
from typing import Dict, Any, Optional

from domain import responses
from domain.contact_processor import ContactProcessor
from domain.models import ErrorKind
from integrations import ses_dispatch

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO').upper())

# Add console handler for local testing (AWS Lambda provides handlers automatically)
if not logger.handlers:
    console_handler = logging.StreamHandler()
    formatter = logging.Formatter('%(levelname)s - %(name)s - %(message)s')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

# Environment variables
SES_EMAIL_ADDRESS = os.environ.get('SES_EMAIL_ADDRESS')
ENVIRONMENT = os.environ.get('ENVIRONMENT', 'dev')

# Initialize processor once at module level (reused across invocations)
contact_processor = ContactProcessor(
    send=ses_dispatch.send_email,
    operator_address=SES_EMAIL_ADDRESS
)


def _request_method(event: Dict[str, Any]) -> str:
    """HTTP method for REST API (v1) and HTTP API (v2) proxy events."""
    method = event.get('httpMethod')
    if not method:
        method = event.get('requestContext', {}).get('http', {}).get('method', '')
    return method.upper()


def _request_body(event: Dict[str, Any]) -> Optional[str]:
    """
    Extract the request body, decoding it if API Gateway base64-encoded it.

    Raises:
        ValueError: If a base64-encoded body cannot be decoded
    """
    body = event.get('body')
    if body is not None and event.get('isBase64Encoded'):
        try:
            body = base64.b64decode(body, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError(f"Undecodable base64 body: {e}")
    return body


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Relay a contact form submission as an email.

    Expected event format (API Gateway proxy integration):
    {
        "httpMethod": "POST",
        "body": "{\"name\": \"...\", \"email\": \"...\", \"message\": \"...\"}",
        "isBase64Encoded": false
    }

    Returns:
        Dict with statusCode, headers (CORS) and a plain text body
    """
    logger.info(f"Environment: {ENVIRONMENT}")

    try:
        method = _request_method(event)
        if method == 'OPTIONS':
            logger.info("Answering CORS preflight request")
            return responses.preflight().to_dict()

        try:
            body = _request_body(event)
        except ValueError as ve:
            logger.warning(f"Rejected request: {ve}")
            return responses.bad_request([ErrorKind.MALFORMED_BODY]).to_dict()

        logger.info(f"Received {method or 'UNKNOWN'} request, body_length={len(body or '')}")

        response = contact_processor.process_request(body)
        logger.info(f"Responding with status {response.status_code}")
        return response.to_dict()

    except Exception as e:
        logger.error(f"Unhandled error in contact handler: {str(e)}", exc_info=True)
        return responses.server_error().to_dict()


def health_check(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Simple health check endpoint for monitoring.
    """
    return {
        'statusCode': 200,
        'headers': dict(responses.CORS_HEADERS),
        'body': json.dumps({
            'status': 'healthy',
            'environment': ENVIRONMENT,
            'senderConfigured': bool(contact_processor.operator_address)
        })
    }
