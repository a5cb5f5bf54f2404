"""
Contact form processing pipeline - core business logic.

This module handles the end-to-end processing of one contact form request:
1. Validate the raw request body
2. Compose the relay email
3. Dispatch it through the email provider
4. Map the outcome to an HTTP response

Every call returns exactly one HttpResponse. No exceptions propagate out
of the public methods; failure causes are logged, never returned.
"""

import logging
from typing import Callable, Optional, Union

from . import composer, responses, validator
from .models import DispatchResult, EmailMessage, HttpResponse

logger = logging.getLogger(__name__)

# Capability interface for the email provider
EmailSender = Callable[[EmailMessage], DispatchResult]


class ContactProcessor:
    """
    Handles end-to-end contact form processing.

    Validates submissions, relays them as email through the injected
    sender and returns an HttpResponse for every outcome.
    """

    def __init__(self, send: EmailSender, operator_address: Optional[str]):
        """
        Initialize contact processor.

        Args:
            send: Callable that sends an EmailMessage and returns a DispatchResult
            operator_address: Configured sender/recipient address (None if unset)
        """
        self.send = send
        self.operator_address = operator_address

    def process_request(self, raw_body: Union[str, bytes, None]) -> HttpResponse:
        """
        Process a single contact form request body.

        Args:
            raw_body: Untrusted request body

        Returns:
            HttpResponse with status 200, 400 or 500
        """
        try:
            result = validator.validate(raw_body)
            if not result.valid:
                logger.warning(f"Rejected submission: {result.error_message}")
                return responses.bad_request(result.errors)

            message = composer.compose(result.submission, self.operator_address)

            dispatch_result = self._dispatch(message)
            if not dispatch_result.success:
                logger.error(f"Email dispatch failed: {dispatch_result!r}")
                return responses.server_error()

            logger.info(f"Email relayed: message_id={dispatch_result.message_id}")
            return responses.ok()

        except composer.ConfigurationError as e:
            logger.error(f"Configuration error: {e}")
            return responses.server_error()

        except Exception as e:
            logger.error(f"Failed to process contact request: {e}", exc_info=True)
            return responses.server_error()

    def _dispatch(self, message: EmailMessage) -> DispatchResult:
        """
        Hand the message to the sender, converting faults into a failed result.

        Args:
            message: Composed email

        Returns:
            DispatchResult (never None)
        """
        try:
            dispatch_result = self.send(message)
        except Exception as e:
            logger.error(f"Email provider raised {e.__class__.__name__}: {e}", exc_info=True)
            return DispatchResult(success=False, status_code=0, error_message=str(e))

        if dispatch_result is None:
            return DispatchResult(
                success=False,
                status_code=0,
                error_message="Email provider returned no response"
            )

        return dispatch_result
