"""
GitHub webhook signature and event-type checks
"""

import hashlib
import hmac
import structlog

logger = structlog.get_logger()

SIGNATURE_PREFIX = "sha256="
SUPPORTED_EVENTS = ("issues", "pull_request")


def validate_github_webhook(payload: bytes, signature: str, secret: str) -> bool:
    """
    Validate an X-Hub-Signature-256 header against the raw request body

    Args:
        payload: Raw request body as bytes
        signature: X-Hub-Signature-256 header value
        secret: Webhook secret configured in GitHub

    Returns:
        bool: True if signature is valid, False otherwise
    """
    if not signature or not signature.startswith(SIGNATURE_PREFIX):
        logger.warning("Invalid signature format")
        return False

    received = signature[len(SIGNATURE_PREFIX):]
    expected = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()

    if not hmac.compare_digest(received, expected):
        logger.warning("Invalid webhook signature", received_prefix=received[:8])
        return False
    return True


def is_supported_event(event_type: str) -> bool:
    """Only issue and pull request deliveries can be first contributions"""
    return event_type in SUPPORTED_EVENTS
