"""Webhook Instagram: verificação, assinatura e parsing seguro."""

from ..signature import SignatureResult, verify_meta_signature
from .receive import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookRequestError,
    parse_webhook_request,
)
from .verify import WebhookChallengeError, verify_webhook_challenge

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "SignatureResult",
    "WebhookChallengeError",
    "WebhookRequestError",
    "parse_webhook_request",
    "verify_meta_signature",
    "verify_webhook_challenge",
]
