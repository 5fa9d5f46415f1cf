"""Connector Instagram — adapter de borda para Instagram Messaging API.

Responsabilidades:
- Webhook (receive, verify, signature)
- HTTP client para Graph API (envio de DM)
- Erros Meta específicos
"""

from .http_base import HttpClient, HttpClientConfig, HttpError
from .http_client import InstagramHttpClient, InstagramSendError, create_instagram_http_client
from .meta_errors import InstagramApiError, parse_meta_error
from .signature import SignatureResult, verify_meta_signature, verify_signature

__all__ = [
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "InstagramApiError",
    "InstagramHttpClient",
    "InstagramSendError",
    "SignatureResult",
    "create_instagram_http_client",
    "parse_meta_error",
    "verify_meta_signature",
    "verify_signature",
]
