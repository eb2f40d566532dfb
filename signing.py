"""
HMAC-SHA1 request signing for the QCloud v2 API.

The signed string is the HTTP method, followed by host and path (no
scheme), a literal '?', and the canonical query string.
"""
import base64
import hashlib
import hmac
from urllib.parse import quote


def signature_source(method: str, host_and_path: str, query: str) -> str:
    """Build the exact string that gets signed."""
    return f"{method.upper()}{host_and_path}?{query}"


def sign(
    method: str,
    host_and_path: str,
    query: str,
    secret_key: str
) -> str:
    """
    Compute the URL-safe signature for a canonical request.

    Args:
        method: HTTP method, e.g. "GET"
        host_and_path: Host plus path, e.g. "vpc.api.qcloud.com/v2/index.php"
        query: Canonical query string
        secret_key: Shared HMAC key

    Returns:
        Base64 HMAC-SHA1 digest, percent-encoded for use in a query string

    Raises:
        ValueError: If secret_key is empty or missing
    """
    if not secret_key:
        raise ValueError("secret key is required to sign a request")

    message = signature_source(method, host_and_path, query)
    digest = hmac.new(
        secret_key.encode("utf-8"), message.encode("utf-8"), hashlib.sha1
    ).digest()
    return quote(base64.b64encode(digest).decode("ascii"), safe="")
