"""JWT utility functions for reading the admin session from a bearer token.

Architecture Note:
- The admin frontend sends the auth service's access token as a bearer token
- We decode the JWT payload without signature verification
- Signature verification is done by the Record Store on every admin request,
  and the role check RPC runs with the same token
- The `sub` claim contains the user ID passed to has_role
"""

import base64
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def decode_jwt_payload(token: str | None) -> dict[str, Any] | None:
    """Decode a JWT token and return the full payload.

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if decoding fails
    """
    if not token:
        return None

    try:
        # JWT format: header.payload.signature
        parts = token.split(".")
        if len(parts) != 3:
            logger.debug("Invalid JWT format: expected 3 parts, got %d", len(parts))
            return None

        payload_b64 = parts[1]

        # base64url requires padding to a multiple of 4
        padding = 4 - len(payload_b64) % 4
        if padding != 4:
            payload_b64 += "=" * padding

        payload = json.loads(base64.urlsafe_b64decode(payload_b64))
        if not isinstance(payload, dict):
            return None
        return payload

    except (ValueError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Failed to decode JWT payload: %s", type(e).__name__)
        return None


def strip_bearer(header_value: str | None) -> str | None:
    """Return the token from an `Authorization: Bearer <token>` header value."""
    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
