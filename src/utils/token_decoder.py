"""Decoding of the Supabase session cookie into tokens and a user id."""

import base64
import binascii
import json
import logging
from collections.abc import Mapping

import jwt
from pydantic import ValidationError

from src.config import AUTH_COOKIE_NAMES, SUPABASE_JWT_SECRET
from src.exceptions import NotAuthorizedError, TokenDecodeError
from src.models.schemas import TokenResponse

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "base64-"


def _decode_base64(value: str) -> str:
    # Supabase writes base64url without padding
    value = value.strip().replace("+", "-").replace("/", "_")
    value += "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value).decode("utf-8")


def decode_token(cookies: Mapping[str, str]) -> TokenResponse:
    """
    Rebuild the session token split across the two auth cookies.

    Args:
        cookies: Request cookies

    Returns:
        The access and refresh tokens
    """
    parts = [cookies.get(name) or "" for name in AUTH_COOKIE_NAMES]
    if not all(parts):
        raise TokenDecodeError("No cookie found")

    encoded = "".join(parts).replace(TOKEN_PREFIX, "")
    try:
        payload = json.loads(_decode_base64(encoded))
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise TokenDecodeError("Token couldn't be decoded.") from None

    if not isinstance(payload, dict):
        raise TokenDecodeError("Token couldn't be decoded.")

    try:
        return TokenResponse.model_validate(payload)
    except ValidationError:
        raise TokenDecodeError("Token couldn't be decoded.") from None


def get_user_id(token: TokenResponse) -> str:
    """User id (``sub`` claim) of the access token."""
    try:
        if SUPABASE_JWT_SECRET:
            claims = jwt.decode(
                token.access_token,
                SUPABASE_JWT_SECRET,
                algorithms=["HS256"],
                audience="authenticated",
            )
        else:
            claims = jwt.decode(token.access_token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected access token: {e}")
        raise NotAuthorizedError("Invalid access token.") from None

    user_id = claims.get("sub")
    if not user_id:
        raise NotAuthorizedError("Access token has no subject.")
    return str(user_id)
