# devfeed/adapters/outbound/security/token_codec.py

import logging
import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

from devfeed.domain.exceptions import (
    BadSignatureError,
    ExpiredTokenError,
    MalformedTokenError,
)
from devfeed.domain.models.principal import Claims

logger = logging.getLogger(__name__)


def mask_subject(subject: str) -> str:
    """Keep at most the first 3 characters of a subject for log output."""
    return f"{(subject or '')[:3]}***"


def _to_utc(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


class TokenCodec:
    """
    Signs and parses HMAC JWT bearer tokens.

    The payload holds ``sub`` (the user's email), ``iat`` and ``exp`` as
    integer seconds, and a random ``jti`` so two tokens signed for the same
    user in the same second still differ. Any failure raises a subclass of
    InvalidTokenException.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret or len(secret.encode("utf-8")) < 32:
            raise ValueError("Signing secret must be at least 32 bytes")
        self._secret = secret
        self.algorithm = algorithm

    def sign(self, subject: str, now: datetime, ttl: timedelta) -> str:
        """
        Create a signed token for ``subject``.

        Args:
            subject: The user's email
            now: Issue instant (timezone aware)
            ttl: Lifetime of the token

        Returns:
            Compact JWT string
        """
        issued_at = int(now.timestamp())
        payload = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + int(ttl.total_seconds()),
            "jti": str(uuid.uuid4()),
        }
        logger.debug(f"Signing token for subject {mask_subject(subject)}")
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def parse(self, token: str, now: datetime) -> Claims:
        """
        Verify a token and return its claims.

        Raises:
            MalformedTokenError: Not a decodable JWT, or required claims missing
            BadSignatureError: Signature does not verify
            ExpiredTokenError: ``exp`` is not after ``now``
        """
        payload = self._decode(token)
        claims = self._claims_from(payload)
        if claims.expires_at <= now:
            raise ExpiredTokenError("Token has expired")
        return claims

    def expiry(self, token: str) -> datetime:
        """
        Return the expiry instant of a correctly signed token, expired or not.

        Used at logout to know how long the revocation entry must be kept.
        """
        payload = self._decode(token)
        return self._claims_from(payload).expires_at

    def _decode(self, token: str) -> dict:
        if not token or not token.strip():
            raise MalformedTokenError("Empty token")
        try:
            jwt.get_unverified_claims(token)
        except JWTError:
            raise MalformedTokenError("Malformed token")

        try:
            # Expiry is checked against the caller's clock in parse()
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except ExpiredSignatureError:
            raise ExpiredTokenError("Token has expired")
        except JWTClaimsError:
            # Signature verified, but a registered claim has the wrong type or value
            raise MalformedTokenError("Token has invalid claims")
        except JWTError:
            raise BadSignatureError("Token signature verification failed")

    @staticmethod
    def _claims_from(payload: dict) -> Claims:
        subject = payload.get("sub")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not isinstance(subject, str) or not subject:
            raise MalformedTokenError("Token has no subject")
        if not isinstance(issued_at, int) or not isinstance(expires_at, int):
            raise MalformedTokenError("Token has no valid iat/exp")
        if expires_at <= issued_at:
            raise MalformedTokenError("Token expires before it was issued")
        return Claims(
            subject=subject,
            issued_at=_to_utc(issued_at),
            expires_at=_to_utc(expires_at),
        )
