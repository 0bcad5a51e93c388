# devfeed/adapters/outbound/security/authentication_gate.py

"""
Per-request authentication.

The gate reads the ``Authorization`` header and either yields a Principal or
nothing. It never builds a response: deciding that a missing principal is an
error belongs to the endpoints that require one.

    missing_header   no header, or not a ``Bearer `` header
    invalid_token    malformed, badly signed or expired token
    revoked          token present in the revocation list
    unknown_subject  signed token whose email matches no user
    authenticated    principal resolved
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.outbound.security.principal_resolver import PrincipalResolver
from devfeed.adapters.outbound.security.revocation_store import RevocationStore
from devfeed.adapters.outbound.security.token_codec import TokenCodec, mask_subject
from devfeed.domain.exceptions import InvalidTokenException
from devfeed.domain.models.principal import Principal

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

MISSING_HEADER = "missing_header"
INVALID_TOKEN = "invalid_token"
REVOKED = "revoked"
UNKNOWN_SUBJECT = "unknown_subject"
AUTHENTICATED = "authenticated"


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of a ``Bearer <token>`` header, None for anything else."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):].strip()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuthenticationGate:

    def __init__(
            self,
            codec: TokenCodec,
            revocations: RevocationStore,
            resolver: PrincipalResolver,
            clock: Callable[[], datetime] = utc_now,
    ):
        self.codec = codec
        self.revocations = revocations
        self.resolver = resolver
        self.clock = clock

    async def authenticate(
            self, db: AsyncSession, authorization: Optional[str]
    ) -> Tuple[Optional[Principal], str]:
        """
        Run the header through parse, revocation check and resolution.

        Returns:
            (principal or None, outcome name)
        """
        token = extract_bearer_token(authorization)
        if not token:
            logger.debug(f"outcome={MISSING_HEADER}")
            return None, MISSING_HEADER

        try:
            claims = self.codec.parse(token, self.clock())
        except InvalidTokenException as e:
            logger.warning(f"outcome={INVALID_TOKEN} reason={type(e).__name__}")
            return None, INVALID_TOKEN

        masked = mask_subject(claims.subject)

        if self.revocations.is_revoked(token):
            logger.info(f"outcome={REVOKED} subject={masked}")
            return None, REVOKED

        principal = await self.resolver.resolve(db, claims.subject)
        if principal is None:
            logger.info(f"outcome={UNKNOWN_SUBJECT} subject={masked}")
            return None, UNKNOWN_SUBJECT

        logger.debug(f"outcome={AUTHENTICATED} subject={masked}")
        return principal, AUTHENTICATED
