# devfeed/application/context.py

"""
Application context.

Everything the authentication core needs (settings, password hasher, token
codec, revocation list, principal resolver and gate) is built once per
application and passed explicitly to endpoints and use cases. Nothing here is
a module global, so two applications built in the same process do not share
revocations or secrets.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from devfeed.adapters.configuration.config import Settings
from devfeed.adapters.outbound.persistence.repositories.user_repository import user_repository
from devfeed.adapters.outbound.security.authentication_gate import AuthenticationGate, utc_now
from devfeed.adapters.outbound.security.password_hasher import PasswordHasher
from devfeed.adapters.outbound.security.principal_resolver import PrincipalResolver
from devfeed.adapters.outbound.security.revocation_store import CLEANUP_PERIOD, RevocationStore
from devfeed.adapters.outbound.security.token_codec import TokenCodec


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    hasher: PasswordHasher
    codec: TokenCodec
    revocations: RevocationStore
    resolver: PrincipalResolver
    gate: AuthenticationGate
    clock: Callable[[], datetime] = utc_now
    cleanup_period: timedelta = CLEANUP_PERIOD

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(milliseconds=self.settings.JWT_EXPIRATION)

    @classmethod
    def from_settings(cls, settings: Settings, clock: Callable[[], datetime] = utc_now) -> "AppContext":
        """Wire the security components from configuration."""
        hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
        codec = TokenCodec(settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        revocations = RevocationStore()
        resolver = PrincipalResolver(user_repository)
        gate = AuthenticationGate(codec, revocations, resolver, clock=clock)
        return cls(
            settings=settings,
            hasher=hasher,
            codec=codec,
            revocations=revocations,
            resolver=resolver,
            gate=gate,
            clock=clock,
        )
