# devfeed/domain/models/principal.py

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Principal:
    """The authenticated user bound to a request."""
    id: int
    email: str
    username: str


@dataclass(frozen=True)
class Claims:
    """Verified payload of a bearer token."""
    subject: str
    issued_at: datetime
    expires_at: datetime

    @property
    def ttl_seconds(self) -> int:
        return int((self.expires_at - self.issued_at).total_seconds())
