# devfeed/adapters/outbound/security/principal_resolver.py

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.application.ports.outbound import IUserRepository
from devfeed.domain.models.principal import Principal


class PrincipalResolver:
    """Maps a token subject (an email) to the current Principal, reading the store each time."""

    def __init__(self, users: IUserRepository):
        self.users = users

    async def resolve(self, db: AsyncSession, email: str) -> Optional[Principal]:
        user = await self.users.get_by_email(db, email)
        if user is None:
            return None
        return self.users.to_principal(user)
