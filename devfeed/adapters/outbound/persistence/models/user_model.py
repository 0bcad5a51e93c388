# devfeed/adapters/outbound/persistence/models/user_model.py

"""
User model.

A user is created at registration and changed only through profile update.
The email is the token subject and is always stored lowercase.
"""

from sqlalchemy import Column, Integer, String

from devfeed.adapters.outbound.persistence.models.base_model import Base, TimestampMixin


class User(TimestampMixin, Base):
    """
    Registered user.

    Attributes:
        id: Autoincrement identifier
        email: Unique, lowercase, used for login and as token subject
        username: Unique display name (3-50 characters)
        password: bcrypt hash, never the plain text
        created_at: Creation instant (UTC)
        updated_at: Last modification instant (UTC)
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
