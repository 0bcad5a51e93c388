# devfeed/adapters/outbound/persistence/models/subscription_model.py

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from devfeed.adapters.outbound.persistence.models.base_model import Base, utc_now


class Subscription(Base):
    """A user following a theme. At most one row per (user, theme)."""
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("user_id", "theme_id", name="uq_subscription_user_theme"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    theme_id = Column(Integer, ForeignKey("themes.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    theme = relationship("Theme", lazy="joined")

    def __repr__(self) -> str:
        return f"<Subscription(user_id={self.user_id}, theme_id={self.theme_id})>"
