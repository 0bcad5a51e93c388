# devfeed/adapters/outbound/persistence/models/article_model.py

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from devfeed.adapters.outbound.persistence.models.base_model import Base, TimestampMixin


class Article(TimestampMixin, Base):
    """
    Article published by a user under a theme.

    Author and theme are always loaded with the article, since every response
    carries their names. Comments are removed with the article.
    """
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    theme_id = Column(Integer, ForeignKey("themes.id"), nullable=False, index=True)

    author = relationship("User", lazy="joined")
    theme = relationship("Theme", lazy="joined")

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, author_id={self.author_id})>"
