# devfeed/adapters/outbound/persistence/models/comment_model.py

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from devfeed.adapters.outbound.persistence.models.base_model import Base, TimestampMixin


class Comment(TimestampMixin, Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(String(2000), nullable=False)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True)

    author = relationship("User", lazy="joined")

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, article_id={self.article_id})>"
