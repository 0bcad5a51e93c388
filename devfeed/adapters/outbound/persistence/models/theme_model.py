# devfeed/adapters/outbound/persistence/models/theme_model.py

from sqlalchemy import Column, Integer, String, Text

from devfeed.adapters.outbound.persistence.models.base_model import Base, TimestampMixin


class Theme(TimestampMixin, Base):
    """Topic an article is classified under and users subscribe to."""
    __tablename__ = "themes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Theme(id={self.id}, name={self.name})>"
