"""
SocialMediaLinks SQLAlchemy model.
"""

import uuid

from sqlalchemy import Column, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from src.db.postgres_bootstrap import Base
from src.models.enums import SocialMediaPlatform


class SocialMediaLink(Base):
    __tablename__ = "social_media_links"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    portfolio_id = Column(Uuid, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(SocialMediaPlatform, native_enum=False, length=32), nullable=False)
    value = Column(String(512), nullable=False)

    portfolio = relationship("Portfolio", back_populates="social_media_links")

    def __repr__(self):
        return f"<SocialMediaLink(id={self.id}, portfolio_id={self.portfolio_id}, type={self.type}, value={self.value})>"
