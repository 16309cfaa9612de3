"""
PortfolioLinks SQLAlchemy model: expiring share links for a portfolio.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from src.db.postgres_bootstrap import Base


class PortfolioLink(Base):
    __tablename__ = "portfolio_links"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    portfolio_id = Column(Uuid, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(String(512), nullable=False)
    creation_date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    expiration_date = Column(DateTime(timezone=True), nullable=False)

    portfolio = relationship("Portfolio", back_populates="share_links")

    @property
    def is_expired(self) -> bool:
        expiration = self.expiration_date
        # SQLite drops tzinfo on the way back
        if expiration.tzinfo is None:
            expiration = expiration.replace(tzinfo=timezone.utc)
        return expiration < datetime.now(timezone.utc)

    def __repr__(self):
        return f"<PortfolioLink(id={self.id}, portfolio_id={self.portfolio_id}, expiration_date={self.expiration_date})>"
