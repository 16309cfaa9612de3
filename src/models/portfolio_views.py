"""
PortfolioViews SQLAlchemy model.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from src.db.postgres_bootstrap import Base


class PortfolioView(Base):
    __tablename__ = "portfolio_views"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    viewer_id = Column(String(255), nullable=False, index=True)
    portfolio_id = Column(Uuid, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True)
    last_occurred_date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    portfolio = relationship("Portfolio", back_populates="views")

    def __repr__(self):
        return f"<PortfolioView(id={self.id}, portfolio_id={self.portfolio_id}, viewer_id={self.viewer_id})>"
