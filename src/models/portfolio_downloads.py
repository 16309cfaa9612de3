"""
PortfolioDownloads SQLAlchemy model.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from src.db.postgres_bootstrap import Base


class PortfolioDownload(Base):
    __tablename__ = "portfolio_downloads"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    downloader_id = Column(String(255), nullable=False, index=True)
    portfolio_id = Column(Uuid, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True)
    occurred_on = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    portfolio = relationship("Portfolio", back_populates="downloads")

    def __repr__(self):
        return f"<PortfolioDownload(id={self.id}, portfolio_id={self.portfolio_id}, downloader_id={self.downloader_id})>"
