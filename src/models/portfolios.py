"""
Portfolios SQLAlchemy model.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql.schema import CheckConstraint

from src.constants import (
    DEFAULT_AVATAR,
    DEFAULT_BACKGROUND_THEME,
    DEFAULT_IS_PUBLIC,
    DEFAULT_MAIN_COLOR,
    DEFAULT_RATING,
)
from src.db.postgres_bootstrap import Base


class Portfolio(Base):
    """
    Portfolio aggregate root. Owns its projects, social links, views, downloads and share links.
    """

    __tablename__ = "portfolios"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    person_id = Column(String(255), nullable=False, unique=True, index=True)  # Supabase user id
    person_names = Column(JSON, nullable=False, default=list)
    biography = Column(Text, nullable=False)
    rating = Column(Float, CheckConstraint("rating >= 0.0"), nullable=False, default=DEFAULT_RATING)
    avatar = Column(String(512), nullable=False, default=DEFAULT_AVATAR)
    background_theme = Column(String(255), nullable=False, default=DEFAULT_BACKGROUND_THEME)
    main_color = Column(String(64), nullable=False, default=DEFAULT_MAIN_COLOR)
    likes = Column(Integer, nullable=False, default=0)
    is_public = Column(Boolean, nullable=False, default=DEFAULT_IS_PUBLIC)
    created_on = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    cv = Column(String(512), nullable=True)

    # No cascade: linked portfolios outlive the one linking to them
    parent_portfolio_id = Column(Uuid, ForeignKey("portfolios.id"), nullable=True, index=True)

    social_media_links = relationship("SocialMediaLink", back_populates="portfolio", cascade="all, delete-orphan")
    projects = relationship("Project", back_populates="portfolio", cascade="all, delete-orphan")
    views = relationship("PortfolioView", back_populates="portfolio", cascade="all, delete-orphan")
    downloads = relationship("PortfolioDownload", back_populates="portfolio", cascade="all, delete-orphan")
    share_links = relationship("PortfolioLink", back_populates="portfolio", cascade="all, delete-orphan")
    linked_portfolios = relationship("Portfolio")

    @property
    def linked_portfolio_ids(self) -> list[uuid.UUID]:
        return [linked.id for linked in self.linked_portfolios]

    def __repr__(self):
        return f"<Portfolio(id={self.id}, person_id={self.person_id}, names={self.person_names}, is_public={self.is_public})>"
