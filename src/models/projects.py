"""
Projects SQLAlchemy model.
"""

import uuid

from sqlalchemy import JSON, Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from src.db.postgres_bootstrap import Base
from src.models.enums import ProjectCategory


class Project(Base):
    __tablename__ = "projects"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    portfolio_id = Column(Uuid, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True)
    source_code_link = Column(String(512), nullable=False)
    hosted_link = Column(String(512), nullable=True)
    description = Column(Text, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    category_values = Column("categories", JSON, nullable=False, default=list)  # sorted, no duplicates

    portfolio = relationship("Portfolio", back_populates="projects")

    @property
    def categories(self) -> set[ProjectCategory]:
        return {ProjectCategory(value) for value in (self.category_values or [])}

    @categories.setter
    def categories(self, values):
        self.category_values = sorted({ProjectCategory(value).value for value in values})

    def __repr__(self):
        return f"<Project(id={self.id}, portfolio_id={self.portfolio_id}, source_code_link={self.source_code_link})>"
