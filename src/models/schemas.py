"""
Pydantic schemas for API requests, responses and decoded tokens.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import ProjectCategory, SocialMediaPlatform


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str


class SocialMediaLinkRequest(BaseModel):
    type: SocialMediaPlatform
    value: str = Field(..., min_length=1, max_length=512)


class SocialMediaLinkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    portfolio_id: UUID
    type: SocialMediaPlatform
    value: str


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    portfolio_id: UUID
    source_code_link: str
    hosted_link: str | None = None
    description: str | None = None
    images: list[str] = []
    categories: set[ProjectCategory] = set()


class PortfolioViewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    viewer_id: str
    last_occurred_date: datetime


class PortfolioDownloadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    downloader_id: str
    occurred_on: datetime


class PortfolioLinkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    portfolio_id: UUID
    value: str
    creation_date: datetime
    expiration_date: datetime
    is_expired: bool


class PortfolioResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    person_id: str
    names: list[str] = Field(default_factory=list, validation_alias="person_names")
    biography: str
    rating: float
    avatar: str
    background_theme: str
    main_color: str
    likes: int
    is_public: bool
    created_on: datetime
    cv: str | None = None
    social_media_links: list[SocialMediaLinkResponse] = []
    projects: list[ProjectResponse] = []
    views: list[PortfolioViewResponse] = []
    downloads: list[PortfolioDownloadResponse] = []
    linked_portfolio_ids: list[UUID] = []


class GitHubRepository(BaseModel):
    id: int
    name: str
    full_name: str
    html_url: str
    description: str | None = None
    language: str | None = None
