"""Service interfaces bound to their implementations at startup."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from src.models import Portfolio, PortfolioLink, Project
from src.models.enums import ProjectCategory
from src.models.schemas import GitHubRepository, SocialMediaLinkRequest


class PortfolioServiceInterface(ABC):
    @abstractmethod
    def create_portfolio(self, user_id: str, biography: str, names: list[str]) -> Portfolio: ...

    @abstractmethod
    def get_portfolio_by_id(self, portfolio_id: str) -> Portfolio: ...

    @abstractmethod
    def get_example_portfolios(self) -> list[Portfolio]: ...

    @abstractmethod
    def add_projects(self, portfolio_id: str, person_id: str, source_code_links: Iterable[str]) -> Portfolio: ...

    @abstractmethod
    def add_social_media_links(
        self, portfolio_id: str, person_id: str, links: Iterable[SocialMediaLinkRequest]
    ) -> Portfolio: ...

    @abstractmethod
    def edit_social_media_link(self, link_id: str, person_id: str, new_value: str) -> Portfolio: ...

    @abstractmethod
    def remove_social_media_link(self, link_id: str, person_id: str) -> Portfolio: ...

    @abstractmethod
    def edit_biography(self, portfolio_id: str, person_id: str, biography: str) -> Portfolio: ...

    @abstractmethod
    def edit_names(self, portfolio_id: str, person_id: str, names: list[str]) -> Portfolio: ...

    @abstractmethod
    def edit_visibility(self, portfolio_id: str, person_id: str, is_public: bool) -> Portfolio: ...

    @abstractmethod
    def edit_theme(
        self,
        portfolio_id: str,
        person_id: str,
        background_theme: str | None = None,
        main_color: str | None = None,
    ) -> Portfolio: ...

    @abstractmethod
    def set_default_theme(self, portfolio_id: str, person_id: str) -> Portfolio: ...

    @abstractmethod
    def upload_avatar(self, portfolio_id: str, person_id: str, avatar_url: str) -> Portfolio: ...

    @abstractmethod
    def remove_avatar(self, portfolio_id: str, person_id: str) -> Portfolio: ...

    @abstractmethod
    def upload_cv(self, portfolio_id: str, person_id: str, cv_url: str) -> Portfolio: ...

    @abstractmethod
    def remove_cv(self, portfolio_id: str, person_id: str) -> Portfolio: ...

    @abstractmethod
    def like_portfolio(self, portfolio_id: str) -> Portfolio: ...

    @abstractmethod
    def record_view(self, portfolio_id: str, viewer_id: str) -> Portfolio: ...

    @abstractmethod
    def record_download(self, portfolio_id: str, downloader_id: str) -> Portfolio: ...

    @abstractmethod
    def create_share_link(self, portfolio_id: str, person_id: str, lifetime_hours: int) -> PortfolioLink: ...

    @abstractmethod
    def get_share_links(self, portfolio_id: str, person_id: str) -> list[PortfolioLink]: ...


class ProjectServiceInterface(ABC):
    @abstractmethod
    def authorize_by_portfolio_id(self, portfolio_id, person_id: str) -> Portfolio: ...

    @abstractmethod
    def add_description(self, project_id: str, person_id: str, description: str) -> Project: ...

    @abstractmethod
    def edit_description(self, project_id: str, person_id: str, description: str) -> Project: ...

    @abstractmethod
    def remove_description(self, project_id: str, person_id: str) -> Project: ...

    @abstractmethod
    def add_active_link(self, project_id: str, person_id: str, active_link: str) -> Project: ...

    @abstractmethod
    def edit_active_link(self, project_id: str, person_id: str, active_link: str) -> Project: ...

    @abstractmethod
    def remove_active_link(self, project_id: str, person_id: str) -> Project: ...

    @abstractmethod
    def add_categories(self, project_id: str, person_id: str, categories: Iterable[ProjectCategory]) -> Project: ...

    @abstractmethod
    def edit_categories(self, project_id: str, person_id: str, categories: Iterable[ProjectCategory]) -> Project: ...

    @abstractmethod
    def remove_all_categories(self, project_id: str, person_id: str) -> Project: ...

    @abstractmethod
    def delete_project(self, project_id: str, person_id: str) -> Portfolio: ...

    @abstractmethod
    async def get_github_projects(self, username: str) -> list[GitHubRepository]: ...


class GitHubServiceInterface(ABC):
    @abstractmethod
    async def get_repositories(self, username: str) -> list[GitHubRepository]: ...
