"""Portfolio management service."""

import logging
import secrets
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from src.config import EXAMPLE_PORTFOLIO_HOLDER_IDS
from src.constants import DEFAULT_AVATAR, DEFAULT_BACKGROUND_THEME, DEFAULT_MAIN_COLOR
from src.exceptions import (
    InvalidRequestError,
    ItemNotDeletedError,
    ItemNotFoundError,
    ItemNotUpdatedError,
    NotAuthorizedError,
    PortfolioAlreadyExistsError,
)
from src.models import Portfolio, PortfolioDownload, PortfolioLink, PortfolioView, Project, SocialMediaLink
from src.models.schemas import SocialMediaLinkRequest
from src.repositories.repository import Repository
from src.services.interfaces import PortfolioServiceInterface
from src.utils.identifiers import parse_id

logger = logging.getLogger(__name__)

AGGREGATE_RELATIONS = ("social_media_links", "projects", "views", "downloads", "linked_portfolios")


class PortfolioService(PortfolioServiceInterface):
    def __init__(
        self,
        portfolio_repository: Repository,
        project_repository: Repository,
        social_media_link_repository: Repository,
        view_repository: Repository,
        download_repository: Repository,
        link_repository: Repository,
    ):
        self.portfolio_repository = portfolio_repository
        self.project_repository = project_repository
        self.social_media_link_repository = social_media_link_repository
        self.view_repository = view_repository
        self.download_repository = download_repository
        self.link_repository = link_repository

    def _load_portfolio(self, portfolio_id, *relations: str) -> Portfolio:
        """
        Load a portfolio or raise.

        Args:
            portfolio_id: Portfolio ID as string or UUID
            relations: Owned collections to load eagerly

        Returns:
            The portfolio
        """
        pid = parse_id(portfolio_id, "portfolio ID")

        if relations:
            query = self.portfolio_repository.get_all_attached().options(
                *(selectinload(getattr(Portfolio, name)) for name in relations)
            )
            portfolio = query.filter(Portfolio.id == pid).first()
        else:
            portfolio = self.portfolio_repository.get_by_id(pid)

        if portfolio is None:
            raise ItemNotFoundError("Portfolio not found.")
        return portfolio

    @staticmethod
    def _authorize(portfolio: Portfolio, person_id: str) -> None:
        if not person_id or portfolio.person_id != person_id:
            raise NotAuthorizedError(f"No permission for user with ID `{person_id}`.")

    def _load_owned_portfolio(self, portfolio_id, person_id: str, *relations: str) -> Portfolio:
        portfolio = self._load_portfolio(portfolio_id, *relations)
        self._authorize(portfolio, person_id)
        return portfolio

    def _save(self, portfolio: Portfolio) -> Portfolio:
        if not self.portfolio_repository.update(portfolio):
            raise ItemNotUpdatedError("Portfolio cannot be updated.")
        return portfolio

    def _load_owned_social_media_link(self, link_id, person_id: str) -> tuple[SocialMediaLink, Portfolio]:
        link = self.social_media_link_repository.get_by_id(parse_id(link_id, "social media link ID"))
        if link is None:
            raise ItemNotFoundError("Social media link not found.")

        portfolio = self._load_owned_portfolio(link.portfolio_id, person_id)
        return link, portfolio

    def create_portfolio(self, user_id: str, biography: str, names: list[str]) -> Portfolio:
        """Create the portfolio of ``user_id``; each user has at most one."""
        if self.portfolio_repository.first_or_default_where(Portfolio.person_id == user_id) is not None:
            raise PortfolioAlreadyExistsError(f"Portfolio for user with id `{user_id}` already exists.")

        portfolio = Portfolio(person_id=user_id, biography=biography, person_names=list(names))

        try:
            self.portfolio_repository.add(portfolio)
        except IntegrityError:
            # Lost a race against a concurrent create for the same user
            raise PortfolioAlreadyExistsError(f"Portfolio for user with id `{user_id}` already exists.")

        logger.info(f"Created portfolio {portfolio.id} for user {user_id}")
        return portfolio

    def get_portfolio_by_id(self, portfolio_id: str) -> Portfolio:
        return self._load_portfolio(portfolio_id, *AGGREGATE_RELATIONS)

    def get_example_portfolios(self) -> list[Portfolio]:
        portfolios = (
            self.portfolio_repository.get_all_attached()
            .filter(Portfolio.person_id.in_(list(EXAMPLE_PORTFOLIO_HOLDER_IDS)))
            .all()
        )
        if not portfolios:
            raise ItemNotFoundError("No example portfolios found.")
        return portfolios

    def add_projects(self, portfolio_id: str, person_id: str, source_code_links: Iterable[str]) -> Portfolio:
        """
        Add one project per source code link.

        Links already present on the portfolio are skipped. Each project is
        committed on its own, so a failure midway keeps the earlier ones.
        """
        portfolio = self._load_owned_portfolio(portfolio_id, person_id, "projects")
        known_links = {project.source_code_link for project in portfolio.projects}

        for link in source_code_links:
            link = link.strip()
            if not link or link in known_links:
                continue

            self.project_repository.add(Project(portfolio_id=portfolio.id, source_code_link=link))
            known_links.add(link)
            logger.info(f"Added project {link} to portfolio {portfolio.id}")

        return portfolio

    def add_social_media_links(
        self, portfolio_id: str, person_id: str, links: Iterable[SocialMediaLinkRequest]
    ) -> Portfolio:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id, "social_media_links")
        known_links = {(link.type, link.value) for link in portfolio.social_media_links}

        for request in links:
            key = (request.type, request.value)
            if key in known_links:
                continue

            self.social_media_link_repository.add(
                SocialMediaLink(portfolio_id=portfolio.id, type=request.type, value=request.value)
            )
            known_links.add(key)

        return portfolio

    def edit_social_media_link(self, link_id: str, person_id: str, new_value: str) -> Portfolio:
        link, portfolio = self._load_owned_social_media_link(link_id, person_id)

        if link.value != new_value:
            link.value = new_value
            if not self.social_media_link_repository.update(link):
                raise ItemNotUpdatedError("Social media link cannot be updated.")

        return portfolio

    def remove_social_media_link(self, link_id: str, person_id: str) -> Portfolio:
        link, portfolio = self._load_owned_social_media_link(link_id, person_id)

        if not self.social_media_link_repository.delete(link):
            raise ItemNotDeletedError("Social media link cannot be deleted.")

        logger.info(f"Removed social media link {link_id} from portfolio {portfolio.id}")
        return portfolio

    def edit_biography(self, portfolio_id: str, person_id: str, biography: str) -> Portfolio:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id)
        if portfolio.biography != biography:
            portfolio.biography = biography
        return self._save(portfolio)

    def edit_names(self, portfolio_id: str, person_id: str, names: list[str]) -> Portfolio:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id)
        portfolio.person_names = list(names)
        return self._save(portfolio)

    def edit_visibility(self, portfolio_id: str, person_id: str, is_public: bool) -> Portfolio:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id)
        if portfolio.is_public != is_public:
            portfolio.is_public = is_public
        return self._save(portfolio)

    def edit_theme(
        self,
        portfolio_id: str,
        person_id: str,
        background_theme: str | None = None,
        main_color: str | None = None,
    ) -> Portfolio:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id)

        if background_theme and portfolio.background_theme != background_theme:
            portfolio.background_theme = background_theme
        if main_color and portfolio.main_color != main_color:
            portfolio.main_color = main_color

        return self._save(portfolio)

    def set_default_theme(self, portfolio_id: str, person_id: str) -> Portfolio:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id)

        is_updated = False
        if portfolio.background_theme != DEFAULT_BACKGROUND_THEME:
            portfolio.background_theme = DEFAULT_BACKGROUND_THEME
            is_updated = True
        if portfolio.main_color != DEFAULT_MAIN_COLOR:
            portfolio.main_color = DEFAULT_MAIN_COLOR
            is_updated = True

        if is_updated:
            self._save(portfolio)
        return portfolio

    def upload_avatar(self, portfolio_id: str, person_id: str, avatar_url: str) -> Portfolio:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id)
        if portfolio.avatar != avatar_url:
            portfolio.avatar = avatar_url
        return self._save(portfolio)

    def remove_avatar(self, portfolio_id: str, person_id: str) -> Portfolio:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id)
        portfolio.avatar = DEFAULT_AVATAR
        return self._save(portfolio)

    def upload_cv(self, portfolio_id: str, person_id: str, cv_url: str) -> Portfolio:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id)
        if portfolio.cv != cv_url:
            portfolio.cv = cv_url
        return self._save(portfolio)

    def remove_cv(self, portfolio_id: str, person_id: str) -> Portfolio:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id)
        portfolio.cv = None
        return self._save(portfolio)

    def like_portfolio(self, portfolio_id: str) -> Portfolio:
        portfolio = self._load_portfolio(portfolio_id)
        portfolio.likes = (portfolio.likes or 0) + 1
        return self._save(portfolio)

    def record_view(self, portfolio_id: str, viewer_id: str) -> Portfolio:
        """Register a view; repeated views by one viewer only move the timestamp."""
        portfolio = self._load_portfolio(portfolio_id, "views")
        now = datetime.now(timezone.utc)

        existing = next((view for view in portfolio.views if view.viewer_id == viewer_id), None)
        if existing is not None:
            existing.last_occurred_date = now
            if not self.view_repository.update(existing):
                raise ItemNotUpdatedError("Portfolio view cannot be updated.")
        else:
            self.view_repository.add(
                PortfolioView(portfolio_id=portfolio.id, viewer_id=viewer_id, last_occurred_date=now)
            )

        return portfolio

    def record_download(self, portfolio_id: str, downloader_id: str) -> Portfolio:
        portfolio = self._load_portfolio(portfolio_id)
        self.download_repository.add(PortfolioDownload(portfolio_id=portfolio.id, downloader_id=downloader_id))
        return portfolio

    def create_share_link(self, portfolio_id: str, person_id: str, lifetime_hours: int) -> PortfolioLink:
        if lifetime_hours <= 0:
            raise InvalidRequestError("Link lifetime must be positive.")

        portfolio = self._load_owned_portfolio(portfolio_id, person_id)
        created = datetime.now(timezone.utc)
        link = PortfolioLink(
            portfolio_id=portfolio.id,
            value=secrets.token_urlsafe(16),
            creation_date=created,
            expiration_date=created + timedelta(hours=lifetime_hours),
        )
        self.link_repository.add(link)

        logger.info(f"Created share link for portfolio {portfolio.id}, expires {link.expiration_date}")
        return link

    def get_share_links(self, portfolio_id: str, person_id: str) -> list[PortfolioLink]:
        portfolio = self._load_owned_portfolio(portfolio_id, person_id, "share_links")
        return list(portfolio.share_links)
