"""Project management service."""

import logging
from collections.abc import Iterable

from src.exceptions import ItemNotDeletedError, ItemNotFoundError, ItemNotUpdatedError, NotAuthorizedError
from src.models import Portfolio, Project
from src.models.enums import ProjectCategory
from src.models.schemas import GitHubRepository
from src.repositories.repository import Repository
from src.services.interfaces import GitHubServiceInterface, ProjectServiceInterface
from src.utils.identifiers import parse_id

logger = logging.getLogger(__name__)


class ProjectService(ProjectServiceInterface):
    """Edits single projects on behalf of the portfolio owner."""

    def __init__(
        self,
        project_repository: Repository,
        portfolio_repository: Repository,
        github_service: GitHubServiceInterface,
    ):
        self.project_repository = project_repository
        self.portfolio_repository = portfolio_repository
        self.github_service = github_service

    def authorize_by_portfolio_id(self, portfolio_id, person_id: str) -> Portfolio:
        """
        Load the portfolio owning a project and check who is asking.

        Args:
            portfolio_id: ID of the owning portfolio
            person_id: ID of the authenticated user

        Returns:
            The owning portfolio
        """
        portfolio = self.portfolio_repository.get_by_id(parse_id(portfolio_id, "portfolio ID"))
        if portfolio is None:
            raise ItemNotFoundError("Portfolio not found.")
        if not person_id or portfolio.person_id != person_id:
            raise NotAuthorizedError(f"No permission for user with ID `{person_id}`.")
        return portfolio

    def _load_owned_project(self, project_id: str, person_id: str) -> Project:
        project = self.project_repository.get_by_id(parse_id(project_id, "project ID"))
        if project is None:
            raise ItemNotFoundError("Project not found.")

        self.authorize_by_portfolio_id(project.portfolio_id, person_id)
        return project

    def _save(self, project: Project) -> Project:
        if not self.project_repository.update(project):
            raise ItemNotUpdatedError("Project cannot be updated.")
        return project

    def add_description(self, project_id: str, person_id: str, description: str) -> Project:
        project = self._load_owned_project(project_id, person_id)
        project.description = description
        return self._save(project)

    def edit_description(self, project_id: str, person_id: str, description: str) -> Project:
        return self.add_description(project_id, person_id, description)

    def remove_description(self, project_id: str, person_id: str) -> Project:
        project = self._load_owned_project(project_id, person_id)
        if project.description and project.description.strip():
            project.description = None
        return self._save(project)

    def add_active_link(self, project_id: str, person_id: str, active_link: str) -> Project:
        project = self._load_owned_project(project_id, person_id)
        project.hosted_link = active_link
        return self._save(project)

    def edit_active_link(self, project_id: str, person_id: str, active_link: str) -> Project:
        return self.add_active_link(project_id, person_id, active_link)

    def remove_active_link(self, project_id: str, person_id: str) -> Project:
        project = self._load_owned_project(project_id, person_id)
        if project.hosted_link and project.hosted_link.strip():
            project.hosted_link = None
        return self._save(project)

    def add_categories(self, project_id: str, person_id: str, categories: Iterable[ProjectCategory]) -> Project:
        project = self._load_owned_project(project_id, person_id)
        project.categories = project.categories | set(categories)
        return self._save(project)

    def edit_categories(self, project_id: str, person_id: str, categories: Iterable[ProjectCategory]) -> Project:
        project = self._load_owned_project(project_id, person_id)
        project.categories = set(categories)
        return self._save(project)

    def remove_all_categories(self, project_id: str, person_id: str) -> Project:
        project = self._load_owned_project(project_id, person_id)
        project.categories = set()
        return self._save(project)

    def delete_project(self, project_id: str, person_id: str) -> Portfolio:
        project = self.project_repository.get_by_id(parse_id(project_id, "project ID"))
        if project is None:
            raise ItemNotFoundError("Project not found.")
        portfolio = self.authorize_by_portfolio_id(project.portfolio_id, person_id)

        if not self.project_repository.delete(project):
            raise ItemNotDeletedError("Project cannot be deleted.")

        logger.info(f"Deleted project {project_id} from portfolio {portfolio.id}")
        return portfolio

    async def get_github_projects(self, username: str) -> list[GitHubRepository]:
        return await self.github_service.get_repositories(username)
