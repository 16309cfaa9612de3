"""
Explicit wiring of repositories and services.

Every mapped entity gets one ``Repository`` binding and every service
interface gets one implementation. Both passes run once at startup and fail
loudly on a bad binding; the API then resolves what it needs per request
through ``ServiceContainer.scope``.
"""

import inspect
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import Session

from src.exceptions import RegistrationError
from src.models import Portfolio, PortfolioDownload, PortfolioLink, PortfolioView, Project, SocialMediaLink
from src.repositories.repository import Repository
from src.services.github_service import GitHubService
from src.services.interfaces import GitHubServiceInterface, PortfolioServiceInterface, ProjectServiceInterface
from src.services.portfolio_service import PortfolioService
from src.services.project_service import ProjectService

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[Session], Repository]
ServiceFactory = Callable[["RequestScope"], Any]

ENTITY_TYPES = (
    Portfolio,
    Project,
    SocialMediaLink,
    PortfolioLink,
    PortfolioView,
    PortfolioDownload,
)

SERVICE_INTERFACES = (
    PortfolioServiceInterface,
    ProjectServiceInterface,
    GitHubServiceInterface,
)


def resolve_id_type(entity: type) -> type:
    """Python type of the entity's ``id`` column."""
    try:
        mapper = sa_inspect(entity)
    except NoInspectionAvailable:
        raise RegistrationError(f"{entity.__name__} is not a mapped entity.") from None

    for attr in mapper.column_attrs:
        if attr.key.lower() != "id":
            continue
        try:
            return attr.columns[0].type.python_type
        except NotImplementedError:
            raise RegistrationError(f"Cannot resolve the id type of {entity.__name__}.") from None

    raise RegistrationError(f"{entity.__name__} has no `id` column.")


class RequestScope:
    """Objects resolved for one request; each is built at most once."""

    def __init__(self, container: "ServiceContainer", session: Session):
        self.container = container
        self.session = session
        self._repositories: dict[type, Repository] = {}
        self._services: dict[type, Any] = {}

    def repository(self, entity: type) -> Repository:
        if entity not in self._repositories:
            factory = self.container.repository_factory(entity)
            self._repositories[entity] = factory(self.session)
        return self._repositories[entity]

    def service(self, interface: type) -> Any:
        if interface not in self._services:
            _, factory = self.container.service_binding(interface)
            self._services[interface] = factory(self)
        return self._services[interface]


class ServiceContainer:
    def __init__(self):
        self.repository_bindings: dict[tuple[type, type], RepositoryFactory] = {}
        self.service_bindings: dict[type, tuple[type, ServiceFactory]] = {}
        self._id_types: dict[type, type] = {}
        self._repositories_registered = False
        self._services_registered = False

    def repository_factory(self, entity: type) -> RepositoryFactory:
        id_type = self._id_types.get(entity)
        if id_type is None:
            raise RegistrationError(f"No repository registered for {entity.__name__}.")
        return self.repository_bindings[(entity, id_type)]

    def service_binding(self, interface: type) -> tuple[type, ServiceFactory]:
        binding = self.service_bindings.get(interface)
        if binding is None:
            raise RegistrationError(f"No service registered for {interface.__name__}.")
        return binding

    def scope(self, session: Session) -> RequestScope:
        return RequestScope(self, session)


def _repository_factory(entity: type) -> RepositoryFactory:
    def factory(session: Session) -> Repository:
        return Repository(session, entity)

    return factory


def register_repositories(container: ServiceContainer, entity_types: Iterable[type] = ENTITY_TYPES) -> None:
    """Bind one generic repository per entity, keyed by ``(entity, id_type)``."""
    if container._repositories_registered:
        raise RegistrationError("Repositories are already registered.")

    for entity in entity_types:
        if entity in container._id_types:
            raise RegistrationError(f"Duplicate repository registration for {entity.__name__}.")

        id_type = resolve_id_type(entity)
        container.repository_bindings[(entity, id_type)] = _repository_factory(entity)
        container._id_types[entity] = id_type
        logger.debug(f"Registered Repository[{entity.__name__}, {id_type.__name__}]")

    container._repositories_registered = True


def _build_portfolio_service(scope: RequestScope) -> PortfolioService:
    return PortfolioService(
        portfolio_repository=scope.repository(Portfolio),
        project_repository=scope.repository(Project),
        social_media_link_repository=scope.repository(SocialMediaLink),
        view_repository=scope.repository(PortfolioView),
        download_repository=scope.repository(PortfolioDownload),
        link_repository=scope.repository(PortfolioLink),
    )


def _build_project_service(scope: RequestScope) -> ProjectService:
    return ProjectService(
        project_repository=scope.repository(Project),
        portfolio_repository=scope.repository(Portfolio),
        github_service=scope.service(GitHubServiceInterface),
    )


def _build_github_service(scope: RequestScope) -> GitHubService:
    return GitHubService()


SERVICE_BINDINGS: dict[type, tuple[type, ServiceFactory]] = {
    PortfolioServiceInterface: (PortfolioService, _build_portfolio_service),
    ProjectServiceInterface: (ProjectService, _build_project_service),
    GitHubServiceInterface: (GitHubService, _build_github_service),
}


def register_services(
    container: ServiceContainer,
    interfaces: Iterable[type] = SERVICE_INTERFACES,
    bindings: Mapping[type, tuple[type, ServiceFactory]] = SERVICE_BINDINGS,
) -> None:
    """Bind every service interface to a concrete implementation."""
    if container._services_registered:
        raise RegistrationError("Services are already registered.")

    for interface in interfaces:
        if interface not in bindings:
            raise RegistrationError(f"No implementation bound to {interface.__name__}.")

        implementation, factory = bindings[interface]
        if not (inspect.isclass(implementation) and issubclass(implementation, interface)):
            raise RegistrationError(f"{implementation!r} does not implement {interface.__name__}.")
        if inspect.isabstract(implementation):
            raise RegistrationError(f"{implementation.__name__} is abstract.")

        container.service_bindings[interface] = (implementation, factory)
        logger.debug(f"Registered {interface.__name__} -> {implementation.__name__}")

    container._services_registered = True


def build_container() -> ServiceContainer:
    container = ServiceContainer()
    register_repositories(container)
    register_services(container)
    logger.info(
        f"Registered {len(container.repository_bindings)} repositories "
        f"and {len(container.service_bindings)} services"
    )
    return container


container = build_container()
