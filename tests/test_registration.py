"""Tests for repository and service registration."""

import uuid

import pytest
from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base

from src.exceptions import RegistrationError
from src.models import Portfolio, Project
from src.registration import (
    ENTITY_TYPES,
    SERVICE_BINDINGS,
    SERVICE_INTERFACES,
    ServiceContainer,
    build_container,
    register_repositories,
    register_services,
    resolve_id_type,
)
from src.repositories.repository import Repository
from src.services.github_service import GitHubService
from src.services.interfaces import GitHubServiceInterface, PortfolioServiceInterface, ProjectServiceInterface
from src.services.portfolio_service import PortfolioService

OtherBase = declarative_base()


class Setting(OtherBase):
    __tablename__ = "settings"

    key = Column(Integer, primary_key=True)


class TestRepositoryRegistration:
    def test_one_binding_per_entity(self):
        container = build_container()

        assert set(container.repository_bindings) == {(entity, uuid.UUID) for entity in ENTITY_TYPES}
        assert len(container.repository_bindings) == len(ENTITY_TYPES)

    def test_resolve_id_type(self):
        assert resolve_id_type(Portfolio) is uuid.UUID

    def test_entity_without_id_column_fails(self):
        with pytest.raises(RegistrationError, match="no `id` column"):
            register_repositories(ServiceContainer(), [Setting])

    def test_unmapped_class_fails(self):
        class NotAnEntity:
            pass

        with pytest.raises(RegistrationError):
            resolve_id_type(NotAnEntity)

    def test_duplicate_entity_fails(self):
        with pytest.raises(RegistrationError, match="Duplicate"):
            register_repositories(ServiceContainer(), [Portfolio, Portfolio])

    def test_second_registration_fails(self):
        container = ServiceContainer()
        register_repositories(container)

        with pytest.raises(RegistrationError, match="already registered"):
            register_repositories(container)


class TestServiceRegistration:
    def test_every_interface_bound(self):
        container = build_container()

        assert set(container.service_bindings) == set(SERVICE_INTERFACES)

    def test_missing_implementation_fails(self):
        bindings = {k: v for k, v in SERVICE_BINDINGS.items() if k is not GitHubServiceInterface}

        with pytest.raises(RegistrationError, match="GitHubServiceInterface"):
            register_services(ServiceContainer(), SERVICE_INTERFACES, bindings)

    def test_wrong_implementation_fails(self):
        bindings = dict(SERVICE_BINDINGS)
        bindings[ProjectServiceInterface] = (PortfolioService, SERVICE_BINDINGS[PortfolioServiceInterface][1])

        with pytest.raises(RegistrationError, match="does not implement"):
            register_services(ServiceContainer(), SERVICE_INTERFACES, bindings)

    def test_abstract_implementation_fails(self):
        class HalfDone(GitHubServiceInterface):
            pass

        bindings = dict(SERVICE_BINDINGS)
        bindings[GitHubServiceInterface] = (HalfDone, lambda scope: HalfDone())

        with pytest.raises(RegistrationError, match="abstract"):
            register_services(ServiceContainer(), SERVICE_INTERFACES, bindings)

    def test_second_registration_fails(self):
        container = ServiceContainer()
        register_services(container)

        with pytest.raises(RegistrationError):
            register_services(container)


class TestRequestScope:
    @pytest.fixture
    def container(self):
        return build_container()

    def test_repository_bound_to_session(self, container, session):
        repository = container.scope(session).repository(Project)

        assert isinstance(repository, Repository)
        assert repository.session is session
        assert repository.model is Project

    def test_objects_reused_within_scope(self, container, session):
        scope = container.scope(session)

        assert scope.service(PortfolioServiceInterface) is scope.service(PortfolioServiceInterface)
        assert scope.repository(Portfolio) is scope.repository(Portfolio)

    def test_new_scope_builds_new_objects(self, container, session):
        first = container.scope(session).service(PortfolioServiceInterface)
        second = container.scope(session).service(PortfolioServiceInterface)

        assert first is not second

    def test_services_share_scope_repositories(self, container, session):
        scope = container.scope(session)

        portfolio_service = scope.service(PortfolioServiceInterface)
        project_service = scope.service(ProjectServiceInterface)

        assert portfolio_service.portfolio_repository is project_service.portfolio_repository
        assert isinstance(project_service.github_service, GitHubService)

    def test_unregistered_entity_fails(self, session):
        with pytest.raises(RegistrationError):
            ServiceContainer().scope(session).repository(Portfolio)
