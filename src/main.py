"""FastAPI application for the Portfi backend."""

import json
import logging

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import CORS_ORIGINS
from src.constants import DEFAULT_SHARE_LINK_LIFETIME_HOURS
from src.db.postgres_client import get_db
from src.exceptions import InvalidRequestError, NotAuthorizedError, PortfiError
from src.models.enums import ProjectCategory
from src.models.schemas import (
    GitHubRepository,
    PortfolioLinkResponse,
    PortfolioResponse,
    ProjectResponse,
    SocialMediaLinkRequest,
)
from src.registration import RequestScope, container
from src.services.interfaces import PortfolioServiceInterface, ProjectServiceInterface
from src.utils.token_decoder import decode_token, get_user_id

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ANONYMOUS_VISITOR = "anonymous"

# Create FastAPI app
app = FastAPI(
    title="Portfi API",
    description="Portfolio builder backend: portfolios, projects and GitHub import",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(error: PortfiError) -> PlainTextResponse:
    return PlainTextResponse(error.message, status_code=error.status_code)


@app.exception_handler(PortfiError)
async def portfi_error_handler(request: Request, exc: PortfiError):
    return _error_response(exc)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


# Dependencies
def get_scope(session: Session = Depends(get_db)) -> RequestScope:
    return container.scope(session)


def get_portfolio_service(scope: RequestScope = Depends(get_scope)) -> PortfolioServiceInterface:
    return scope.service(PortfolioServiceInterface)


def get_project_service(scope: RequestScope = Depends(get_scope)) -> ProjectServiceInterface:
    return scope.service(ProjectServiceInterface)


def get_current_user_id(request: Request) -> str:
    """Id of the signed-in user; 401 when the auth cookie is missing or invalid."""
    return get_user_id(decode_token(request.cookies))


def get_visitor_id(request: Request) -> str:
    try:
        return get_current_user_id(request)
    except NotAuthorizedError:
        return ANONYMOUS_VISITOR


def _parse_social_media_links(raw: str) -> list[SocialMediaLinkRequest]:
    try:
        return TypeAdapter(list[SocialMediaLinkRequest]).validate_python(json.loads(raw))
    except (ValueError, ValidationError):
        raise InvalidRequestError("Social media links must be a JSON list of {type, value} objects.") from None


def _parse_categories(raw: list[str]) -> set[ProjectCategory]:
    try:
        return {ProjectCategory(value.strip()) for value in raw if value.strip()}
    except ValueError as e:
        raise InvalidRequestError(f"Invalid project category: {e}") from None


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "Portfi API"}


# Portfolio Endpoints
@app.post("/api/portfolio/createPortfolio", response_model=PortfolioResponse)
def create_portfolio(
    userID: str = Query(..., min_length=1),
    biography: str = Query(...),
    names: list[str] = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    """Create the portfolio of the signed-in user."""
    try:
        if userID != user_id:
            raise NotAuthorizedError(f"No permission for user with ID `{userID}`.")
        portfolio = service.create_portfolio(userID, biography, names)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error creating portfolio: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.get("/api/portfolio/getPortfolioById", response_model=PortfolioResponse)
def get_portfolio_by_id(
    portfolioID: str = Query(...),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    """Get a portfolio with its links, projects, views and downloads."""
    try:
        portfolio = service.get_portfolio_by_id(portfolioID)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error getting portfolio: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.get("/api/portfolio/getExamplePortfolios", response_model=list[PortfolioResponse])
def get_example_portfolios(service: PortfolioServiceInterface = Depends(get_portfolio_service)):
    """Get the portfolios shown as examples."""
    try:
        portfolios = service.get_example_portfolios()
        return [PortfolioResponse.model_validate(portfolio) for portfolio in portfolios]
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error getting example portfolios: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.put("/api/portfolio/addProjects", response_model=PortfolioResponse)
def add_projects(
    portfolioID: str = Query(...),
    projects: list[str] = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    """Add projects by source code link."""
    try:
        portfolio = service.add_projects(portfolioID, user_id, projects)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error adding projects: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/api/portfolio/addSocialMediaLinks", response_model=PortfolioResponse)
def add_social_media_links(
    portfolioID: str = Query(...),
    socialMediaLinks: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    """Add social media links given as a JSON list."""
    try:
        links = _parse_social_media_links(socialMediaLinks)
        portfolio = service.add_social_media_links(portfolioID, user_id, links)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error adding social media links: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/portfolio/editSocialMediaLink", response_model=PortfolioResponse)
def edit_social_media_link(
    socialMediaLinkID: str = Query(...),
    socialMediaLink: str = Query(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.edit_social_media_link(socialMediaLinkID, user_id, socialMediaLink)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error editing social media link: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.delete("/api/portfolio/removeSocialMediaLink", response_model=PortfolioResponse)
def remove_social_media_link(
    socialMediaLinkID: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.remove_social_media_link(socialMediaLinkID, user_id)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error removing social media link: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/portfolio/uploadAvatar", response_model=PortfolioResponse)
def upload_avatar(
    portfolioID: str = Query(...),
    avatarURL: str = Query(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.upload_avatar(portfolioID, user_id, avatarURL)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error uploading avatar: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.delete("/api/portfolio/removeAvatar", response_model=PortfolioResponse)
def remove_avatar(
    portfolioID: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.remove_avatar(portfolioID, user_id)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error removing avatar: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/portfolio/uploadCV", response_model=PortfolioResponse)
def upload_cv(
    portfolioID: str = Query(...),
    cv: str = Query(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.upload_cv(portfolioID, user_id, cv)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error uploading CV: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.delete("/api/portfolio/removeCV", response_model=PortfolioResponse)
def remove_cv(
    portfolioID: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.remove_cv(portfolioID, user_id)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error removing CV: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/portfolio/editBiography", response_model=PortfolioResponse)
def edit_biography(
    portfolioID: str = Query(...),
    biography: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.edit_biography(portfolioID, user_id, biography)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error editing biography: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/portfolio/editNames", response_model=PortfolioResponse)
def edit_names(
    portfolioID: str = Query(...),
    names: list[str] = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.edit_names(portfolioID, user_id, names)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error editing names: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/portfolio/editVisibility", response_model=PortfolioResponse)
def edit_visibility(
    portfolioID: str = Query(...),
    isPublic: bool = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.edit_visibility(portfolioID, user_id, isPublic)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error editing visibility: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/portfolio/editTheme", response_model=PortfolioResponse)
def edit_theme(
    portfolioID: str = Query(...),
    backgroundTheme: str | None = Query(None),
    mainColor: str | None = Query(None),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    """Change the background theme and/or the main color."""
    try:
        portfolio = service.edit_theme(portfolioID, user_id, backgroundTheme, mainColor)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error editing theme: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/portfolio/setDefaultTheme", response_model=PortfolioResponse)
def set_default_theme(
    portfolioID: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.set_default_theme(portfolioID, user_id)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error setting default theme: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/api/portfolio/likePortfolio", response_model=PortfolioResponse)
def like_portfolio(
    portfolioID: str = Query(...),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.like_portfolio(portfolioID)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error liking portfolio: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/api/portfolio/recordView", response_model=PortfolioResponse)
def record_view(
    portfolioID: str = Query(...),
    viewer_id: str = Depends(get_visitor_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    """Record a portfolio view; anonymous visitors share one view row."""
    try:
        portfolio = service.record_view(portfolioID, viewer_id)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error recording view: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/api/portfolio/recordDownload", response_model=PortfolioResponse)
def record_download(
    portfolioID: str = Query(...),
    downloader_id: str = Depends(get_visitor_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        portfolio = service.record_download(portfolioID, downloader_id)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error recording download: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/api/portfolio/createShareLink", response_model=PortfolioLinkResponse)
def create_share_link(
    portfolioID: str = Query(...),
    lifetimeHours: int = Query(DEFAULT_SHARE_LINK_LIFETIME_HOURS),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    """Create an expiring share link."""
    try:
        link = service.create_share_link(portfolioID, user_id, lifetimeHours)
        return PortfolioLinkResponse.model_validate(link)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error creating share link: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.get("/api/portfolio/getShareLinks", response_model=list[PortfolioLinkResponse])
def get_share_links(
    portfolioID: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioServiceInterface = Depends(get_portfolio_service),
):
    try:
        links = service.get_share_links(portfolioID, user_id)
        return [PortfolioLinkResponse.model_validate(link) for link in links]
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error getting share links: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


# Project Endpoints
@app.get("/api/project/getGitHubProjectsByUsername", response_model=list[GitHubRepository])
async def get_github_projects_by_username(
    username: str = Query(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    """Get the public GitHub repositories of a user."""
    try:
        return await service.get_github_projects(username)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error getting GitHub projects: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/api/project/addProjectDescription", response_model=ProjectResponse)
def add_project_description(
    projectID: str = Query(...),
    description: str = Query(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    try:
        project = service.add_description(projectID, user_id, description)
        return ProjectResponse.model_validate(project)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error adding project description: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/project/editProjectDescription", response_model=ProjectResponse)
def edit_project_description(
    projectID: str = Query(...),
    description: str = Query(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    try:
        project = service.edit_description(projectID, user_id, description)
        return ProjectResponse.model_validate(project)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error editing project description: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.delete("/api/project/removeProjectDescription", response_model=ProjectResponse)
def remove_project_description(
    projectID: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    try:
        project = service.remove_description(projectID, user_id)
        return ProjectResponse.model_validate(project)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error removing project description: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/api/project/addActiveLinkToProject", response_model=ProjectResponse)
def add_active_link_to_project(
    projectID: str = Query(...),
    activeLink: str = Query(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    try:
        project = service.add_active_link(projectID, user_id, activeLink)
        return ProjectResponse.model_validate(project)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error adding active link: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/project/editActiveLinkToProject", response_model=ProjectResponse)
def edit_active_link_to_project(
    projectID: str = Query(...),
    activeLink: str = Query(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    try:
        project = service.edit_active_link(projectID, user_id, activeLink)
        return ProjectResponse.model_validate(project)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error editing active link: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.delete("/api/project/removeActiveLinkFromProject", response_model=ProjectResponse)
def remove_active_link_from_project(
    projectID: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    try:
        project = service.remove_active_link(projectID, user_id)
        return ProjectResponse.model_validate(project)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error removing active link: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/api/project/addCategoriesToProject", response_model=ProjectResponse)
def add_categories_to_project(
    projectID: str = Query(...),
    categories: list[str] = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    try:
        project = service.add_categories(projectID, user_id, _parse_categories(categories))
        return ProjectResponse.model_validate(project)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error adding project categories: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.patch("/api/project/editProjectCategories", response_model=ProjectResponse)
def edit_project_categories(
    projectID: str = Query(...),
    categories: list[str] = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    try:
        project = service.edit_categories(projectID, user_id, _parse_categories(categories))
        return ProjectResponse.model_validate(project)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error editing project categories: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.delete("/api/project/clearProjectCategories", response_model=ProjectResponse)
def clear_project_categories(
    projectID: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    try:
        project = service.remove_all_categories(projectID, user_id)
        return ProjectResponse.model_validate(project)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error clearing project categories: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.delete("/api/project/removeProjectByProjectId", response_model=PortfolioResponse)
def remove_project_by_project_id(
    projectID: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: ProjectServiceInterface = Depends(get_project_service),
):
    """Delete a project and return its portfolio."""
    try:
        portfolio = service.delete_project(projectID, user_id)
        return PortfolioResponse.model_validate(portfolio)
    except HTTPException:
        raise
    except PortfiError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error deleting project: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=True)
