"""
Init file for the SQLAlchemy models.
"""

from .portfolio_downloads import PortfolioDownload
from .portfolio_links import PortfolioLink
from .portfolio_views import PortfolioView
from .portfolios import Portfolio
from .projects import Project
from .social_media_links import SocialMediaLink

__all__ = [
    "Portfolio",
    "PortfolioDownload",
    "PortfolioLink",
    "PortfolioView",
    "Project",
    "SocialMediaLink",
]
