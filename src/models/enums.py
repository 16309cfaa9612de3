"""
Closed enumerations shared by models and request schemas.
"""

import enum


class _CaseInsensitiveEnum(str, enum.Enum):
    @classmethod
    def _missing_(cls, value):
        # the web client sends display names such as "LinkedIn"
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower() or member.name == value.upper():
                    return member
        return None


class SocialMediaPlatform(_CaseInsensitiveEnum):
    GITHUB = "github"
    LINKEDIN = "linkedin"
    X = "x"
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"


class ProjectCategory(_CaseInsensitiveEnum):
    ACTIVE = "active"
    ARCHIVED = "archived"
    WEB = "web"
    MOBILE = "mobile"
    DESKTOP = "desktop"
    BACKEND = "backend"
    FRONTEND = "frontend"
    LIBRARY = "library"
    GAME = "game"
    MACHINE_LEARNING = "machine_learning"
