"""Default values for portfolio fields."""

DEFAULT_IS_PUBLIC = True
DEFAULT_MAIN_COLOR = "#FFFFFF"
DEFAULT_BACKGROUND_THEME = "default-background-theme"
DEFAULT_AVATAR = "default-avatar.jpg"
DEFAULT_RATING = 0.0

DEFAULT_SHARE_LINK_LIFETIME_HOURS = 24 * 7
