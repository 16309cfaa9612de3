"""
Declarative base shared by every Portfi model.
Kept apart from the connection module so models can import it without cycles."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
