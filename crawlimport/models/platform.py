"""Platform model for source sites."""

from pydantic import Field

from .base import DBModel


class Platform(DBModel):
    """Named source site articles are attributed to."""

    name: str = Field(..., description="Platform name")
