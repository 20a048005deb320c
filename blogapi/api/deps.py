# blogapi/api/deps.py
from typing import Annotated, TypeAlias

from fastapi import Depends, Request

from blogapi.core.settings import Settings, get_settings
from blogapi.db.repository import PostRepository


def get_repository(request: Request) -> PostRepository:
    """Repository bound to the Database handle opened in the lifespan."""
    return request.app.state.repository


RepoDep: TypeAlias = Annotated[PostRepository, Depends(get_repository)]
SettingsDep: TypeAlias = Annotated[Settings, Depends(get_settings)]
