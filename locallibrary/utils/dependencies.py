"""FastAPI dependencies shared by the catalog routers."""
from uuid import UUID

from fastapi import HTTPException, Request, status

from locallibrary.config import Settings
from locallibrary.services.repository import Repositories


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def parse_record_id(record_id: str) -> UUID:
    """Turn a path id into a UUID, rejecting malformed ones with a 400."""
    try:
        return UUID(record_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid id")
