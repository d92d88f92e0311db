"""Catalog home page."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.services import catalog_service
from locallibrary.services.repository import Repositories
from locallibrary.utils.dependencies import get_repositories
from locallibrary.utils.logger import get_logger
from locallibrary.utils.views import render

logger = get_logger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, repos: Repositories = Depends(get_repositories)):
    """Record counts. A failed count is shown on the page instead of failing it."""
    try:
        data = await catalog_service.get_counts(repos)
        error = None
    except Exception as e:
        logger.warning("Could not count catalog records: %s", e)
        data = {}
        error = str(e) or type(e).__name__
    return render(request, "index.html", title="Local Library Home", data=data, error=error)
