"""Template rendering and view-model helpers."""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, Iterable, List, Optional, TypeVar

from fastapi import Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

ItemT = TypeVar("ItemT")

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
# Stored text is escaped when it is submitted, so it must not be escaped twice
templates.env.filters["sanitized"] = lambda value: Markup(value if value is not None else "")


@dataclass(frozen=True)
class Choice(Generic[ItemT]):
    """One candidate for a select or checkbox list."""
    item: ItemT
    selected: bool = False


def mark_selected(candidates: Iterable[ItemT], selected_ids: Optional[Iterable[Any]]) -> List[Choice[ItemT]]:
    """Pair each candidate with whether its id is among ``selected_ids``.

    Ids are compared as strings so form values and stored UUIDs match.
    """
    wanted = {str(selected_id) for selected_id in (selected_ids or ())}
    return [Choice(item=candidate, selected=str(candidate.id) in wanted) for candidate in candidates]

def catalog_url(request: Request, path: str = "/") -> str:
    """Address of a catalog page under the prefix the app was configured with."""
    return f"{request.app.state.settings.catalog_prefix}{path}"


def render(
    request: Request,
    template: str,
    status_code: int = status.HTTP_200_OK,
    **context: Any,
) -> HTMLResponse:
    context.setdefault("catalog_prefix", request.app.state.settings.catalog_prefix)
    return templates.TemplateResponse(request, template, context, status_code=status_code)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def catalog_redirect(request: Request, path: str = "/") -> RedirectResponse:
    return redirect(catalog_url(request, path))
