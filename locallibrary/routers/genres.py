"""Genre endpoints."""
from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse

from locallibrary.models.genre_model import GenreForm
from locallibrary.services import genre_service
from locallibrary.services.repository import Repositories
from locallibrary.utils.dependencies import get_repositories, parse_record_id
from locallibrary.utils.views import catalog_redirect, render

router = APIRouter()


@router.get("/genres", response_class=HTMLResponse)
async def genre_list(request: Request, repos: Repositories = Depends(get_repositories)):
    genres = await genre_service.list_genres(repos)
    return render(request, "genre_list.html", title="Genre List", genre_list=genres)


@router.get("/genres/create", response_class=HTMLResponse)
async def genre_create_get(request: Request):
    return render(request, "genre_form.html", title="Create Genre", genre=GenreForm(), errors=[])


@router.post("/genres/create", response_class=HTMLResponse)
async def genre_create_post(
    request: Request,
    name: str = Form(""),
    repos: Repositories = Depends(get_repositories),
):
    """Create a genre unless one with the same name exists; either way
    redirect to the genre's page."""
    result, genre = await genre_service.create_genre(repos, GenreForm(name=name))
    if genre is None:
        return render(
            request,
            "genre_form.html",
            title="Create Genre",
            genre=result.form,
            errors=result.errors,
        )
    return catalog_redirect(request, genre.path)


@router.get("/genres/{genre_id}", response_class=HTMLResponse)
async def genre_detail(
    request: Request, genre_id: str, repos: Repositories = Depends(get_repositories)
):
    results = await genre_service.get_genre_with_books(repos, parse_record_id(genre_id))
    if results is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Genre not found")
    return render(request, "genre_detail.html", title="Genre Detail", **results)


@router.get("/genres/{genre_id}/delete", response_class=HTMLResponse)
async def genre_delete_get(
    request: Request, genre_id: str, repos: Repositories = Depends(get_repositories)
):
    results = await genre_service.get_genre_with_books(repos, parse_record_id(genre_id))
    if results is None:
        return catalog_redirect(request, "/genres")
    return render(request, "genre_delete.html", title="Delete Genre", **results)


@router.post("/genres/{genre_id}/delete")
async def genre_delete_post(
    request: Request, genre_id: str, repos: Repositories = Depends(get_repositories)
):
    await genre_service.delete_genre(repos, parse_record_id(genre_id))
    return catalog_redirect(request, "/genres")


@router.get("/genres/{genre_id}/update", response_class=PlainTextResponse)
async def genre_update_get(genre_id: str):
    return PlainTextResponse(
        "NOT IMPLEMENTED: Genre update GET", status_code=status.HTTP_501_NOT_IMPLEMENTED
    )


@router.post("/genres/{genre_id}/update", response_class=PlainTextResponse)
async def genre_update_post(genre_id: str):
    return PlainTextResponse(
        "NOT IMPLEMENTED: Genre update POST", status_code=status.HTTP_501_NOT_IMPLEMENTED
    )
