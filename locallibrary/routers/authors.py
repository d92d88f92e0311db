"""Author endpoints."""
from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse

from locallibrary.models.author_model import AuthorForm
from locallibrary.services import author_service
from locallibrary.services.repository import Repositories
from locallibrary.utils.dependencies import get_repositories, parse_record_id
from locallibrary.utils.views import catalog_redirect, render

router = APIRouter()


@router.get("/authors", response_class=HTMLResponse)
async def author_list(request: Request, repos: Repositories = Depends(get_repositories)):
    authors = await author_service.list_authors(repos)
    return render(request, "author_list.html", title="Author List", author_list=authors)


@router.get("/authors/create", response_class=HTMLResponse)
async def author_create_get(request: Request):
    return render(request, "author_form.html", title="Create Author", author=AuthorForm(), errors=[])


@router.post("/authors/create", response_class=HTMLResponse)
async def author_create_post(
    request: Request,
    first_name: str = Form(""),
    family_name: str = Form(""),
    date_of_birth: str = Form(""),
    date_of_death: str = Form(""),
    repos: Repositories = Depends(get_repositories),
):
    form = AuthorForm(
        first_name=first_name,
        family_name=family_name,
        date_of_birth=date_of_birth,
        date_of_death=date_of_death,
    )
    result, author = await author_service.create_author(repos, form)
    if author is None:
        return render(
            request,
            "author_form.html",
            title="Create Author",
            author=result.form,
            errors=result.errors,
        )
    return catalog_redirect(request, author.path)


@router.get("/authors/{author_id}", response_class=HTMLResponse)
async def author_detail(
    request: Request, author_id: str, repos: Repositories = Depends(get_repositories)
):
    """Show an author and their books."""
    results = await author_service.get_author_with_books(repos, parse_record_id(author_id))
    if results is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Author not found")
    return render(request, "author_detail.html", title="Author Detail", **results)


@router.get("/authors/{author_id}/delete", response_class=HTMLResponse)
async def author_delete_get(
    request: Request, author_id: str, repos: Repositories = Depends(get_repositories)
):
    results = await author_service.get_author_with_books(repos, parse_record_id(author_id))
    if results is None:
        return catalog_redirect(request, "/authors")
    return render(request, "author_delete.html", title="Delete Author", **results)


@router.post("/authors/{author_id}/delete")
async def author_delete_post(
    request: Request, author_id: str, repos: Repositories = Depends(get_repositories)
):
    await author_service.delete_author(repos, parse_record_id(author_id))
    return catalog_redirect(request, "/authors")


@router.get("/authors/{author_id}/update", response_class=PlainTextResponse)
async def author_update_get(author_id: str):
    return PlainTextResponse(
        "NOT IMPLEMENTED: Author update GET", status_code=status.HTTP_501_NOT_IMPLEMENTED
    )


@router.post("/authors/{author_id}/update", response_class=PlainTextResponse)
async def author_update_post(author_id: str):
    return PlainTextResponse(
        "NOT IMPLEMENTED: Author update POST", status_code=status.HTTP_501_NOT_IMPLEMENTED
    )
