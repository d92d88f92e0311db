"""Book copy endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse

from locallibrary.config import Settings
from locallibrary.models.book_model import Book
from locallibrary.models.bookinstance_model import STATUS_CHOICES, BookInstanceForm
from locallibrary.services import bookinstance_service
from locallibrary.services.repository import Repositories
from locallibrary.utils.dependencies import get_app_settings, get_repositories, parse_record_id
from locallibrary.utils.validation import FieldError
from locallibrary.utils.views import catalog_redirect, mark_selected, render

router = APIRouter()


def render_instance_form(
    request: Request,
    form: BookInstanceForm,
    books: List[Book],
    errors: Optional[List[FieldError]] = None,
) -> HTMLResponse:
    return render(
        request,
        "bookinstance_form.html",
        title="Create BookInstance",
        bookinstance=form,
        book_list=mark_selected(books, [form.book]),
        status_choices=STATUS_CHOICES,
        errors=errors or [],
    )


@router.get("/bookinstances", response_class=HTMLResponse)
async def bookinstance_list(request: Request, repos: Repositories = Depends(get_repositories)):
    instances = await bookinstance_service.list_instances(repos)
    return render(
        request, "bookinstance_list.html", title="Book Instance List", bookinstance_list=instances
    )


@router.get("/bookinstances/create", response_class=HTMLResponse)
async def bookinstance_create_get(
    request: Request, repos: Repositories = Depends(get_repositories)
):
    books = await bookinstance_service.list_book_choices(repos)
    return render_instance_form(request, BookInstanceForm(), books)


@router.post("/bookinstances/create", response_class=HTMLResponse)
async def bookinstance_create_post(
    request: Request,
    book: str = Form(""),
    imprint: str = Form(""),
    status_: str = Form("", alias="status"),
    due_back: str = Form(""),
    repos: Repositories = Depends(get_repositories),
    app_settings: Settings = Depends(get_app_settings),
):
    form = BookInstanceForm(book=book, imprint=imprint, status=status_, due_back=due_back)
    result, instance = await bookinstance_service.create_instance(
        repos, form, app_settings.enforce_references
    )
    if instance is None:
        books = await bookinstance_service.list_book_choices(repos)
        return render_instance_form(request, result.form, books, result.errors)
    return catalog_redirect(request, instance.path)


@router.get("/bookinstances/{instance_id}", response_class=HTMLResponse)
async def bookinstance_detail(
    request: Request, instance_id: str, repos: Repositories = Depends(get_repositories)
):
    view = await bookinstance_service.get_instance(repos, parse_record_id(instance_id))
    if view is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book copy not found")
    return render(
        request, "bookinstance_detail.html", title=f"Copy: {view.title}", bookinstance=view
    )


@router.get("/bookinstances/{instance_id}/delete", response_class=HTMLResponse)
async def bookinstance_delete_get(
    request: Request, instance_id: str, repos: Repositories = Depends(get_repositories)
):
    view = await bookinstance_service.get_instance(repos, parse_record_id(instance_id))
    if view is None:
        return catalog_redirect(request, "/bookinstances")
    return render(request, "bookinstance_delete.html", title="Delete Instance", bookinstance=view)


@router.post("/bookinstances/{instance_id}/delete")
async def bookinstance_delete_post(
    request: Request, instance_id: str, repos: Repositories = Depends(get_repositories)
):
    await bookinstance_service.delete_instance(repos, parse_record_id(instance_id))
    return catalog_redirect(request, "/bookinstances")


@router.get("/bookinstances/{instance_id}/update", response_class=PlainTextResponse)
async def bookinstance_update_get(instance_id: str):
    return PlainTextResponse(
        "NOT IMPLEMENTED: BookInstance update GET", status_code=status.HTTP_501_NOT_IMPLEMENTED
    )


@router.post("/bookinstances/{instance_id}/update", response_class=PlainTextResponse)
async def bookinstance_update_post(instance_id: str):
    return PlainTextResponse(
        "NOT IMPLEMENTED: BookInstance update POST", status_code=status.HTTP_501_NOT_IMPLEMENTED
    )
