"""Book endpoints."""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse

from locallibrary.config import Settings
from locallibrary.models.book_model import BookForm
from locallibrary.services import book_service
from locallibrary.services.repository import Repositories
from locallibrary.utils.dependencies import get_app_settings, get_repositories, parse_record_id
from locallibrary.utils.validation import FieldError
from locallibrary.utils.views import catalog_redirect, mark_selected, render

router = APIRouter()


def render_book_form(
    request: Request,
    title: str,
    form: BookForm,
    choices: Dict[str, Any],
    errors: Optional[List[FieldError]] = None,
) -> HTMLResponse:
    return render(
        request,
        "book_form.html",
        title=title,
        book=form,
        authors=mark_selected(choices["authors"], [form.author]),
        genres=mark_selected(choices["genres"], form.genre),
        errors=errors or [],
    )


def book_form_data(
    title: str = Form(""),
    author: str = Form(""),
    summary: str = Form(""),
    isbn: str = Form(""),
    genre: Optional[List[str]] = Form(None),
) -> BookForm:
    """Collect the submitted book fields. ``genre`` may be absent or repeated."""
    return BookForm(
        title=title,
        author=author,
        summary=summary,
        isbn=isbn,
        genre=genre,
    )


@router.get("/books", response_class=HTMLResponse)
async def book_list(request: Request, repos: Repositories = Depends(get_repositories)):
    """List every book, sorted by title, with its author."""
    books = await book_service.list_books(repos)
    return render(request, "book_list.html", title="Book List", book_list=books)


@router.get("/books/create", response_class=HTMLResponse)
async def book_create_get(request: Request, repos: Repositories = Depends(get_repositories)):
    choices = await book_service.get_form_choices(repos)
    return render_book_form(request, "Create Book", BookForm(), choices)


@router.post("/books/create", response_class=HTMLResponse)
async def book_create_post(
    request: Request,
    form: BookForm = Depends(book_form_data),
    repos: Repositories = Depends(get_repositories),
    app_settings: Settings = Depends(get_app_settings),
):
    """Create a book, or re-render the form with the validation errors."""
    result, book = await book_service.create_book(repos, form, app_settings.enforce_references)
    if book is None:
        choices = await book_service.get_form_choices(repos)
        return render_book_form(request, "Create Book", result.form, choices, result.errors)
    return catalog_redirect(request, book.path)


@router.get("/books/{book_id}", response_class=HTMLResponse)
async def book_detail(
    request: Request, book_id: str, repos: Repositories = Depends(get_repositories)
):
    """Show a book with its author, genres and copies."""
    results = await book_service.get_book_with_instances(repos, parse_record_id(book_id))
    if results is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return render(
        request,
        "book_detail.html",
        title=results["book"].title,
        book=results["book"],
        book_instances=results["book_instances"],
    )


@router.get("/books/{book_id}/delete", response_class=HTMLResponse)
async def book_delete_get(
    request: Request, book_id: str, repos: Repositories = Depends(get_repositories)
):
    """Confirm deletion, listing the copies that would be left behind."""
    results = await book_service.get_book_with_instances(repos, parse_record_id(book_id))
    if results is None:
        return catalog_redirect(request, "/books")
    return render(
        request,
        "book_delete.html",
        title="Delete Book",
        book=results["book"],
        book_instances=results["book_instances"],
    )


@router.post("/books/{book_id}/delete")
async def book_delete_post(
    request: Request, book_id: str, repos: Repositories = Depends(get_repositories)
):
    await book_service.delete_book(repos, parse_record_id(book_id))
    return catalog_redirect(request, "/books")


@router.get("/books/{book_id}/update", response_class=HTMLResponse)
async def book_update_get(
    request: Request, book_id: str, repos: Repositories = Depends(get_repositories)
):
    """Show the book form pre-filled, with the book's genres checked."""
    results = await book_service.get_book_for_update(repos, parse_record_id(book_id))
    if results is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return render_book_form(request, "Update Book", BookForm.from_record(results["book"]), results)


@router.post("/books/{book_id}/update", response_class=HTMLResponse)
async def book_update_post(
    request: Request,
    book_id: str,
    form: BookForm = Depends(book_form_data),
    repos: Repositories = Depends(get_repositories),
    app_settings: Settings = Depends(get_app_settings),
):
    record_id = parse_record_id(book_id)
    result, book = await book_service.update_book(
        repos, record_id, form, app_settings.enforce_references
    )
    if not result.ok:
        choices = await book_service.get_form_choices(repos)
        return render_book_form(request, "Update Book", result.form, choices, result.errors)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return catalog_redirect(request, book.path)
