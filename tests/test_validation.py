from datetime import date
from uuid import uuid4

import pytest

from locallibrary.models import Book, BookForm, BookInstanceForm, BookInstanceStatus, GenreForm
from locallibrary.models.author_model import AuthorForm
from locallibrary.utils.validation import FormInvalid, as_list, sanitize


def test_sanitize_trims_and_escapes_markup():
    assert sanitize("  <b>Tom & Jerry</b>  ") == "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;"
    assert sanitize(None) == ""


def test_as_list_normalizes_multi_valued_fields():
    assert as_list(None) == []
    assert as_list("abc") == ["abc"]
    assert as_list(["a", "b"]) == ["a", "b"]


def test_forms_sanitize_fields_as_they_are_built():
    form = BookForm(title="  <i>Dune</i> ", genre=[" a ", "", "  "])
    assert form.title == "&lt;i&gt;Dune&lt;/i&gt;"
    assert form.genre == ("a",)
    assert BookForm(genre=None).genre == ()
    assert BookForm(genre="a").genre == ("a",)


def test_book_form_from_record_does_not_escape_twice():
    book = Book(title="Tom &amp; Jerry", summary="s", isbn="i")
    assert BookForm.from_record(book).title == "Tom &amp; Jerry"


def test_book_form_reports_one_error_per_empty_required_field():
    result = BookForm(title="  ", summary="", isbn="").check()
    assert not result.ok
    assert result.messages == [
        "Title must not be empty.",
        "Author must not be empty.",
        "Summary must not be empty.",
        "ISBN must not be empty",
    ]


def test_book_form_builds_record_from_sanitized_values():
    author_id, genre_id = uuid4(), uuid4()
    form = BookForm(
        title=" Dune ",
        author=str(author_id),
        summary="Spice <must> flow",
        isbn=" 123 ",
        genre=(str(genre_id), str(genre_id)),
    )
    result = form.check()
    assert result.ok
    book = result.record(Book)
    assert book.title == "Dune"
    assert book.summary == "Spice &lt;must&gt; flow"
    assert book.isbn == "123"
    assert book.author_id == author_id
    assert book.genre_ids == [genre_id]
    assert result.form.title == "Dune"


def test_book_form_rejects_malformed_references():
    result = BookForm(title="t", author="nope", summary="s", isbn="i", genre=("bad",)).check()
    assert result.messages == ["Invalid author", "Invalid genre"]


def test_record_refuses_to_build_from_failed_validation():
    result = GenreForm(name="").check()
    with pytest.raises(FormInvalid) as excinfo:
        result.record(Book)
    assert excinfo.value.errors[0].param == "name"


def test_record_keeps_explicit_id():
    book_id = uuid4()
    form = BookForm(title="t", author=str(uuid4()), summary="s", isbn="i")
    assert form.check().record(Book, id=book_id).id == book_id


def test_author_form_dates_are_optional_but_must_parse():
    result = AuthorForm(first_name="Ada", family_name="Lovelace", date_of_birth="1815-12-10").check()
    assert result.ok
    assert result.values["date_of_birth"] == date(1815, 12, 10)
    assert result.values["date_of_death"] is None

    result = AuthorForm(first_name="Ada", family_name="Lovelace", date_of_death="soon").check()
    assert result.messages == ["Invalid date of death"]


def test_instance_form_status_defaults_and_choices():
    book_id = str(uuid4())
    result = BookInstanceForm(book=book_id, imprint="Penguin").check()
    assert result.ok
    assert result.values["status"] == BookInstanceStatus.MAINTENANCE.value
    assert result.values["due_back"] is None

    result = BookInstanceForm(book=book_id, imprint="Penguin", status="Lost", due_back="x").check()
    assert result.messages == ["Invalid status", "Invalid date"]


def test_forms_are_immutable():
    form = GenreForm(name="Poetry")
    with pytest.raises(Exception):
        form.name = "Prose"


def test_dates_parse_as_iso_8601():
    result = AuthorForm(first_name="Ada", family_name="Lovelace", date_of_birth=" 2020-02-29 ").check()
    assert result.values["date_of_birth"] == date(2020, 2, 29)

    result = AuthorForm(first_name="Ada", family_name="Lovelace", date_of_birth="29/02/2020").check()
    assert result.messages == ["Invalid date of birth"]
    assert result.errors[0].param == "date_of_birth"
    assert result.errors[0].value == "29/02/2020"


def test_failed_validation_keeps_the_sanitized_form():
    result = BookForm(title="<b>", author="", summary="s", isbn="i").check()
    assert result.messages == ["Author must not be empty."]
    assert result.errors[0].param == "author"
    assert result.form.title == "&lt;b&gt;"
    assert result.values == {}


def test_invalid_genres_are_reported_one_by_one():
    good = str(uuid4())
    result = BookForm(
        title="t", author=str(uuid4()), summary="s", isbn="i", genre=("x", good, "y")
    ).check()
    assert result.messages == ["Invalid genre", "Invalid genre"]
    assert [error.value for error in result.errors] == ["x", "y"]
