from datetime import date
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from locallibrary.config import Settings
from locallibrary.main import create_app
from locallibrary.models import BookInstanceStatus
from tests.conftest import error_messages, run


def test_instance_list_is_sorted_by_book_title(client, catalog):
    response = client.get("/catalog/bookinstances")
    assert response.status_code == 200
    text = response.text
    assert text.index("Foundation : Gnome Press") < text.index("The Hobbit : Allen &amp; Unwin")
    assert "Due:" not in text


def test_instance_detail(client, catalog):
    copy = catalog["copies"][0]
    response = client.get(f"/catalog/bookinstances/{copy.id}")
    assert response.status_code == 200
    assert "Copy: The Hobbit" in response.text
    assert "Available" in response.text


def test_instance_detail_unknown_id_is_not_found(client):
    response = client.get(f"/catalog/bookinstances/{uuid4()}")
    assert response.status_code == 404
    assert "Book copy not found" in response.text


def test_instance_create_redirects_to_new_copy(client, repos, catalog):
    payload = {
        "book": str(catalog["hobbit"].id),
        "imprint": "HarperCollins, 2012",
        "status": "Loaned",
        "due_back": "2026-12-01",
    }
    response = client.post("/catalog/bookinstances/create", data=payload, follow_redirects=False)
    assert response.status_code == 303
    copy = run(repos.instances.find_one(imprint="HarperCollins, 2012"))
    assert response.headers["location"] == f"/catalog{copy.path}"
    assert copy.status == BookInstanceStatus.LOANED
    assert copy.due_back == date(2026, 12, 1)
    assert copy.due_back_formatted == "Dec 1, 2026"


def test_instance_create_form_keeps_selected_book(client, catalog):
    hobbit = catalog["hobbit"]
    response = client.post(
        "/catalog/bookinstances/create", data={"book": str(hobbit.id), "imprint": ""}
    )
    assert error_messages(response) == ["Imprint must be specified"]
    assert f'value="{hobbit.id}" selected' in response.text


def test_instance_create_rejects_unknown_book(client, repos, catalog):
    before = run(repos.instances.count())
    response = client.post(
        "/catalog/bookinstances/create", data={"book": str(uuid4()), "imprint": "Nowhere"}
    )
    assert error_messages(response) == ["Book not found"]
    assert run(repos.instances.count()) == before


@pytest.fixture
def lenient_client(repos):
    return TestClient(create_app(repositories=repos, settings=Settings(enforce_references=False)))


def test_instance_create_without_reference_checks_accepts_unknown_book(lenient_client, repos):
    response = lenient_client.post(
        "/catalog/bookinstances/create",
        data={"book": str(uuid4()), "imprint": "Nowhere"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert run(repos.instances.count()) == 1


def test_instance_delete(client, repos, catalog):
    copy = catalog["copies"][1]
    assert "Gnome Press" in client.get(f"/catalog/bookinstances/{copy.id}/delete").text
    response = client.post(f"/catalog/bookinstances/{copy.id}/delete", follow_redirects=False)
    assert response.headers["location"] == "/catalog/bookinstances"
    assert run(repos.instances.find_by_id(copy.id)) is None


def test_instance_delete_of_unknown_copy_redirects(client):
    response = client.get(f"/catalog/bookinstances/{uuid4()}/delete", follow_redirects=False)
    assert response.status_code == 303


def test_instance_update_is_not_implemented(client, catalog):
    copy = catalog["copies"][0]
    response = client.post(f"/catalog/bookinstances/{copy.id}/update")
    assert response.status_code == 501
    assert response.text == "NOT IMPLEMENTED: BookInstance update POST"
