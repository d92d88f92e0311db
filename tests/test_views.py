from locallibrary.models import Genre
from locallibrary.utils.views import mark_selected


def test_mark_selected_pairs_candidates_without_mutating_them():
    fantasy, poetry = Genre(name="Fantasy"), Genre(name="Poetry")

    choices = mark_selected([fantasy, poetry], [str(poetry.id)])

    assert [(choice.item, choice.selected) for choice in choices] == [
        (fantasy, False),
        (poetry, True),
    ]
    assert not hasattr(poetry, "checked")


def test_mark_selected_matches_uuid_and_string_ids():
    genre = Genre(name="Fantasy")
    assert mark_selected([genre], [genre.id])[0].selected
    assert not mark_selected([genre], None)[0].selected
