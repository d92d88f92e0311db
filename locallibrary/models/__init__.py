"""Pydantic models for catalog records and submitted forms."""
from .author_model import Author, AuthorForm
from .book_model import Book, BookForm, BookView
from .bookinstance_model import BookInstance, BookInstanceForm, BookInstanceStatus, BookInstanceView
from .genre_model import Genre, GenreForm
