"""Store reads used by the catalog views.

Each function takes the SQLAlchemy session it should run against. Reads that
gather several related record sets return one of the result classes below.
"""
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from data_models import Author, Book, BookInstance, Genre


@dataclass
class CatalogCounts:
    books: int
    book_instances: int
    book_instances_available: int
    authors: int
    genres: int


@dataclass
class AuthorDetail:
    author: Author
    books: List[Book]


@dataclass
class GenreDetail:
    genre: Genre
    books: List[Book]


@dataclass
class BookDetail:
    book: Book
    instances: List[BookInstance]


@dataclass
class BookInstanceDetail:
    instance: BookInstance
    book: Book
    author: Author


@dataclass
class BookFormChoices:
    authors: List[Author]
    genres: List[Genre]


def catalog_counts(session: Session) -> CatalogCounts:
    return CatalogCounts(
        books=session.query(Book).count(),
        book_instances=session.query(BookInstance).count(),
        book_instances_available=session.query(BookInstance).filter(BookInstance.status == 'Available').count(),
        authors=session.query(Author).count(),
        genres=session.query(Genre).count(),
    )


def list_authors(session: Session) -> List[Author]:
    return (
        session.query(Author)
        .order_by(Author.family_name.asc(), Author.first_name.asc(), Author.id.asc())
        .all()
    )


def list_genres(session: Session) -> List[Genre]:
    return session.query(Genre).order_by(Genre.name.asc(), Genre.id.asc()).all()


def list_books(session: Session) -> List[Book]:
    return (
        session.query(Book)
        .options(joinedload(Book.author))
        .order_by(Book.title.asc(), Book.id.asc())
        .all()
    )


def list_book_instances(session: Session) -> List[BookInstance]:
    return (
        session.query(BookInstance)
        .join(BookInstance.book)
        .options(joinedload(BookInstance.book))
        .order_by(Book.title.asc(), BookInstance.imprint.asc(), BookInstance.id.asc())
        .all()
    )


def books_by_author(session: Session, author_id: int) -> List[Book]:
    return (
        session.query(Book)
        .filter(Book.author_id == author_id)
        .order_by(Book.title.asc(), Book.id.asc())
        .all()
    )


def books_in_genre(session: Session, genre_id: int) -> List[Book]:
    return (
        session.query(Book)
        .filter(Book.genres.any(Genre.id == genre_id))
        .order_by(Book.title.asc(), Book.id.asc())
        .all()
    )


def instances_of_book(session: Session, book_id: int) -> List[BookInstance]:
    return (
        session.query(BookInstance)
        .filter(BookInstance.book_id == book_id)
        .order_by(BookInstance.id.asc())
        .all()
    )


def find_genre_by_name(session: Session, name: str) -> Optional[Genre]:
    return session.query(Genre).filter(Genre.name == name).order_by(Genre.id.asc()).first()


def genres_by_ids(session: Session, genre_ids) -> List[Genre]:
    if not genre_ids:
        return []
    return session.query(Genre).filter(Genre.id.in_(genre_ids)).order_by(Genre.name.asc()).all()


def get_author_detail(session: Session, author_id: int) -> Optional[AuthorDetail]:
    author = session.get(Author, author_id)
    if author is None:
        return None
    books = books_by_author(session, author_id)
    return AuthorDetail(author=author, books=books)


def get_genre_detail(session: Session, genre_id: int) -> Optional[GenreDetail]:
    genre = session.get(Genre, genre_id)
    if genre is None:
        return None
    books = books_in_genre(session, genre_id)
    return GenreDetail(genre=genre, books=books)


def get_book_detail(session: Session, book_id: int) -> Optional[BookDetail]:
    book = session.get(
        Book, book_id,
        options=[joinedload(Book.author), selectinload(Book.genres)],
    )
    if book is None:
        return None
    instances = instances_of_book(session, book_id)
    return BookDetail(book=book, instances=instances)


def get_book_instance_detail(session: Session, instance_id: int) -> Optional[BookInstanceDetail]:
    """Resolve a copy, then its book, then that book's author, in that order."""
    instance = session.get(BookInstance, instance_id)
    if instance is None:
        return None
    book = session.get(Book, instance.book_id)
    if book is None:
        return None
    author = session.get(Author, book.author_id)
    return BookInstanceDetail(instance=instance, book=book, author=author)


def get_book_form_choices(session: Session) -> BookFormChoices:
    return BookFormChoices(authors=list_authors(session), genres=list_genres(session))


def list_book_choices(session: Session) -> List[Book]:
    return session.query(Book).order_by(Book.title.asc(), Book.id.asc()).all()
