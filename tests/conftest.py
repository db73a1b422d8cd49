import pytest

from app import create_app
from data_models import db, Author, Book, BookInstance, Genre


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'WTF_CSRF_ENABLED': False,
        'SECRET_KEY': 'test-secret',
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_author(app):
    def make(first_name='Isaac', family_name='Asimov', **kwargs):
        author = Author(first_name=first_name, family_name=family_name, **kwargs)
        db.session.add(author)
        db.session.commit()
        return author
    return make


@pytest.fixture
def make_genre(app):
    def make(name='Fantasy'):
        genre = Genre(name=name)
        db.session.add(genre)
        db.session.commit()
        return genre
    return make


@pytest.fixture
def make_book(app, make_author):
    def make(title='Foundation', author=None, genres=(), summary='Psychohistory.', isbn='9780553293357'):
        book = Book(title=title, author=author or make_author(), summary=summary, isbn=isbn,
                    genres=list(genres))
        db.session.add(book)
        db.session.commit()
        return book
    return make


@pytest.fixture
def make_instance(app, make_book):
    def make(book=None, imprint='Gnome Press, 1951.', status='Available', due_back=None):
        instance = BookInstance(book=book or make_book(), imprint=imprint, status=status, due_back=due_back)
        db.session.add(instance)
        db.session.commit()
        return instance
    return make
