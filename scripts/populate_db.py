import os, sys
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from datetime import date

from markupsafe import escape

from app import create_app
from data_models import db, Author, Book, BookInstance, Genre


AUTHORS = [
    ('Patrick', 'Rothfuss', date(1973, 6, 6), None),
    ('Ben', 'Bova', date(1932, 11, 8), None),
    ('Isaac', 'Asimov', date(1920, 1, 2), date(1992, 4, 6)),
    ('Bob', 'Billings', None, None),
    ('Jim', 'Jones', date(1971, 12, 16), None),
]

GENRES = ['Fantasy', 'Science Fiction', 'French Poetry']

BOOKS = [
    ('The Name of the Wind (The Kingkiller Chronicle, #1)', 'Rothfuss', '9781473211896', ['Fantasy'],
     'I have stolen princesses back from sleeping barrow kings.'),
    ("The Wise Man's Fear (The Kingkiller Chronicle, #2)", 'Rothfuss', '9788401352836', ['Fantasy'],
     'Picking up the tale of Kvothe Kingkiller once again.'),
    ('Apes and Angels', 'Bova', '9780765379528', ['Science Fiction'],
     'Humankind headed out to the stars not for conquest, nor exploration, nor even for curiosity.'),
    ('Death Wave', 'Bova', '9780765379504', ['Science Fiction'],
     "In Ben Bova's previous novel New Earth, Jordan Kell led the first human mission beyond the solar system."),
    ('Test Book 1', 'Billings', 'ISBN111111', ['Fantasy', 'Science Fiction'], 'Summary of test book 1'),
]

COPIES = [
    ('The Name of the Wind (The Kingkiller Chronicle, #1)', 'London Gollancz, 2014.', 'Available', None),
    ("The Wise Man's Fear (The Kingkiller Chronicle, #2)", 'Gollancz, 2011.', 'Loaned', date(2030, 1, 1)),
    ('Apes and Angels', 'New York Tom Doherty Associates, 2016.', 'Available', None),
    ('Death Wave', 'New York, NY Tom Doherty Associates, LLC, 2015.', 'Maintenance', None),
    ('Test Book 1', 'Imprint XXX2', 'Reserved', None),
]


def _stored(text):
    # forms store escaped text, seed data follows suit
    return str(escape(text))


def main():
    app = create_app()
    with app.app_context():
        db.create_all()
        if Author.query.count():
            print('Catalog already has data, nothing to do')
            return

        authors = {}
        for first_name, family_name, born, died in AUTHORS:
            authors[family_name] = Author(first_name=first_name, family_name=family_name,
                                          date_of_birth=born, date_of_death=died)
        genres = {name: Genre(name=name) for name in GENRES}
        books = {}
        for title, family_name, isbn, genre_names, summary in BOOKS:
            books[title] = Book(title=_stored(title), author=authors[family_name], isbn=isbn, summary=_stored(summary),
                                genres=[genres[name] for name in genre_names])
        copies = [
            BookInstance(book=books[title], imprint=_stored(imprint), status=status, due_back=due_back)
            for title, imprint, status, due_back in COPIES
        ]

        db.session.add_all([*authors.values(), *genres.values(), *books.values(), *copies])
        db.session.commit()
        print(f'Added {len(authors)} authors, {len(genres)} genres, {len(books)} books, {len(copies)} copies')


if __name__ == '__main__':
    main()
