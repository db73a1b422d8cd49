from flask import url_for
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


BOOK_INSTANCE_STATUSES = ("Available", "Maintenance", "Loaned", "Reserved")

# largest value a SQLite INTEGER primary key can hold
MAX_ID = 2 ** 63 - 1


book_genres = db.Table(
    'book_genres',
    db.Column('book_id', db.Integer, db.ForeignKey('books.id'), primary_key=True),
    db.Column('genre_id', db.Integer, db.ForeignKey('genres.id'), primary_key=True),
)


def _format_date(value):
    if value is None:
        return ''
    return value.strftime('%b %d, %Y')


class Author(db.Model):
    __tablename__ = 'authors'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    first_name = db.Column(db.String(100), nullable=False)
    family_name = db.Column(db.String(100), nullable=False)
    date_of_birth = db.Column(db.Date, nullable=True)
    date_of_death = db.Column(db.Date, nullable=True)

    # no cascade: authors with books cannot be deleted
    books = db.relationship('Book', back_populates='author')

    @property
    def name(self):
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self):
        if not self.date_of_birth and not self.date_of_death:
            return ''
        return f"{_format_date(self.date_of_birth)} - {_format_date(self.date_of_death)}"

    @property
    def url(self):
        return url_for('catalog.author_detail', author_id=self.id)

    def __repr__(self):
        return f"<Author id={self.id} name={self.name!r}>"

    def __str__(self):
        return f"{self.name} (born: {self.date_of_birth}, died: {self.date_of_death})"


class Genre(db.Model):
    __tablename__ = 'genres'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    # escaped text: up to 100 characters typed, each can grow to an entity
    name = db.Column(db.String(500), nullable=False)

    books = db.relationship('Book', secondary=book_genres, back_populates='genres')

    @property
    def url(self):
        return url_for('catalog.genre_detail', genre_id=self.id)

    def __repr__(self):
        return f"<Genre id={self.id} name={self.name!r}>"


class Book(db.Model):
    __tablename__ = 'books'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(255), nullable=False)
    summary = db.Column(db.Text, nullable=False)
    isbn = db.Column(db.String(32), nullable=False)

    author_id = db.Column(db.Integer, db.ForeignKey('authors.id'), nullable=False)
    author = db.relationship('Author', back_populates='books')
    genres = db.relationship('Genre', secondary=book_genres, back_populates='books')
    instances = db.relationship('BookInstance', back_populates='book')

    @property
    def url(self):
        return url_for('catalog.book_detail', book_id=self.id)

    def __repr__(self):
        return f"<Book id={self.id} isbn={self.isbn!r} title={self.title!r}>"

    def __str__(self):
        return f"{self.title} by {self.author.name if self.author else 'Unknown'}"


class BookInstance(db.Model):
    __tablename__ = 'book_instances'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    imprint = db.Column(db.String(255), nullable=False)
    status = db.Column(db.String(20), nullable=False, default='Maintenance')
    due_back = db.Column(db.Date, nullable=True)

    book_id = db.Column(db.Integer, db.ForeignKey('books.id'), nullable=False)
    book = db.relationship('Book', back_populates='instances')

    @property
    def due_back_formatted(self):
        return _format_date(self.due_back)

    @property
    def url(self):
        return url_for('catalog.bookinstance_detail', instance_id=self.id)

    def __repr__(self):
        return f"<BookInstance id={self.id} book_id={self.book_id} status={self.status!r}>"
