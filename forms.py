"""Form classes validating and sanitizing catalog input.

Every create and update form goes through one of these classes. Text input is
trimmed as it is read from the request and validated as typed; the escaped
form of each text field is what gets stored. Reference fields (a book's
author, a copy's book) are checked against the database.
"""
from dataclasses import dataclass
from datetime import datetime

from flask_wtf import FlaskForm
from markupsafe import Markup, escape
from wtforms import DateField, SelectField, SelectMultipleField, StringField
from wtforms.validators import AnyOf, InputRequired, Length, Optional, Regexp, ValidationError
from wtforms.widgets import CheckboxInput, ListWidget, TextArea

from data_models import BOOK_INSTANCE_STATUSES, MAX_ID, Author, Book, Genre, db


ALPHANUMERIC = r'^[A-Za-z0-9]+$'


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def collect_errors(form):
    """Flatten ``form.errors`` into an ordered list of :class:`FieldError`."""
    return [
        FieldError(name, message)
        for name, messages in form.errors.items()
        for message in messages
    ]


def _record_id(value):
    record_id = int(value)
    if not 0 < record_id <= MAX_ID:
        raise ValueError(f"{value!r} is not a record id")
    return record_id


def _coerce_id(value):
    if value is None or value == '':
        return None
    return _record_id(value)


class SanitizedStringField(StringField):
    """String input trimmed when read from submitted form data.

    Validators see the trimmed text as typed. ``cleaned`` is the escaped form
    that gets stored, and stored values are unescaped again when a form is
    filled from a record.
    """

    def process_data(self, value):
        self.data = None if value is None else Markup(value).unescape()

    def process_formdata(self, valuelist):
        if valuelist:
            self.data = valuelist[0].strip()

    @property
    def cleaned(self):
        return None if self.data is None else str(escape(self.data))


class SanitizedTextAreaField(SanitizedStringField):
    widget = TextArea()


class ISODateField(DateField):
    """Date input in ISO-8601 calendar form (YYYY-MM-DD), with a configurable parse error."""

    def __init__(self, label=None, validators=None, invalid_message='Invalid date', **kwargs):
        super().__init__(label, validators, **kwargs)
        self.invalid_message = invalid_message

    def process_formdata(self, valuelist):
        if not valuelist or not valuelist[0].strip():
            self.data = None
            return
        try:
            self.data = datetime.strptime(valuelist[0].strip(), '%Y-%m-%d').date()
        except ValueError:
            self.data = None
            raise ValueError(self.invalid_message)

    def _value(self):
        if self.raw_data:
            return ' '.join(self.raw_data)
        return self.data.isoformat() if self.data else ''


class MultiCheckboxField(SelectMultipleField):
    widget = ListWidget(prefix_label=False)
    option_widget = CheckboxInput()


class RecordExists:
    """Validator checking that the selected id(s) resolve to stored records."""

    def __init__(self, model, message=None):
        self.model = model
        self.message = message or f"{model.__name__} not found."

    def __call__(self, form, field):
        if field.data is None:
            return
        ids = field.data if isinstance(field.data, list) else [field.data]
        for record_id in ids:
            if db.session.get(self.model, record_id) is None:
                raise ValidationError(self.message)


class AuthorForm(FlaskForm):
    first_name = SanitizedStringField('First name', validators=[
        Length(min=1, message='First name must be specified.'),
        Length(max=100, message='First name must be at most 100 characters.'),
        Regexp(ALPHANUMERIC, message='First name has non-alphanumeric characters.'),
    ])
    family_name = SanitizedStringField('Family name', validators=[
        Length(min=1, message='Family name must be specified.'),
        Length(max=100, message='Family name must be at most 100 characters.'),
        Regexp(ALPHANUMERIC, message='Family name has non-alphanumeric characters.'),
    ])
    date_of_birth = ISODateField('Date of birth', validators=[Optional()],
                                 invalid_message='Invalid date of birth')
    date_of_death = ISODateField('Date of death', validators=[Optional()],
                                 invalid_message='Invalid date of death')

    @classmethod
    def from_record(cls, author):
        return cls(data={
            'first_name': author.first_name,
            'family_name': author.family_name,
            'date_of_birth': author.date_of_birth,
            'date_of_death': author.date_of_death,
        })

    def apply_to(self, author):
        author.first_name = self.first_name.cleaned
        author.family_name = self.family_name.cleaned
        author.date_of_birth = self.date_of_birth.data
        author.date_of_death = self.date_of_death.data
        return author


class GenreForm(FlaskForm):
    name = SanitizedStringField('Genre', validators=[
        Length(min=3, max=100, message='Genre name must be between 3 and 100 characters.'),
    ])

    @classmethod
    def from_record(cls, genre):
        return cls(data={'name': genre.name})

    def apply_to(self, genre):
        genre.name = self.name.cleaned
        return genre


class BookForm(FlaskForm):
    title = SanitizedStringField('Title', validators=[
        Length(min=1, message='Title must not be empty.'),
    ])
    author = SelectField('Author', coerce=_coerce_id, choices=[], validate_choice=False, validators=[
        InputRequired(message='Author must not be empty.'),
        RecordExists(Author, message='Selected author does not exist.'),
    ])
    summary = SanitizedTextAreaField('Summary', validators=[
        Length(min=1, message='Summary must not be empty.'),
    ])
    isbn = SanitizedStringField('ISBN', validators=[
        Length(min=1, message='ISBN must not be empty.'),
    ])
    genre = MultiCheckboxField('Genre', coerce=_record_id, choices=[], validate_choice=False, validators=[
        RecordExists(Genre, message='Selected genre does not exist.'),
    ])

    @classmethod
    def from_record(cls, book):
        return cls(data={
            'title': book.title,
            'author': book.author_id,
            'summary': book.summary,
            'isbn': book.isbn,
            'genre': [genre.id for genre in book.genres],
        })

    @property
    def genre_ids(self):
        return list(self.genre.data or [])

    def set_choices(self, choices):
        """Populate the author select and genre checkboxes from ``BookFormChoices``."""
        self.author.choices = [('', '-- select an author --')] + [
            (author.id, author.name) for author in choices.authors
        ]
        self.genre.choices = [(genre.id, Markup(genre.name)) for genre in choices.genres]

    def apply_to(self, book, genres):
        book.title = self.title.cleaned
        book.author_id = self.author.data
        book.summary = self.summary.cleaned
        book.isbn = self.isbn.cleaned
        book.genres = list(genres)
        return book


class BookInstanceForm(FlaskForm):
    book = SelectField('Book', coerce=_coerce_id, choices=[], validate_choice=False, validators=[
        InputRequired(message='Book must be specified.'),
        RecordExists(Book, message='Selected book does not exist.'),
    ])
    imprint = SanitizedStringField('Imprint', validators=[
        Length(min=1, message='Imprint must be specified.'),
    ])
    status = SelectField(
        'Status',
        choices=[(status, status) for status in BOOK_INSTANCE_STATUSES],
        default='Maintenance',
        validate_choice=False,
        validators=[AnyOf(BOOK_INSTANCE_STATUSES, message='Status must be one of: %(values)s.')],
    )
    due_back = ISODateField('Date when book available', validators=[Optional()],
                            invalid_message='Invalid date')

    @classmethod
    def from_record(cls, instance):
        return cls(data={
            'book': instance.book_id,
            'imprint': instance.imprint,
            'status': instance.status,
            'due_back': instance.due_back,
        })

    def set_choices(self, books):
        self.book.choices = [('', '-- select a book --')] + [
            (book.id, Markup(book.title)) for book in books
        ]

    def apply_to(self, instance):
        instance.book_id = self.book.data
        instance.imprint = self.imprint.cleaned
        instance.status = self.status.data
        instance.due_back = self.due_back.data
        return instance
