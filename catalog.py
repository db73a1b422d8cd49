from flask import Blueprint, abort, current_app, redirect, render_template, url_for
from markupsafe import Markup

import queries
from data_models import Author, Book, BookInstance, Genre, db
from forms import AuthorForm, BookForm, BookInstanceForm, GenreForm, collect_errors


bp = Blueprint('catalog', __name__, url_prefix='/catalog')


@bp.get('/')
def index():
    counts = queries.catalog_counts(db.session)
    return render_template('index.html', title='Local Library Home', counts=counts)


# --- Authors ---

@bp.get('/authors')
def author_list():
    authors = queries.list_authors(db.session)
    return render_template('author_list.html', title='Author List', authors=authors)


@bp.get('/author/<id:author_id>')
def author_detail(author_id: int):
    detail = queries.get_author_detail(db.session, author_id)
    if detail is None:
        abort(404, description='Author not found.')
    return render_template('author_detail.html', title='Author Detail', detail=detail)


@bp.get('/author/create')
def author_create_get():
    return render_template('author_form.html', title='Add Author', form=AuthorForm())


@bp.post('/author/create')
def author_create_post():
    form = AuthorForm()
    if not form.validate():
        return render_template('author_form.html', title='Add Author', form=form,
                               errors=collect_errors(form))

    author = form.apply_to(Author())
    db.session.add(author)
    db.session.commit()
    current_app.logger.info('Created author %s', author.id)
    return redirect(author.url)


@bp.get('/author/<id:author_id>/delete')
def author_delete_get(author_id: int):
    detail = queries.get_author_detail(db.session, author_id)
    if detail is None:
        return redirect(url_for('catalog.author_list'))
    return render_template('author_delete.html', title='Delete Author', detail=detail)


@bp.post('/author/<id:author_id>/delete')
def author_delete_post(author_id: int):
    detail = queries.get_author_detail(db.session, author_id)
    if detail is None:
        return redirect(url_for('catalog.author_list'))
    if detail.books:
        current_app.logger.info('Refused to delete author %s: %d book(s) remain', author_id, len(detail.books))
        return render_template('author_delete.html', title='Delete Author', detail=detail)

    db.session.delete(detail.author)
    db.session.commit()
    current_app.logger.info('Deleted author %s', author_id)
    return redirect(url_for('catalog.author_list'))


@bp.get('/author/<id:author_id>/update')
def author_update_get(author_id: int):
    author = db.session.get(Author, author_id)
    if author is None:
        abort(404, description='Author not found.')
    return render_template('author_form.html', title='Update Author', form=AuthorForm.from_record(author))


@bp.post('/author/<id:author_id>/update')
def author_update_post(author_id: int):
    author = db.session.get(Author, author_id)
    if author is None:
        abort(404, description='Author not found.')

    form = AuthorForm()
    if not form.validate():
        return render_template('author_form.html', title='Update Author', form=form,
                               errors=collect_errors(form))

    form.apply_to(author)
    db.session.commit()
    current_app.logger.info('Updated author %s', author.id)
    return redirect(author.url)


# --- Genres ---

@bp.get('/genres')
def genre_list():
    genres = queries.list_genres(db.session)
    return render_template('genre_list.html', title='Genre List', genres=genres)


@bp.get('/genre/<id:genre_id>')
def genre_detail(genre_id: int):
    detail = queries.get_genre_detail(db.session, genre_id)
    if detail is None:
        abort(404, description='Genre not found.')
    return render_template('genre_detail.html', title='Genre Detail', detail=detail)


@bp.get('/genre/create')
def genre_create_get():
    return render_template('genre_form.html', title='Create Genre', form=GenreForm())


@bp.post('/genre/create')
def genre_create_post():
    form = GenreForm()
    if not form.validate():
        return render_template('genre_form.html', title='Create Genre', form=form,
                               errors=collect_errors(form))

    existing = queries.find_genre_by_name(db.session, form.name.cleaned)
    if existing is not None:
        current_app.logger.info('Genre %r already exists as %s', form.name.data, existing.id)
        return redirect(existing.url)

    genre = form.apply_to(Genre())
    db.session.add(genre)
    db.session.commit()
    current_app.logger.info('Created genre %s', genre.id)
    return redirect(genre.url)


@bp.get('/genre/<id:genre_id>/delete')
def genre_delete_get(genre_id: int):
    detail = queries.get_genre_detail(db.session, genre_id)
    if detail is None:
        return redirect(url_for('catalog.genre_list'))
    return render_template('genre_delete.html', title='Delete Genre', detail=detail)


@bp.post('/genre/<id:genre_id>/delete')
def genre_delete_post(genre_id: int):
    detail = queries.get_genre_detail(db.session, genre_id)
    if detail is None:
        return redirect(url_for('catalog.genre_list'))
    if detail.books:
        current_app.logger.info('Refused to delete genre %s: %d book(s) remain', genre_id, len(detail.books))
        return render_template('genre_delete.html', title='Delete Genre', detail=detail)

    db.session.delete(detail.genre)
    db.session.commit()
    current_app.logger.info('Deleted genre %s', genre_id)
    return redirect(url_for('catalog.genre_list'))


@bp.get('/genre/<id:genre_id>/update')
def genre_update_get(genre_id: int):
    genre = db.session.get(Genre, genre_id)
    if genre is None:
        abort(404, description='Genre not found.')
    return render_template('genre_form.html', title='Update Genre', form=GenreForm.from_record(genre))


@bp.post('/genre/<id:genre_id>/update')
def genre_update_post(genre_id: int):
    genre = db.session.get(Genre, genre_id)
    if genre is None:
        abort(404, description='Genre not found.')

    form = GenreForm()
    if not form.validate():
        return render_template('genre_form.html', title='Update Genre', form=form,
                               errors=collect_errors(form))

    form.apply_to(genre)
    db.session.commit()
    current_app.logger.info('Updated genre %s', genre.id)
    return redirect(genre.url)


# --- Books ---

@bp.get('/books')
def book_list():
    books = queries.list_books(db.session)
    return render_template('book_list.html', title='Book List', books=books)


@bp.get('/book/<id:book_id>')
def book_detail(book_id: int):
    detail = queries.get_book_detail(db.session, book_id)
    if detail is None:
        abort(404, description='Book not found.')
    return render_template('book_detail.html', title=Markup(detail.book.title), detail=detail)


@bp.get('/book/create')
def book_create_get():
    form = BookForm()
    form.set_choices(queries.get_book_form_choices(db.session))
    return render_template('book_form.html', title='Add Book', form=form)


@bp.post('/book/create')
def book_create_post():
    form = BookForm()
    if not form.validate():
        form.set_choices(queries.get_book_form_choices(db.session))
        return render_template('book_form.html', title='Add Book', form=form,
                               errors=collect_errors(form))

    genres = queries.genres_by_ids(db.session, form.genre_ids)
    book = form.apply_to(Book(), genres)
    db.session.add(book)
    db.session.commit()
    current_app.logger.info('Created book %s', book.id)
    return redirect(book.url)


@bp.get('/book/<id:book_id>/delete')
def book_delete_get(book_id: int):
    detail = queries.get_book_detail(db.session, book_id)
    if detail is None:
        return redirect(url_for('catalog.book_list'))
    return render_template('book_delete.html', title='Delete Book', detail=detail)


@bp.post('/book/<id:book_id>/delete')
def book_delete_post(book_id: int):
    detail = queries.get_book_detail(db.session, book_id)
    if detail is None:
        return redirect(url_for('catalog.book_list'))
    if detail.instances:
        current_app.logger.info('Refused to delete book %s: %d copy(ies) remain', book_id, len(detail.instances))
        return render_template('book_delete.html', title='Delete Book', detail=detail)

    db.session.delete(detail.book)
    db.session.commit()
    current_app.logger.info('Deleted book %s', book_id)
    return redirect(url_for('catalog.book_list'))


@bp.get('/book/<id:book_id>/update')
def book_update_get(book_id: int):
    book = db.session.get(Book, book_id)
    if book is None:
        abort(404, description='Book not found.')
    form = BookForm.from_record(book)
    form.set_choices(queries.get_book_form_choices(db.session))
    return render_template('book_form.html', title='Update Book', form=form)


@bp.post('/book/<id:book_id>/update')
def book_update_post(book_id: int):
    book = db.session.get(Book, book_id)
    if book is None:
        abort(404, description='Book not found.')

    form = BookForm()
    if not form.validate():
        form.set_choices(queries.get_book_form_choices(db.session))
        return render_template('book_form.html', title='Update Book', form=form,
                               errors=collect_errors(form))

    genres = queries.genres_by_ids(db.session, form.genre_ids)
    form.apply_to(book, genres)
    db.session.commit()
    current_app.logger.info('Updated book %s', book.id)
    return redirect(book.url)


# --- Book instances ---

@bp.get('/bookinstances')
def bookinstance_list():
    instances = queries.list_book_instances(db.session)
    return render_template('bookinstance_list.html', title='Book Instance List', instances=instances)


@bp.get('/bookinstance/<id:instance_id>')
def bookinstance_detail(instance_id: int):
    detail = queries.get_book_instance_detail(db.session, instance_id)
    if detail is None:
        abort(404, description='Book copy not found.')
    return render_template('bookinstance_detail.html', title='Book Copy', detail=detail)


@bp.get('/bookinstance/create')
def bookinstance_create_get():
    form = BookInstanceForm()
    form.set_choices(queries.list_book_choices(db.session))
    return render_template('bookinstance_form.html', title='Create Book Copy', form=form)


@bp.post('/bookinstance/create')
def bookinstance_create_post():
    form = BookInstanceForm()
    if not form.validate():
        form.set_choices(queries.list_book_choices(db.session))
        return render_template('bookinstance_form.html', title='Create Book Copy', form=form,
                               errors=collect_errors(form))

    instance = form.apply_to(BookInstance())
    db.session.add(instance)
    db.session.commit()
    current_app.logger.info('Created book instance %s', instance.id)
    return redirect(instance.url)


@bp.get('/bookinstance/<id:instance_id>/delete')
def bookinstance_delete_get(instance_id: int):
    instance = db.session.get(BookInstance, instance_id)
    if instance is None:
        return redirect(url_for('catalog.bookinstance_list'))
    return render_template('bookinstance_delete.html', title='Delete Book Copy', instance=instance)


@bp.post('/bookinstance/<id:instance_id>/delete')
def bookinstance_delete_post(instance_id: int):
    instance = db.session.get(BookInstance, instance_id)
    if instance is not None:
        db.session.delete(instance)
        db.session.commit()
        current_app.logger.info('Deleted book instance %s', instance_id)
    return redirect(url_for('catalog.bookinstance_list'))


@bp.get('/bookinstance/<id:instance_id>/update')
def bookinstance_update_get(instance_id: int):
    instance = db.session.get(BookInstance, instance_id)
    if instance is None:
        abort(404, description='Book copy not found.')
    form = BookInstanceForm.from_record(instance)
    form.set_choices(queries.list_book_choices(db.session))
    return render_template('bookinstance_form.html', title='Update Book Copy', form=form)


@bp.post('/bookinstance/<id:instance_id>/update')
def bookinstance_update_post(instance_id: int):
    instance = db.session.get(BookInstance, instance_id)
    if instance is None:
        abort(404, description='Book copy not found.')

    form = BookInstanceForm()
    if not form.validate():
        form.set_choices(queries.list_book_choices(db.session))
        return render_template('bookinstance_form.html', title='Update Book Copy', form=form,
                               errors=collect_errors(form))

    form.apply_to(instance)
    db.session.commit()
    current_app.logger.info('Updated book instance %s', instance.id)
    return redirect(instance.url)
