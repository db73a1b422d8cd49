"""Author list, detail, create, update and delete routes."""
from datetime import date

from data_models import db, Author, Book


def test_author_list_sorted_by_family_name(client, make_author):
    make_author('Jim', 'Jones')
    make_author('Ben', 'Bova')
    make_author('Isaac', 'Asimov')

    resp = client.get('/catalog/authors')

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert body.index('Asimov, Isaac') < body.index('Bova, Ben') < body.index('Jones, Jim')


def test_author_detail_lists_books(client, make_author, make_book):
    author = make_author()
    make_book(title='Foundation', author=author)
    make_book(title='I, Robot', author=author)

    resp = client.get(f'/catalog/author/{author.id}')

    assert resp.status_code == 200
    assert b'Foundation' in resp.data
    assert b'I, Robot' in resp.data


def test_author_detail_missing_is_404(client):
    resp = client.get('/catalog/author/999')
    assert resp.status_code == 404
    assert b'Author not found.' in resp.data


def test_create_author_redirects_to_detail(client):
    resp = client.post('/catalog/author/create', data={
        'first_name': '  Isaac ',
        'family_name': 'Asimov',
        'date_of_birth': '1920-01-02',
        'date_of_death': '',
    })

    author = Author.query.one()
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith(f'/catalog/author/{author.id}')
    assert author.first_name == 'Isaac'
    assert author.family_name == 'Asimov'
    assert author.date_of_birth == date(1920, 1, 2)
    assert author.date_of_death is None


def test_create_author_with_empty_name_reports_errors(client):
    resp = client.post('/catalog/author/create', data={'first_name': '   ', 'family_name': 'Asimov'})

    assert resp.status_code == 200
    assert b'First name must be specified.' in resp.data
    assert b'First name has non-alphanumeric characters.' in resp.data
    assert Author.query.count() == 0


def test_create_author_rejects_non_alphanumeric_name(client):
    resp = client.post('/catalog/author/create', data={'first_name': 'Jean-Luc', 'family_name': 'Picard'})

    assert resp.status_code == 200
    assert b'First name has non-alphanumeric characters.' in resp.data
    assert b'First name must be specified.' not in resp.data
    assert Author.query.count() == 0


def test_create_author_rejects_invalid_date(client):
    resp = client.post('/catalog/author/create', data={
        'first_name': 'Isaac',
        'family_name': 'Asimov',
        'date_of_birth': 'yesterday',
    })

    assert resp.status_code == 200
    assert b'Invalid date of birth' in resp.data
    assert b'value="yesterday"' in resp.data
    assert Author.query.count() == 0


def test_delete_get_lists_dependent_books(client, make_author, make_book):
    author = make_author()
    make_book(title='Foundation', author=author)
    make_book(title='I, Robot', author=author)

    resp = client.get(f'/catalog/author/{author.id}/delete')

    assert resp.status_code == 200
    assert b'Delete the following books' in resp.data
    assert b'Foundation' in resp.data
    assert b'I, Robot' in resp.data


def test_delete_post_refused_while_author_has_books(client, make_author, make_book):
    author = make_author()
    make_book(title='Foundation', author=author)
    make_book(title='I, Robot', author=author)

    resp = client.post(f'/catalog/author/{author.id}/delete')

    assert resp.status_code == 200
    assert b'Foundation' in resp.data
    assert db.session.get(Author, author.id) is not None
    assert Book.query.count() == 2


def test_delete_post_removes_author_without_books(client, make_author):
    author = make_author()
    author_id = author.id

    resp = client.post(f'/catalog/author/{author_id}/delete')

    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/catalog/authors')
    assert db.session.get(Author, author_id) is None
    assert client.get(f'/catalog/author/{author_id}').status_code == 404


def test_delete_get_for_missing_author_redirects_to_list(client):
    resp = client.get('/catalog/author/42/delete')

    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/catalog/authors')


def test_update_get_prefills_form(client, make_author):
    author = make_author(date_of_birth=date(1920, 1, 2))

    resp = client.get(f'/catalog/author/{author.id}/update')

    assert resp.status_code == 200
    assert b'value="Isaac"' in resp.data
    assert b'value="1920-01-02"' in resp.data


def test_update_get_missing_is_404(client):
    assert client.get('/catalog/author/7/update').status_code == 404


def test_update_post_replaces_fields(client, make_author):
    author = make_author(date_of_birth=date(1920, 1, 2))

    resp = client.post(f'/catalog/author/{author.id}/update', data={
        'first_name': 'Arthur',
        'family_name': 'Clarke',
        'date_of_birth': '',
        'date_of_death': '2008-03-19',
    })

    assert resp.status_code == 302
    assert resp.headers['Location'].endswith(f'/catalog/author/{author.id}')
    updated = db.session.get(Author, author.id)
    assert updated.first_name == 'Arthur'
    assert updated.family_name == 'Clarke'
    assert updated.date_of_birth is None
    assert updated.date_of_death == date(2008, 3, 19)
    assert Author.query.count() == 1


def test_update_post_with_errors_leaves_author_unchanged(client, make_author):
    author = make_author()

    resp = client.post(f'/catalog/author/{author.id}/update', data={'first_name': '', 'family_name': 'Clarke'})

    assert resp.status_code == 200
    assert b'First name must be specified.' in resp.data
    assert db.session.get(Author, author.id).family_name == 'Asimov'
