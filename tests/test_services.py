import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from library_service import models, schemas
from library_service.services import AuthorNotFound, AuthorService, BookService


def _author(db, name="Gabriel"):
    return AuthorService(db).create(
        schemas.AuthorCreate(name=name, nationality="Colombiana", birth_date=datetime.date(1927, 3, 6))
    )


def _book(db, author_id, title="Cien años de soledad", genre="Novela"):
    return BookService(db).create(
        schemas.BookCreate(title=title, genre=genre, price=12.0, author_id=author_id)
    )


def test_get_missing_returns_none(db):
    assert AuthorService(db).get(1) is None
    assert BookService(db).get(1) is None
    assert AuthorService(db).update(1, schemas.AuthorUpdate(name="x")) is None
    assert BookService(db).update(1, schemas.BookUpdate(title="x")) is None


def test_delete_missing_returns_false(db):
    assert AuthorService(db).delete(1) is False
    assert BookService(db).delete(1) is False


def test_create_book_unknown_author_persists_nothing(db):
    with pytest.raises(AuthorNotFound) as info:
        BookService(db).create(schemas.BookCreate(title="Huérfano", author_id=3))

    assert info.value.author_id == 3
    assert db.query(models.Book).count() == 0


def test_author_delete_removes_books_in_one_transaction(db):
    author = _author(db)
    _book(db, author.id)
    _book(db, author.id, title="El otoño del patriarca")

    assert AuthorService(db).delete(author.id) is True

    assert db.query(models.Author).count() == 0
    assert db.query(models.Book).count() == 0


def test_removing_book_from_author_collection_deletes_it(db):
    author = _author(db)
    book = _book(db, author.id)

    author.books.remove(book)
    db.commit()

    assert db.get(models.Book, book.id) is None


def test_update_preserves_identifier(db):
    author = _author(db)
    updated = AuthorService(db).update(author.id, schemas.AuthorUpdate(biography="Nobel 1982"))

    assert updated.id == author.id
    assert updated.biography == "Nobel 1982"
    assert updated.nationality == "Colombiana"


def test_list_by_genre_ignores_case(db):
    author = _author(db)
    novela = _book(db, author.id, genre="Novela")
    _book(db, author.id, title="Relato", genre="Cuento")

    service = BookService(db)
    assert [b.id for b in service.list_by_genre("NOVELA")] == [novela.id]
    assert service.list_by_genre("novela") == service.list_by_genre("Novela")


def test_list_books_of_author(db):
    first = _author(db)
    second = _author(db, name="Isabel")
    book = _book(db, first.id)
    _book(db, second.id, title="La casa de los espíritus")

    assert [b.id for b in AuthorService(db).list_books(first.id)] == [book.id]


def test_storage_rejects_book_with_dangling_author(db):
    db.add(models.Book(title="Sin dueño", author_id=999))

    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
    assert db.query(models.Book).count() == 0


def test_storage_rejects_book_without_author(db):
    db.add(models.Book(title="Sin dueño", author_id=None))

    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
    assert db.query(models.Book).count() == 0
