"""
Capa de servicios para autores y libros.

Cada método público es una unidad de trabajo: hace commit si todo va bien y
rollback si la base de datos falla. La ausencia de un registro se devuelve
como ``None`` (o ``False`` en los borrados) para que el controlador decida
la respuesta HTTP.
"""

import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models, schemas
from .repositories import AuthorRepository, BookRepository

logger = logging.getLogger(__name__)


class AuthorNotFound(LookupError):
    """El authorId indicado para un libro no existe."""

    def __init__(self, author_id: int):
        super().__init__(f"Author {author_id} not found")
        self.author_id = author_id


@contextmanager
def unit_of_work(db: Session):
    try:
        yield
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


class AuthorService:
    def __init__(self, db: Session):
        self.db = db
        self.authors = AuthorRepository(db)
        self.books = BookRepository(db)

    def create(self, data: schemas.AuthorCreate) -> models.Author:
        with unit_of_work(self.db):
            author = self.authors.add(models.Author(**data.model_dump()))
        self.db.refresh(author)
        logger.info("Author created id=%s", author.id)
        return author

    def list_all(self) -> List[models.Author]:
        return self.authors.list_all()

    def get(self, author_id: int) -> Optional[models.Author]:
        return self.authors.get(author_id)

    def update(self, author_id: int, data: schemas.AuthorUpdate) -> Optional[models.Author]:
        author = self.authors.get(author_id)
        if author is None:
            return None

        with unit_of_work(self.db):
            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(author, field, value)
            self.db.flush()
        self.db.refresh(author)
        logger.info("Author updated id=%s", author_id)
        return author

    def delete(self, author_id: int) -> bool:
        """
        Borra el autor y todos sus libros en una sola transacción:
        primero los libros, después el autor.
        """
        author = self.authors.get(author_id)
        if author is None:
            return False

        with unit_of_work(self.db):
            removed = self.books.delete_by_author(author_id)
            self.authors.delete(author)
        logger.info("Author deleted id=%s books_removed=%s", author_id, removed)
        return True

    def list_books(self, author_id: int) -> List[models.Book]:
        return self.books.list_by_author(author_id)


class BookService:
    def __init__(self, db: Session):
        self.db = db
        self.authors = AuthorRepository(db)
        self.books = BookRepository(db)

    def _require_author(self, author_id: int) -> models.Author:
        author = self.authors.get(author_id)
        if author is None:
            raise AuthorNotFound(author_id)
        return author

    def create(self, data: schemas.BookCreate) -> models.Book:
        fields = data.model_dump(exclude={"author_id"})
        author = self._require_author(data.author_id)

        with unit_of_work(self.db):
            book = self.books.add(models.Book(author=author, **fields))
        self.db.refresh(book)
        logger.info("Book created id=%s author_id=%s", book.id, author.id)
        return book

    def list_all(self) -> List[models.Book]:
        return self.books.list_all()

    def get(self, book_id: int) -> Optional[models.Book]:
        return self.books.get(book_id)

    def update(self, book_id: int, data: schemas.BookUpdate) -> Optional[models.Book]:
        book = self.books.get(book_id)
        if book is None:
            return None

        changes = data.model_dump(exclude_unset=True)
        if "author_id" in changes:
            book.author = self._require_author(changes.pop("author_id"))

        with unit_of_work(self.db):
            for field, value in changes.items():
                setattr(book, field, value)
            self.db.flush()
        self.db.refresh(book)
        logger.info("Book updated id=%s", book_id)
        return book

    def delete(self, book_id: int) -> bool:
        book = self.books.get(book_id)
        if book is None:
            return False

        with unit_of_work(self.db):
            self.books.delete(book)
        logger.info("Book deleted id=%s", book_id)
        return True

    def list_by_genre(self, genre: str) -> List[models.Book]:
        """
        Filtra por género sin distinguir mayúsculas/minúsculas
        (comparación en memoria con ``casefold``).
        """
        wanted = genre.casefold()
        return [
            book for book in self.books.list_all()
            if book.genre is not None and book.genre.casefold() == wanted
        ]
