"""
Acceso a datos de autores y libros.

Los repositorios solo hacen flush; el commit/rollback es responsabilidad de
la capa de servicios, que es quien define la unidad de trabajo.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from . import models


class AuthorRepository:
    def __init__(self, db: Session):
        self.db = db

    def add(self, author: models.Author) -> models.Author:
        self.db.add(author)
        self.db.flush()
        return author

    def list_all(self) -> List[models.Author]:
        stmt = select(models.Author).order_by(models.Author.id)
        return list(self.db.execute(stmt).scalars().all())

    def get(self, author_id: int) -> Optional[models.Author]:
        return self.db.get(models.Author, author_id)

    def delete(self, author: models.Author) -> None:
        self.db.delete(author)
        self.db.flush()


class BookRepository:
    def __init__(self, db: Session):
        self.db = db

    def add(self, book: models.Book) -> models.Book:
        self.db.add(book)
        self.db.flush()
        return book

    def list_all(self) -> List[models.Book]:
        stmt = select(models.Book).order_by(models.Book.id)
        return list(self.db.execute(stmt).scalars().all())

    def list_by_author(self, author_id: int) -> List[models.Book]:
        stmt = (
            select(models.Book)
            .where(models.Book.author_id == author_id)
            .order_by(models.Book.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get(self, book_id: int) -> Optional[models.Book]:
        return self.db.get(models.Book, book_id)

    def delete(self, book: models.Book) -> None:
        self.db.delete(book)
        self.db.flush()

    def delete_by_author(self, author_id: int) -> int:
        """Marca para borrar todos los libros de un autor y devuelve cuántos son."""
        books = self.list_by_author(author_id)
        for book in books:
            self.db.delete(book)
        return len(books)
