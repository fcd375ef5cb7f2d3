"""
Endpoints de libros.

    POST   /books                 -> crea libro (authorId obligatorio y existente)
    GET    /books                 -> lista libros
    GET    /books/{id}            -> detalle (404 si no existe)
    PUT    /books/{id}            -> actualiza los campos enviados (404 si no existe)
    DELETE /books/{id}            -> borra libro (204)
    GET    /books/genre/{genre}   -> libros de un género (sin distinguir mayúsculas)
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..services import AuthorNotFound, BookService

router = APIRouter(prefix="/books", tags=["books"])


def get_book_service(db: Session = Depends(get_db)) -> BookService:
    return BookService(db)


@router.post("", response_model=schemas.Book)
def create_book(book: schemas.BookCreate, service: BookService = Depends(get_book_service)):
    """
    Crea un libro.

    Si el authorId no existe se devuelve 404 y no se guarda nada.
    """
    try:
        return service.create(book)
    except AuthorNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=List[schemas.Book])
def list_books(service: BookService = Depends(get_book_service)):
    return service.list_all()


@router.get("/genre/{genre}", response_model=List[schemas.Book])
def list_books_by_genre(genre: str, service: BookService = Depends(get_book_service)):
    return service.list_by_genre(genre)


@router.get("/{book_id}", response_model=schemas.Book)
def get_book(book_id: int, service: BookService = Depends(get_book_service)):
    book = service.get(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.put("/{book_id}", response_model=schemas.Book)
def update_book(
    book_id: int,
    payload: schemas.BookUpdate,
    service: BookService = Depends(get_book_service),
):
    try:
        book = service.update(book_id, payload)
    except AuthorNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, service: BookService = Depends(get_book_service)):
    if not service.delete(book_id):
        raise HTTPException(status_code=404, detail="Book not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
