"""
Endpoints de autores.

    POST   /authors               -> crea autor
    GET    /authors               -> lista autores
    GET    /authors/{id}          -> detalle (404 si no existe)
    PUT    /authors/{id}          -> actualiza los campos enviados (404 si no existe)
    DELETE /authors/{id}          -> borra autor y sus libros (204)
    GET    /authors/{id}/books    -> libros del autor
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..services import AuthorService

router = APIRouter(prefix="/authors", tags=["authors"])


def get_author_service(db: Session = Depends(get_db)) -> AuthorService:
    return AuthorService(db)


@router.post("", response_model=schemas.Author)
def create_author(author: schemas.AuthorCreate, service: AuthorService = Depends(get_author_service)):
    return service.create(author)


@router.get("", summary="List authors", response_model=List[schemas.Author])
def list_authors(service: AuthorService = Depends(get_author_service)):
    """Lista todos los autores."""
    return service.list_all()


@router.get("/{author_id}", response_model=schemas.Author)
def read_author(author_id: int, service: AuthorService = Depends(get_author_service)):
    author = service.get(author_id)
    if author is None:
        raise HTTPException(status_code=404, detail="Author not found")
    return author


@router.put("/{author_id}", response_model=schemas.Author)
def update_author(
    author_id: int,
    payload: schemas.AuthorUpdate,
    service: AuthorService = Depends(get_author_service),
):
    author = service.update(author_id, payload)
    if author is None:
        raise HTTPException(status_code=404, detail="Author not found")
    return author


@router.delete("/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_author(author_id: int, service: AuthorService = Depends(get_author_service)):
    """Borra el autor; sus libros se eliminan en la misma transacción."""
    if not service.delete(author_id):
        raise HTTPException(status_code=404, detail="Author not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{author_id}/books", response_model=List[schemas.Book])
def read_author_books(author_id: int, service: AuthorService = Depends(get_author_service)):
    """
    Devuelve los libros de un autor.

    Si el autor no existe la lista sale vacía (no es un 404).
    """
    return service.list_books(author_id)
