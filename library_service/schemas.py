from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# El JSON de la API va en camelCase (birthDate, authorId...), pero también
# se aceptan los nombres en snake_case al recibir datos
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# -------------------------------
# Autores
# -------------------------------
class AuthorBase(CamelModel):
    name: str
    nationality: Optional[str] = None
    birth_date: Optional[date] = None
    biography: Optional[str] = Field(None, max_length=1000)


class AuthorCreate(AuthorBase):
    pass


class AuthorUpdate(CamelModel):
    """Solo se modifican los campos que vienen en el body."""

    name: Optional[str] = None
    nationality: Optional[str] = None
    birth_date: Optional[date] = None
    biography: Optional[str] = Field(None, max_length=1000)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        if value is None:
            raise ValueError("name may not be null")
        return value


class Author(AuthorBase):
    id: int


# Versión ligera del autor para mostrarlo dentro del libro
class AuthorForBook(CamelModel):
    id: int
    name: str


# -------------------------------
# Libros
# -------------------------------
class BookBase(CamelModel):
    title: str
    genre: Optional[str] = None
    publication_date: Optional[date] = None
    price: Optional[float] = None


class BookCreate(BookBase):
    # El libro se crea siempre asociado a un autor existente
    author_id: int


class BookUpdate(CamelModel):
    title: Optional[str] = None
    genre: Optional[str] = None
    publication_date: Optional[date] = None
    price: Optional[float] = None
    author_id: Optional[int] = None

    @field_validator("title", "author_id")
    @classmethod
    def required_not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} may not be null")
        return value


class Book(BookBase):
    id: int
    author_id: int
    author: Optional[AuthorForBook] = None
