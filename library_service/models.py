from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from .database import Base


class Author(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    nationality = Column(String)
    birth_date = Column(Date)
    biography = Column(String(1000), nullable=True)

    # Un autor es dueño de sus libros: al borrarlo (o sacar un libro de la
    # colección sin reasignarlo) el libro se elimina
    books = relationship(
        "Book",
        back_populates="author",
        cascade="all, delete-orphan",
        order_by="Book.id",
    )

    def __repr__(self):
        return f"Author(id={self.id}, name={self.name!r})"


class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    genre = Column(String)
    publication_date = Column(Date)
    price = Column(Float)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=False, index=True)

    author = relationship("Author", back_populates="books")

    def __repr__(self):
        return f"<Book id={self.id} title={self.title!r}>"
