from bookshelf.models.author import Author
from bookshelf.models.book import Book

__all__ = ["Author", "Book"]
