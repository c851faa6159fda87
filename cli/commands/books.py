# cli/commands/books.py
import click

from lms.exceptions import InvalidInputError
from lms.sa.database import Database
from lms.services import BookService
from ..utils import echo_error, echo_items

@click.group()
def books():
    """Catalogue listing and search"""
    pass

@books.command(name='list')
@click.option('--available', 'show', flag_value='available', help='Only books with a copy on the shelf')
@click.option('--borrowed', 'show', flag_value='borrowed', help='Only books with copies on loan')
@click.option('--genre', default=None, help='Only books of this genre')
@click.pass_obj
def list_books(db: Database, show: str, genre: str):
    """List books in the catalogue

    Example:
        lms books list --available
        lms books list --genre Fantasy
    """
    session = db.get_session()
    try:
        service = BookService(session)
        if genre:
            result = service.get_books_by_genre(genre)
        elif show == 'available':
            result = service.get_available_books()
        elif show == 'borrowed':
            result = service.get_all_borrowed_books()
        else:
            result = service.get_all_books()
        echo_items(result, "No books found.")
    finally:
        session.close()

@books.command()
@click.argument('keyword')
@click.pass_obj
def search(db: Database, keyword: str):
    """Search books by title, author or genre

    Example:
        lms books search tolkien
    """
    session = db.get_session()
    try:
        echo_items(BookService(session).search_books(keyword), f"No books match '{keyword}'.")
    except InvalidInputError as e:
        echo_error(str(e))
        raise click.exceptions.Exit(1)
    finally:
        session.close()
