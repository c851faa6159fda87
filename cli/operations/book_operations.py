# cli/operations/book_operations.py
import click

from cli.context import LibraryApp
from cli.utils import (
    choose_from, echo_header, echo_info, echo_items, echo_success, echo_warning,
    prompt_id, prompt_text, report_errors
)
from lms.sa.models import User
from lms.schemas.book import BOOK_UPDATABLE_FIELDS, BookCreate, BookUpdate, parse_book_field_update
from lms.utils import validators

GENRE_MESSAGE = f"Genre must be non-blank and at most {validators.MAX_GENRE_LENGTH} characters"
ISBN_MESSAGE = "ISBN must be 10 characters (last may be X) or 13 digits"

class BookOperations:
    """Console workflows for the catalogue and for borrowing"""

    def __init__(self, app: LibraryApp):
        self.app = app

    # Catalogue

    @report_errors
    def add_book(self):
        echo_header("Add a book")
        book = BookCreate(
            title=prompt_text("Title"),
            author=prompt_text("Author"),
            genre=prompt_text("Genre", validators.is_valid_genre, GENRE_MESSAGE),
            isbn=prompt_text("ISBN", validators.is_valid_isbn, ISBN_MESSAGE),
            total_copies=prompt_id("Total copies")
        )
        created = self.app.books.add_book(book)
        echo_success(f"Book added with ID {created.id}.")

    @report_errors
    def find_book_by_id(self):
        book = self.app.books.get_book(prompt_id("Book ID"))
        click.echo(str(book))

    @report_errors
    def view_all_books(self):
        echo_header("All books")
        echo_items(self.app.books.get_all_books(), "There are no books in the library.")

    @report_errors
    def view_available_books(self):
        echo_header("Available books")
        echo_items(self.app.books.get_available_books(), "No books are available right now.")

    @report_errors
    def view_borrowed_books(self):
        echo_header("Borrowed books")
        echo_items(self.app.books.get_all_borrowed_books(), "No books are currently borrowed.")

    @report_errors
    def view_books_by_genre(self):
        genre = prompt_text("Genre", validators.is_valid_genre, GENRE_MESSAGE)
        echo_items(self.app.books.get_books_by_genre(genre), f"No books found in genre '{genre}'.")

    @report_errors
    def view_book_by_title(self):
        click.echo(str(self.app.books.get_book_by_title(prompt_text("Title"))))

    @report_errors
    def view_books_by_author(self):
        author = prompt_text("Author")
        echo_items(self.app.books.get_books_by_author(author), f"No books found by '{author}'.")

    @report_errors
    def search_books(self):
        keyword = prompt_text("Search")
        echo_items(self.app.books.search_books(keyword), f"No books match '{keyword}'.")

    @report_errors
    def update_book(self):
        book = self.app.books.get_book(prompt_id("Book ID"))
        click.echo(str(book))
        echo_info("Enter the new details (press Enter to keep the current value).")
        update = BookUpdate(
            title=prompt_text("Title", default=book.title),
            author=prompt_text("Author", default=book.author),
            genre=prompt_text("Genre", validators.is_valid_genre, GENRE_MESSAGE, default=book.genre),
            isbn=prompt_text("ISBN", validators.is_valid_isbn, ISBN_MESSAGE, default=book.isbn),
            total_copies=click.prompt("Total copies", type=click.IntRange(min=1), default=book.total_copies)
        )
        updated = self.app.books.update_book(book.id, update)
        echo_success(f"Book updated: {updated}")

    @report_errors
    def update_book_field(self):
        book = self.app.books.get_book(prompt_id("Book ID"))
        field = choose_from(list(BOOK_UPDATABLE_FIELDS), "Field to update")
        if field == "total_copies":
            value = click.prompt("New total copies", type=int)
        else:
            value = prompt_text(f"New {field.replace('_', ' ')}")
        updated = self.app.books.update_book_field(book.id, parse_book_field_update(field, value))
        echo_success(f"Book updated: {updated}")

    @report_errors
    def remove_book(self):
        book = self.app.books.get_book(prompt_id("Book ID"))
        if not click.confirm(f"Remove '{book.title}'?", default=False):
            echo_info("Nothing removed.")
            return
        self.app.books.delete_book(book.id)
        echo_success("Book removed from the library.")

    # Circulation

    @report_errors
    def borrow_book(self, user: User):
        keyword = prompt_text("Title to search for")
        books = self.app.books.search_books(keyword)
        if not books:
            echo_warning(f"No books match '{keyword}'.")
            return
        book = choose_from(books, "Book to borrow")
        transaction = self.app.transactions.borrow_book(user.id, book.id)
        echo_success(f"You borrowed '{book.title}' (transaction {transaction.id}).")

    @report_errors
    def return_book(self, user: User):
        books = self.app.books.get_borrowed_books_by_user(user.id)
        if not books:
            echo_warning("You have no borrowed books.")
            return
        book = choose_from(books, "Book to return")
        self.app.transactions.return_book_for_user(user.id, book.id)
        echo_success(f"You returned '{book.title}'.")

    @report_errors
    def view_current_loans(self, user: User):
        echo_header("Currently borrowed")
        echo_items(self.app.books.get_borrowed_books_by_user(user.id), "You have no borrowed books.")

    @report_errors
    def view_borrowing_history(self, user: User):
        echo_header("Borrowing history")
        echo_items(self.app.transactions.get_borrowing_history(user.id), "No borrowing history.")
