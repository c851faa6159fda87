# cli/menus/book_menu.py
from cli.context import LibraryApp
from cli.operations import BookOperations
from .base import MenuAction, MenuItem, back, exit_program, run_menu

def book_operations_menu(app: LibraryApp) -> MenuAction:
    """Catalogue management for administrators"""
    ops = BookOperations(app)
    return run_menu("Book Operations", [
        MenuItem("Add a new book to the library", ops.add_book),
        MenuItem("Find a book by ID", ops.find_book_by_id),
        MenuItem("View all books in the library", ops.view_all_books),
        MenuItem("Update the details of a book", ops.update_book),
        MenuItem("Remove a book from the library", ops.remove_book),
        MenuItem("View all borrowed books from the library", ops.view_borrowed_books),
        MenuItem("View available books in the library", ops.view_available_books),
        MenuItem("View books by genre", ops.view_books_by_genre),
        MenuItem("View book by title", ops.view_book_by_title),
        MenuItem("View books by author", ops.view_books_by_author),
        MenuItem("Search for books in the library", ops.search_books),
        MenuItem("Update a specific field of a book", ops.update_book_field),
        MenuItem("Go back to the previous menu", back),
        MenuItem("Exit the program", exit_program),
    ])
