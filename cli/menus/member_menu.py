# cli/menus/member_menu.py
from cli.context import LibraryApp
from cli.operations import BookOperations, UserOperations
from lms.sa.models import User
from .base import MenuAction, MenuItem, exit_program, logout, run_menu

def member_menu(app: LibraryApp, user: User) -> MenuAction:
    books = BookOperations(app)
    users = UserOperations(app)
    return run_menu(f"Member Menu - {user.full_name}", [
        MenuItem("Borrow a Book", lambda: books.borrow_book(user)),
        MenuItem("Return a Book", lambda: books.return_book(user)),
        MenuItem("View books you have currently borrowed", lambda: books.view_current_loans(user)),
        MenuItem("View Borrowing History", lambda: books.view_borrowing_history(user)),
        MenuItem("Update Profile", lambda: users.update_profile(user)),
        MenuItem("View All Books in the Library", books.view_all_books),
        MenuItem("View Available Books in the Library", books.view_available_books),
        MenuItem("View Books by Genre", books.view_books_by_genre),
        MenuItem("View Book by Title", books.view_book_by_title),
        MenuItem("View Books by Author", books.view_books_by_author),
        MenuItem("Search for Books in the Library", books.search_books),
        MenuItem("Logout", logout),
        MenuItem("Exit the program", exit_program),
    ])
