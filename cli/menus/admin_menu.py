# cli/menus/admin_menu.py
from cli.context import LibraryApp
from lms.sa.models import User
from .base import MenuAction, MenuItem, exit_program, logout, run_menu, submenu
from .book_menu import book_operations_menu
from .user_menu import standard_admin_user_menu, super_admin_user_menu

def admin_menu(app: LibraryApp, user: User) -> MenuAction:
    """Top menu of an administrator; the user operations offered depend on the admin type"""
    if user.is_super_admin:
        title, user_menu = "Super Admin Menu", super_admin_user_menu
    else:
        title, user_menu = "Standard Admin Menu", standard_admin_user_menu

    return run_menu(f"{title} - {user.full_name}", [
        MenuItem("User Related Operations", lambda: submenu(user_menu(app))),
        MenuItem("Book Related Operations", lambda: submenu(book_operations_menu(app))),
        MenuItem("Logout", logout),
        MenuItem("Exit the program", exit_program),
    ])
