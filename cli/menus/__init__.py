from .base import MenuAction, MenuItem, run_menu
from .login_menu import login_menu
from .member_menu import member_menu
from .admin_menu import admin_menu
from .book_menu import book_operations_menu
from .user_menu import super_admin_user_menu, standard_admin_user_menu

__all__ = [
    'MenuAction',
    'MenuItem',
    'run_menu',
    'login_menu',
    'member_menu',
    'admin_menu',
    'book_operations_menu',
    'super_admin_user_menu',
    'standard_admin_user_menu'
]
