# cli/menus/login_menu.py
import click

from cli.context import LibraryApp
from cli.operations import UserOperations
from cli.utils import echo_success, prompt_text, report_errors
from .admin_menu import admin_menu
from .base import MenuAction, MenuItem, exit_program, run_menu
from .member_menu import member_menu

@report_errors
def login(app: LibraryApp) -> MenuAction:
    """Authenticate and open the menu for the user's role.

    Logging out brings the user back to the login menu.
    """
    username = prompt_text("Username")
    password = click.prompt("Password", hide_input=True)
    user = app.auth.authenticate(username, password)
    echo_success(f"Welcome, {user.full_name}!")

    action = admin_menu(app, user) if user.is_admin else member_menu(app, user)
    return MenuAction.EXIT if action == MenuAction.EXIT else MenuAction.STAY

def login_menu(app: LibraryApp) -> MenuAction:
    users = UserOperations(app)
    return run_menu("Library Management System", [
        MenuItem("Login", lambda: login(app)),
        MenuItem("Sign Up as a new Member", users.sign_up),
        MenuItem("Forgot Password", users.forgot_password),
        MenuItem("Exit the Program", exit_program),
    ])
