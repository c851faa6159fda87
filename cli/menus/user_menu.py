# cli/menus/user_menu.py
from cli.context import LibraryApp
from cli.operations import UserOperations
from .base import MenuAction, MenuItem, back, exit_program, run_menu

def super_admin_user_menu(app: LibraryApp) -> MenuAction:
    ops = UserOperations(app)
    return run_menu("User Operations", [
        MenuItem("Add a new member to the library", ops.add_member),
        MenuItem("Add a new admin to the library", ops.add_admin),
        MenuItem("Find a user by ID", ops.find_user_by_id),
        MenuItem("Find a user by username", ops.find_user_by_username),
        MenuItem("View all members in the library", ops.view_members),
        MenuItem("View all admins in the library", ops.view_admins),
        MenuItem("View all users in the library", ops.view_all_users),
        MenuItem("Update the details of a user", ops.update_user_details),
        MenuItem("Update a user's username", ops.update_username),
        MenuItem("Update a user's password", ops.update_password),
        MenuItem("Update a user's type", ops.update_user_type),
        MenuItem("Update an admin's type", ops.update_admin_type),
        MenuItem("Remove a user from the library", ops.remove_user),
        MenuItem("View the user type of a user", ops.view_user_type),
        MenuItem("View the admin type of an admin", ops.view_admin_type),
        MenuItem("View currently borrowed books by a user", ops.view_borrowed_books_by_user),
        MenuItem("View borrowing history of a user", ops.view_borrowing_history),
        MenuItem("Go back to the previous menu", back),
        MenuItem("Exit the program", exit_program),
    ])

def standard_admin_user_menu(app: LibraryApp) -> MenuAction:
    ops = UserOperations(app)
    return run_menu("User Operations", [
        MenuItem("Add a new member to the library", ops.add_member),
        MenuItem("Find a user by ID", ops.find_user_by_id),
        MenuItem("Find a user by username", ops.find_user_by_username),
        MenuItem("View all members in the library", ops.view_members),
        MenuItem("View all admins in the library", ops.view_admins),
        MenuItem("View all users in the library", ops.view_all_users),
        MenuItem("Update the details of a user", ops.update_user_details),
        MenuItem("View the user type of a user", ops.view_user_type),
        MenuItem("View currently borrowed books by a user", ops.view_borrowed_books_by_user),
        MenuItem("View borrowing history of a user", ops.view_borrowing_history),
        MenuItem("Go back to the previous menu", back),
        MenuItem("Exit the program", exit_program),
    ])
