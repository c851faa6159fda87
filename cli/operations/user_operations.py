# cli/operations/user_operations.py
import click

from cli.context import LibraryApp
from cli.utils import (
    choose_from, echo_header, echo_info, echo_items, echo_success, echo_warning,
    prompt_date, prompt_id, prompt_text, report_errors, validated
)
from lms.sa.models import AdminType, Role, User
from lms.schemas.user import (
    MEMBER_UPDATABLE_FIELDS, AddressCreate, UserCreate, UserProfileUpdate, parse_member_field_update
)
from lms.utils import validators

USERNAME_MESSAGE = "Username must be 3-20 characters of letters, digits, '.', '_', '@' or '-'"
PASSWORD_MESSAGE = (
    "Password must be at least 8 characters and contain a digit, "
    "a lower and upper case letter and one of @#$%^&+=!"
)
NAME_MESSAGE = "Names must be at least 2 letters (hyphens and spaces allowed)"
DOB_MESSAGE = (
    f"Date of birth must be YYYY-MM-DD, between {validators.MIN_AGE_YEARS} "
    f"and {validators.MAX_AGE_YEARS} years ago"
)

def prompt_username(label: str = "Username") -> str:
    return prompt_text(label, validators.is_valid_username, USERNAME_MESSAGE)

def prompt_password(label: str = "Password") -> str:
    return click.prompt(label, value_proc=validated(validators.is_valid_password, PASSWORD_MESSAGE, convert=str),
                        hide_input=True, confirmation_prompt=True)

def prompt_address() -> AddressCreate:
    return AddressCreate(
        street=prompt_text("Street"),
        city=prompt_text("City"),
        pincode=prompt_text("Pincode", validators.is_valid_pincode,
                            "Pincode must be 3-10 letters, digits, spaces or hyphens"),
        state=prompt_text("State"),
        country=prompt_text("Country")
    )

def prompt_profile() -> dict:
    return dict(
        firstname=prompt_text("First name", validators.is_valid_name, NAME_MESSAGE),
        surname=prompt_text("Surname", validators.is_valid_name, NAME_MESSAGE),
        date_of_birth=prompt_date("Date of birth (YYYY-MM-DD)", validators.is_valid_date_of_birth, DOB_MESSAGE),
        gender=click.prompt("Gender", type=click.Choice(["MALE", "FEMALE"], case_sensitive=False)),
        email=click.prompt("Email"),
        phone_number=prompt_text("Phone number", validators.is_valid_phone_number,
                                 "Phone number must be 10 to 15 digits with an optional leading +")
    )

def prompt_new_user() -> UserCreate:
    return UserCreate(
        username=prompt_username(),
        password=prompt_password(),
        **prompt_profile(),
        address=prompt_address()
    )

class UserOperations:
    """Console workflows for accounts"""

    def __init__(self, app: LibraryApp):
        self.app = app

    @report_errors
    def sign_up(self):
        echo_header("Sign up")
        user = self.app.users.register_member(prompt_new_user())
        echo_success(f"Welcome {user.firstname}! You can now log in as '{user.username}'.")

    @report_errors
    def add_member(self):
        echo_header("Add a member")
        user = self.app.users.register_member(prompt_new_user())
        echo_success(f"Member added with ID {user.id}.")

    @report_errors
    def add_admin(self):
        echo_header("Add an admin")
        user = self.app.users.add_admin(prompt_new_user(), AdminType.STANDARD)
        echo_success(f"Admin added with ID {user.id}.")

    @report_errors
    def find_user_by_id(self):
        click.echo(str(self.app.users.get_user(prompt_id("User ID"))))

    @report_errors
    def find_user_by_username(self):
        click.echo(str(self.app.users.get_user_by_username(prompt_text("Username"))))

    @report_errors
    def view_members(self):
        echo_header("Members")
        self._echo_users(self.app.users.get_members(), "There are no members.")

    @report_errors
    def view_admins(self):
        echo_header("Admins")
        self._echo_users(self.app.users.get_admins(), "There are no admins.")

    @report_errors
    def view_all_users(self):
        echo_header("All users")
        self._echo_users(self.app.users.get_all_users(), "There are no users.")

    def _echo_users(self, users, empty_message: str):
        if not users:
            echo_warning(empty_message)
            return
        for user in users:
            click.echo(str(user))
            click.echo("-" * 40)

    @report_errors
    def update_user_details(self):
        user = self.app.users.get_user(prompt_id("User ID"))
        click.echo(str(user))
        update = UserProfileUpdate(**prompt_profile(), address=prompt_address())
        self.app.users.update_profile(user.id, update)
        echo_success("User details updated.")

    @report_errors
    def update_profile(self, user: User):
        """Let a logged in user change one of their own fields"""
        field = choose_from(list(MEMBER_UPDATABLE_FIELDS), "Field to update")
        if field == "address":
            value = prompt_address().model_dump()
        elif field == "password":
            value = prompt_password("New password")
        else:
            value = prompt_text(f"New {field.replace('_', ' ')}")
        self.app.users.update_member_field(user.id, parse_member_field_update(field, value))
        echo_success(f"Your {field.replace('_', ' ')} has been updated.")

    @report_errors
    def update_username(self):
        user_id = prompt_id("User ID")
        user = self.app.users.update_username(user_id, prompt_username("New username"))
        echo_success(f"Username changed to '{user.username}'.")

    @report_errors
    def update_password(self):
        user_id = prompt_id("User ID")
        self.app.users.update_password(user_id, prompt_password("New password"))
        echo_success("Password changed.")

    @report_errors
    def update_user_type(self):
        user_id = prompt_id("User ID")
        role = click.prompt("New user type", type=click.Choice([r.value for r in Role], case_sensitive=False))
        user = self.app.users.update_role(user_id, Role(role.upper()))
        echo_success(f"User {user.id} is now {user.role.value}.")

    @report_errors
    def update_admin_type(self):
        user_id = prompt_id("Admin ID")
        admin_type = click.prompt("New admin type",
                                  type=click.Choice([t.value for t in AdminType], case_sensitive=False))
        user = self.app.users.update_admin_type(user_id, AdminType(admin_type.upper()))
        echo_success(f"Admin {user.id} is now {user.admin_type.value}.")

    @report_errors
    def remove_user(self):
        user = self.app.users.get_user(prompt_id("User ID"))
        if not click.confirm(f"Remove user '{user.username}'?", default=False):
            echo_info("Nothing removed.")
            return
        self.app.users.delete_user(user.id)
        echo_success("User removed from the library.")

    @report_errors
    def view_user_type(self):
        user_id = prompt_id("User ID")
        echo_info(f"User {user_id} is {self.app.users.get_user_type(user_id).value}.")

    @report_errors
    def view_admin_type(self):
        user_id = prompt_id("Admin ID")
        echo_info(f"Admin {user_id} is {self.app.users.get_admin_type(user_id).value}.")

    @report_errors
    def view_borrowed_books_by_user(self):
        user_id = prompt_id("User ID")
        echo_items(self.app.books.get_borrowed_books_by_user(user_id),
                   f"User {user_id} has no borrowed books.")

    @report_errors
    def view_borrowing_history(self):
        user_id = prompt_id("User ID")
        echo_items(self.app.transactions.get_borrowing_history(user_id),
                   f"User {user_id} has no borrowing history.")

    @report_errors
    def forgot_password(self):
        echo_header("Forgot password")
        username = prompt_text("Username")
        if self.app.auth.request_password_reset(username):
            echo_info("A verification code has been sent to your email.")
        else:
            echo_warning("The verification email could not be sent. Please try again later.")
            return

        code = prompt_text("Verification code")
        if not self.app.auth.verify_code(username, code):
            echo_warning("Verification failed. Incorrect code.")
            return
        self.app.auth.reset_password(username, code, prompt_password("New password"))
        echo_success("Your password has been reset. You can now log in.")
