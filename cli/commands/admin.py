# cli/commands/admin.py
import click
from pydantic import ValidationError

from lms.exceptions import LibraryError
from lms.sa.database import Database
from lms.sa.models import AdminType
from lms.services import UserService
from ..operations.user_operations import prompt_new_user
from ..utils import echo_error, echo_success, format_validation_error

@click.command(name='init-db')
@click.option('--drop/--no-drop', default=False, help='Drop every table first')
@click.pass_obj
def init_db(db: Database, drop: bool):
    """Create the database tables"""
    if drop and click.confirm("This deletes all library data. Continue?", default=False):
        db.drop_db()
    db.init_db()
    echo_success(f"Database ready at {db.engine.url.render_as_string(hide_password=True)}")

@click.command(name='create-superadmin')
@click.pass_obj
def create_superadmin(db: Database):
    """Create the one super administrator account"""
    db.init_db()
    session = db.get_session()
    try:
        user = UserService(session).add_admin(prompt_new_user(), AdminType.SUPER)
        echo_success(f"Super admin '{user.username}' created with ID {user.id}.")
    except LibraryError as e:
        echo_error(str(e))
        raise click.exceptions.Exit(1)
    except ValidationError as e:
        echo_error(format_validation_error(e))
        raise click.exceptions.Exit(1)
    finally:
        session.close()
