# cli/main.py
import logging
import click

from lms.config import settings
from lms.sa.database import Database
from .commands.admin import init_db, create_superadmin
from .commands.books import books
from .context import LibraryApp
from .menus import MenuAction, login_menu

logger = logging.getLogger(__name__)

def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

def run_console(app: LibraryApp) -> int:
    """Run the interactive session until the user exits.

    Returns:
        Process exit code
    """
    action = login_menu(app)
    logger.debug(f"Console session ended with {action.name}")
    return 0 if action == MenuAction.EXIT else 1

@click.group()
@click.option('--database-url', default=None, help='SQLAlchemy URL (defaults to LMS_DATABASE_URL)')
@click.option('--verbose/--no-verbose', default=False, help='Log debug output')
@click.pass_context
def cli(ctx: click.Context, database_url: str, verbose: bool):
    """Library Management System"""
    configure_logging(verbose)
    ctx.obj = Database(database_url)
    ctx.call_on_close(ctx.obj.dispose)

@cli.command()
@click.pass_obj
def run(db: Database):
    """Start the interactive library console"""
    db.init_db()
    app = LibraryApp.from_database(db)
    try:
        code = run_console(app)
    finally:
        db.close_session()
    raise click.exceptions.Exit(code)

cli.add_command(init_db)
cli.add_command(create_superadmin)
cli.add_command(books)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
