# cli/commands/shelf.py
import click
from shelf.auth import AuthSession
from shelf.exceptions import ValidationError
from shelf.hardcover import HardcoverClient
from shelf.lifecycle import ReadingStatus, status_label
from shelf.merge import LIBRARY_FILTERS
from shelf.sa.database import Database
from shelf.services import LibraryService
from ..utils import format_display_book

STATUSES = [s.value for s in ReadingStatus]

@click.group()
def shelf():
    """Manage a user's shelf"""
    pass

@shelf.command('add')
@click.argument('user_id', type=int)
@click.argument('hardcover_id')
@click.option('--status', type=click.Choice(STATUSES), default='want_to_read', help='Reading status')
def add(user_id, hardcover_id, status):
    """Add a book to a user's shelf or change its status"""
    database = Database()
    with database.get_db() as session:
        service = LibraryService(session, HardcoverClient())
        try:
            record = service.add_to_shelf(AuthSession(user_id=user_id), hardcover_id, status)
        except ValidationError as e:
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            raise click.Abort()
        click.echo(f"Book {record.hardcover_id} is now " + click.style(status_label(record.status), fg='green'))

@shelf.command('list')
@click.argument('user_id', type=int)
@click.option('--filter', 'filter_name', type=click.Choice(LIBRARY_FILTERS), default='all', help='Library tab')
def list_shelf(user_id, filter_name):
    """Show a user's shelf with book details"""
    database = Database()
    with database.get_db() as session:
        view = LibraryService(session, HardcoverClient()).get_library(AuthSession(user_id=user_id), filter_name)
        counts = ", ".join(f"{name}: {count}" for name, count in view.counts.items())
        click.echo(click.style(counts, fg='blue'))
        if not view.books:
            click.echo("No books found")
            return
        for display_book in view.books:
            click.echo(format_display_book(display_book))

@shelf.command('remove')
@click.argument('user_id', type=int)
@click.argument('hardcover_id')
def remove(user_id, hardcover_id):
    """Remove a book from a user's shelf"""
    database = Database()
    with database.get_db() as session:
        removed = LibraryService(session, HardcoverClient()).remove_from_shelf(AuthSession(user_id=user_id), hardcover_id)
        if removed:
            click.echo(click.style(f"Removed book {hardcover_id}", fg='green'))
        else:
            click.echo(click.style(f"Book {hardcover_id} is not on the shelf", fg='yellow'))
