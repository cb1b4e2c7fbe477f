import click
import json
from shelf.auth import AuthSession
from shelf.hardcover import HardcoverClient
from shelf.lifecycle import ReadingStatus, coerce_date
from shelf.merge import normalize_external_id
from shelf.sa.database import Database
from shelf.sa.repositories import UserRepository
from shelf.services import LibraryService
from ..utils import ImportSummary

@click.command('import')
@click.argument('json_file', type=click.Path(exists=True))
@click.option('--user-id', type=int, required=True, help='User ID to associate the read books with')
@click.option('--dry-run', is_flag=True, help='Show what would be imported without making changes')
@click.option('--verbose', '-v', is_flag=True, help='Show details of skipped books')
def read(json_file, user_id, dry_run, verbose):
    """Import finished books from a JSON file containing Hardcover IDs and read dates."""
    db = Database()
    session = db.get_session()
    summary = ImportSummary(dry_run=dry_run)
    try:
        user = UserRepository(session).get_by_id(user_id)
        if not user:
            click.echo(click.style(f"User {user_id} not found", fg='red'), err=True)
            raise click.Abort()
        click.echo(f"Using existing user: {user.name} (ID: {user_id})")

        with open(json_file, 'r') as f:
            books = json.load(f)

        click.echo(f"Found {len(books)} books to process")
        service = LibraryService(session, HardcoverClient())
        auth = AuthSession(user_id=user.id)

        for book_data in books:
            summary.processed += 1
            hardcover_id = normalize_external_id(book_data.get('hardcover_id'))
            title = book_data.get('title', 'Unknown Title')
            date_read = coerce_date(book_data.get('date_read'))

            if not hardcover_id:
                summary.skip(title, book_data.get('hardcover_id'), 'No Hardcover ID')
                continue

            if dry_run:
                click.echo(f"Would mark finished: {title} (ID: {hardcover_id})"
                           + (f" on {date_read.isoformat()}" if date_read else ""))
                summary.imported += 1
                continue

            click.echo(f"Processing: {title} (ID: {hardcover_id})")
            record = service.add_to_shelf(auth, hardcover_id, ReadingStatus.finished)
            if date_read:
                updates = {'finish_date': date_read}
                if record.start_date is None or record.start_date > date_read:
                    updates['start_date'] = date_read
                service.library.update(record, **updates)
            summary.imported += 1

        summary.print_results(verbose)
    except click.Abort:
        raise
    except Exception as e:
        session.rollback()
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()
    finally:
        session.close()
