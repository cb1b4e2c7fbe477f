# cli/commands/book.py
import click
from shelf.hardcover import HardcoverClient
from shelf.sa.database import Database
from shelf.services import ReviewService

@click.group()
def book():
    """Book lookup commands"""
    pass

@book.command('show')
@click.argument('hardcover_id')
def show(hardcover_id):
    """Show Hardcover metadata and local review stats for a book"""
    client = HardcoverClient()
    metadata = client.get_book_by_id(hardcover_id)
    if metadata is None:
        click.echo(click.style(f"Book {hardcover_id} not found on Hardcover", fg='red'), err=True)
        raise click.Abort()

    click.echo(click.style(metadata.title, fg='cyan', bold=True))
    if metadata.subtitle:
        click.echo(metadata.subtitle)
    click.echo(f"By: {', '.join(metadata.authors)}")
    if metadata.publication_year:
        click.echo(f"Published: {metadata.publication_year}")
    if metadata.page_count:
        click.echo(f"Pages: {metadata.page_count}")

    database = Database()
    with database.get_db() as session:
        stats = ReviewService(session, client).get_review_stats(metadata.id)
    click.echo(f"Rating: {stats.average_rating} ({stats.total_reviews} reviews)")

@book.command('search')
@click.argument('query')
@click.option('--limit', default=5, help='Maximum number of results')
def search(query, limit):
    """Search Hardcover by title"""
    hits = HardcoverClient().search_books(query, limit=limit)
    if not hits:
        click.echo("No results")
        return
    for hit in hits:
        document = hit.get('document', hit) if isinstance(hit, dict) else {}
        authors = ', '.join(document.get('author_names') or []) or 'Unknown Author'
        click.echo(f"{document.get('id')}\t{document.get('title')} - {authors}")
