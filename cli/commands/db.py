# cli/commands/db.py
import click
from shelf.sa.database import Database

@click.group()
def db():
    """Database management commands"""
    pass

@db.command('init')
@click.option('--database-url', help='Override DATABASE_URL')
def init(database_url):
    """Create all tables"""
    database = Database(database_url)
    database.init_db()
    click.echo(click.style("Database initialized", fg='green'))

@db.command('reset')
@click.option('--database-url', help='Override DATABASE_URL')
@click.confirmation_option(prompt='This deletes all data. Continue?')
def reset(database_url):
    """Drop and recreate all tables"""
    database = Database(database_url)
    database.drop_db()
    database.init_db()
    click.echo(click.style("Database reset", fg='yellow'))
