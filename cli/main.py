# cli/main.py
import click
from shelf.config import settings
from shelf.utils.logging import setup_logging
from .commands.db import db
from .commands.user import user
from .commands.shelf import shelf
from .commands.book import book
from .commands.read import read

@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """ReadThat CLI"""
    setup_logging('DEBUG' if verbose else settings.log_level)

cli.add_command(db)
cli.add_command(user)
cli.add_command(shelf)
cli.add_command(book)
cli.add_command(read)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
