# cli/commands/user.py
import click
from shelf.sa.database import Database
from shelf.sa.repositories import UserRepository

@click.group()
def user():
    """User management commands"""
    pass

@user.command('create')
@click.argument('email')
@click.option('--username', help='Public handle used in profile URLs')
@click.option('--display-name', help='Name shown in feeds and reviews')
def create(email, username, display_name):
    """Create a user and print their API token"""
    database = Database()
    with database.get_db() as session:
        try:
            new_user = UserRepository(session).create_user(
                email=email,
                username=username,
                display_name=display_name
            )
        except ValueError as e:
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            raise click.Abort()
        click.echo(f"Created user {new_user.id} ({new_user.email})")
        click.echo("API token: " + click.style(new_user.api_token, fg='green'))

@user.command('list')
@click.option('--limit', default=20, help='Maximum number of users to show')
def list_users(limit):
    """List users"""
    database = Database()
    with database.get_db() as session:
        for u in UserRepository(session).list_users(limit=limit):
            click.echo(f"{u.id}\t{u.username or '-'}\t{u.email}")

@user.command('rotate-token')
@click.argument('user_id', type=int)
def rotate_token(user_id):
    """Issue a new API token for a user"""
    database = Database()
    with database.get_db() as session:
        token = UserRepository(session).rotate_token(user_id)
        if token is None:
            click.echo(click.style(f"User {user_id} not found", fg='red'), err=True)
            raise click.Abort()
        click.echo("API token: " + click.style(token, fg='green'))
