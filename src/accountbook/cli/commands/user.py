"""Account owner commands."""

import click

from accountbook.cli.error_handling import handle_errors
from accountbook.domain.user import UserService


@click.group()
def user_group():
    """Manage account owners."""
    pass


@user_group.command("create")
@click.argument("name", metavar="NAME")
@click.pass_context
@handle_errors
def create_user(ctx, name: str):
    """Create a new account owner.

    Examples:
        accountbook user create "Kim Minji"
    """
    service = UserService(ctx.obj["db"])
    user = service.create_user(name)
    click.echo(f"Created user '{user.name}' (ID: {user.id})")


@user_group.command("show")
@click.argument("user_id", type=click.IntRange(min=1))
@click.pass_context
@handle_errors
def show_user(ctx, user_id: int):
    """Show an account owner."""
    service = UserService(ctx.obj["db"])
    user = service.get_user(user_id)
    click.echo(f"ID: {user.id} | {user.name} | Since: {user.created_at:%Y-%m-%d}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
