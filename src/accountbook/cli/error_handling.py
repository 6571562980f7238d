"""CLI error handling helpers."""

import functools

import click

from accountbook.domain.errors import DomainError, StorageUnavailableError

STORAGE_ERROR_EXIT_CODE = 2


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_storage_error(ctx: click.Context, error: StorageUnavailableError) -> None:
    """Render an infrastructure failure and exit with a distinct status."""
    click.echo(f"Error: storage unavailable: {error}", err=True)
    ctx.exit(STORAGE_ERROR_EXIT_CODE)


def handle_errors(command):
    """Map errors a command does not handle itself onto CLI exits.

    Apply below ``click.pass_context`` so the wrapped callback receives the context.
    """

    @functools.wraps(command)
    def wrapper(ctx: click.Context, *args, **kwargs):
        try:
            return command(ctx, *args, **kwargs)
        except DomainError as exc:
            handle_domain_error(ctx, exc)
        except StorageUnavailableError as exc:
            handle_storage_error(ctx, exc)

    return wrapper
