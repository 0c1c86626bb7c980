"""Error boundary handling for CLI commands.

Catches well-known exceptions at CLI entry points and displays clean error
messages without stack traces. With --debug the exception is re-raised.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from start_assets.core.errors import StartAssetsError


T = TypeVar("T", bound=Callable[..., Any])


def _debug_enabled() -> bool:
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return False
    return bool(getattr(ctx.find_root().obj, "debug", False))


def cli_error_boundary(func: T) -> T:
    """Decorator that catches well-known exceptions and displays clean error messages.

    Catches:
        - StartAssetsError: every engine error (not found, ambiguous,
          validation, transport, store, batch install)
        - PermissionError: Permission denied errors

    All other exceptions bubble up normally with full stack traces.

    Example:
        @click.command()
        @cli_error_boundary
        def my_command():
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (StartAssetsError, PermissionError) as e:
            if _debug_enabled():
                raise
            click.echo(click.style("Error: ", fg="red") + str(e), err=True)
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
