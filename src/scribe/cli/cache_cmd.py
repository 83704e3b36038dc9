"""CLI command for clearing cached post listings.

Usage:
    scribe cache-clear                          # every listing page
    scribe cache-clear --pattern "posts:page:*"  # global listing only
    scribe cache-clear --user alice             # one author's listing
"""

from __future__ import annotations

import asyncio

import typer

from scribe.cache.factory import create_cache_keys, create_cache_store
from scribe.cache.invalidation import CacheInvalidator
from scribe.core.errors import ValidationFailed
from scribe.core.validation import validate_username

app = typer.Typer(help="Clear cached post listings")


async def _clear(pattern: str | None, user: str | None) -> int:
    keys = create_cache_keys()
    store = create_cache_store()
    try:
        invalidator = CacheInvalidator(store, keys)
        if user is not None:
            return await invalidator.invalidate(keys.user_posts_pattern(user))
        if pattern is not None:
            return await invalidator.invalidate(pattern)
        return await invalidator.invalidate_all()
    finally:
        await store.close()


@app.callback(invoke_without_command=True)
def cache_clear(
    pattern: str | None = typer.Option(
        None, "--pattern", help="Glob pattern of keys to delete"
    ),
    user: str | None = typer.Option(None, "--user", "-u", help="Clear one author's listing"),
) -> None:
    """Delete cached listing pages."""
    if pattern is not None and user is not None:
        typer.echo("Use either --pattern or --user, not both", err=True)
        raise typer.Exit(code=2)

    if user is not None:
        try:
            validate_username(user)
        except ValidationFailed as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=2)

    cleared = asyncio.run(_clear(pattern, user))
    typer.echo(f"Cleared {cleared} cached pages")
