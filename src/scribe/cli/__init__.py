"""CLI commands for Scribe.

Provides command-line interface using Typer:
- scribe serve: Run the API server
- scribe cache-clear: Delete cached listing pages

Usage:
    scribe --help
    scribe serve --port 5000
    scribe cache-clear --user alice
"""

import typer

from scribe.cli.cache_cmd import app as cache_app
from scribe.cli.serve import app as serve_app

app = typer.Typer(
    name="scribe",
    help="Scribe: blog posts with cached paginated listings",
    no_args_is_help=True,
)

app.add_typer(serve_app, name="serve")
app.add_typer(cache_app, name="cache-clear")


@app.callback()
def callback() -> None:
    """Scribe: blog posts with cached paginated listings."""
    pass


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
