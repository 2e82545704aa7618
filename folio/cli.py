"""Command-line interface for Folio.

This module defines read-only commands for inspecting a site's content using
the Click framework.

Commands:
- pages: List every page with its heading.
- articles: List dated pages, newest first.
- show: Show a page's metadata, or its rendered body.
- menu: List the pages in menu.txt.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from . import __version__
from .cache import PageCache
from .config import SiteConfig
from .errors import ContentError, PageNotFoundError


@click.group()
@click.version_option(version=__version__, prog_name="folio")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory containing folio.yaml (defaults to the current directory)",
)
@click.option("--verbose", is_flag=True, help="Log cache activity")
@click.pass_context
def cli(ctx: click.Context, root: Path | None, verbose: bool):
    """Folio content repository."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    project_root = (root or Path.cwd()).resolve()
    ctx.obj = PageCache(SiteConfig.from_project(project_root))


@cli.command()
@click.pass_obj
def pages(cache: PageCache):
    """List every page."""
    for page in cache.find_all():
        click.echo(f"{page.path or '/'}\t{page.heading or ''}")


@cli.command()
@click.pass_obj
def articles(cache: PageCache):
    """List articles, newest first."""
    for page in cache.find_articles():
        click.echo(f"{page.date('%Y-%m-%d')}\t{page.path}\t{page.heading or ''}")


@cli.command()
@click.argument("path")
@click.option("--html", "as_html", is_flag=True, help="Print the rendered body")
@click.pass_obj
def show(cache: PageCache, path: str, as_html: bool):
    """Show the page at PATH."""
    try:
        page = cache.load(path)
        if as_html:
            click.echo(page.body)
            return
        click.echo(f"path: {page.path}")
        click.echo(f"file: {page.filename}")
        click.echo(f"format: {page.format.value}")
        click.echo(f"heading: {page.heading or ''}")
        for key, value in page.metadata.items():
            click.echo(f"{key}: {value}")
        categories = page.categories
    except PageNotFoundError as exc:
        raise click.ClickException(f"No page at {exc.path!r}") from None
    except ContentError as exc:
        raise click.ClickException(str(exc)) from None
    if categories:
        click.echo("in: " + ", ".join(c.path for c in categories))


@cli.command()
@click.pass_obj
def menu(cache: PageCache):
    """List the pages in menu.txt."""
    for page in cache.menu_items():
        click.echo(f"{page.abspath}\t{page.heading or ''}")


def main():
    """Entry point for the CLI application."""
    cli()
