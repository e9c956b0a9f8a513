"""
Adds anchor ids to the headings of an HTML file and expands its outline markers.
Prints the result to stdout unless asked to rewrite the file in place.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import ReadFileError
from .filesystem import normalize_filepath, read_document, stat_document, write_document
from .pipeline import process_content
from .scanner import scan_html

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option("--tags", help="Default heading tags for markers, e.g. h2,h3,h4")
@click.option("--title", help="Default outline title (empty string for none)")
@click.option("--marker", help="Outline marker name")
@click.option("--styles", "include_styles", is_flag=True, help="Inject the outline stylesheet")
@click.option("--in-place", is_flag=True, help="Rewrite the file instead of printing it")
@click.option("--json", "as_json", is_flag=True, help="Print the heading records as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    tags: str | None = None,
    title: str | None = None,
    marker: str | None = None,
    include_styles: bool = False,
    in_place: bool = False,
    as_json: bool = False,
    verbose: bool = False,
):
    """
    Entry point for adding heading ids and outlines to an HTML file.

    Args:
        filepath: Path to the HTML file to process.
        tags: Override for the default heading tags.
        title: Override for the default outline title.
        marker: Override for the outline marker name.
        include_styles: Whether to inject the outline stylesheet.
        in_place: Rewrite the file atomically instead of printing it.
        as_json: Print the heading records instead of the document.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If the file cannot be read, is too large, or
            changes while being processed.

    Examples:
        html-outline page.html --tags h2,h3,h4 --in-place
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    if in_place and as_json:
        raise click.UsageError("--in-place and --json cannot be used together")

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            filepath.parent,
            tags=tags,
            title=title,
            marker=marker,
            include_styles=include_styles or None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        initial_stat = stat_document(filepath, config.max_file_size)
        content = read_document(filepath, initial_stat)
    except (IOError, ReadFileError) as error:
        raise click.ClickException(str(error)) from error

    if as_json:
        records = scan_html(content).records
        click.echo(json.dumps([record.as_dict() for record in records], indent=2))
        return

    html = process_content(content, is_primary=True, config=config)

    if in_place:
        if html == content:
            return
        try:
            write_document(
                filepath,
                html,
                initial_stat,
                warn=lambda message: click.echo(message, err=True),
            )
        except IOError as error:
            raise click.ClickException(str(error)) from error
    else:
        click.echo(html, nl=False)


if __name__ == "__main__":
    cli()
