"""CLI interface for contentree."""

from __future__ import annotations

import asyncio
import logging

import click

from .errors import ScanError
from .models import DirectoryEntry, Entry, TypeFilter, dumps

_TYPES = click.Choice([t.value for t in TypeFilter])


def _run(coro):
    """Run an async coroutine synchronously."""
    return asyncio.run(coro)


def _make_tree(root: str, match: str | None, enrich: bool, max_concurrency: int | None):
    from .core import ContentTree

    if enrich:
        return ContentTree.markdown(root, match=match, max_concurrency=max_concurrency)
    return ContentTree(root, match=match, max_concurrency=max_concurrency)


def _echo_entries(entries: list[Entry], json_output: bool) -> None:
    if json_output:
        click.echo(dumps({"data": [e.to_resource() for e in entries]}, indent=2))
        return
    if not entries:
        click.echo("No entries found.")
        return
    for e in entries:
        line = f"{e.type.value:<12} {e.id}  (depth {e.depth})"
        if isinstance(e, DirectoryEntry):
            line += f"  [{len(e.children)} children]"
        click.echo(line)


def _common_options(f):
    f = click.option(
        "--json-output", "-j", is_flag=True, help="Output as a JSON:API document."
    )(f)
    f = click.option(
        "--max-concurrency",
        type=click.IntRange(min=1),
        default=None,
        envvar="CONTENTREE_MAX_CONCURRENCY",
        help="Limit concurrent listing/enrichment operations.",
    )(f)
    f = click.option(
        "--enrich/--no-enrich",
        default=False,
        help="Attach markdown attributes (front matter, timestamps, ...).",
    )(f)
    f = click.option(
        "--types", "-t", type=_TYPES, default="all", help="Entry types to output."
    )(f)
    f = click.option(
        "--match",
        "-m",
        default=None,
        envvar="CONTENTREE_MATCH",
        help="Regex an entry's relative path must match.",
    )(f)
    return f


@click.group()
@click.version_option(package_name="contentree")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """contentree: index a directory tree into a flat JSON:API collection."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


@cli.command()
@click.argument("root", type=click.Path())
@_common_options
def scan(
    root: str,
    match: str | None,
    types: str,
    enrich: bool,
    max_concurrency: int | None,
    json_output: bool,
) -> None:
    """Scan ROOT and print every matched entry."""
    tree = _make_tree(root, match, enrich, max_concurrency)
    try:
        collection = _run(tree.scan())
    except ScanError as e:
        raise click.ClickException(str(e)) from e

    type_filter = TypeFilter(types)
    entries = [e for e in collection if type_filter.allows(e.type)]
    _echo_entries(entries, json_output)


@cli.command()
@click.argument("root", type=click.Path())
@click.argument("dir_ids", nargs=-1, required=True)
@_common_options
@click.option(
    "--recurse/--no-recurse",
    default=True,
    help="Include descendants of child directories.",
)
def children(
    root: str,
    dir_ids: tuple[str, ...],
    match: str | None,
    types: str,
    enrich: bool,
    max_concurrency: int | None,
    json_output: bool,
    recurse: bool,
) -> None:
    """Scan ROOT and print the children of the directories DIR_IDS."""
    tree = _make_tree(root, match, enrich, max_concurrency)
    try:
        _run(tree.scan())
    except ScanError as e:
        raise click.ClickException(str(e)) from e

    try:
        entries = _run(tree.children(dir_ids, with_types=types, recurse=recurse))
    except KeyError as e:
        raise click.UsageError(f"No such directory in the index: {e.args[0]}") from e
    _echo_entries(entries, json_output)
