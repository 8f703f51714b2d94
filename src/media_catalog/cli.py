"""Command line interface for media catalog."""

import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .api import CatalogApi, Response
from .codec import get_codec
from .domain.catalog.entities import EntityKind
from .exceptions import MediaCatalogError
from .infrastructure.repositories import json_file_repositories
from .logging_config import setup_logging
from .models.config import Config, load_config

console = Console()
logger = logging.getLogger(__name__)

FORMATS = ("csv", "json")


def _parse_kind(ctx, param, value: str) -> EntityKind:
    try:
        return EntityKind.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from None


def _parse_id(kind: EntityKind, raw: str) -> Any:
    """Books are keyed by ISBN; every other kind by an integer."""
    if kind == EntityKind.BOOK:
        return raw
    try:
        return int(raw)
    except ValueError:
        raise click.BadParameter(f"{kind.value} ids are integers, got {raw!r}") from None


def _open_api(ctx: click.Context) -> CatalogApi:
    config: Config = ctx.obj["config"]
    try:
        return CatalogApi(json_file_repositories(config.storage.directory))
    except MediaCatalogError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


def _check(response: Response) -> Response:
    """Exit with status 1 unless the response is a success."""
    if not response.ok:
        detail = f": {escape(str(response.body))}" if response.body else ""
        console.print(f"[red]{response.status.value} {response.status.phrase}{detail}[/red]")
        sys.exit(1)
    return response


def _entity_table(kind: EntityKind, entities: List[Any]) -> Table:
    """Render non-empty ``entities`` with their JSON keys as columns."""
    codec = get_codec(kind)
    rows = [codec.to_raw(entity) for entity in entities]

    table = Table(title=f"{kind.value.replace('_', ' ').title()}s ({len(rows)})")
    columns = list(rows[0])
    for column in columns:
        table.add_column(column, style="cyan" if column == columns[0] else None)
    for row in rows:
        table.add_row(*("" if row[c] is None else str(row[c]) for c in columns))
    return table


@click.group()
@click.version_option(package_name="media-catalog")
@click.option(
    '--config',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Configuration file path'
)
@click.option(
    '--storage-dir',
    type=click.Path(file_okay=False, path_type=Path),
    help='Directory holding the catalog data files'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Verbose output'
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], storage_dir: Optional[Path], verbose: bool):
    """Manage a catalog of books, albums, songs and their reviews."""
    try:
        cfg = load_config(config).with_env_overrides() if config else Config.from_env()
    except MediaCatalogError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if storage_dir:
        cfg.storage.directory = storage_dir

    setup_logging(cfg.logging, verbose=verbose)
    logger.debug(f"Using storage directory {cfg.storage.directory}")
    ctx.obj = {"config": cfg}


@cli.command(name="import")
@click.argument('kind', callback=_parse_kind)
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--format', 'fmt',
    type=click.Choice(FORMATS),
    help='Input format; taken from the file suffix when omitted'
)
@click.pass_context
def import_(ctx: click.Context, kind: EntityKind, file: Path, fmt: Optional[str]):
    """Import every record of KIND from a CSV or JSON FILE."""
    fmt = fmt or file.suffix.lstrip('.').lower()
    if fmt not in FORMATS:
        raise click.BadParameter(f"cannot tell the format of {file.name}; use --format", param_hint="FILE")

    controller = _open_api(ctx).for_kind(kind)
    text = file.read_text(encoding='utf-8')
    response = _check(controller.import_csv(text) if fmt == "csv" else controller.import_json(text))
    console.print(f"[green]Imported {len(response.body)} {kind.value} records from {file.name}[/green]")


@cli.command()
@click.argument('kind', callback=_parse_kind)
@click.option(
    '--format', 'fmt',
    type=click.Choice(FORMATS),
    default='json',
    show_default=True,
    help='Output format'
)
@click.option(
    '--parent-id',
    type=int,
    help='Only export reviews of this book, album or song'
)
@click.option(
    '--output', '-o',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Write to this file instead of standard output'
)
@click.pass_context
def export(ctx: click.Context, kind: EntityKind, fmt: str, parent_id: Optional[int], output: Optional[Path]):
    """Export every record of KIND as CSV or JSON."""
    if parent_id is not None and not kind.is_review:
        raise click.BadParameter(f"{kind.value} records have no parent", param_hint="--parent-id")

    controller = _open_api(ctx).for_kind(kind)
    if fmt == "csv":
        response = _check(controller.export_csv(parent_id=parent_id))
    else:
        response = _check(controller.export_json(parent_id=parent_id))

    if output:
        output.write_text(response.body, encoding='utf-8')
        console.print(f"[green]Wrote {kind.value} export to {output}[/green]")
    else:
        click.echo(response.body, nl=False)


@cli.command(name="list")
@click.argument('kind', callback=_parse_kind)
@click.option('--property', 'prop', help='Property to filter on, e.g. author or rating')
@click.option('--value', help='Value the property must equal')
@click.pass_context
def list_(ctx: click.Context, kind: EntityKind, prop: Optional[str], value: Optional[str]):
    """List records of KIND, optionally filtered by one property."""
    response = _check(_open_api(ctx).for_kind(kind).list(prop, value))
    if not response.body:
        console.print(f"[yellow]No {kind.value} records found[/yellow]")
        return
    console.print(_entity_table(kind, response.body))


@cli.command()
@click.argument('kind', callback=_parse_kind)
@click.argument('entity_id', metavar='ID')
@click.pass_context
def get(ctx: click.Context, kind: EntityKind, entity_id: str):
    """Show one record of KIND."""
    response = _check(_open_api(ctx).for_kind(kind).get(_parse_id(kind, entity_id)))
    console.print(_entity_table(kind, [response.body]))


@cli.command()
@click.argument('kind', callback=_parse_kind)
@click.argument('entity_id', metavar='ID')
@click.pass_context
def delete(ctx: click.Context, kind: EntityKind, entity_id: str):
    """Delete one record of KIND."""
    _check(_open_api(ctx).for_kind(kind).delete(_parse_id(kind, entity_id)))
    console.print(f"[green]Deleted {kind.value} {entity_id}[/green]")


@cli.command()
@click.argument('kind', callback=_parse_kind)
@click.argument('parent_id', type=int)
@click.pass_context
def rating(ctx: click.Context, kind: EntityKind, parent_id: int):
    """Average review rating of a book, album or song."""
    if kind.is_review:
        raise click.BadParameter("rate a book, album or song, not a review", param_hint="KIND")

    response = _check(_open_api(ctx).for_kind(kind).rating(parent_id))
    if response.body is None:
        console.print(f"[yellow]No ratings for {kind.value} {parent_id}[/yellow]")
        return
    console.print(f"Average rating of {kind.value} {parent_id}: [bold]{response.body:.2f}[/bold]")


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
