"""CLI interface for showcase."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from showcase.config import ShowcaseConfig, load_config, merge_cli_overrides
from showcase.content.models import ContentFilter, ContentQuery, ContentType, SortOrder
from showcase.content.store import open_store
from showcase.errors import InvalidQueryError, StoreUnavailableError
from showcase.listing.lister import ContentLister
from showcase.listing.pages import LAYOUTS, render_page, single_event_layout

app = typer.Typer(
    name="showcase",
    help="List and render site content from a content store.",
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from showcase import __version__

        console.print(f"showcase {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output."),
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .showcase.toml file."),
    ] = None,
) -> None:
    """Showcase - bounded content listings rendered per content type."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )
    ctx.obj = load_config(config_path)


def _lister(ctx: typer.Context, store: Optional[Path]) -> tuple[ShowcaseConfig, ContentLister]:
    config: ShowcaseConfig = ctx.obj if isinstance(ctx.obj, ShowcaseConfig) else load_config()
    config = merge_cli_overrides(config, store_path=store)
    lister = ContentLister(open_store(config.store_path), gates=config.gate_map())
    return config, lister


@app.command(name="list")
def list_cmd(
    ctx: typer.Context,
    content_type: Annotated[ContentType, typer.Argument(help="Content type to list.")],
    category_id: Annotated[
        Optional[int], typer.Option("--category-id", help="Only items in this category id.")
    ] = None,
    category: Annotated[
        Optional[str], typer.Option("--category", help="Only items in this category slug.")
    ] = None,
    item_id: Annotated[Optional[int], typer.Option("--id", help="Only the item with this id.")] = None,
    exclude_category: Annotated[
        Optional[list[int]],
        typer.Option("--exclude-category", help="Skip items in this category id (repeatable)."),
    ] = None,
    ascending: Annotated[
        bool, typer.Option("--ascending", help="Oldest first instead of newest first.")
    ] = False,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", help="Maximum items.")] = None,
    store: Annotated[
        Optional[Path], typer.Option("--store", "-s", help="Content store JSON file.")
    ] = None,
) -> None:
    """List matching items as a table."""
    config, lister = _lister(ctx, store)
    try:
        query = ContentQuery(
            content_type=content_type,
            filter=ContentFilter(
                category_id=category_id,
                category_name=category,
                item_id=item_id,
                exclude_category_ids=frozenset(exclude_category or []),
            ),
            sort_order=SortOrder.ASCENDING if ascending else SortOrder.DEFAULT,
            limit=limit if limit is not None else config.listing.default_limit,
        )
        result = lister.list(query)
    except (InvalidQueryError, StoreUnavailableError) as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    if result.is_empty:
        console.print(f"[yellow]No {content_type} items found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"{content_type} ({len(result)})")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Created")
    table.add_column("Categories")
    table.add_column("Permalink")
    for item in result.items:
        table.add_row(
            str(item.id),
            item.title,
            item.created_at.strftime("%Y-%m-%d"),
            ", ".join(c.slug for c in item.categories),
            lister.store.permalink(item),
        )
    console.print(table)


@app.command(name="render")
def render_cmd(
    ctx: typer.Context,
    page: Annotated[str, typer.Argument(help="Layout: home, events, about or event.")],
    item_id: Annotated[
        Optional[int], typer.Option("--id", help="Event id (required for the event page).")
    ] = None,
    store: Annotated[
        Optional[Path], typer.Option("--store", "-s", help="Content store JSON file.")
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write HTML here instead of stdout.")
    ] = None,
) -> None:
    """Render a page layout to HTML."""
    if page == "event":
        if item_id is None:
            err_console.print("[red]Error:[/red] --id is required for the event page.")
            raise typer.Exit(1)
        layout = single_event_layout(item_id)
    elif page in LAYOUTS:
        layout = LAYOUTS[page]()
    else:
        names = ", ".join([*LAYOUTS, "event"])
        err_console.print(f"[red]Error:[/red] Unknown page {page!r}. Choose from: {names}")
        raise typer.Exit(1)

    _, lister = _lister(ctx, store)
    body = render_page(lister, layout)

    for result in body.sections:
        if result.error is not None:
            err_console.print(f"[yellow]Section {result.name} skipped:[/yellow] {result.error}")

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(body.html, encoding="utf-8")
        console.print(f"[green]Wrote {output}[/green]")
    else:
        typer.echo(body.html)

    if body.sections and len(body.failed_sections) == len(body.sections):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
