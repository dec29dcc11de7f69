import logging
import sys
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from config import Settings, settings
from libranet.catalog import Catalog
from libranet.errors import LibraryError
from libranet.item import ItemKind
from libranet.sample_data import populate
from libranet.ui_helpers import (
    print_fines_result,
    print_items_result,
    print_stats_result,
    set_output_mode,
)

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.WARNING))
logger = logging.getLogger(__name__)

console = Console()


def build_catalog(cfg: Settings = settings) -> Catalog:
    """Create the catalog for one process run."""
    catalog = Catalog(fine_rate=cfg.fine_rate, borrow_days=cfg.borrow_period_days)
    if cfg.seed_sample_items:
        populate(catalog)
        logger.info(f"Library initialized with {len(catalog)} sample items")
    return catalog


def _format_fine(amount: float) -> str:
    return f"{amount} {settings.currency_label}"


# --- Typer CLI application ---
# Each invocation builds a fresh catalog; the interactive menu keeps one for the whole session.
app = typer.Typer(help="LibraNet library catalog")


@app.callback()
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
):
    """Global options for the CLI (e.g. output mode)."""
    if output and not set_output_mode(output):
        print(f"Unknown output mode '{output}', using plain.")
    if ctx.obj is None:
        ctx.obj = build_catalog()


def _catalog(ctx: typer.Context) -> Catalog:
    return ctx.obj


@app.command("list")
def cli_list(ctx: typer.Context):
    """List every catalog item."""
    print_items_result(_catalog(ctx).list_items(), "No items in library.", title="All Items")


@app.command("find")
def cli_find(ctx: typer.Context, item_id: int = typer.Argument(..., help="Item ID")):
    """Show one item by ID."""
    item = _catalog(ctx).get_item(item_id)
    if item:
        print_items_result([item], title="Item Found")
    else:
        print(f"Item with ID {item_id} not found")


@app.command("borrow")
def cli_borrow(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="Item ID"),
    borrow_date: str = typer.Argument(..., help="Borrow date (YYYY-MM-DD)"),
):
    """Borrow an item."""
    try:
        item = _catalog(ctx).borrow_item(item_id, borrow_date)
    except LibraryError as e:
        print(f"Error: {e}")
        return
    print(f"Item borrowed successfully. Due date: {item.due_date.isoformat()}")


@app.command("return")
def cli_return(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="Item ID"),
    return_date: str = typer.Argument(..., help="Return date (YYYY-MM-DD)"),
    borrowed_on: Optional[str] = typer.Option(
        None,
        "--borrowed-on",
        help="Borrow the item on this date first (YYYY-MM-DD), for a full loan in one call",
    ),
):
    """Return a borrowed item and report any fine."""
    catalog = _catalog(ctx)
    try:
        if borrowed_on is not None:
            item = catalog.borrow_item(item_id, borrowed_on)
            print(f"Item borrowed successfully. Due date: {item.due_date.isoformat()}")
        fine = catalog.return_item(item_id, return_date)
    except LibraryError as e:
        print(f"Error: {e}")
        return
    if fine > 0:
        print(f"Item returned successfully. Fine: {_format_fine(fine)}")
    else:
        print("Item returned successfully. No fines.")


@app.command("search")
def cli_search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Search text"),
    by: str = typer.Option("title", "--by", "-b", help="Field to search: title | author"),
):
    """Case-insensitive search by title or author."""
    catalog = _catalog(ctx)
    field = by.lower().strip()
    if field == "title":
        results = catalog.search_by_title(query)
        empty = "No items found with that title."
    elif field == "author":
        results = catalog.search_by_author(query)
        empty = "No items found by that author."
    else:
        print(f"Unsupported search field: {by}. Use title or author.")
        return
    print_items_result(results, empty, title=f"Search results for '{query}'")


@app.command("by-type")
def cli_by_type(ctx: typer.Context, kind: ItemKind = typer.Argument(..., help="Item type")):
    """List items of one type."""
    print_items_result(_catalog(ctx).search_by_type(kind), "No items of this type found.", title=kind.label)


@app.command("available")
def cli_available(ctx: typer.Context):
    """List items that can be borrowed."""
    print_items_result(_catalog(ctx).get_available_items(), "No available items at the moment.", title="Available")


@app.command("borrowed")
def cli_borrowed(ctx: typer.Context):
    """List items currently on loan."""
    print_items_result(_catalog(ctx).get_borrowed_items(), "No borrowed items at the moment.", title="Borrowed")


@app.command("overdue")
def cli_overdue(ctx: typer.Context, as_of: str = typer.Argument(..., help="Reference date (YYYY-MM-DD)")):
    """List borrowed items that are past due on a date."""
    try:
        items = _catalog(ctx).get_overdue_items(as_of)
    except LibraryError as e:
        print(f"Error: {e}")
        return
    print_items_result(items, "No overdue items.", title=f"Overdue on {as_of}")


@app.command("fines")
def cli_fines(ctx: typer.Context, item_id: Optional[int] = typer.Option(None, "--item", "-i", help="Only this item")):
    """Show total fines, or the fines recorded for one item."""
    catalog = _catalog(ctx)
    if item_id is None:
        print_fines_result(catalog.get_total_fines(), settings.currency_label)
    else:
        print_fines_result(catalog.get_fines_for_item(item_id), settings.currency_label, item_id=item_id)


@app.command("stats")
def cli_stats(ctx: typer.Context):
    """Show catalog statistics."""
    print_stats_result(_catalog(ctx).get_statistics(), settings.currency_label)


@app.command("pages")
def cli_pages(ctx: typer.Context, item_id: int = typer.Argument(..., help="Book ID")):
    """Show the page count of a book."""
    try:
        pages = _catalog(ctx).get_page_count(item_id)
    except LibraryError as e:
        print(f"Error: {e}")
        return
    print(f"Page count: {pages}")


@app.command("play")
def cli_play(ctx: typer.Context, item_id: int = typer.Argument(..., help="Audiobook ID")):
    """Play an audiobook."""
    catalog = _catalog(ctx)
    try:
        notice = catalog.play(item_id)
    except LibraryError as e:
        print(f"Error: {e}")
        return
    print(notice)
    print(f"Duration: {catalog.get_item(item_id).duration_hours} hours")


@app.command("archive")
def cli_archive(ctx: typer.Context, item_id: int = typer.Argument(..., help="E-magazine ID")):
    """Archive an e-magazine issue."""
    catalog = _catalog(ctx)
    try:
        changed = catalog.archive_issue(item_id)
    except LibraryError as e:
        print(f"Error: {e}")
        return
    magazine = catalog.get_item(item_id)
    if changed:
        print(magazine.archive_notice())
    else:
        print(f"Issue #{magazine.issue_number} of {magazine.title} is already archived.")


@app.command("menu")
def cli_menu(ctx: typer.Context):
    """Start the interactive menu."""
    run_menu(_catalog(ctx))


# --- Interactive menu ---
def _show_error(e: Exception) -> None:
    console.print(f"[bold red]Error:[/] {escape(str(e))}")


def borrow(catalog: Catalog) -> None:
    item_id = IntPrompt.ask("Enter item ID to borrow")
    borrow_date = Prompt.ask("Enter borrow date (YYYY-MM-DD)")
    try:
        item = catalog.borrow_item(item_id, borrow_date)
    except LibraryError as e:
        _show_error(e)
        return
    console.print(Panel.fit(
        f"[green]Item borrowed successfully.[/] Due date: [bold]{item.due_date.isoformat()}[/]",
        title="✅ Borrowed",
        border_style="green",
    ))


def return_item(catalog: Catalog) -> None:
    item_id = IntPrompt.ask("Enter item ID to return")
    return_date = Prompt.ask("Enter return date (YYYY-MM-DD)")
    try:
        fine = catalog.return_item(item_id, return_date)
    except LibraryError as e:
        _show_error(e)
        return
    if fine > 0:
        console.print(f"[yellow]Item returned successfully. Fine: {_format_fine(fine)}[/]")
    else:
        console.print("[green]Item returned successfully. No fines.[/]")


def search(catalog: Catalog, field: str) -> None:
    query = Prompt.ask(f"Enter {field} to search")
    if field == "title":
        print_items_result(catalog.search_by_title(query), "No items found with that title.", title="Search results")
    else:
        print_items_result(catalog.search_by_author(query), "No items found by that author.", title="Search results")


def search_by_type(catalog: Catalog) -> None:
    console.print("Select item type:\n1. Books\n2. Audiobooks\n3. E-Magazines")
    choice = Prompt.ask("Enter your choice", choices=["1", "2", "3"])
    kind = {"1": ItemKind.BOOK, "2": ItemKind.AUDIOBOOK, "3": ItemKind.EMAGAZINE}[choice]
    print_items_result(catalog.search_by_type(kind), "No items of this type found.", title=kind.label)


def specialized_functions(catalog: Catalog) -> None:
    console.print("Specialized functions:\n1. Get page count of a book\n2. Play an audiobook\n3. Archive an e-magazine")
    choice = Prompt.ask("Enter your choice", choices=["1", "2", "3"])
    try:
        if choice == "1":
            item_id = IntPrompt.ask("Enter book ID")
            console.print(f"Page count: {catalog.get_page_count(item_id)}")
        elif choice == "2":
            item_id = IntPrompt.ask("Enter audiobook ID")
            console.print(escape(catalog.play(item_id)))
            console.print(f"Duration: {catalog.get_item(item_id).duration_hours} hours")
        else:
            item_id = IntPrompt.ask("Enter e-magazine ID")
            magazine = catalog.get_item(item_id)
            if catalog.archive_issue(item_id):
                console.print(escape(magazine.archive_notice()))
            else:
                console.print(f"[yellow]Issue #{magazine.issue_number} of {escape(magazine.title)} is already archived.[/]")
    except LibraryError as e:
        _show_error(e)


def run_menu(catalog: Catalog) -> None:
    """Simple interactive menu for the library catalog."""
    menu_items = [
        ("1", "Display all the items", "📚"),
        ("2", "Borrow an item", "📤"),
        ("3", "Return an item", "📥"),
        ("4", "Search by title", "🔎"),
        ("5", "Search by author", "✍️"),
        ("6", "Search by type", "🗂️"),
        ("7", "Show available items", "✅"),
        ("8", "Show borrowed items", "⏳"),
        ("9", "Show total fines", "💰"),
        ("10", "Use specialized functions", "🛠️"),
        ("0", "Exit", "🚪"),
    ]

    def render_menu() -> None:
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in menu_items:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")
        console.print(Panel(table, title=settings.app_name, border_style="cyan", box=box.HEAVY, padding=(1, 2)))

    while True:
        render_menu()
        choice = Prompt.ask("Enter your choice", choices=[key for key, _, _ in menu_items], default="1").strip()

        if choice == "1":
            print_items_result(catalog.list_items(), "No items in library.", title="All Items")
        elif choice == "2":
            borrow(catalog)
        elif choice == "3":
            return_item(catalog)
        elif choice == "4":
            search(catalog, "title")
        elif choice == "5":
            search(catalog, "author")
        elif choice == "6":
            search_by_type(catalog)
        elif choice == "7":
            print_items_result(catalog.get_available_items(), "No available items at the moment.", title="Available")
        elif choice == "8":
            print_items_result(catalog.get_borrowed_items(), "No borrowed items at the moment.", title="Borrowed")
        elif choice == "9":
            print_fines_result(catalog.get_total_fines(), settings.currency_label)
        elif choice == "10":
            specialized_functions(catalog)
        elif choice == "0":
            console.print("[green]Thank you for using LibraNet! Come Again.[/]")
            break
        print()  # blank line between operations


def main() -> None:
    set_output_mode(settings.output_mode)
    if len(sys.argv) > 1:
        app()
    else:
        run_menu(build_catalog())


if __name__ == "__main__":
    main()
