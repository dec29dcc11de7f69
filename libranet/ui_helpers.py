import os
import json
from typing import List, Any, Dict, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from libranet.item import LibraryItem

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

_console = Console()


def set_output_mode(mode: str) -> bool:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode
        return True
    return False


def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, "plain").lower()
    return mode if mode in OUTPUT_MODES else "plain"


def _detail(item: LibraryItem) -> str:
    data = item.to_dict()
    if "page_count" in data:
        return f"{data['page_count']} pages"
    if "duration_hours" in data:
        return f"{data['duration_hours']:.2f} hours"
    if "issue_number" in data:
        archived = " (archived)" if data.get("archived") else ""
        return f"Issue #{data['issue_number']}{archived}"
    return ""


def print_items_result(items: List[LibraryItem], empty_message: str = "No items found.", title: str = "Items") -> None:
    """Print a list of catalog items in the current output mode.
    - plain: one ``describe()`` line per item, or ``empty_message``
    - json: JSON array of ``to_dict()`` payloads (``[]`` when empty)
    - rich: Rich table
    """
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps([item.to_dict() for item in items], ensure_ascii=False))
        return

    if not items:
        print(empty_message)
        return

    if mode == "rich":
        table = Table(title=f"📚 {title}", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True, justify="right")
        table.add_column("Type", style="cyan")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Details", style="white")
        table.add_column("Status", style="white")
        for item in items:
            if item.available:
                status = "[green]Available[/]"
            else:
                status = f"[yellow]Due {item.due_date.isoformat()}[/]"
            table.add_row(str(item.id), item.kind.label, item.title, item.author, _detail(item), status)
        _console.print(table)
    else:
        for item in items:
            print(item.describe())


def print_fines_result(total: float, currency: str, item_id: Optional[int] = None) -> None:
    mode = get_output_mode()

    if mode == "json":
        payload: Dict[str, Any] = {"total_fines": total}
        if item_id is not None:
            payload["item_id"] = item_id
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        label = f"Fines for item {item_id}" if item_id is not None else "Total fines collected"
        _console.print(Panel.fit(f"[bold]{label}:[/] {total} {currency}", title="💰 Fines", border_style="blue"))
    else:
        if item_id is not None:
            print(f"Fines for item {item_id}: {total} {currency}")
        else:
            print(f"Total fines collected: {total} {currency}")


def print_stats_result(stats: Dict[str, Any], currency: str) -> None:
    """Print catalog statistics in the current output mode."""
    mode = get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
        return

    by_kind = stats.get("items_by_kind", {})
    lines = [
        ("Total Items", stats.get("total_items", 0)),
        ("Available", stats.get("available_items", 0)),
        ("Borrowed", stats.get("borrowed_items", 0)),
        ("Books", by_kind.get("book", 0)),
        ("Audiobooks", by_kind.get("audiobook", 0)),
        ("E-Magazines", by_kind.get("emagazine", 0)),
        ("Total Fines", f"{stats.get('total_fines', 0.0)} {currency}"),
    ]
    if mode == "rich":
        content = "\n".join(f"[bold]{label}:[/] {value}" for label, value in lines)
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        for label, value in lines:
            print(f"{label}: {value}")
