# inventory_cli.py
import asyncio
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from inventory_app.config import configure_logging
from inventory_app.models import CATEGORIES
from inventory_sdk.client import AsyncInventoryClient
from inventory_sdk.config import PAGE_SIZE_OPTIONS, load_client_config
from inventory_sdk.dialogs import DeleteDialog, DialogState, ProductDialog
from inventory_sdk.icons import ICON_GLYPHS, get_icon_glyph
from inventory_sdk.store import ProductStore
from inventory_sdk.table import SORTABLE_COLUMNS, Projection, ProductTable

console = Console()
CONFIG = load_client_config()

store = ProductStore(AsyncInventoryClient(base_url=CONFIG.base_url, timeout=CONFIG.timeout))
table = ProductTable(store, page_size=CONFIG.page_size)

# Global status line shown above the menu
status_message = "Ready"

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

FORM_LABELS = {
    "name": "📝 Product name",
    "sku": "🔖 SKU",
    "supplier": "🚚 Supplier",
    "category": "🏷️ Category",
    "quantity": "📦 Quantity in stock",
    "price": "💰 Price",
    "icon": "🎨 Icon",
}


# ---------------------------
# Display helpers
# ---------------------------
def format_price(value: Any) -> str:
    try:
        return f"${float(value):.2f}"
    except (TypeError, ValueError):
        return "$0.00"


def format_date(value: Any) -> str:
    if not value:
        return "Invalid Date"
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return "Invalid Date"
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def _sort_marker(column: str) -> str:
    if table.sort.column != column:
        return ""
    return " ↓" if table.sort.descending else " ↑"


def render_products(projection: Projection) -> Table:
    title = f"📦 Products ({len(store.products)})"
    if table.category_filter:
        title += " · " + ", ".join(sorted(table.category_filter))
    if table.name_filter:
        title += f" · \"{table.name_filter}\""

    out = Table(
        title=title,
        caption=f"Page {projection.page_index + 1} of {projection.page_count}",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    out.add_column("#", style="dim", justify="right", width=4)
    out.add_column("Name" + _sort_marker("name"), style="bold", width=24)
    out.add_column("SKU" + _sort_marker("sku"), width=12)
    out.add_column("Created At" + _sort_marker("createdAt"), width=18)
    out.add_column("Price" + _sort_marker("price"), justify="right", width=10)
    out.add_column("Category" + _sort_marker("category"), width=15)
    out.add_column("Qty" + _sort_marker("quantityInStock"), justify="right", width=8)
    out.add_column("Supplier" + _sort_marker("supplier"), width=16)

    start = projection.page_index * table.page_size
    for offset, p in enumerate(projection.rows, start=1):
        out.add_row(
            str(start + offset),
            f"{get_icon_glyph(p.get('icon'))} {p.get('name', 'N/A')}",
            p.get("sku", "N/A"),
            format_date(p.get("createdAt")),
            format_price(p.get("price")),
            p.get("category", "N/A"),
            str(p.get("quantityInStock", 0)),
            p.get("supplier", "N/A"),
        )
    return out


def show_products():
    projection = table.projection()
    if not projection.rows:
        console.print("[italic yellow]No results.[/italic yellow]")
        return
    console.print(render_products(projection))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def toast(message: str, is_success: bool) -> None:
    global status_message
    status_message = message
    console.print(show_status(message, is_success))


product_dialog = ProductDialog(store, notify=toast)
delete_dialog = DeleteDialog(store, notify=toast)


# ---------------------------
# Running store actions
# ---------------------------
def run_action(coro, description: str = "Processing..."):
    """Run a store coroutine to completion behind a spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    ) as progress:
        progress.add_task(description=description, total=None)
        return asyncio.run(coro)


def refresh_products():
    global status_message
    result = run_action(store.load_products(), "Loading products...")
    if result.success:
        status_message = f"{len(store.products)} products loaded"
    else:
        status_message = f"Error: could not load products ({result.error})"


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def get_product_completer():
    rows = table.projection().rows
    names = [p.get("name", "") for p in rows]
    return WordCompleter([n for n in names if n], ignore_case=True, sentence=True)


def pick_row(action: str) -> Optional[Dict[str, Any]]:
    """Ask for a row on the current page by number or name."""
    projection = table.projection()
    if not projection.rows:
        console.print("[italic yellow]No products on this page[/italic yellow]")
        return None
    raw = prompt_with_autocomplete(f"Product to {action} (row # or name)", completer=get_product_completer()).strip()
    start = projection.page_index * table.page_size
    if raw.isdigit():
        idx = int(raw) - 1 - start
        if 0 <= idx < len(projection.rows):
            return projection.rows[idx]
    for p in projection.rows:
        if p.get("name", "").lower() == raw.lower():
            return p
    console.print(f"[red]No product matching '{raw}' on this page[/red]")
    return None


def show_form_errors(errors: Dict[str, str]):
    err_table = Table(box=box.SIMPLE, show_header=False)
    err_table.add_column("Field", style="bold")
    err_table.add_column("Problem", style="red")
    for field, message in errors.items():
        err_table.add_row(FORM_LABELS.get(field, field), message)
    console.print(Panel(err_table, title="Please fix these fields", border_style="red"))


def fill_form(dialog: ProductDialog):
    """Prompt for every field, pre-filled with the current draft."""
    for field in ("name", "sku", "supplier"):
        dialog.set_field(field, prompt_with_autocomplete(FORM_LABELS[field], default=dialog.draft[field]))
    dialog.set_field("category", prompt_with_autocomplete(
        FORM_LABELS["category"],
        completer=WordCompleter(list(CATEGORIES), ignore_case=True, sentence=True),
        default=dialog.draft["category"],
    ))
    for field in ("quantity", "price"):
        dialog.set_field(field, prompt_with_autocomplete(FORM_LABELS[field], default=dialog.draft[field]))

    console.print("  " + "  ".join(
        f"[reverse]{glyph} {name}[/reverse]" if dialog.icons.is_selected(name) else f"{glyph} {name}"
        for name, glyph in ICON_GLYPHS.items()
    ))
    dialog.select_icon(prompt_with_autocomplete(
        FORM_LABELS["icon"],
        completer=WordCompleter(list(ICON_GLYPHS), ignore_case=True),
        default=dialog.draft["icon"],
    ))


def run_product_dialog(dialog: ProductDialog):
    title = "✏️ Edit Product" if dialog.is_editing else "➕ Add Product"
    console.print(Panel.fit(
        "Update the product's details" if dialog.is_editing else "Fill in the form to add new product",
        title=title,
        border_style="cyan",
    ))
    while dialog.state != DialogState.CLOSED:
        fill_form(dialog)
        result = run_action(dialog.submit(), "Saving product...")
        if result.success:
            return
        if dialog.errors:
            show_form_errors(dialog.errors)
        if not Confirm.ask("Try again?", default=True):
            dialog.close()


def run_delete_dialog(dialog: DeleteDialog):
    target = dialog.target
    if target is None:
        return
    console.print(Panel.fit(
        f"This will permanently delete [bold]{target.get('name')}[/bold].\nThis action cannot be undone.",
        title="⚠️ Are you absolutely sure?",
        border_style="red",
    ))
    if Confirm.ask("[red]Delete this product?[/red]", default=False):
        run_action(dialog.confirm(), "Deleting...")
    else:
        dialog.cancel()


def choose_sort():
    column = prompt_with_autocomplete(
        "Sort by column",
        completer=WordCompleter(list(SORTABLE_COLUMNS), ignore_case=True),
        default=table.sort.column,
    ).strip()
    if column not in SORTABLE_COLUMNS:
        console.print(f"[red]Unknown column '{column}'[/red]")
        return
    direction = prompt_with_autocomplete("Direction (asc/desc)", completer=WordCompleter(["asc", "desc"]), default="asc")
    table.sort_by(column, descending=direction.strip().lower().startswith("d"))


def choose_categories():
    menu_table = Table.grid(padding=(0, 2))
    menu_table.add_column("Key", style="bold cyan", width=4)
    menu_table.add_column("Category", width=20)
    for i, category in enumerate(CATEGORIES, start=1):
        mark = "☑" if category in table.category_filter else "☐"
        menu_table.add_row(str(i), f"{mark} {category}")
    console.print(Panel(menu_table, title="🏷️ Category filter", border_style="yellow"))
    raw = prompt_with_autocomplete("Toggle categories (numbers, comma separated)").strip()
    for piece in raw.split(","):
        piece = piece.strip()
        if piece.isdigit() and 1 <= int(piece) <= len(CATEGORIES):
            table.toggle_category(CATEGORIES[int(piece) - 1])


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "📦 Inventory",
        "[bold blue]Product Catalog[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_products()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        show_products()

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "🔄 Reload products", "7", "⏮️ First page"),
            ("2", "🔍 Search by name", "8", "◀️ Previous page"),
            ("3", "🏷️ Filter categories", "9", "▶️ Next page"),
            ("4", "↕️ Sort", "10", "⏭️ Last page"),
            ("5", "➕ Add product", "11", "📄 Rows per page"),
            ("6", "✏️ Edit product", "12", "🗑️ Delete product"),
            ("r", "♻️ Reset filters", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 13)] + ["r", "q", "quit", "exit"])
        ).strip().lower()

        if choice == "1":
            refresh_products()

        elif choice == "2":
            table.set_name_filter(prompt_with_autocomplete("Search by name...", default=table.name_filter))

        elif choice == "3":
            choose_categories()

        elif choice == "4":
            choose_sort()

        elif choice == "5":
            product_dialog.open_new()
            run_product_dialog(product_dialog)

        elif choice == "6":
            row = pick_row("edit")
            if row:
                table.edit_row(row)
                product_dialog.prepare()
                run_product_dialog(product_dialog)

        elif choice == "7":
            table.first_page()

        elif choice == "8":
            if not table.can_previous_page():
                status_message = "Already on the first page"
            table.previous_page()

        elif choice == "9":
            if not table.can_next_page():
                status_message = "Already on the last page"
            table.next_page()

        elif choice == "10":
            table.last_page()

        elif choice == "11":
            size = IntPrompt.ask("Rows per page", choices=[str(s) for s in PAGE_SIZE_OPTIONS], default=table.page_size)
            table.set_page_size(size)

        elif choice == "12":
            row = pick_row("delete")
            if row:
                table.delete_row(row)
                run_delete_dialog(delete_dialog)

        elif choice == "r":
            table.reset_filters()
            status_message = "Filters cleared"

        elif choice in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def main():
    configure_logging(CONFIG.log_level, console=console)
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
