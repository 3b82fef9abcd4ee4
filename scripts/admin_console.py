#!/usr/bin/env python3
"""
PollDesk Admin Console

A command-line admin to browse the declared lists and their list views.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text
from rich import box
from sqlalchemy import text

from polldesk.core.content import ContentError, ContentService, ListViewPage
from polldesk.core.schema_registry import SchemaRegistry, get_default_registry
from polldesk.db.base import get_engine
from polldesk.db.session import SessionLocal


console = Console()


# -----------------------------
# Display Functions
# -----------------------------


def show_header():
    """Display the application header."""
    header = Text()
    header.append("🗳  ", style="bright_magenta")
    header.append("PollDesk", style="bold bright_cyan")
    header.append(" - Admin Console", style="dim")

    console.print()
    console.print(Panel(
        header,
        box=box.DOUBLE,
        border_style="bright_blue",
        padding=(0, 2),
    ))
    console.print()


def show_help():
    """Display help information."""
    help_text = Text()
    help_text.append("Available Commands:\n", style="bold cyan")
    help_text.append("  help              ", style="green")
    help_text.append("- Show this help message\n")
    help_text.append("  schema            ", style="green")
    help_text.append("- Show declared lists and fields\n")
    help_text.append("  <List>            ", style="green")
    help_text.append("- Show the list view of a list\n")
    help_text.append("  <List> f=v ...    ", style="green")
    help_text.append("- Show the list view filtered by fields\n")
    help_text.append("  exit | quit       ", style="green")
    help_text.append("- Exit the application\n\n")

    help_text.append("Examples:\n", style="bold cyan")
    help_text.append("  • User\n", style="white")
    help_text.append("  • User email=ana@example.com\n", style="white")
    help_text.append("  • Poll\n", style="white")

    console.print(Panel(
        help_text,
        title="[bold]Help[/bold]",
        border_style="dim",
    ))


def show_schema(registry: SchemaRegistry):
    """Display the declared lists."""
    table = Table(
        title="[bold cyan]Declared Lists[/bold cyan]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("List", style="cyan")
    table.add_column("Field", style="green")
    table.add_column("Kind", style="yellow")
    table.add_column("Required", style="dim")
    table.add_column("Details", style="dim")

    for list_key in registry.list_keys():
        schema = registry.get_list(list_key)
        hidden = " (hidden)" if schema.ui.is_hidden else ""
        for field_name, config in schema.fields.items():
            details = ""
            if config.kind.value == "relationship":
                details = f"→ {config.ref}" + (" [many]" if config.many else "")
            elif config.kind.value == "select":
                details = "|".join(config.values)
            table.add_row(
                list_key + hidden,
                field_name,
                config.kind.value,
                "✓" if config.is_required else "",
                details,
            )
            list_key, hidden = "", ""

    console.print(table)
    console.print()


def show_list_view(page: ListViewPage):
    """Display a list view in a table."""
    if not page.rows:
        console.print(f"[dim]No {page.list_key} items found.[/dim]")
        return

    table = Table(
        title=f"[bold cyan]{page.list_key} ({len(page.rows)} items)[/bold cyan]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta",
    )

    for column in page.columns:
        table.add_column(column, style="cyan")

    for cells in page.values()[:50]:  # Limit display to 50 rows
        table.add_row(*[_format_cell(value) for value in cells])

    if len(page.rows) > 50:
        console.print(f"[dim](Showing first 50 of {len(page.rows)} items)[/dim]")

    console.print(table)


def show_error(title: str, message: str):
    """Display an error message."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def _format_cell(value) -> str:
    if value is None:
        return "—"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


# -----------------------------
# Main Processing
# -----------------------------


def parse_command(command: str) -> tuple[str, dict[str, str]]:
    """Split 'List field=value ...' into the list key and its filters."""
    list_key, *pairs = command.split()
    where = {}
    for pair in pairs:
        field, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Filter '{pair}' must look like field=value")
        where[field] = value
    return list_key, where


def process_command(command: str):
    """Render the list view a command asks for."""
    try:
        list_key, where = parse_command(command)
    except ValueError as e:
        show_error("Input Error", str(e))
        return

    session = SessionLocal()
    try:
        page = ContentService(session).list_view(list_key, where=where)
    except ContentError as e:
        show_error("Content Error", str(e))
        return
    finally:
        session.close()

    show_list_view(page)
    console.print()


def main():
    """Main entry point."""
    show_header()

    console.print("[dim]Initializing...[/dim]")

    try:
        registry = get_default_registry()
        engine = get_engine()

        # Test database connection
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

        console.print("[green]✓[/green] Connected to database")
        console.print(f"[green]✓[/green] Lists: [cyan]{', '.join(registry.navigation())}[/cyan]")

    except Exception as e:
        show_error("Initialization Error", str(e))
        console.print("\n[dim]Make sure your .env file is configured correctly.[/dim]")
        sys.exit(1)

    console.print()
    console.print("[dim]Type 'help' for available commands, or a list name.[/dim]")
    console.print()

    # Main loop
    while True:
        try:
            command = Prompt.ask("[bold magenta]🗳  List[/bold magenta]").strip()

            if not command:
                continue

            if command.lower() in ("exit", "quit", "q"):
                console.print("\n[dim]Goodbye! 👋[/dim]\n")
                break

            if command.lower() == "help":
                show_help()
                continue

            if command.lower() == "schema":
                show_schema(registry)
                continue

            process_command(command)

        except KeyboardInterrupt:
            console.print("\n[dim]Goodbye! 👋[/dim]\n")
            break
        except Exception as e:
            show_error("Unexpected Error", str(e))


if __name__ == "__main__":
    main()
