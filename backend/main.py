"""
Wedding Portal operator console.

Read-only views of the portal data for the photographer, printed with
rich. Runs against Supabase (service role) when configured and against
the demo data otherwise.

Usage:
    python main.py clients [--search TERM]
    python main.py form USER_ID
    python main.py preview TEMPLATE_ID CLIENT_ID
    python main.py dashboard
    python main.py export [--output FILE]
"""

import argparse
import asyncio
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from modules.admin.service import AdminDashboardService
from modules.clients.service import ClientService
from modules.emails.dispatcher import LoggingEmailDispatcher
from modules.emails.service import EmailService
from modules.forms.dashboard import days_until_wedding, get_motivational_message
from modules.forms.scheduler import ManualScheduler
from modules.forms.store import FormStateStore
from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.factory import get_persistence_backend
from modules.persistence.interfaces import IPersistenceBackend
from shared.config import get_settings
from shared.exceptions import PortalError
from shared.log_config import setup_logging

console = Console()


def completion_style(completion: int) -> str:
    if completion == 100:
        return "green"
    if completion >= 50:
        return "yellow"
    return "red"


async def show_clients(gateway: IPersistenceBackend, search: str | None) -> None:
    clients = await ClientService(gateway).list_clients(search)

    table = Table(title=f"Clients ({len(clients)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Couple")
    table.add_column("Wedding Date")
    table.add_column("Complete", justify="right")

    for client in clients:
        couple = " & ".join(n for n in (client.bride_name, client.groom_name) if n)
        style = completion_style(client.completion)
        table.add_row(
            client.id,
            client.full_name or "",
            client.email or "",
            couple,
            client.wedding_date,
            f"[{style}]{client.completion}%[/{style}]",
        )

    console.print(table)


async def show_form(gateway: IPersistenceBackend, user_id: str) -> None:
    """Section-by-section progress for one client's wedding form."""
    # Nothing is edited here, so the autosave scheduler never advances
    store = FormStateStore(user_id, gateway, ManualScheduler())
    form_data = await store.load()
    completion = store.completion_percentage()

    table = Table(title=f"Wedding form for {user_id}")
    table.add_column("Section", style="cyan")
    table.add_column("Filled", justify="right")
    table.add_column("Status")

    for section in store.section_progress():
        if section["complete"]:
            status = "[green]complete[/green]"
        elif section["started"]:
            status = "[yellow]in progress[/yellow]"
        else:
            status = "[dim]not started[/dim]"
        table.add_row(section["title"], f"{section['filled']}/{section['total']}", status)

    console.print(table)

    style = completion_style(completion)
    lines = [f"Completion: [{style}]{completion}%[/{style}]", get_motivational_message(completion)]
    days = days_until_wedding(form_data.get("wedding_date"))
    if days is not None:
        lines.append(f"Days until the wedding: {days}")
    console.print(Panel("\n".join(lines), title="Summary"))


async def show_preview(gateway: IPersistenceBackend, template_id: str, client_id: str) -> None:
    service = EmailService(gateway, LoggingEmailDispatcher(demo=gateway.is_demo))
    preview = await service.preview(template_id, client_id)
    console.print(f"[bold]To:[/bold] {preview.recipient or '[dim]no email on file[/dim]'}")
    console.print(f"[bold]Subject:[/bold] {preview.subject}")
    console.print(Panel(preview.body, title="Body"))


async def show_dashboard(gateway: IPersistenceBackend) -> None:
    stats = await AdminDashboardService(gateway).get_stats()

    table = Table(title="Dashboard", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total clients", str(stats.total_clients))
    table.add_row("Completed forms", str(stats.completed_forms))
    table.add_row("Upcoming meetings", str(stats.upcoming_meetings))
    table.add_row("Pending emails", str(stats.pending_emails))
    console.print(table)


async def export_clients(gateway: IPersistenceBackend, output: Path | None) -> None:
    csv_text = await ClientService(gateway).export_csv()
    if output is None:
        console.print(csv_text, markup=False, highlight=False, end="")
        return
    output.write_text(csv_text)
    console.print(f"[green]✓[/green] Wrote {output}")


async def run(args: argparse.Namespace) -> None:
    settings = get_settings()
    if not settings.backend_configured:
        console.print("[yellow]Supabase is not configured; showing demo data.[/yellow]\n")
    gateway = get_persistence_backend(settings=settings)

    if args.command == "clients":
        await show_clients(gateway, args.search)
    elif args.command == "form":
        await show_form(gateway, args.user_id)
    elif args.command == "preview":
        await show_preview(gateway, args.template_id, args.client_id)
    elif args.command == "dashboard":
        await show_dashboard(gateway)
    elif args.command == "export":
        await export_clients(gateway, args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wedding Portal operator console")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    clients = subparsers.add_parser("clients", help="List clients with form completion")
    clients.add_argument("--search", "-s", help="Filter by email, name, bride or groom")

    form = subparsers.add_parser("form", help="Show a client's wedding form progress")
    form.add_argument("user_id", help="Client profile id")

    preview = subparsers.add_parser("preview", help="Merge an email template for a client")
    preview.add_argument("template_id")
    preview.add_argument("client_id")

    subparsers.add_parser("dashboard", help="Show admin dashboard totals")

    export = subparsers.add_parser("export", help="Export clients as CSV")
    export.add_argument("--output", "-o", type=Path, help="Write to a file instead of stdout")

    return parser


if __name__ == "__main__":
    args = build_parser().parse_args()
    setup_logging(args.log_level)

    try:
        asyncio.run(run(args))
    except RecordNotFoundError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        sys.exit(1)
    except PortalError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        sys.exit(2)
