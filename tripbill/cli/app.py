import questionary
from rich.console import Console

from tripbill.cli.billing_menu import create_invoice_menu, export_invoice_menu, preview_invoice_menu
from tripbill.services.billing_service import BillingSession
from tripbill.services.invoice_service import InvoiceService
from tripbill.settings import settings
from tripbill.storage.factory import get_storage

console = Console()


def _build_services() -> tuple[BillingSession, InvoiceService]:
    return BillingSession(), InvoiceService(get_storage())


def main_menu() -> None:
    session, invoice_service = _build_services()

    console.print()
    console.print(f"[bold]{settings.brand_name} Billing[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "Create Invoice",
                "Preview Invoice",
                "Export PDF",
                "Start New Draft",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "Create Invoice":
            create_invoice_menu(session, invoice_service)
        elif choice == "Preview Invoice":
            preview_invoice_menu(session, invoice_service)
        elif choice == "Export PDF":
            export_invoice_menu(session, invoice_service)
        elif choice == "Start New Draft":
            session.reset()
            console.print("[green]Draft cleared.[/green]")
