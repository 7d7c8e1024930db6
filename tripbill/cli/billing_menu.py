from __future__ import annotations

from datetime import date

import questionary
from rich.console import Console
from rich.table import Table

from tripbill.cli.preview import print_preview
from tripbill.exceptions import (
    BillingValidationError,
    InvoiceExportError,
    LastServiceError,
    NoCurrentRecordError,
)
from tripbill.models import format_inr, parse_date, parse_inr
from tripbill.models.billing import BillingRecord, BillingTotals, ServiceLineItem
from tripbill.services.billing_service import BillingSession
from tripbill.services.invoice_service import InvoiceService

console = Console()

CUSTOMER_FIELDS = [
    ("first_name", "First name:"),
    ("last_name", "Last name:"),
    ("contact_number", "Contact number:"),
    ("email", "Email:"),
]


def _ask_text(message: str, default: str = "") -> str | None:
    return questionary.text(message, default=default or "").ask()


def _ask_amount(message: str, default: int | None = 0) -> int | None:
    while True:
        text = questionary.text(message, default=str(default or 0)).ask()
        if text is None:
            return None
        parsed = parse_inr(text)
        if parsed is not None and parsed >= 0:
            return parsed
        console.print("[red]Invalid amount. Enter a non-negative number.[/red]")


def _ask_date(message: str, current: date | None) -> tuple[bool, date | None]:
    """Returns (answered, value). A blank answer clears the date."""
    while True:
        text = questionary.text(message, default=current.isoformat() if current else "").ask()
        if text is None:
            return False, None
        if not text.strip():
            return True, None
        parsed = parse_date(text)
        if parsed is not None:
            return True, parsed
        console.print("[red]Invalid date. Use YYYY-MM-DD or DD/MM/YYYY.[/red]")


def _print_totals(totals: BillingTotals) -> None:
    console.print(
        f"  Services: [bold]{format_inr(totals.services_total)}[/bold]  "
        f"Total cost: [bold]{format_inr(totals.total_cost)}[/bold]  "
        f"Due: [bold]{format_inr(totals.due_amount)}[/bold]"
    )


def _print_services(session: BillingSession) -> None:
    table = Table(title="Services")
    table.add_column("#", style="dim")
    table.add_column("Service", style="bold")
    table.add_column("Details")
    table.add_column("Amount", justify="right")

    for i, service in enumerate(session.draft.services, start=1):
        table.add_row(str(i), service.name or "-", service.details, format_inr(service.amount))

    console.print()
    console.print(table)
    _print_totals(session.totals)


def _customer_step(session: BillingSession) -> bool:
    answers: dict[str, str] = {}
    for field, message in CUSTOMER_FIELDS:
        value = _ask_text(message, getattr(session.draft, field))
        if value is None:
            return False
        answers[field] = value
    session.update(**answers)
    return True


def _trip_step(session: BillingSession) -> bool:
    draft = session.draft
    for field, message in (
        ("booking_date", "Booking date:"),
        ("check_in_date", "Check-in date:"),
        ("check_out_date", "Check-out date (optional):"),
    ):
        answered, value = _ask_date(message, getattr(draft, field))
        if not answered:
            return False
        session.update(**{field: value})

    hotel_name = _ask_text("Trip / hotel name (optional):", draft.hotel_name)
    if hotel_name is None:
        return False
    room_number = _ask_text("Room number (optional):", draft.room_number)
    if room_number is None:
        return False
    travel_security = questionary.confirm("Travel security?", default=draft.travel_security).ask()
    if travel_security is None:
        return False

    session.update(hotel_name=hotel_name, room_number=room_number, travel_security=travel_security)
    return True


def _edit_service(session: BillingSession, service: ServiceLineItem) -> None:
    name = _ask_text("  Service name:", service.name)
    if name is None:
        return
    details = _ask_text("  Details (optional):", service.details)
    if details is None:
        return
    amount = _ask_amount("  Amount (e.g. 15000):", service.amount)
    if amount is None:
        return
    session.update_service(service.id, name=name, details=details, amount=amount)
    console.print(f"  [green]Service '{name}' saved.[/green]")


def _pick_service(session: BillingSession, message: str) -> ServiceLineItem | None:
    services = session.draft.services
    choices = [
        f"{i}. {service.name or '(unnamed)'} ({format_inr(service.amount)})" for i, service in enumerate(services, start=1)
    ] + ["Back"]
    choice = questionary.select(message, choices=choices).ask()
    if choice is None or choice == "Back":
        return None
    return services[choices.index(choice)]


def _services_menu(session: BillingSession) -> bool:
    while True:
        _print_services(session)
        choice = questionary.select(
            "Services:",
            choices=["Add Service", "Edit Service", "Remove Service", "Done"],
        ).ask()

        if choice is None:
            return False
        if choice == "Done":
            return True
        elif choice == "Add Service":
            _edit_service(session, session.add_service())
        elif choice == "Edit Service":
            service = _pick_service(session, "Select the service:")
            if service is not None:
                _edit_service(session, service)
        elif choice == "Remove Service":
            service = _pick_service(session, "Select the service to remove:")
            if service is None:
                continue
            try:
                session.remove_service(service.id)
            except LastServiceError as exc:
                console.print(f"[red]{exc}[/red]")
                continue
            console.print(f"[green]Service '{service.name or '(unnamed)'}' removed.[/green]")


def _charges_step(session: BillingSession) -> bool:
    service_charge = _ask_amount("Service charge:", session.draft.service_charge)
    if service_charge is None:
        return False
    _print_totals(session.update(service_charge=service_charge))

    advanced_amount = _ask_amount("Advanced amount:", session.draft.advanced_amount)
    if advanced_amount is None:
        return False
    _print_totals(session.update(advanced_amount=advanced_amount))
    return True


def _print_errors(errors: dict[str, str]) -> None:
    console.print("[red bold]Please fix the following:[/red bold]")
    for field, message in errors.items():
        console.print(f"  [red]{field}: {message}[/red]")


def create_invoice_menu(session: BillingSession, invoice_service: InvoiceService) -> BillingRecord | None:
    console.print()
    console.print("[bold]New Invoice[/bold]", style="cyan")

    while True:
        completed = (
            _customer_step(session) and _trip_step(session) and _services_menu(session) and _charges_step(session)
        )
        if not completed:
            console.print("[yellow]Operation cancelled.[/yellow]")
            return None

        try:
            record = session.finalize()
        except BillingValidationError as exc:
            _print_errors(exc.errors)
            if not questionary.confirm("Fix and try again?", default=True).ask():
                return None
            continue

        console.print()
        console.print(f"[green bold]Invoice for {record.customer_name} created.[/green bold]")
        print_preview(invoice_service.build_document(record), console)
        return record


def preview_invoice_menu(session: BillingSession, invoice_service: InvoiceService) -> None:
    try:
        record = session.require_record()
    except NoCurrentRecordError as exc:
        console.print(f"[yellow]{exc}.[/yellow]")
        return
    print_preview(invoice_service.build_document(record), console)


def export_invoice_menu(session: BillingSession, invoice_service: InvoiceService) -> None:
    try:
        record = session.require_record()
    except NoCurrentRecordError as exc:
        console.print(f"[yellow]{exc}.[/yellow]")
        return

    try:
        exported = invoice_service.export(record)
    except InvoiceExportError as exc:
        console.print(f"[red]Export failed: {exc}[/red]")
        console.print("[dim]The invoice is unchanged; you can try exporting again.[/dim]")
        return

    console.print(f"[green]Invoice saved: {exported.path}[/green]")
