from __future__ import annotations

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from tripbill.models import format_inr
from tripbill.models.invoice import InvoiceDocument

console = Console()


def _info_column(title: str, headline: str, lines) -> Group:
    body = [Text(title, style="dim underline"), Text(headline, style="bold")]
    body += [Text(f"{line.label}: {line.value}") for line in lines]
    return Group(*body)


def build_preview(document: InvoiceDocument) -> Panel:
    header = document.header
    customer = document.customer
    accommodation = document.accommodation
    services = document.services

    title = Group(
        Text(header.brand.upper(), style="bold cyan", justify="center"),
        Text(header.tagline, style="dim", justify="center"),
        Text(header.title, style="bold", justify="center"),
    )

    info = Table.grid(expand=True)
    info.add_column(ratio=1)
    info.add_column(ratio=1, justify="right")
    info.add_row(
        _info_column("Customer Details", customer.customer_name, customer.customer_lines),
        _info_column("Invoice Information", customer.customer_id, customer.invoice_lines),
    )

    stay = Table.grid(expand=True, padding=(0, 2))
    stay.add_column("Trip Name", ratio=1)
    stay.add_column("Details", ratio=2)
    stay.add_column("Travel Security", ratio=1)
    stay.add_row(
        Group(Text("Trip Name", style="dim"), Text(accommodation.trip_name), Text(f"Room: {accommodation.room_number}")),
        Group(Text("Details", style="dim"), *(Text(detail) for detail in accommodation.detail_previews)),
        Group(Text("Travel Security", style="dim"), Text(accommodation.travel_security)),
    )

    table = Table(expand=True)
    table.add_column(services.columns[0])
    table.add_column(services.columns[1])
    table.add_column(services.columns[2], justify="right")
    for row in services.rows:
        table.add_row(row.name, row.details, format_inr(row.amount))

    summary = Table.grid(padding=(0, 2))
    summary.add_column()
    summary.add_column(justify="right")
    for line in services.summary:
        if line.emphasized:
            summary.add_row(Text("\u2500" * 18, style="dim"), Text("\u2500" * 12, style="dim"))
            summary.add_row(Text(f"{line.label}:", style="bold cyan"), Text(format_inr(line.amount), style="bold cyan"))
        else:
            summary.add_row(f"{line.label}:", format_inr(line.amount))

    footer = Group(*(Text(line, style="dim", justify="center") for line in document.footer))

    return Panel(
        Group(
            title,
            Rule(),
            info,
            Rule("Accommodation"),
            stay,
            Rule("Services & Charges"),
            table,
            Align.right(Panel.fit(summary, border_style="dim")),
            Rule(),
            footer,
        ),
        expand=True,
    )


def print_preview(document: InvoiceDocument, target: Console | None = None) -> None:
    (target or console).print(build_preview(document))
