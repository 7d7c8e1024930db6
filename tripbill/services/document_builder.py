from __future__ import annotations

import logging
from collections.abc import Sequence

from tripbill.constants import DETAIL_PREVIEW_SLOTS, NOT_SPECIFIED, yes_no
from tripbill.models import format_date
from tripbill.models.billing import BillingRecord
from tripbill.models.invoice import (
    AccommodationSection,
    CustomerSection,
    DocumentHeader,
    InfoLine,
    InvoiceDocument,
    ServiceRow,
    ServicesSection,
    SummaryLine,
)
from tripbill.settings import settings

logger = logging.getLogger(__name__)


def detail_previews(record: BillingRecord, slots: int = DETAIL_PREVIEW_SLOTS) -> tuple[str, ...]:
    """Details of services 0..slots-1, one entry per slot.

    These repeat what the services table shows. The first slot falls back to
    the placeholder, the others are blank when the service is absent.
    """
    previews = []
    for index in range(slots):
        details = record.services[index].details if index < len(record.services) else ""
        if index == 0 and not details:
            details = NOT_SPECIFIED
        previews.append(details)
    return tuple(previews)


def _customer_section(record: BillingRecord) -> CustomerSection:
    return CustomerSection(
        customer_name=record.customer_name,
        customer_lines=(
            InfoLine(label="Contact", value=record.contact_number),
            InfoLine(label="Email", value=record.email),
            InfoLine(label="Travel Security", value=yes_no(record.travel_security)),
        ),
        customer_id=record.customer_id,
        invoice_lines=(
            InfoLine(label="Booking Date", value=format_date(record.booking_date)),
            InfoLine(label="Check-in Date", value=format_date(record.check_in_date)),
            InfoLine(label="Check-out Date", value=format_date(record.check_out_date)),
        ),
    )


def _accommodation_section(record: BillingRecord) -> AccommodationSection:
    return AccommodationSection(
        trip_name=record.hotel_name or NOT_SPECIFIED,
        room_number=record.room_number,
        detail_previews=detail_previews(record),
        travel_security=yes_no(record.travel_security),
    )


def _services_section(record: BillingRecord) -> ServicesSection:
    rows = tuple(
        ServiceRow(name=service.name, details=service.details or "", amount=service.amount or 0)
        for service in record.services
    )
    summary = (
        SummaryLine(label="Service Charge", amount=record.service_charge),
        SummaryLine(label="Advanced Amount", amount=record.advanced_amount),
        SummaryLine(label="Due Amount", amount=record.due_amount),
        SummaryLine(label="Total Cost", amount=record.total_cost, emphasized=True),
    )
    return ServicesSection(rows=rows, summary=summary)


def build_invoice_document(
    record: BillingRecord,
    brand: str | None = None,
    tagline: str | None = None,
    title: str | None = None,
    footer: Sequence[str] | None = None,
) -> InvoiceDocument:
    brand = brand or settings.brand_name
    document = InvoiceDocument(
        header=DocumentHeader(
            brand=brand,
            tagline=tagline if tagline is not None else settings.brand_tagline,
            title=title or settings.document_title,
        ),
        customer=_customer_section(record),
        accommodation=_accommodation_section(record),
        services=_services_section(record),
        footer=tuple(footer if footer is not None else settings.footer_lines),
        metadata_title=f"{brand}_Invoice_{record.customer_id}",
        author=f"{brand} Travel Agency",
        creator=f"{brand} Billing Software",
    )
    logger.debug(
        "Invoice document built: customer=%s services=%d total=%d",
        record.customer_id,
        len(record.services),
        record.total_cost,
    )
    return document
