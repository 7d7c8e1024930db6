from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DocumentHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    brand: str
    tagline: str
    title: str


class InfoLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class CustomerSection(BaseModel):
    """Two columns: customer identity on the left, invoice identifiers and dates on the right."""

    model_config = ConfigDict(frozen=True)

    customer_name: str
    customer_lines: tuple[InfoLine, ...]
    customer_id: str
    invoice_lines: tuple[InfoLine, ...]


class AccommodationSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    trip_name: str
    room_number: str
    detail_previews: tuple[str, ...]
    travel_security: str


class ServiceRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    details: str
    amount: int


class SummaryLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    amount: int
    emphasized: bool = False


class ServicesSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    columns: tuple[str, str, str] = ("Service", "Details", "Amount")
    rows: tuple[ServiceRow, ...]
    summary: tuple[SummaryLine, ...]

    @property
    def total_line(self) -> SummaryLine:
        return self.summary[-1]


class InvoiceDocument(BaseModel):
    """Renderer-neutral description of one invoice.

    Amounts are whole rupees taken verbatim from the billing record; renderers
    format them but never derive new ones.
    """

    model_config = ConfigDict(frozen=True)

    header: DocumentHeader
    customer: CustomerSection
    accommodation: AccommodationSection
    services: ServicesSection
    footer: tuple[str, ...]
    metadata_title: str
    author: str
    creator: str
