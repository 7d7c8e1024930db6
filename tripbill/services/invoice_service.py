from __future__ import annotations

import logging
import re
import unicodedata
from datetime import datetime

from pydantic import BaseModel

from tripbill.constants import IST_TZ
from tripbill.exceptions import InvoiceExportError
from tripbill.models.billing import BillingRecord
from tripbill.models.invoice import InvoiceDocument
from tripbill.pdf.invoice import InvoicePDF
from tripbill.pdf.layout import DEFAULT_LAYOUT, InvoiceLayout
from tripbill.services.document_builder import build_invoice_document
from tripbill.settings import settings
from tripbill.storage.base import StorageBackend

logger = logging.getLogger(__name__)

_DASHES = re.compile(r"-+")


def _filename_part(text: str, fallback: str) -> str:
    """Letters, marks and digits of any script are kept; anything else becomes '-'."""
    kept = "".join(ch if unicodedata.category(ch)[0] in "LMN" else "-" for ch in text)
    return _DASHES.sub("-", kept).strip("-") or fallback


def invoice_filename(record: BillingRecord, generated_at: datetime, brand: str | None = None) -> str:
    """'Tripomaniac_Invoice_Jane_Doe_20250105-143000.pdf'"""
    brand = _filename_part(brand or settings.brand_name, "Invoice")
    first = _filename_part(record.first_name, "Customer")
    last = _filename_part(record.last_name, "Customer")
    stamp = generated_at.astimezone(IST_TZ).strftime("%Y%m%d-%H%M%S")
    return f"{brand}_Invoice_{first}_{last}_{stamp}.pdf"


def _storage_key(filename: str) -> str:
    prefix = settings.storage_prefix
    if prefix:
        return f"{prefix}/{filename}"
    return filename


class ExportedInvoice(BaseModel):
    filename: str
    key: str
    path: str
    size: int
    generated_at: datetime


class InvoiceService:
    def __init__(self, storage: StorageBackend, layout: InvoiceLayout | None = None) -> None:
        self.storage = storage
        self.layout = layout or DEFAULT_LAYOUT
        self.pdf_generator = InvoicePDF()

    def build_document(self, record: BillingRecord) -> InvoiceDocument:
        return build_invoice_document(record)

    def render_pdf(self, record: BillingRecord) -> bytes:
        return self.pdf_generator.generate(self.build_document(record), self.layout)

    def export(self, record: BillingRecord, generated_at: datetime | None = None) -> ExportedInvoice:
        """Render the record to PDF and store it under a name derived from the customer.

        Any failure is raised as ``InvoiceExportError``; nothing is stored in that case
        and the record is untouched, so the call can simply be repeated.
        """
        generated_at = generated_at or datetime.now(IST_TZ)
        filename = invoice_filename(record, generated_at)
        key = _storage_key(filename)

        try:
            pdf_bytes = self.render_pdf(record)
            path = self.storage.save(key, pdf_bytes)
        except Exception as exc:
            logger.exception("Invoice export failed: customer=%s key=%s", record.customer_id, key)
            raise InvoiceExportError(f"Could not export invoice for {record.customer_name}: {exc}") from exc

        logger.info("Invoice exported: customer=%s key=%s size=%d", record.customer_id, key, len(pdf_bytes))
        return ExportedInvoice(
            filename=filename,
            key=key,
            path=path,
            size=len(pdf_bytes),
            generated_at=generated_at,
        )
